"""
Configuration management.

Loads settings from config.yaml and exposes typed engine settings with
defaults for every key, so a missing file or section still yields a
usable configuration.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"
DEFAULT_SNAPSHOT_PATH = os.path.join("data", "graph", "snapshot.json")

DEFAULT_ERA_RANGES: Dict[str, Tuple[int, int]] = {
    "ancient": (-3000, 500),
    "medieval": (500, 1500),
    "modern": (1500, 1900),
    "contemporary": (1900, 2100),
}

COMMUNITY_METHODS = ("label_propagation", "connected_components")


@dataclass(frozen=True)
class EngineSettings:
    """Tunable parameters for GraphEngine."""
    community_method: str = "label_propagation"
    label_propagation_max_iterations: int = 50
    betweenness_sample_size: int = 200
    random_seed: int = 42
    pagerank_damping: float = 0.85
    all_paths_max_length: int = 4
    all_paths_limit: int = 10
    era_ranges: Dict[str, Tuple[int, int]] = field(
        default_factory=lambda: dict(DEFAULT_ERA_RANGES)
    )


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from YAML file. Returns an empty dict if the file is missing."""
    if not os.path.exists(config_path):
        return {}
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_graph_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Get the `graph` configuration section."""
    config = load_config(config_path)
    return config.get("graph", {}) or {}


def get_snapshot_path(config_path: str = DEFAULT_CONFIG_PATH) -> str:
    """Get the JSON snapshot path used by the build pipeline."""
    config = load_config(config_path)
    data_cfg = config.get("data", {}) or {}
    return str(data_cfg.get("snapshot_path") or DEFAULT_SNAPSHOT_PATH)


def settings_from_dict(graph_cfg: Dict[str, Any]) -> EngineSettings:
    """
    Build EngineSettings from a `graph` config mapping.

    Unknown keys are ignored; missing keys keep their defaults.

    Raises:
        ValueError: If `community_method` is not a known detector or an
            era range is not a [start, end] pair.
    """
    defaults = EngineSettings()

    method = str(graph_cfg.get("community_method", defaults.community_method))
    if method not in COMMUNITY_METHODS:
        raise ValueError(
            f"Unknown community_method '{method}'. Expected one of: {', '.join(COMMUNITY_METHODS)}"
        )

    era_ranges = dict(defaults.era_ranges)
    for era, bounds in (graph_cfg.get("era_ranges") or {}).items():
        if not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
            raise ValueError(f"Era range for '{era}' must be a [start, end] pair, got {bounds!r}")
        era_ranges[str(era)] = (int(bounds[0]), int(bounds[1]))

    return EngineSettings(
        community_method=method,
        label_propagation_max_iterations=int(
            graph_cfg.get("label_propagation_max_iterations", defaults.label_propagation_max_iterations)
        ),
        betweenness_sample_size=int(
            graph_cfg.get("betweenness_sample_size", defaults.betweenness_sample_size)
        ),
        random_seed=int(graph_cfg.get("random_seed", defaults.random_seed)),
        pagerank_damping=float(graph_cfg.get("pagerank_damping", defaults.pagerank_damping)),
        all_paths_max_length=int(graph_cfg.get("all_paths_max_length", defaults.all_paths_max_length)),
        all_paths_limit=int(graph_cfg.get("all_paths_limit", defaults.all_paths_limit)),
        era_ranges=era_ranges,
    )


def load_engine_settings(config_path: str = DEFAULT_CONFIG_PATH) -> EngineSettings:
    """Load EngineSettings from the `graph` section of config.yaml."""
    settings = settings_from_dict(get_graph_config(config_path))
    logger.debug("Loaded engine settings from %s: %s", config_path, settings)
    return settings
