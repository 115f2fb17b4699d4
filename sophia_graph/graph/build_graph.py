"""
Graph construction pipeline script.

Builds the knowledge graph engine from a JSON snapshot and logs summary
statistics. This script is designed to be called via:
    python -m sophia_graph.graph.build_graph

The snapshot is a JSON object of the form
    {"nodes": [...], "relationships": [...]}
whose records use the content files' camelCase keys.
"""

import json
import logging
import os
from typing import Any, Dict, List, Tuple

from sophia_graph.common.config import (
    DEFAULT_CONFIG_PATH,
    get_snapshot_path,
    load_engine_settings,
)
from sophia_graph.common.logging_utils import setup_logging
from .engine import GraphEngine
from .reports import log_summary

logger = logging.getLogger(__name__)

CONFIG_PATH = DEFAULT_CONFIG_PATH


def load_snapshot(path: str) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Load node and relationship records from a JSON snapshot.

    Raises:
        FileNotFoundError: If the snapshot does not exist
        ValueError: If the JSON is not an object with `nodes` and `relationships` lists
    """
    if not os.path.exists(path):
        raise FileNotFoundError(
            f"Graph snapshot not found at {path}. "
            "Export the node and relationship data first."
        )
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("Graph snapshot must be a JSON object with 'nodes' and 'relationships'")
    nodes = data.get("nodes")
    relationships = data.get("relationships", [])
    if not isinstance(nodes, list) or not isinstance(relationships, list):
        raise ValueError("Graph snapshot 'nodes' and 'relationships' must be lists")

    logger.info("Loaded %d nodes and %d relationships from %s", len(nodes), len(relationships), path)
    return nodes, relationships


def build_engine(config_path: str = CONFIG_PATH) -> GraphEngine:
    """Load settings and snapshot, then build the engine."""
    settings = load_engine_settings(config_path)
    nodes, relationships = load_snapshot(get_snapshot_path(config_path))
    return GraphEngine(nodes, relationships, settings=settings)


def main() -> None:
    """Main graph construction pipeline."""
    setup_logging(CONFIG_PATH)
    logger.info("Starting knowledge graph construction pipeline")

    try:
        engine = build_engine(CONFIG_PATH)

        if engine.warnings:
            logger.warning("%d relationships were dropped during construction", len(engine.warnings))

        communities = engine.communities()
        logger.info("Detected %d multi-member communities", len(communities))
        for community in communities[:10]:
            logger.info("  %s (%s): %d members", community.community_id, community.label, community.size)

        for era_slice in engine.temporal_slices():
            logger.info(
                "  era %s %s: %d nodes, %d edges",
                era_slice.era,
                era_slice.year_range,
                len(era_slice.node_ids),
                era_slice.edge_count,
            )

        log_summary(engine)
        logger.info("Knowledge graph construction complete")
    except FileNotFoundError as exc:
        logger.error("Graph construction failed: %s", exc)
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("Graph construction failed with error: %s", exc)
        raise


if __name__ == "__main__":
    main()
