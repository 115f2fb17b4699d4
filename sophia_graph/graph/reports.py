"""
Tabular summaries of a built graph engine.

Used by the build pipeline to log connection statistics and to spot
under-connected content.
"""

import logging

import pandas as pd

from .engine import GraphEngine

logger = logging.getLogger(__name__)

NODE_COLUMNS = ["id", "node_type", "category", "era", "degree", "community"]


def nodes_frame(engine: GraphEngine) -> pd.DataFrame:
    """One row per node with its type, category, era, true degree and community label."""
    rows = [
        {
            "id": node.id,
            "node_type": node.node_type,
            "category": node.category,
            "era": node.era,
            "degree": engine.index.degree(node.id),
            "community": engine.community_of(node.id),
        }
        for node in engine.get_all_nodes()
    ]
    return pd.DataFrame(rows, columns=NODE_COLUMNS)


def connection_distribution(engine: GraphEngine) -> pd.DataFrame:
    """Number of nodes per degree value, sorted by degree."""
    frame = nodes_frame(engine)
    if frame.empty:
        return pd.DataFrame(columns=["degree", "nodes"])
    distribution = frame.groupby("degree").size().reset_index(name="nodes")
    return distribution.sort_values("degree").reset_index(drop=True)


def under_connected(engine: GraphEngine, threshold: int = 3) -> pd.DataFrame:
    """Nodes with fewer than `threshold` distinct neighbors, lowest degree first."""
    frame = nodes_frame(engine)
    selected = frame[frame["degree"] < threshold]
    return selected.sort_values(["degree", "id"]).reset_index(drop=True)


def under_connected_by_category(engine: GraphEngine, threshold: int = 3) -> pd.DataFrame:
    """Counts of under-connected nodes per category, most frequent first."""
    selected = under_connected(engine, threshold)
    if selected.empty:
        return pd.DataFrame(columns=["category", "nodes"])
    counts = selected.groupby("category").size().reset_index(name="nodes")
    return counts.sort_values(["nodes", "category"], ascending=[False, True]).reset_index(drop=True)


def log_summary(engine: GraphEngine, threshold: int = 3) -> None:
    """Log connection distribution and under-connected node counts."""
    distribution = connection_distribution(engine)
    for row in distribution.itertuples(index=False):
        logger.info("  %d connections: %d nodes", row.degree, row.nodes)

    weak = under_connected(engine, threshold)
    logger.info("Under-connected nodes (<%d neighbors): %d", threshold, len(weak))
    for row in under_connected_by_category(engine, threshold).itertuples(index=False):
        logger.info("  %s: %d", row.category, row.nodes)
