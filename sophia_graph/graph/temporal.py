"""
Era and year-range views over the graph.
"""

from typing import Dict, List, Tuple

from .index import GraphIndex
from .models import Node, TemporalSlice


def temporal_slices(index: GraphIndex, era_ranges: Dict[str, Tuple[int, int]]) -> List[TemporalSlice]:
    """
    One slice per configured era: its year range, the ids of nodes tagged
    with that era, and the number of edges with both endpoints in the era.
    """
    slices = []
    for era, year_range in era_ranges.items():
        node_ids = [node_id for node_id, node in index.nodes.items() if node.era == era]
        members = set(node_ids)
        edge_count = sum(1 for rel in index.edges if rel.source in members and rel.target in members)
        slices.append(
            TemporalSlice(
                era=era,
                year_range=(year_range[0], year_range[1]),
                node_ids=node_ids,
                edge_count=edge_count,
            )
        )
    return slices


def nodes_in_time_range(index: GraphIndex, start_year: int, end_year: int) -> List[Node]:
    """Nodes whose period overlaps [start_year, end_year]; nodes without a period are skipped."""
    if start_year > end_year:
        raise ValueError(f"start_year ({start_year}) must not exceed end_year ({end_year})")
    return [
        node
        for node in index.nodes.values()
        if node.period is not None and node.period.overlaps(start_year, end_year)
    ]
