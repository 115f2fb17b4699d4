"""
Neighborhood and attribute overlap between two nodes.

Neighbor-based scores exclude the two compared nodes from both neighbor
sets, so adjacent nodes never count each other as shared connections.
"""

from typing import FrozenSet, List, Tuple

from .index import GraphIndex
from .models import Node


def _pair_neighbor_sets(index: GraphIndex, node_a: str, node_b: str) -> Tuple[FrozenSet[str], FrozenSet[str]]:
    excluded = {node_a, node_b}
    return index.neighbor_set(node_a) - excluded, index.neighbor_set(node_b) - excluded


def shared_connections(index: GraphIndex, node_a: str, node_b: str) -> List[str]:
    """Common neighbors of both nodes, in `node_a`'s adjacency order."""
    _, neighbors_b = _pair_neighbor_sets(index, node_a, node_b)
    return [n for n in index.neighbor_ids(node_a) if n in neighbors_b]


def jaccard_similarity(index: GraphIndex, node_a: str, node_b: str) -> float:
    """|N(a) ∩ N(b)| / |N(a) ∪ N(b)|; 0.0 when both neighborhoods are empty."""
    neighbors_a, neighbors_b = _pair_neighbor_sets(index, node_a, node_b)
    union = neighbors_a | neighbors_b
    if not union:
        return 0.0
    return len(neighbors_a & neighbors_b) / len(union)


def shared_tags(node_a: Node, node_b: Node) -> List[str]:
    return sorted(set(node_a.tags) & set(node_b.tags))


def era_overlap(node_a: Node, node_b: Node) -> bool:
    """Same era tag. Nodes without an era never overlap."""
    return node_a.era is not None and node_a.era == node_b.era


def period_overlap(node_a: Node, node_b: Node) -> bool:
    """Numeric year-range overlap. Nodes without a period never overlap."""
    if node_a.period is None or node_b.period is None:
        return False
    return node_a.period.overlaps(node_b.period.start, node_b.period.end)
