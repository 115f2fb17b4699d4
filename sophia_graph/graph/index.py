"""
Immutable graph index.

Turns node and relationship records into:
- a map from node id to Node
- a map from node id to an ordered list of (neighbor id, edge) pairs

Both directions of every accepted edge are inserted, so adjacency is
undirected while each entry still points at the original directed edge.
Adjacency order follows input edge order; path finding and community
detection rely on it for deterministic tie-breaking.

A simple undirected NetworkX projection (all nodes, parallel edges
collapsed) is built alongside for whole-graph metrics and frozen with
`nx.freeze`, so callers cannot add or remove nodes or edges.
"""

import logging
from collections import OrderedDict
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

import networkx as nx

from .errors import DuplicateNodeError
from .models import (
    NeighborResult,
    Node,
    Relationship,
    node_from_record,
    relationship_from_record,
)

logger = logging.getLogger(__name__)

NodeInput = Union[Node, Mapping]
RelationshipInput = Union[Relationship, Mapping]


def _as_node(item: NodeInput) -> Node:
    if isinstance(item, Mapping):
        return node_from_record(item)
    return item


def _as_relationship(item: RelationshipInput) -> Relationship:
    if isinstance(item, Mapping):
        return relationship_from_record(item)
    return item


class GraphIndex:
    """Read-only adjacency structure over a static node/edge snapshot."""

    def __init__(
        self,
        nodes: Iterable[NodeInput],
        relationships: Iterable[RelationshipInput],
    ):
        """
        Build the index.

        Args:
            nodes: Node objects or JSON-shaped node records
            relationships: Relationship objects or JSON-shaped relationship records

        Raises:
            DuplicateNodeError: If two nodes share an id
            InvalidRecordError: If a raw record is malformed
        """
        self._nodes: Dict[str, Node] = OrderedDict()
        for item in nodes:
            node = _as_node(item)
            if node.id in self._nodes:
                raise DuplicateNodeError(node.id)
            self._nodes[node.id] = node

        self._edges: List[Relationship] = []
        self._incidence: Dict[str, List[Tuple[str, int]]] = {node_id: [] for node_id in self._nodes}
        self._warnings: List[str] = []

        for item in relationships:
            rel = _as_relationship(item)
            reason = self._rejection_reason(rel)
            if reason is not None:
                message = f"Dropped relationship {rel.source} -> {rel.target} ({rel.type}): {reason}"
                logger.warning(message)
                self._warnings.append(message)
                continue
            position = len(self._edges)
            self._edges.append(rel)
            self._incidence[rel.source].append((rel.target, position))
            self._incidence[rel.target].append((rel.source, position))

        # Distinct neighbors in first-seen adjacency order
        self._neighbor_ids: Dict[str, Tuple[str, ...]] = {}
        self._neighbor_sets: Dict[str, FrozenSet[str]] = {}
        for node_id, entries in self._incidence.items():
            ordered = tuple(OrderedDict.fromkeys(neighbor for neighbor, _ in entries))
            self._neighbor_ids[node_id] = ordered
            self._neighbor_sets[node_id] = frozenset(ordered)

        self._graph = self._build_projection()

        logger.info(
            "Graph index built: %d nodes, %d edges (%d dropped)",
            len(self._nodes),
            len(self._edges),
            len(self._warnings),
        )

    def _rejection_reason(self, rel: Relationship) -> Optional[str]:
        if rel.source not in self._nodes:
            return f"unknown source node '{rel.source}'"
        if rel.target not in self._nodes:
            return f"unknown target node '{rel.target}'"
        if rel.source == rel.target:
            return "self-loop"
        return None

    def _build_projection(self) -> nx.Graph:
        graph = nx.Graph()
        graph.add_nodes_from(self._nodes)
        for rel in self._edges:
            if not graph.has_edge(rel.source, rel.target):
                graph.add_edge(rel.source, rel.target, type=rel.type)
        return nx.freeze(graph)

    # ── Lookups ──

    @property
    def nodes(self) -> Mapping[str, Node]:
        return MappingProxyType(self._nodes)

    @property
    def edges(self) -> Tuple[Relationship, ...]:
        """Accepted edges in input order."""
        return tuple(self._edges)

    @property
    def warnings(self) -> Tuple[str, ...]:
        """Messages for edges dropped during construction."""
        return tuple(self._warnings)

    @property
    def graph(self) -> nx.Graph:
        """Frozen undirected NetworkX projection; mutators raise NetworkXError."""
        return self._graph

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def adjacency(self, node_id: str) -> List[Tuple[str, Relationship]]:
        """(neighbor id, edge) pairs for a node in insertion order; empty for unknown ids."""
        return [(neighbor, self._edges[pos]) for neighbor, pos in self._incidence.get(node_id, ())]

    # ── Neighbor queries ──

    def neighbor_ids(self, node_id: str) -> Tuple[str, ...]:
        return self._neighbor_ids.get(node_id, ())

    def neighbor_set(self, node_id: str) -> FrozenSet[str]:
        return self._neighbor_sets.get(node_id, frozenset())

    def incident_edges(self, node_id: str) -> List[Relationship]:
        return [self._edges[pos] for _, pos in self._incidence.get(node_id, ())]

    def degree(self, node_id: str) -> int:
        """Number of distinct neighbors."""
        return len(self._neighbor_ids.get(node_id, ()))

    def neighbors(self, node_id: str) -> NeighborResult:
        """Neighbor ids and incident edges. Unknown ids give an empty result."""
        return NeighborResult(
            ids=list(self.neighbor_ids(node_id)),
            edges=self.incident_edges(node_id),
        )

    def relationships_between(self, node_a: str, node_b: str) -> List[Relationship]:
        """All edges directly joining two nodes, either direction, in input order."""
        return [self._edges[pos] for neighbor, pos in self._incidence.get(node_a, ()) if neighbor == node_b]

    def k_hop_neighbors(self, node_id: str, depth: int) -> Dict[str, int]:
        """
        Nodes within `depth` hops of `node_id`, mapped to their hop distance.

        The starting node is excluded. Order follows breadth-first discovery.
        Unknown ids or a non-positive depth give an empty mapping.
        """
        result: Dict[str, int] = OrderedDict()
        if node_id not in self._nodes or depth <= 0:
            return result

        seen = {node_id}
        frontier = [node_id]
        for hop in range(1, depth + 1):
            next_frontier = []
            for current in frontier:
                for neighbor in self._neighbor_ids[current]:
                    if neighbor in seen:
                        continue
                    seen.add(neighbor)
                    result[neighbor] = hop
                    next_frontier.append(neighbor)
            if not next_frontier:
                break
            frontier = next_frontier
        return result

    def ego_network(self, node_id: str, depth: int) -> Tuple[List[str], List[Relationship]]:
        """
        Subgraph around a node: the node, its k-hop neighbors, and every
        accepted edge with both endpoints inside that set (input order).
        """
        if node_id not in self._nodes:
            return [], []

        members = [node_id] + list(self.k_hop_neighbors(node_id, depth))
        member_set = set(members)
        positions = set()
        for member in members:
            for neighbor, pos in self._incidence[member]:
                if neighbor in member_set:
                    positions.add(pos)
        return members, [self._edges[pos] for pos in sorted(positions)]
