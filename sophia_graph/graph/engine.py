"""
Graph engine for comparing nodes of the knowledge graph.

Builds the graph index and community labeling once at construction and
then answers read-only queries: neighbors, paths, similarity, communities,
centrality, temporal slices, and the aggregated `compare(a, b)`.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

import networkx as nx

from ..common.config import EngineSettings
from . import paths, similarity, temporal
from .centrality import CentralityScores, compute_centrality, top_nodes
from .communities import (
    CommunityDetector,
    ConnectedComponentDetector,
    LabelPropagationDetector,
    find_bridge_nodes,
    summarize_communities,
)
from .errors import InvalidQueryError
from .index import GraphIndex, NodeInput, RelationshipInput
from .models import (
    CommunityResult,
    ComparisonResult,
    NeighborResult,
    Node,
    PathResult,
    Relationship,
    TemporalSlice,
)

logger = logging.getLogger(__name__)


def detector_from_settings(settings: EngineSettings) -> CommunityDetector:
    """Instantiate the community detector named by `settings.community_method`."""
    if settings.community_method == ConnectedComponentDetector.name:
        return ConnectedComponentDetector()
    if settings.community_method == LabelPropagationDetector.name:
        return LabelPropagationDetector(max_iterations=settings.label_propagation_max_iterations)
    raise ValueError(f"Unknown community method '{settings.community_method}'")


class GraphEngine:
    """Immutable knowledge graph with pairwise comparison queries."""

    def __init__(
        self,
        nodes: Iterable[NodeInput],
        relationships: Iterable[RelationshipInput],
        settings: Optional[EngineSettings] = None,
        community_detector: Optional[CommunityDetector] = None,
    ):
        """
        Build the engine.

        Args:
            nodes: Node objects or JSON-shaped node records
            relationships: Relationship objects or JSON-shaped records
            settings: Engine settings (defaults if None)
            community_detector: Detector override; otherwise chosen from settings

        Raises:
            DuplicateNodeError: If two nodes share an id
            InvalidRecordError: If a raw record is malformed
        """
        self.settings = settings or EngineSettings()
        self.index = GraphIndex(nodes, relationships)

        self.community_detector = community_detector or detector_from_settings(self.settings)
        self._labels: Dict[str, str] = self.community_detector.detect(self.index)
        self._communities: Optional[Tuple[CommunityResult, ...]] = None
        self._centrality: Optional[CentralityScores] = None

        logger.info(
            "Graph engine ready: %d nodes, %d edges, %d communities (%s)",
            len(self.index),
            len(self.index.edges),
            len(set(self._labels.values())),
            self.community_detector.name,
        )

    # ── Getters ──

    @property
    def warnings(self) -> Tuple[str, ...]:
        return self.index.warnings

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.index.get_node(node_id)

    def get_all_nodes(self) -> List[Node]:
        return list(self.index.nodes.values())

    def get_relationships(self) -> List[Relationship]:
        return list(self.index.edges)

    def _require_pair(self, node_a: str, node_b: str) -> None:
        if node_a == node_b:
            raise InvalidQueryError(f"Cannot compare node '{node_a}' with itself")
        missing = [node_id for node_id in (node_a, node_b) if node_id not in self.index]
        if missing:
            raise InvalidQueryError(f"Unknown node id(s): {', '.join(missing)}")

    # ── Neighbor queries ──

    def neighbors(self, node_id: str) -> NeighborResult:
        return self.index.neighbors(node_id)

    def k_hop_neighbors(self, node_id: str, depth: int = 2) -> Dict[str, int]:
        return self.index.k_hop_neighbors(node_id, depth)

    def ego_network(self, node_id: str, depth: int = 2) -> Tuple[List[str], List[Relationship]]:
        return self.index.ego_network(node_id, depth)

    def relationships_between(self, node_a: str, node_b: str) -> List[Relationship]:
        return self.index.relationships_between(node_a, node_b)

    # ── Paths ──

    def shortest_path(self, node_a: str, node_b: str) -> Optional[PathResult]:
        self._require_pair(node_a, node_b)
        return paths.shortest_path(self.index, node_a, node_b)

    def find_all_paths(
        self,
        node_a: str,
        node_b: str,
        max_length: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[PathResult]:
        self._require_pair(node_a, node_b)
        return paths.find_all_paths(
            self.index,
            node_a,
            node_b,
            max_length=self.settings.all_paths_max_length if max_length is None else max_length,
            limit=self.settings.all_paths_limit if limit is None else limit,
        )

    def influence_chain(self, node_id: str, direction: str = paths.FORWARD) -> List[str]:
        return paths.influence_chain(self.index, node_id, direction)

    # ── Similarity ──

    def jaccard_similarity(self, node_a: str, node_b: str) -> float:
        self._require_pair(node_a, node_b)
        return similarity.jaccard_similarity(self.index, node_a, node_b)

    def shared_connections(self, node_a: str, node_b: str) -> List[str]:
        self._require_pair(node_a, node_b)
        return similarity.shared_connections(self.index, node_a, node_b)

    # ── Communities ──

    def community_of(self, node_id: str) -> Optional[str]:
        return self._labels.get(node_id)

    def communities(self) -> List[CommunityResult]:
        """Communities with at least two members, largest first. Returns fresh copies."""
        if self._communities is None:
            self._communities = tuple(summarize_communities(self.index, self._labels))
        return [replace(community, members=list(community.members)) for community in self._communities]

    def bridge_nodes(self, top_n: int = 10) -> List[Dict[str, Any]]:
        return find_bridge_nodes(self.index, self._labels, top_n=top_n)

    def connected_components(self) -> List[List[str]]:
        """Connected components as sorted id lists, largest first."""
        components = [sorted(component) for component in nx.connected_components(self.index.graph)]
        components.sort(key=lambda members: (-len(members), members[0]))
        return components

    # ── Centrality ──

    def centrality(self) -> CentralityScores:
        if self._centrality is None:
            self._centrality = compute_centrality(
                self.index,
                betweenness_sample_size=self.settings.betweenness_sample_size,
                damping=self.settings.pagerank_damping,
                seed=self.settings.random_seed,
            )
        return self._centrality

    def top_nodes(self, metric: str = "degree", top_n: int = 20) -> List[Tuple[str, float]]:
        return top_nodes(self.centrality().get(metric), top_n=top_n)

    # ── Temporal ──

    def temporal_slices(self) -> List[TemporalSlice]:
        return temporal.temporal_slices(self.index, self.settings.era_ranges)

    def nodes_in_time_range(self, start_year: int, end_year: int) -> List[Node]:
        return temporal.nodes_in_time_range(self.index, start_year, end_year)

    # ── Comparison ──

    def compare(self, node_a: str, node_b: str) -> ComparisonResult:
        """
        Compare two distinct nodes.

        Raises:
            InvalidQueryError: If the ids are equal or either is unknown
        """
        self._require_pair(node_a, node_b)
        first = self.index.get_node(node_a)
        second = self.index.get_node(node_b)

        return ComparisonResult(
            node_a=node_a,
            node_b=node_b,
            jaccard_similarity=similarity.jaccard_similarity(self.index, node_a, node_b),
            shared_connections=similarity.shared_connections(self.index, node_a, node_b),
            shortest_path=paths.shortest_path(self.index, node_a, node_b),
            common_community=self._labels[node_a] == self._labels[node_b],
            relationships_between=self.index.relationships_between(node_a, node_b),
            shared_tags=similarity.shared_tags(first, second),
            era_overlap=similarity.era_overlap(first, second),
        )
