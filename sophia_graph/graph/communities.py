"""
Community detection over a GraphIndex.

Detection runs once over the whole graph and yields a label per node;
two nodes share a community iff their labels match. Detectors are
interchangeable strategies:

- LabelPropagationDetector: deterministic label propagation (default)
- ConnectedComponentDetector: one community per connected component

Both only assign equal labels to nodes joined by some path.
"""

import logging
from collections import Counter, OrderedDict
from typing import Any, Dict, List

import networkx as nx

from .index import GraphIndex
from .models import CommunityResult

logger = logging.getLogger(__name__)


class CommunityDetector:
    """Strategy interface: map every node id to a community label."""

    name = "base"

    def detect(self, index: GraphIndex) -> Dict[str, str]:
        raise NotImplementedError


class LabelPropagationDetector(CommunityDetector):
    """
    Deterministic label propagation.

    Every node starts with its own id as label. Each pass visits nodes in
    sorted id order and gives each node with neighbors the most frequent
    label among its distinct neighbors, breaking ties with the smallest
    label. Updates are applied in place. Stops after a pass with no change
    or after `max_iterations` passes.
    """

    name = "label_propagation"

    def __init__(self, max_iterations: int = 50):
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        self.max_iterations = max_iterations

    def detect(self, index: GraphIndex) -> Dict[str, str]:
        labels: Dict[str, str] = {node_id: node_id for node_id in index.nodes}
        order = sorted(labels)

        for iteration in range(1, self.max_iterations + 1):
            changed = False
            for node_id in order:
                neighbors = index.neighbor_ids(node_id)
                if not neighbors:
                    continue
                counts = Counter(labels[neighbor] for neighbor in neighbors)
                top = max(counts.values())
                best = min(label for label, count in counts.items() if count == top)
                if best != labels[node_id]:
                    labels[node_id] = best
                    changed = True
            if not changed:
                logger.info("Label propagation converged after %d iterations", iteration)
                break
        else:
            logger.warning(
                "Label propagation did not converge within %d iterations; using last labeling",
                self.max_iterations,
            )

        return labels


class ConnectedComponentDetector(CommunityDetector):
    """Each connected component is a community, labeled by its smallest node id."""

    name = "connected_components"

    def detect(self, index: GraphIndex) -> Dict[str, str]:
        labels: Dict[str, str] = {}
        for component in nx.connected_components(index.graph):
            label = min(component)
            for node_id in component:
                labels[node_id] = label
        return labels


def summarize_communities(index: GraphIndex, labels: Dict[str, str]) -> List[CommunityResult]:
    """
    Group labeled nodes into communities with at least two members.

    Each community gets an automatic label "<dominant category>-<dominant era>"
    ("mixed" when no member carries the attribute). Sorted by size
    descending, then by community id.
    """
    groups: Dict[str, List[str]] = OrderedDict()
    for node_id in sorted(labels):
        groups.setdefault(labels[node_id], []).append(node_id)

    results = []
    for community_id, members in groups.items():
        if len(members) < 2:
            continue
        categories: Counter = Counter()
        eras: Counter = Counter()
        for member in members:
            node = index.get_node(member)
            if node is None:
                continue
            if node.category:
                categories[node.category] += 1
            if node.era:
                eras[node.era] += 1
        top_category = categories.most_common(1)[0][0] if categories else "mixed"
        top_era = eras.most_common(1)[0][0] if eras else "mixed"
        results.append(
            CommunityResult(
                community_id=community_id,
                members=members,
                label=f"{top_category}-{top_era}",
                size=len(members),
            )
        )

    results.sort(key=lambda c: (-c.size, c.community_id))
    return results


def find_bridge_nodes(
    index: GraphIndex,
    labels: Dict[str, str],
    top_n: int = 10,
) -> List[Dict[str, Any]]:
    """
    Nodes whose neighbors belong to two or more multi-member communities.

    Returns:
        List of dictionaries with `id` and sorted `communities`, ordered by
        number of communities spanned (descending), then id
    """
    sizes = Counter(labels.values())
    bridges = []
    for node_id in index.nodes:
        spanned = {
            labels[neighbor]
            for neighbor in index.neighbor_ids(node_id)
            if sizes[labels[neighbor]] >= 2
        }
        if len(spanned) >= 2:
            bridges.append({"id": node_id, "communities": sorted(spanned)})

    bridges.sort(key=lambda b: (-len(b["communities"]), b["id"]))
    return bridges[:top_n]
