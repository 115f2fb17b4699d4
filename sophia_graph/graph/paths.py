"""
Path finding over the undirected adjacency of a GraphIndex.

- Shortest path: breadth-first search, deterministic for a fixed input order
- All paths: bounded depth-first enumeration of simple paths
- Influence chain: longest directed chain over influence-type edges
"""

import logging
from collections import deque
from typing import Dict, List, Optional, Tuple

from .errors import InvalidQueryError
from .index import GraphIndex
from .models import PathResult, Relationship

logger = logging.getLogger(__name__)

INFLUENCE_TYPES = frozenset({"influenced", "teacher_student", "developed"})

FORWARD = "forward"
BACKWARD = "backward"


def shortest_path(index: GraphIndex, start: str, end: str) -> Optional[PathResult]:
    """
    Find the fewest-hops path between two nodes.

    Neighbors are expanded in adjacency order and the first node to discover
    another becomes its parent, so ties between equal-length paths resolve
    the same way on every call. The edge recorded for each hop is the first
    one in adjacency order joining that pair.

    Args:
        index: Graph index to search
        start: Start node id
        end: End node id

    Returns:
        PathResult, or None if either node is unknown or unreachable

    Raises:
        InvalidQueryError: If start == end
    """
    if start == end:
        raise InvalidQueryError(f"Shortest path requires two distinct nodes, got '{start}' twice")
    if start not in index or end not in index:
        return None

    parents: Dict[str, Tuple[str, Relationship]] = {}
    visited = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for neighbor, edge in index.adjacency(current):
            if neighbor in visited:
                continue
            visited.add(neighbor)
            parents[neighbor] = (current, edge)
            if neighbor == end:
                return _reconstruct(parents, start, end)
            queue.append(neighbor)

    return None


def _reconstruct(parents: Dict[str, Tuple[str, Relationship]], start: str, end: str) -> PathResult:
    path = [end]
    relationships: List[Relationship] = []
    node = end
    while node != start:
        parent, edge = parents[node]
        relationships.append(edge)
        path.append(parent)
        node = parent
    path.reverse()
    relationships.reverse()
    return PathResult(path=path, relationships=relationships)


def _first_edge(index: GraphIndex, node_a: str, node_b: str) -> Relationship:
    for neighbor, edge in index.adjacency(node_a):
        if neighbor == node_b:
            return edge
    raise KeyError(f"No edge between '{node_a}' and '{node_b}'")


def find_all_paths(
    index: GraphIndex,
    start: str,
    end: str,
    max_length: int = 4,
    limit: int = 10,
) -> List[PathResult]:
    """
    Enumerate simple paths of at most `max_length` hops.

    Paths are discovered depth-first in adjacency order, then stably sorted
    by hop count and truncated to `limit`.

    Raises:
        InvalidQueryError: If start == end
    """
    if start == end:
        raise InvalidQueryError(f"Path search requires two distinct nodes, got '{start}' twice")
    if start not in index or end not in index or max_length <= 0:
        return []

    found: List[List[str]] = []
    path = [start]
    on_path = {start}

    def dfs(current: str) -> None:
        if current == end:
            found.append(list(path))
            return
        if len(path) - 1 >= max_length:
            return
        for neighbor in index.neighbor_ids(current):
            if neighbor in on_path:
                continue
            on_path.add(neighbor)
            path.append(neighbor)
            dfs(neighbor)
            path.pop()
            on_path.discard(neighbor)

    dfs(start)
    found.sort(key=len)

    results = []
    for nodes in found[:limit]:
        edges = [_first_edge(index, nodes[i], nodes[i + 1]) for i in range(len(nodes) - 1)]
        results.append(PathResult(path=nodes, relationships=edges))

    logger.debug("Found %d paths between %s and %s (max_length=%d)", len(found), start, end, max_length)
    return results


def influence_chain(index: GraphIndex, node_id: str, direction: str = FORWARD) -> List[str]:
    """
    Longest directed chain of influence starting at a node.

    Only `influenced`, `teacher_student` and `developed` edges are followed,
    source -> target when going forward and target -> source backward.
    The first longest chain found in edge order wins.

    Returns:
        List of node ids beginning with `node_id`; just `[node_id]` when it has
        no outgoing influence edges or is not in the graph.
    """
    if direction not in (FORWARD, BACKWARD):
        raise ValueError(f"direction must be '{FORWARD}' or '{BACKWARD}', got '{direction}'")
    if node_id not in index:
        return [node_id]

    successors: Dict[str, List[str]] = {}
    for rel in index.edges:
        if rel.type not in INFLUENCE_TYPES:
            continue
        origin, dest = (rel.source, rel.target) if direction == FORWARD else (rel.target, rel.source)
        targets = successors.setdefault(origin, [])
        if dest not in targets:
            targets.append(dest)

    longest = [node_id]
    path = [node_id]
    on_path = {node_id}

    def dfs(current: str) -> None:
        nonlocal longest
        if len(path) > len(longest):
            longest = list(path)
        for nxt in successors.get(current, ()):
            if nxt in on_path:
                continue
            on_path.add(nxt)
            path.append(nxt)
            dfs(nxt)
            path.pop()
            on_path.discard(nxt)

    dfs(node_id)
    return longest
