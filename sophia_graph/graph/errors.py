"""
Exceptions raised by the graph engine.
"""


class GraphEngineError(Exception):
    """Base class for graph engine errors."""


class InvalidRecordError(GraphEngineError, ValueError):
    """A node or relationship record is malformed (missing id, unknown nodeType, ...)."""


class DuplicateNodeError(GraphEngineError, ValueError):
    """Two nodes share the same id; the graph cannot be built."""

    def __init__(self, node_id: str):
        super().__init__(f"Duplicate node id '{node_id}'")
        self.node_id = node_id


class InvalidQueryError(GraphEngineError, ValueError):
    """A pairwise query was called with identical or unknown node ids."""
