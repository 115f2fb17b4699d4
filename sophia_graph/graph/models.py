"""
Data model for the knowledge graph.

Nodes are a closed union keyed by `node_type`: `PersonNode` or
`EntityNode`. Both expose the fields the algorithms rely on (`id`, `era`,
`period`, `tags`) so traversal and similarity code can treat them
uniformly; type-specific fields are reached through `is_person` /
`is_entity`.

Raw JSON-shaped records (camelCase keys, as the content files store them)
are converted with `node_from_record` and `relationship_from_record`.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .errors import InvalidRecordError

PERSON = "person"
ENTITY = "entity"
NODE_TYPES = (PERSON, ENTITY)

ERAS = ("ancient", "medieval", "modern", "contemporary")


@dataclass(frozen=True)
class LocalizedName:
    ko: str
    en: str = ""
    original: Optional[str] = None


@dataclass(frozen=True)
class TimePeriod:
    """Year range; BC years are negative."""
    start: int
    end: int
    approximate: bool = False

    def overlaps(self, start: int, end: int) -> bool:
        return self.start <= end and self.end >= start


@dataclass(frozen=True)
class PersonNode:
    id: str
    category: str = ""
    era: Optional[str] = None
    period: Optional[TimePeriod] = None
    tags: Tuple[str, ...] = ()
    connections: int = 0
    name: Optional[LocalizedName] = None
    subcategory: Optional[str] = None

    @property
    def node_type(self) -> str:
        return PERSON


@dataclass(frozen=True)
class EntityNode:
    id: str
    category: str = ""
    era: Optional[str] = None
    period: Optional[TimePeriod] = None
    tags: Tuple[str, ...] = ()
    connections: int = 0
    name: Optional[LocalizedName] = None
    entity_type: Optional[str] = None

    @property
    def node_type(self) -> str:
        return ENTITY


Node = Union[PersonNode, EntityNode]


def is_person(node: Node) -> bool:
    return isinstance(node, PersonNode)


def is_entity(node: Node) -> bool:
    return isinstance(node, EntityNode)


@dataclass(frozen=True)
class Relationship:
    """
    A directed, typed arc between two node ids.

    `type` is an opaque label (influenced, opposed, teacher_student, ...).
    Direction is kept for display only; traversal treats edges as undirected.
    """
    source: str
    target: str
    type: str
    description: str = ""
    strength: Optional[float] = None
    id: Optional[str] = None
    year: Optional[int] = None
    tags: Tuple[str, ...] = ()

    def connects(self, a: str, b: str) -> bool:
        """True if this edge joins `a` and `b` in either direction."""
        return (self.source == a and self.target == b) or (self.source == b and self.target == a)

    def other_end(self, node_id: str) -> str:
        return self.target if self.source == node_id else self.source

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "source": self.source,
            "target": self.target,
            "type": self.type,
            "description": self.description,
        }
        if self.strength is not None:
            data["strength"] = self.strength
        if self.id is not None:
            data["id"] = self.id
        if self.year is not None:
            data["year"] = self.year
        if self.tags:
            data["tags"] = list(self.tags)
        return data


@dataclass
class NeighborResult:
    ids: List[str] = field(default_factory=list)
    edges: List[Relationship] = field(default_factory=list)


@dataclass
class PathResult:
    """Node ids from start to end inclusive, plus one representative edge per hop."""
    path: List[str]
    relationships: List[Relationship]

    @property
    def length(self) -> int:
        return len(self.path) - 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": list(self.path),
            "length": self.length,
            "relationships": [rel.to_dict() for rel in self.relationships],
        }


@dataclass
class CommunityResult:
    community_id: str
    members: List[str]
    label: str
    size: int


@dataclass
class TemporalSlice:
    era: str
    year_range: Tuple[int, int]
    node_ids: List[str]
    edge_count: int


@dataclass
class ComparisonResult:
    node_a: str
    node_b: str
    jaccard_similarity: float
    shared_connections: List[str]
    shortest_path: Optional[PathResult]
    common_community: bool
    relationships_between: List[Relationship]
    shared_tags: List[str]
    era_overlap: bool

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation using the UI's camelCase keys."""
        return {
            "nodeA": self.node_a,
            "nodeB": self.node_b,
            "jaccardSimilarity": self.jaccard_similarity,
            "sharedConnections": list(self.shared_connections),
            "shortestPath": self.shortest_path.to_dict() if self.shortest_path else None,
            "commonCommunity": self.common_community,
            "relationshipsBetween": [rel.to_dict() for rel in self.relationships_between],
            "sharedTags": list(self.shared_tags),
            "eraOverlap": self.era_overlap,
        }


def _parse_name(raw: Any) -> Optional[LocalizedName]:
    if raw is None:
        return None
    if isinstance(raw, str):
        return LocalizedName(ko=raw, en=raw)
    if isinstance(raw, Mapping):
        return LocalizedName(
            ko=str(raw.get("ko", "")),
            en=str(raw.get("en", "")),
            original=raw.get("original"),
        )
    raise InvalidRecordError(f"Unsupported name value: {raw!r}")


def _parse_period(raw: Any) -> Optional[TimePeriod]:
    if raw is None:
        return None
    try:
        if isinstance(raw, Mapping):
            return TimePeriod(
                start=int(raw["start"]),
                end=int(raw["end"]),
                approximate=bool(raw.get("approximate", False)),
            )
        start, end = raw
        return TimePeriod(start=int(start), end=int(end))
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidRecordError(f"Invalid period value: {raw!r}") from exc


def _parse_tags(raw: Any, owner: str) -> Tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        raise InvalidRecordError(f"{owner} tags must be a list, got {raw!r}")
    return tuple(str(tag) for tag in raw)


def _parse_number(raw: Any, convert, field_name: str, owner: str):
    if raw is None:
        return None
    try:
        return convert(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidRecordError(f"{owner} has invalid {field_name} value: {raw!r}") from exc


def node_from_record(record: Mapping[str, Any]) -> Node:
    """
    Build a Node from a JSON-shaped record.

    `nodeType` selects the variant. Records without it are treated as
    entities when they carry an entity `type` (the entity files' shape)
    and as persons otherwise.

    Raises:
        InvalidRecordError: If the id is missing, `nodeType` is unknown,
            `connections` is not numeric or `tags` is not a list.
    """
    node_id = record.get("id")
    if not node_id:
        raise InvalidRecordError(f"Node record has no id: {dict(record)!r}")

    node_type = record.get("nodeType")
    if node_type is None:
        node_type = ENTITY if ("type" in record or "entityType" in record) else PERSON
    if node_type not in NODE_TYPES:
        raise InvalidRecordError(f"Node '{node_id}' has unknown nodeType '{node_type}'")

    common = dict(
        id=str(node_id),
        era=record.get("era"),
        period=_parse_period(record.get("period")),
        tags=_parse_tags(record.get("tags"), f"Node '{node_id}'"),
        connections=_parse_number(record.get("connections"), int, "connections", f"Node '{node_id}'") or 0,
        name=_parse_name(record.get("name")),
    )

    if node_type == PERSON:
        return PersonNode(
            category=str(record.get("category") or ""),
            subcategory=record.get("subcategory"),
            **common,
        )

    entity_type = record.get("entityType") or record.get("type")
    return EntityNode(
        category=str(record.get("category") or entity_type or ""),
        entity_type=entity_type,
        **common,
    )


def relationship_from_record(record: Mapping[str, Any]) -> Relationship:
    """
    Build a Relationship from a JSON-shaped record.

    Raises:
        InvalidRecordError: If source, target or type is missing, `strength`
            or `year` is not numeric, or `tags` is not a list.
    """
    missing = [key for key in ("source", "target", "type") if not record.get(key)]
    if missing:
        raise InvalidRecordError(
            f"Relationship record is missing {', '.join(missing)}: {dict(record)!r}"
        )

    owner = f"Relationship {record['source']} -> {record['target']}"
    return Relationship(
        source=str(record["source"]),
        target=str(record["target"]),
        type=str(record["type"]),
        description=str(record.get("description") or ""),
        strength=_parse_number(record.get("strength"), float, "strength", owner),
        id=record.get("id"),
        year=_parse_number(record.get("year"), int, "year", owner),
        tags=_parse_tags(record.get("tags"), owner),
    )
