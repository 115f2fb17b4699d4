"""
Tests for record parsing and data model helpers (sophia_graph/graph/models.py).
"""

import pytest

from sophia_graph.graph.errors import GraphEngineError, InvalidRecordError
from sophia_graph.graph.models import (
    EntityNode,
    PersonNode,
    Relationship,
    TimePeriod,
    is_entity,
    is_person,
    node_from_record,
    relationship_from_record,
)


class TestNodeFromRecord:
    def test_person_record(self):
        node = node_from_record({
            "id": "kant",
            "nodeType": "person",
            "name": {"ko": "칸트", "en": "Immanuel Kant"},
            "category": "philosopher",
            "subcategory": "german_idealism",
            "era": "modern",
            "period": {"start": 1724, "end": 1804},
            "tags": ["ethics", "epistemology"],
            "connections": 12,
        })

        assert isinstance(node, PersonNode)
        assert is_person(node)
        assert node.node_type == "person"
        assert node.name.en == "Immanuel Kant"
        assert node.subcategory == "german_idealism"
        assert node.period == TimePeriod(start=1724, end=1804)
        assert node.tags == ("ethics", "epistemology")
        assert node.connections == 12

    def test_entity_record_uses_entity_type_as_category(self):
        node = node_from_record({"id": "french-revolution", "nodeType": "entity", "entityType": "event", "era": "modern"})

        assert isinstance(node, EntityNode)
        assert is_entity(node)
        assert node.entity_type == "event"
        assert node.category == "event"

    def test_entity_file_shape_without_node_type(self):
        """Entity files carry `type` instead of `nodeType`."""
        node = node_from_record({"id": "stoicism", "type": "ideology", "tags": ["ethics"]})

        assert node.node_type == "entity"
        assert node.entity_type == "ideology"
        assert node.era is None

    def test_record_without_type_is_person(self):
        node = node_from_record({"id": "socrates", "category": "philosopher"})
        assert node.node_type == "person"

    def test_period_as_pair(self):
        node = node_from_record({"id": "x", "period": [-500, -400]})
        assert node.period == TimePeriod(start=-500, end=-400)

    def test_missing_id_raises(self):
        with pytest.raises(InvalidRecordError):
            node_from_record({"nodeType": "person"})

    def test_unknown_node_type_raises(self):
        with pytest.raises(InvalidRecordError, match="unknown nodeType"):
            node_from_record({"id": "x", "nodeType": "religion"})

    def test_invalid_period_raises(self):
        with pytest.raises(InvalidRecordError):
            node_from_record({"id": "x", "period": {"start": -500}})

    def test_invalid_record_error_is_value_error(self):
        with pytest.raises(ValueError):
            node_from_record({})

    def test_non_numeric_connections_raises(self):
        with pytest.raises(InvalidRecordError, match="connections"):
            node_from_record({"id": "x", "connections": "many"})

    def test_string_tags_rejected(self):
        with pytest.raises(InvalidRecordError, match="tags"):
            node_from_record({"id": "x", "tags": "ethics"})


class TestRelationshipFromRecord:
    def test_full_record(self):
        rel = relationship_from_record({
            "id": "r1",
            "source": "hegel",
            "target": "marx",
            "type": "influenced",
            "description": "Dialectics",
            "strength": 3,
            "year": 1840,
            "tags": ["dialectics"],
        })

        assert rel == Relationship(
            source="hegel",
            target="marx",
            type="influenced",
            description="Dialectics",
            strength=3.0,
            id="r1",
            year=1840,
            tags=("dialectics",),
        )

    def test_defaults(self):
        rel = relationship_from_record({"source": "a", "target": "b", "type": "opposed"})
        assert rel.description == ""
        assert rel.strength is None
        assert rel.tags == ()

    @pytest.mark.parametrize("missing", ["source", "target", "type"])
    def test_missing_required_field_raises(self, missing):
        record = {"source": "a", "target": "b", "type": "opposed"}
        del record[missing]
        with pytest.raises(InvalidRecordError, match=missing):
            relationship_from_record(record)

    @pytest.mark.parametrize("field_name, value", [("year", "c. 400"), ("strength", "strong"), ("year", [1840])])
    def test_non_numeric_field_raises(self, field_name, value):
        record = {"source": "a", "target": "b", "type": "opposed", field_name: value}
        with pytest.raises(InvalidRecordError, match=field_name) as excinfo:
            relationship_from_record(record)
        assert isinstance(excinfo.value, GraphEngineError)
        assert isinstance(excinfo.value.__cause__, (TypeError, ValueError))

    def test_string_tags_rejected(self):
        with pytest.raises(InvalidRecordError, match="tags"):
            relationship_from_record({"source": "a", "target": "b", "type": "opposed", "tags": "ethics"})


def test_relationship_connects_either_direction():
    rel = Relationship(source="plato", target="socrates", type="teacher_student")
    assert rel.connects("plato", "socrates")
    assert rel.connects("socrates", "plato")
    assert not rel.connects("plato", "aristotle")
    assert rel.other_end("socrates") == "plato"


def test_relationship_to_dict_omits_empty_optionals():
    rel = Relationship(source="a", target="b", type="influenced", description="d")
    assert rel.to_dict() == {"source": "a", "target": "b", "type": "influenced", "description": "d"}


def test_time_period_overlaps():
    period = TimePeriod(start=-428, end=-348)
    assert period.overlaps(-400, -300)
    assert period.overlaps(-348, -300)
    assert not period.overlaps(-347, -300)
