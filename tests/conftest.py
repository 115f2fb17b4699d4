"""
Pytest configuration and shared fixtures for Sophia Graph tests.

This module provides:
- A small philosophy dataset as raw JSON-shaped records
- A GraphEngine built from that dataset
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sophia_graph.graph.engine import GraphEngine


@pytest.fixture
def philosophy_nodes():
    """Persons and entities in two connected clusters plus two isolated nodes."""
    return [
        {
            "id": "socrates",
            "nodeType": "person",
            "name": {"ko": "소크라테스", "en": "Socrates"},
            "category": "philosopher",
            "era": "ancient",
            "period": {"start": -470, "end": -399},
            "tags": ["classical_greek", "ethics"],
            "connections": 1,
        },
        {
            "id": "plato",
            "nodeType": "person",
            "name": {"ko": "플라톤", "en": "Plato"},
            "category": "philosopher",
            "era": "ancient",
            "period": {"start": -428, "end": -348},
            "tags": ["classical_greek", "metaphysics", "ethics"],
            "connections": 3,
        },
        {
            "id": "aristotle",
            "nodeType": "person",
            "category": "philosopher",
            "era": "ancient",
            "period": {"start": -384, "end": -322},
            "tags": ["classical_greek", "logic", "metaphysics"],
        },
        {
            "id": "platonism",
            "nodeType": "entity",
            "entityType": "ideology",
            "era": "ancient",
            "tags": ["metaphysics"],
        },
        {
            "id": "kant",
            "nodeType": "person",
            "category": "philosopher",
            "era": "modern",
            "period": {"start": 1724, "end": 1804},
            "tags": ["german_idealism", "ethics"],
        },
        {
            "id": "hegel",
            "nodeType": "person",
            "category": "philosopher",
            "era": "modern",
            "period": {"start": 1770, "end": 1831},
            "tags": ["german_idealism", "dialectics"],
        },
        {
            "id": "marx",
            "nodeType": "person",
            "category": "philosopher",
            "era": "modern",
            "period": {"start": 1818, "end": 1883},
            "tags": ["critical_theory", "dialectics"],
        },
        {
            "id": "lonely",
            "nodeType": "person",
            "category": "scientist",
            "era": "contemporary",
            "tags": [],
        },
        {
            "id": "hermit",
            "nodeType": "entity",
            "entityType": "concept",
            "tags": [],
        },
    ]


@pytest.fixture
def philosophy_relationships():
    """Relationships including a parallel edge, an unknown endpoint and a self-loop."""
    return [
        {"source": "plato", "target": "socrates", "type": "teacher_student", "description": "Plato studied under Socrates"},
        {"source": "aristotle", "target": "plato", "type": "teacher_student", "description": "Aristotle studied at the Academy"},
        {"source": "plato", "target": "platonism", "type": "founded", "description": "Plato founded Platonism", "strength": 3},
        {"source": "aristotle", "target": "platonism", "type": "opposed", "description": "Critique of the Forms"},
        {"source": "kant", "target": "hegel", "type": "influenced", "description": "Critical philosophy"},
        {"source": "hegel", "target": "marx", "type": "influenced", "description": "Dialectics"},
        {"source": "plato", "target": "aristotle", "type": "influenced", "description": "Theory of Forms"},
        {"source": "ghost-id", "target": "plato", "type": "influenced", "description": "Unknown source"},
        {"source": "kant", "target": "kant", "type": "influenced", "description": "Self-loop"},
    ]


@pytest.fixture
def engine(philosophy_nodes, philosophy_relationships):
    """GraphEngine built from the philosophy dataset with default settings."""
    return GraphEngine(philosophy_nodes, philosophy_relationships)
