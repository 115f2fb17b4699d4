"""
Tests for graph construction pipeline (sophia_graph/graph/build_graph.py).
"""

import json
import logging
from unittest.mock import patch

import pytest
import yaml

from sophia_graph.graph.build_graph import build_engine, load_snapshot, main


@pytest.fixture
def snapshot_path(tmp_path, philosophy_nodes, philosophy_relationships):
    path = tmp_path / "graph" / "snapshot.json"
    path.parent.mkdir(parents=True)
    path.write_text(
        json.dumps({"nodes": philosophy_nodes, "relationships": philosophy_relationships}, ensure_ascii=False),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def config_path(tmp_path, snapshot_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump({
            "logging": {"level": "INFO"},
            "data": {"snapshot_path": str(snapshot_path)},
            "graph": {"community_method": "connected_components"},
        }),
        encoding="utf-8",
    )
    return str(path)


@pytest.fixture
def no_logging_setup():
    """Keep pytest's log capture handlers in place while main() runs."""
    with patch("sophia_graph.graph.build_graph.setup_logging") as mock_setup:
        yield mock_setup


def test_load_snapshot(snapshot_path):
    nodes, relationships = load_snapshot(str(snapshot_path))
    assert len(nodes) == 9
    assert len(relationships) == 9
    assert nodes[0]["id"] == "socrates"


def test_load_snapshot_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="snapshot"):
        load_snapshot(str(tmp_path / "missing.json"))


def test_load_snapshot_rejects_wrong_shape(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps([{"id": "kant"}]), encoding="utf-8")
    with pytest.raises(ValueError):
        load_snapshot(str(path))


def test_load_snapshot_relationships_optional(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({"nodes": [{"id": "kant"}]}), encoding="utf-8")
    nodes, relationships = load_snapshot(str(path))
    assert relationships == []


def test_build_engine_uses_config(config_path):
    engine = build_engine(config_path)
    assert len(engine.get_all_nodes()) == 9
    assert engine.community_detector.name == "connected_components"
    assert engine.compare("socrates", "aristotle").common_community is True


def test_main_runs_pipeline(config_path, no_logging_setup, caplog):
    with patch("sophia_graph.graph.build_graph.CONFIG_PATH", config_path):
        with caplog.at_level(logging.INFO):
            main()
    no_logging_setup.assert_called_once_with(config_path)
    messages = [record.getMessage() for record in caplog.records]
    assert any("construction complete" in message for message in messages)
    assert any("relationships were dropped" in message for message in messages)


def test_main_reraises_missing_snapshot(tmp_path, no_logging_setup):
    config = tmp_path / "config.yaml"
    config.write_text(
        yaml.safe_dump({"data": {"snapshot_path": str(tmp_path / "absent.json")}}),
        encoding="utf-8",
    )
    with patch("sophia_graph.graph.build_graph.CONFIG_PATH", str(config)):
        with pytest.raises(FileNotFoundError):
            main()
