"""Tests for agent state files."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from claude_agents.state import StateManager, cleanup_all_states


def test_state_path_layout(tmp_path: Path):
    manager = StateManager("scan", sub_dir="extraction", base_dir=tmp_path)
    assert manager.path == tmp_path / "extraction" / "scan.json"
    assert manager.path.parent.is_dir()


def test_state_defaults_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    manager = StateManager("progress", create_dir=False)
    assert manager.path == tmp_path / "agents" / "tmp" / "progress.json"
    assert not manager.path.parent.exists()


def test_read_missing_returns_none(tmp_path: Path):
    manager = StateManager("missing", base_dir=tmp_path)
    assert not manager.exists()
    assert manager.read() is None


def test_write_adds_timestamp_and_reads_back(tmp_path: Path):
    manager = StateManager("state", base_dir=tmp_path)
    manager.write({"version": "1.0.0", "phase": "discovery"})

    stored = manager.read()
    assert stored is not None
    assert stored["phase"] == "discovery"
    assert stored["timestamp"]


def test_write_keeps_existing_timestamp(tmp_path: Path):
    manager = StateManager("state", base_dir=tmp_path)
    manager.write({"version": "1.0.0", "timestamp": "2024-01-01T00:00:00+00:00"})
    assert manager.read()["timestamp"] == "2024-01-01T00:00:00+00:00"


def test_update_merges_and_refreshes_timestamp(tmp_path: Path):
    manager = StateManager("state", base_dir=tmp_path)
    manager.write({"version": "1.0.0", "a": 1, "timestamp": "old"})

    updated = manager.update({"b": 2})

    assert updated["a"] == 1
    assert updated["b"] == 2
    assert updated["timestamp"] != "old"
    assert manager.read() == updated


def test_corrupt_state_reads_as_none(tmp_path: Path):
    manager = StateManager("state", base_dir=tmp_path)
    manager.path.write_text("{not json")
    assert manager.read() is None

    manager.path.write_text(json.dumps([1, 2, 3]))
    assert manager.read() is None


def test_initialize_and_delete(tmp_path: Path):
    manager = StateManager("state", base_dir=tmp_path)
    default = {"version": "1.0.0", "currentPhase": "start"}

    assert manager.initialize(default)["currentPhase"] == "start"
    assert manager.initialize({"version": "2"})["currentPhase"] == "start"

    manager.delete()
    assert not manager.exists()
    manager.delete()


def test_cleanup_all_states(tmp_path: Path):
    first = StateManager("last-run", sub_dir="git-branch-janitor", base_dir=tmp_path)
    second = StateManager("progress", sub_dir="extraction", base_dir=tmp_path)
    first.write({"version": "1.0.0"})
    second.write({"version": "1.0.0"})
    (tmp_path / "notes.txt").write_text("keep me")

    assert cleanup_all_states(tmp_path) == 2
    assert not first.exists()
    assert not second.exists()
    assert (tmp_path / "notes.txt").exists()
    assert cleanup_all_states(tmp_path / "nowhere") == 0
