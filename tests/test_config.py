"""Tests for the global datastore and framework.yml persistence."""

from __future__ import annotations

from pathlib import Path

import pytest

from armory_core.config import (
    ConfigStore,
    FrameworkConfig,
    read_framework_config,
    write_framework_config,
)


def test_config_store_set_get_delete() -> None:
    store = ConfigStore()
    store.set("RHOSTS", "10.0.0.5")
    assert store.get("RHOSTS") == "10.0.0.5"
    assert store.get("rhosts") is None
    assert store.get("missing", default="fallback") == "fallback"

    store.delete("RHOSTS")
    assert "RHOSTS" not in store
    store.delete("RHOSTS")
    assert len(store) == 0


def test_snapshot_is_a_copy() -> None:
    store = ConfigStore()
    store.update({"A": 1, "B": True})
    snapshot = store.snapshot()
    snapshot["A"] = 2
    assert store.get("A") == 1


def test_missing_framework_file_yields_defaults(tmp_path: Path) -> None:
    config = read_framework_config(tmp_path / "framework.yml")
    assert config.globals == {}
    assert config.module_paths == []


def test_framework_file_persists_globals_and_paths(tmp_path: Path) -> None:
    path = tmp_path / "config" / "framework.yml"
    written = write_framework_config(
        path,
        FrameworkConfig(globals={"LPORT": 4444, "VERBOSE": True}, module_paths=["/opt/mods"]),
    )
    assert written == path

    loaded = read_framework_config(path)
    assert loaded.globals == {"LPORT": 4444, "VERBOSE": True}
    assert loaded.module_paths == ["/opt/mods"]


def test_non_scalar_globals_are_ignored(tmp_path: Path) -> None:
    path = tmp_path / "framework.yml"
    path.write_text("globals:\n  GOOD: yes-please\n  BAD: [1, 2]\n  EMPTY:\n", encoding="utf-8")
    loaded = read_framework_config(path)
    assert loaded.globals == {"GOOD": "yes-please"}


def test_malformed_framework_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "framework.yml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_framework_config(path)
