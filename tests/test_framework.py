"""Tests for the framework facade: bootstrap and configuration persistence."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import yaml

from armory_core.framework import Framework
from armory_core.paths import UserDirs


def test_bootstrap_loads_workspace_modules(framework: Framework, write_module) -> None:
    modules_dir = framework.workspace.layout.modules_dir
    write_module(modules_dir, "exploits", "multi/http/struts")

    status = framework.bootstrap()

    assert status.module_paths == (modules_dir,)
    assert status.module_counts["exploits"] == 1
    assert status.failed_modules == ()
    assert framework.bootstrap().module_paths == (modules_dir,)


def test_bootstrap_includes_user_modules_dir(
    framework: Framework, user_dirs: UserDirs, write_module
) -> None:
    write_module(user_dirs.modules_dir(), "post", "windows/gather/hashdump")

    status = framework.bootstrap()

    assert user_dirs.modules_dir().resolve() in status.module_paths
    assert status.module_counts["post"] == 1


def test_globals_survive_save_and_reload(
    framework: Framework, tmp_path: Path, user_dirs: UserDirs
) -> None:
    framework.set_global("RHOSTS", "192.0.2.10")
    framework.set_global("LPORT", 4444)
    framework.set_global("VERBOSE", False)
    framework.set_global("DISCARD", "x")
    framework.delete_global("DISCARD")

    path = framework.save_config()

    assert path == framework.config_path
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert data == {
        "globals": {"LPORT": 4444, "RHOSTS": "192.0.2.10", "VERBOSE": False},
        "module_paths": [],
    }

    reopened = Framework(start_dir=tmp_path / "project", user_dirs=user_dirs)
    assert reopened.get_global("LPORT") == 4444
    assert reopened.get_global("VERBOSE") is False
    assert reopened.get_global("DISCARD") is None


def test_saved_module_paths_are_restored(
    framework: Framework, tmp_path: Path, user_dirs: UserDirs, write_module
) -> None:
    extra = tmp_path / "extra"
    write_module(extra, "encoders", "x86/alpha_mixed")
    framework.bootstrap()
    framework.modules.add_module_path(extra)
    framework.save_config()

    reopened = Framework(start_dir=tmp_path / "project", user_dirs=user_dirs)
    status = reopened.bootstrap()

    assert extra.resolve() in status.module_paths
    assert status.module_counts["encoders"] == 1


def test_missing_saved_module_path_is_skipped(
    framework: Framework,
    tmp_path: Path,
    user_dirs: UserDirs,
    caplog: pytest.LogCaptureFixture,
) -> None:
    gone = tmp_path / "gone"
    framework.config_path.write_text(
        yaml.safe_dump({"globals": {}, "module_paths": [str(gone)]}), encoding="utf-8"
    )

    reopened = Framework(start_dir=tmp_path / "project", user_dirs=user_dirs)
    with caplog.at_level(logging.WARNING):
        status = reopened.bootstrap()

    assert status.module_paths == (reopened.workspace.layout.modules_dir,)
    assert "skipping saved module path" in caplog.text


def test_corrupt_framework_config_fails_startup(
    framework: Framework, tmp_path: Path, user_dirs: UserDirs
) -> None:
    framework.config_path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError):
        Framework(start_dir=tmp_path / "project", user_dirs=user_dirs)


def test_save_emits_event(framework: Framework) -> None:
    saved: list[str] = []
    framework.events.on("config.saved", lambda event: saved.append(event.payload["path"]))

    framework.save_config()

    assert saved == [str(framework.config_path)]


def test_version_info_is_stable(framework: Framework) -> None:
    info = framework.version_info()
    assert info is framework.version_info()
    assert info.framework
    assert info.api
