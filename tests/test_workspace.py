"""Tests for the Armory workspace resolver and layout helpers."""

from pathlib import Path

from armory_core.paths import UserDirs
from armory_core.workspace import (
    CONFIG_FILE_NAME,
    WorkspaceLayout,
    WorkspaceResolver,
)


def test_find_workspace_in_parent(tmp_path: Path) -> None:
    project = tmp_path / "project"
    workspace_root = project / ".armory"
    workspace_root.mkdir(parents=True)
    (project / "sub").mkdir()

    resolver = WorkspaceResolver(env={})
    found = resolver.find_workspace(project / "sub")
    assert found == workspace_root


def test_ensure_workspace_creates_layout(tmp_path: Path) -> None:
    resolver = WorkspaceResolver(env={})
    start_dir = tmp_path / "project"
    start_dir.mkdir()

    workspace_root = resolver.ensure_workspace(start_dir)
    layout = WorkspaceLayout.from_root(workspace_root)

    assert layout.modules_dir.is_dir()
    assert layout.config_dir.is_dir()
    assert layout.logs_dir.is_dir()
    assert layout.state_dir.is_dir()
    assert layout.config_file.is_file()
    assert layout.framework_file == layout.config_dir / "framework.yml"

    second_root = resolver.ensure_workspace(start_dir)
    assert second_root == workspace_root


def test_env_override_selects_workspace_root(tmp_path: Path) -> None:
    custom = tmp_path / "elsewhere"
    resolver = WorkspaceResolver(env={"ARMORY_DIR": str(custom)})

    assert resolver.find_workspace(tmp_path) is None
    root = resolver.ensure_workspace(tmp_path)
    assert root == custom.resolve()
    assert (custom / "modules").is_dir()


def test_config_resolution_precedence(tmp_path: Path) -> None:
    user_config_dir = tmp_path / "user-config"
    user_dirs = UserDirs(config_dir_override=user_config_dir)
    user_config_dir.mkdir()
    (user_config_dir / CONFIG_FILE_NAME).write_text('rpc_port = 7001')

    project = tmp_path / "project"
    workspace_dir = project / ".armory"
    workspace_dir.mkdir(parents=True)
    (workspace_dir / CONFIG_FILE_NAME).write_text('rpc_port = 7002')

    resolver = WorkspaceResolver(
        cli_overrides={"rpc_port": "7004"},
        env={"ARMORY_RPC_PORT": "7003"},
        user_dirs=user_dirs,
    )
    assert resolver.resolve_setting("rpc_port", start_dir=project) == "7004"

    resolver = WorkspaceResolver(env={"ARMORY_RPC_PORT": "7003"}, user_dirs=user_dirs)
    assert resolver.resolve_setting("rpc_port", start_dir=project) == "7003"

    resolver = WorkspaceResolver(env={}, user_dirs=user_dirs)
    assert resolver.resolve_setting("rpc_port", start_dir=project) == "7002"

    (workspace_dir / CONFIG_FILE_NAME).unlink()
    assert resolver.resolve_setting("rpc_port", start_dir=project) == "7001"

    (user_config_dir / CONFIG_FILE_NAME).unlink()
    assert resolver.resolve_setting("rpc_port", start_dir=project) == "55553"
