"""Workspace helpers that find or create the .armory directory hierarchy."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

import tomllib

from .paths import UserDirs

DEFAULT_WORKSPACE_NAME = ".armory"
CONFIG_FILE_NAME = "config.toml"
FRAMEWORK_FILE_NAME = "framework.yml"

_DEFAULTS: dict[str, str] = {
    "armory_dir": DEFAULT_WORKSPACE_NAME,
    "rpc_host": "127.0.0.1",
    "rpc_port": "55553",
    "log_level": "info",
}
_ENV_KEY_MAP: dict[str, str] = {
    "armory_dir": "ARMORY_DIR",
    "rpc_host": "ARMORY_RPC_HOST",
    "rpc_port": "ARMORY_RPC_PORT",
    "log_level": "ARMORY_LOG_LEVEL",
}


def _load_config_from_file(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError):
        return {}
    return {key: str(value) for key, value in data.items()}


@dataclass(frozen=True)
class WorkspaceLayout:
    """Defines the directory structure that .armory should contain."""

    root: Path
    modules_dir: Path
    config_dir: Path
    logs_dir: Path
    state_dir: Path
    config_file: Path
    framework_file: Path

    @classmethod
    def from_root(cls, root: Path, config_filename: str = CONFIG_FILE_NAME) -> "WorkspaceLayout":
        root = root.resolve()
        config_dir = root / "config"
        return cls(
            root=root,
            modules_dir=root / "modules",
            config_dir=config_dir,
            logs_dir=root / "logs",
            state_dir=root / "state",
            config_file=root / config_filename,
            framework_file=config_dir / FRAMEWORK_FILE_NAME,
        )

    def ensure(self) -> None:
        """Ensure every layout directory exists and config.toml is present."""
        for directory in (
            self.root,
            self.modules_dir,
            self.config_dir,
            self.logs_dir,
            self.state_dir,
        ):
            directory.mkdir(parents=True, exist_ok=True)
        self.config_file.touch(exist_ok=True)


@dataclass
class WorkspaceResolver:
    """Resolve and create Armory workspaces while honoring layered configuration."""

    workspace_name: str = DEFAULT_WORKSPACE_NAME
    config_filename: str = CONFIG_FILE_NAME
    user_dirs: UserDirs | None = None
    cli_overrides: Mapping[str, str] | None = None
    env: Mapping[str, str] | None = None
    defaults: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        self.user_dirs = self.user_dirs or UserDirs()
        self.cli_overrides = {
            key: value for key, value in dict(self.cli_overrides or {}).items() if value
        }
        self.env = self.env if self.env is not None else os.environ
        base_defaults = dict(_DEFAULTS)
        if self.defaults:
            base_defaults.update(self.defaults)
        self.defaults = base_defaults

    # ---------- Public API ----------

    def find_workspace(self, start_dir: Path | None = None) -> Path | None:
        """Look for an existing .armory workspace by walking parent directories."""
        override = self._override_root_value()
        if override:
            candidate = override.expanduser().resolve()
            if candidate.is_dir():
                return candidate
            return None
        start = (Path(start_dir) if start_dir else Path.cwd()).resolve()
        for current in (start, *start.parents):
            candidate = current / self.workspace_name
            if candidate.is_dir():
                return candidate
        return None

    def ensure_workspace(self, start_dir: Path | None = None) -> Path:
        """Create the minimal .armory hierarchy and return the workspace root."""
        override = self._override_root_value()
        if override:
            root = override.expanduser().resolve()
        else:
            existing = self.find_workspace(start_dir)
            if existing is not None:
                root = existing
            else:
                base = (Path(start_dir) if start_dir else Path.cwd()).resolve()
                root = base / self.workspace_name
        layout = WorkspaceLayout.from_root(root, self.config_filename)
        layout.ensure()
        return layout.root

    def resolve_setting(self, key: str, start_dir: Path | None = None) -> str | None:
        """Return the value for `key` using CLI, env, workspace, user, defaults order."""
        if value := self.cli_overrides.get(key):
            return value
        if value := self._env_value(key):
            return value
        workspace_layer = self._workspace_config_layer(start_dir)
        if (value := workspace_layer.get(key)):
            return value
        user_layer = self._user_config_layer()
        if (value := user_layer.get(key)):
            return value
        return self.defaults.get(key)

    # ---------- Internal helpers ----------

    def _env_value(self, key: str) -> str | None:
        value = self.env.get(key)
        if value:
            return value
        alias = _ENV_KEY_MAP.get(key)
        if alias:
            return self.env.get(alias)
        return None

    def _override_root_value(self) -> Path | None:
        if override := self.cli_overrides.get("armory_dir"):
            return Path(override)
        if override := self._env_value("armory_dir"):
            return Path(override)
        return None

    def _workspace_config_layer(self, start_dir: Path | None) -> dict[str, str]:
        workspace_root = self.find_workspace(start_dir)
        if workspace_root is None:
            return {}
        return _load_config_from_file(workspace_root / self.config_filename)

    def _user_config_layer(self) -> dict[str, str]:
        config_path = self.user_dirs.config_dir() / self.config_filename
        return _load_config_from_file(config_path)


@dataclass(frozen=True)
class Workspace:
    """Thin descriptor for the root .armory directory and its layout."""

    root: Path
    layout: WorkspaceLayout

    @classmethod
    def from_root(cls, root: Path) -> "Workspace":
        return cls(root=root, layout=WorkspaceLayout.from_root(root))
