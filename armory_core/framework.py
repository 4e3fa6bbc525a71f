"""Runtime facade that wires together the Armory framework subsystems."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

from armory_core.categories import ModuleCategory
from armory_core.config import (
    ConfigStore,
    FrameworkConfig,
    Scalar,
    read_framework_config,
    write_framework_config,
)
from armory_core.events import EventBus
from armory_core.modules import ModuleManager, ModulePathError
from armory_core.paths import UserDirs
from armory_core.threads import ThreadTable
from armory_core.version import VersionInfo
from armory_core.workspace import Workspace, WorkspaceResolver

CONFIG_SAVED_EVENT = "config.saved"


@dataclass(frozen=True)
class FrameworkStatus:
    workspace: Workspace
    module_paths: Sequence[Path]
    module_counts: Mapping[str, int]
    failed_modules: Sequence[str]


class Framework:
    """Single writer-of-record for globals, modules, and worker threads.

    Each subsystem synchronizes itself; the facade only routes calls and
    handles persistence of the runtime settings.
    """

    def __init__(
        self,
        *,
        start_dir: Path | str | None = None,
        user_dirs: UserDirs | None = None,
        logger: logging.Logger | None = None,
        events: EventBus | None = None,
        include_user_modules: bool = True,
    ) -> None:
        self.logger = logger or logging.getLogger("armory_core.framework")
        self.user_dirs = user_dirs or UserDirs()
        self.workspace_resolver = WorkspaceResolver(user_dirs=self.user_dirs)
        normalized_start = Path(start_dir) if isinstance(start_dir, str) else start_dir
        workspace_root = self.workspace_resolver.ensure_workspace(normalized_start)
        self.workspace = Workspace.from_root(workspace_root)
        self.events = events or EventBus()
        self.version = VersionInfo.current()
        self.datastore = ConfigStore()
        self.modules = ModuleManager(events=self.events)
        self.threads = ThreadTable(events=self.events)
        self._include_user_modules = include_user_modules
        self._saved_module_paths: list[str] = []
        self._bootstrapped = False
        self._load_config()

    @property
    def config_path(self) -> Path:
        return self.workspace.layout.framework_file

    def bootstrap(self) -> FrameworkStatus:
        """Register the default and saved module paths, loading their modules."""

        if not self._bootstrapped:
            for path in self._default_module_paths():
                self.modules.add_module_path(path)
            for raw_path in self._saved_module_paths:
                try:
                    self.modules.add_module_path(raw_path)
                except ModulePathError as exc:
                    self.logger.warning("skipping saved module path %s: %s", raw_path, exc)
            self._bootstrapped = True
        return self.status()

    def status(self) -> FrameworkStatus:
        return FrameworkStatus(
            workspace=self.workspace,
            module_paths=self.modules.paths,
            module_counts={
                category.stat_key: self.modules.count(category) for category in ModuleCategory
            },
            failed_modules=tuple(sorted(self.modules.failed_modules())),
        )

    def version_info(self) -> VersionInfo:
        return self.version

    def get_global(self, name: str) -> Scalar | None:
        return self.datastore.get(name)

    def set_global(self, name: str, value: Scalar) -> None:
        self.datastore.set(name, value)

    def delete_global(self, name: str) -> None:
        self.datastore.delete(name)

    def save_config(self) -> Path:
        """Write globals and runtime-added module paths to ``framework.yml``."""

        defaults = set(self._default_module_paths())
        config = FrameworkConfig(
            globals=self.datastore.snapshot(),
            module_paths=[str(path) for path in self.modules.paths if path not in defaults],
        )
        path = write_framework_config(self.config_path, config)
        self.events.emit(CONFIG_SAVED_EVENT, {"path": str(path)})
        return path

    def shutdown(self, timeout: float | None = 5.0) -> None:
        self.threads.kill_all(timeout)

    def _load_config(self) -> None:
        config = read_framework_config(self.config_path)
        self.datastore.update(config.globals)
        self._saved_module_paths = list(config.module_paths)
        if config.globals or config.module_paths:
            self.logger.debug(
                "loaded %d globals and %d module paths from %s",
                len(config.globals),
                len(config.module_paths),
                self.config_path,
            )

    def _default_module_paths(self) -> list[Path]:
        paths = [self.workspace.layout.modules_dir]
        if self._include_user_modules:
            user_modules = self.user_dirs.modules_dir()
            if user_modules.is_dir():
                paths.append(user_modules.resolve())
        return paths
