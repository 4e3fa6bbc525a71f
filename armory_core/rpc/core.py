"""Handlers for the ``core`` command group.

Each handler touches exactly one framework subsystem and returns a flat
mapping. Collaborator errors propagate unchanged, except in
:meth:`CoreHandlers.thread_kill`, which always reports success.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from armory_core.categories import ModuleCategory

from .params import Param, ParamType
from .registry import CommandRegistry, CommandSpec

if TYPE_CHECKING:
    from armory_core.framework import Framework
    from armory_core.modules import ModuleManager

logger = logging.getLogger(__name__)

GROUP = "core"


class ServiceLifecycle(Protocol):
    def stop(self) -> None:
        ...


def _success() -> dict[str, str]:
    return {"result": "success"}


def module_stats(modules: "ModuleManager") -> dict[str, int]:
    """Fixed-shape module counts: every category key is present, zero included."""

    return {category.stat_key: int(modules.count(category)) for category in ModuleCategory}


def _status_text(status: Any) -> str:
    if status is None:
        return "dead"
    return str(getattr(status, "value", status))


def _started_text(started: Any) -> str:
    if started is None:
        return ""
    if isinstance(started, datetime):
        return started.strftime("%Y-%m-%d %H:%M:%S %z").strip()
    return str(started)


class CoreHandlers:
    """Administrative commands over the framework facade."""

    def __init__(self, framework: "Framework", lifecycle: ServiceLifecycle) -> None:
        self.framework = framework
        self.lifecycle = lifecycle

    def version(self) -> dict[str, str]:
        """Return the framework, host runtime and API versions."""

        info = self.framework.version_info()
        return {
            "version": str(info.framework),
            "host_runtime": str(info.host_runtime),
            "api": str(info.api),
        }

    def stop(self) -> dict[str, str]:
        """Ask the RPC service to stop accepting commands."""

        self.lifecycle.stop()
        return _success()

    def getg(self, name: str) -> dict[str, str]:
        """Return a global variable; unset variables read as an empty string."""

        value = self.framework.get_global(name)
        return {name: "" if value is None else str(value)}

    def setg(self, name: str, value: Any) -> dict[str, str]:
        """Set a global variable."""

        self.framework.set_global(name, value)
        return _success()

    def unsetg(self, name: str) -> dict[str, str]:
        """Remove a global variable if it is set."""

        self.framework.delete_global(name)
        return _success()

    def save(self) -> dict[str, str]:
        """Persist globals and runtime settings."""

        self.framework.save_config()
        return _success()

    def reload_modules(self) -> dict[str, int]:
        """Rebuild the module registry from every module path. Slow."""

        self.framework.modules.reload_modules()
        return module_stats(self.framework.modules)

    def add_module_path(self, path: Path) -> dict[str, int]:
        """Load the modules found below an additional path."""

        self.framework.modules.add_module_path(path)
        return module_stats(self.framework.modules)

    def module_stats(self) -> dict[str, int]:
        """Return the number of loaded modules per category."""

        return module_stats(self.framework.modules)

    def thread_list(self) -> dict[str, dict[str, Any]]:
        """List worker threads keyed by table index."""

        threads: dict[str, dict[str, Any]] = {}
        for index, handle in self.framework.threads.each_slot():
            if handle is None:
                continue
            name = handle.name
            threads[str(index)] = {
                "status": _status_text(handle.status()),
                "critical": bool(handle.is_critical()),
                "name": "" if name is None else str(name),
                "started": _started_text(handle.started_at),
            }
        return threads

    def thread_kill(self, index: int) -> dict[str, str]:
        """Request termination of a worker thread. Always reports success."""

        try:
            self.framework.threads.kill(index)
        except Exception as exc:
            # callers confirm the effect through thread_list
            logger.warning("thread_kill(%d) ignored: %s: %s", index, type(exc).__name__, exc)
        return _success()


def core_command_specs(handlers: CoreHandlers) -> tuple[CommandSpec, ...]:
    return (
        CommandSpec(GROUP, "version", handlers.version),
        CommandSpec(GROUP, "stop", handlers.stop),
        CommandSpec(GROUP, "getg", handlers.getg, (Param("name"),)),
        CommandSpec(
            GROUP,
            "setg",
            handlers.setg,
            (Param("name"), Param("value", ParamType.SCALAR)),
        ),
        CommandSpec(GROUP, "unsetg", handlers.unsetg, (Param("name"),)),
        CommandSpec(GROUP, "save", handlers.save),
        CommandSpec(GROUP, "reload_modules", handlers.reload_modules),
        CommandSpec(
            GROUP,
            "add_module_path",
            handlers.add_module_path,
            (Param("path", ParamType.PATH),),
        ),
        CommandSpec(GROUP, "module_stats", handlers.module_stats),
        CommandSpec(GROUP, "thread_list", handlers.thread_list),
        CommandSpec(
            GROUP,
            "thread_kill",
            handlers.thread_kill,
            (Param("index", ParamType.INTEGER),),
        ),
    )


def register_core_commands(registry: CommandRegistry, handlers: CoreHandlers) -> None:
    """Register the ``core`` command group with the supplied registry."""

    registry.register_all(core_command_specs(handlers))
