"""Module path bookkeeping, loading, and per-category counts."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable

from armory_core.categories import ModuleCategory
from armory_core.events import EventBus

from .entry import ModuleEntry
from .errors import ModulePathError
from .loader import ModuleLoader

RELOADED_EVENT = "modules.reloaded"
PATH_ADDED_EVENT = "modules.path_added"


class ModuleManager:
    """Own every loaded module, keyed by ``<category dir>/<reference>``.

    All mutation happens under one re-entrant lock, so counts read after a
    reload or path addition always match the registry contents.
    """

    def __init__(
        self,
        paths: Iterable[Path | str] = (),
        *,
        events: EventBus | None = None,
    ) -> None:
        self.events = events or EventBus()
        self._logger = logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._paths: list[Path] = []
        self._entries: dict[str, ModuleEntry] = {}
        self._failures: dict[str, str] = {}
        for path in paths:
            resolved = self._validate_path(path)
            if resolved not in self._paths:
                self._paths.append(resolved)

    @property
    def paths(self) -> tuple[Path, ...]:
        with self._lock:
            return tuple(self._paths)

    def reload_modules(self) -> None:
        """Discard every loaded module and rebuild from all known paths."""

        with self._lock:
            self._entries = {}
            self._failures = {}
            for path in self._paths:
                self._load_path(path)
            counts = self._counts_locked()
            self._logger.info(
                "reloaded %d modules from %d paths", len(self._entries), len(self._paths)
            )
        self.events.emit(RELOADED_EVENT, {"counts": counts})

    def add_module_path(self, path: Path | str) -> tuple[ModuleEntry, ...]:
        """Register ``path`` and merge the modules found below it."""

        resolved = self._validate_path(path)
        with self._lock:
            if resolved not in self._paths:
                self._paths.append(resolved)
            added = self._load_path(resolved)
            counts = self._counts_locked()
        self._logger.info("added module path %s (%d modules)", resolved, len(added))
        self.events.emit(
            PATH_ADDED_EVENT,
            {"path": str(resolved), "loaded": len(added), "counts": counts},
        )
        return added

    def count(self, category: ModuleCategory | str) -> int:
        category = ModuleCategory(category)
        with self._lock:
            return sum(1 for entry in self._entries.values() if entry.category is category)

    def entries(self, category: ModuleCategory | str | None = None) -> tuple[ModuleEntry, ...]:
        with self._lock:
            values = sorted(self._entries.values(), key=lambda entry: entry.full_name)
        if category is None:
            return tuple(values)
        wanted = ModuleCategory(category)
        return tuple(entry for entry in values if entry.category is wanted)

    def get(self, full_name: str) -> ModuleEntry | None:
        with self._lock:
            return self._entries.get(full_name)

    def failed_modules(self) -> dict[str, str]:
        with self._lock:
            return dict(self._failures)

    def _validate_path(self, path: Path | str) -> Path:
        if not str(path).strip():
            raise ModulePathError("module path cannot be empty")
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_dir():
            raise ModulePathError(f"{resolved} is not a directory")
        return resolved

    def _load_path(self, path: Path) -> tuple[ModuleEntry, ...]:
        result = ModuleLoader(path).load()
        for entry in result.entries:
            previous = self._entries.get(entry.full_name)
            if previous is not None and previous.origin != entry.origin:
                self._logger.debug(
                    "%s from %s overrides %s", entry.full_name, entry.origin, previous.origin
                )
            self._entries[entry.full_name] = entry
            self._failures.pop(entry.full_name, None)
        self._failures.update(result.failures)
        return result.entries

    def _counts_locked(self) -> dict[str, int]:
        counts = {category.stat_key: 0 for category in ModuleCategory}
        for entry in self._entries.values():
            counts[entry.category.stat_key] += 1
        return counts
