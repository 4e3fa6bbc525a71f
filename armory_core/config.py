"""Global datastore shared by every module, plus its on-disk persistence."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)

Scalar = str | int | float | bool


@dataclass
class ConfigStore:
    """Thread-safe mapping of global variable names to scalar values.

    Keys are case-sensitive. The store lives for the process lifetime; it is
    only written to disk through :func:`write_framework_config`.
    """

    _store: dict[str, Scalar] = field(default_factory=dict, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def get(self, key: str, default: Scalar | None = None) -> Scalar | None:
        with self._lock:
            return self._store.get(key, default)

    def set(self, key: str, value: Scalar) -> None:
        with self._lock:
            self._store[key] = value

    def delete(self, key: str) -> None:
        """Remove ``key``; deleting an absent key is a no-op."""

        with self._lock:
            self._store.pop(key, None)

    def update(self, values: Mapping[str, Scalar]) -> None:
        with self._lock:
            self._store.update(values)

    def snapshot(self) -> dict[str, Scalar]:
        with self._lock:
            return dict(self._store)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


@dataclass
class FrameworkConfig:
    """Persisted runtime settings: global variables and extra module paths."""

    globals: dict[str, Scalar] = field(default_factory=dict)
    module_paths: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "globals": dict(self.globals),
            "module_paths": list(self.module_paths),
        }


def _ensure_mapping(data: Any, label: str) -> Mapping[str, Any]:
    if isinstance(data, Mapping):
        return data
    raise ValueError(f"expected mapping for {label}")


def read_framework_config(path: Path) -> FrameworkConfig:
    """Load ``framework.yml``; a missing or empty file yields defaults."""

    if not path.exists():
        return FrameworkConfig()
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    raw = _ensure_mapping(raw, "framework configuration")

    globals_raw = _ensure_mapping(raw.get("globals") or {}, "globals")
    values: dict[str, Scalar] = {}
    for key, value in globals_raw.items():
        if value is None or isinstance(value, (list, dict)):
            logger.warning("ignoring non-scalar global %r in %s", key, path)
            continue
        values[str(key)] = value

    paths_raw = raw.get("module_paths") or []
    if not isinstance(paths_raw, list):
        raise ValueError("expected list for module_paths")
    return FrameworkConfig(
        globals=values,
        module_paths=[str(item) for item in paths_raw],
    )


def write_framework_config(path: Path, config: FrameworkConfig) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(config.to_dict(), sort_keys=True), encoding="utf-8")
    logger.info("saved framework configuration to %s", path)
    return path
