"""Module registry: discovery, loading, and per-category statistics."""

from .entry import ModuleEntry
from .errors import ModuleError, ModuleLoadError, ModulePathError
from .loader import LoadResult, ModuleLoader
from .manager import PATH_ADDED_EVENT, RELOADED_EVENT, ModuleManager

__all__ = [
    "ModuleEntry",
    "ModuleManager",
    "ModuleLoader",
    "LoadResult",
    "ModuleError",
    "ModuleLoadError",
    "ModulePathError",
    "RELOADED_EVENT",
    "PATH_ADDED_EVENT",
]
