"""Registry entry describing a loaded module."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Type

from armory_core.categories import ModuleCategory


@dataclass(frozen=True)
class ModuleEntry:
    """Immutable descriptor for a module discovered below a module path."""

    category: ModuleCategory
    reference: str
    name: str
    description: str
    target: Type[Any]
    file: Path
    origin: Path

    def __post_init__(self) -> None:
        if not self.reference:
            raise ValueError("reference cannot be empty.")
        if not isinstance(self.target, type):
            raise TypeError("target must be a class type.")

    @property
    def full_name(self) -> str:
        """Return the ``<category dir>/<reference>`` identifier for this entry."""

        return f"{self.category.directory}/{self.reference}"
