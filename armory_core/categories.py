"""The fixed set of module categories tracked by the framework."""

from __future__ import annotations

from enum import Enum


class ModuleCategory(str, Enum):
    EXPLOIT = "exploit"
    AUXILIARY = "auxiliary"
    POST = "post"
    ENCODER = "encoder"
    NOP = "nop"
    PAYLOAD = "payload"

    @property
    def directory(self) -> str:
        """Directory name holding this category below a module path."""

        return _DIRECTORIES[self]

    @property
    def stat_key(self) -> str:
        """Key used for this category in module statistics."""

        return _DIRECTORIES[self]

    @classmethod
    def from_directory(cls, name: str) -> "ModuleCategory | None":
        for category, directory in _DIRECTORIES.items():
            if directory == name:
                return category
        return None


_DIRECTORIES: dict[ModuleCategory, str] = {
    ModuleCategory.EXPLOIT: "exploits",
    ModuleCategory.AUXILIARY: "auxiliary",
    ModuleCategory.POST: "post",
    ModuleCategory.ENCODER: "encoders",
    ModuleCategory.NOP: "nops",
    ModuleCategory.PAYLOAD: "payloads",
}
