"""Abstract base classes for framework modules, one per category."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Mapping

from armory_core.categories import ModuleCategory


class FrameworkModule(ABC):
    """Common ancestor of every loadable module."""

    category: ClassVar[ModuleCategory]


class Exploit(FrameworkModule):
    """Base interface for exploit modules."""

    category = ModuleCategory.EXPLOIT

    @abstractmethod
    def run(self, options: Mapping[str, Any]) -> Any:
        """Launch the exploit with the merged datastore options."""


class Auxiliary(FrameworkModule):
    """Base interface for scanners, fuzzers and other non-exploit actions."""

    category = ModuleCategory.AUXILIARY

    @abstractmethod
    def run(self, options: Mapping[str, Any]) -> Any:
        """Run the auxiliary action with the merged datastore options."""


class Post(FrameworkModule):
    """Base interface for post-exploitation modules."""

    category = ModuleCategory.POST

    @abstractmethod
    def run(self, options: Mapping[str, Any]) -> Any:
        """Run against an established session described by ``options``."""


class Encoder(FrameworkModule):
    category = ModuleCategory.ENCODER

    @abstractmethod
    def encode(self, buffer: bytes) -> bytes:
        """Return ``buffer`` transformed by this encoder."""


class Nop(FrameworkModule):
    category = ModuleCategory.NOP

    @abstractmethod
    def generate(self, length: int) -> bytes:
        """Return a NOP sled of ``length`` bytes."""


class Payload(FrameworkModule):
    category = ModuleCategory.PAYLOAD

    @abstractmethod
    def generate(self, options: Mapping[str, Any]) -> bytes:
        """Render the payload bytes for ``options``."""
