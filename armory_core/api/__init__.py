"""Convenience imports for module authors."""

from .abc import Auxiliary, Encoder, Exploit, FrameworkModule, Nop, Payload, Post
from .decorators import MODULE_METADATA_ATTR, frameworkmodule

__all__ = [
    "FrameworkModule",
    "Exploit",
    "Auxiliary",
    "Post",
    "Encoder",
    "Nop",
    "Payload",
    "frameworkmodule",
    "MODULE_METADATA_ATTR",
]
