"""Version information reported by the RPC service."""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass

FRAMEWORK_VERSION = "0.3.0"
API_VERSION = "1.0"


def host_runtime_descriptor() -> str:
    """Return ``<python version> <platform> <build date>`` separated by single spaces."""

    _, build_date = platform.python_build()
    parts = [platform.python_version(), sys.platform, *build_date.split()]
    return " ".join(part for part in parts if part)


@dataclass(frozen=True)
class VersionInfo:
    framework: str
    host_runtime: str
    api: str

    @classmethod
    def current(cls) -> "VersionInfo":
        return cls(
            framework=FRAMEWORK_VERSION,
            host_runtime=host_runtime_descriptor(),
            api=API_VERSION,
        )
