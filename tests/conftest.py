"""Shared fixtures: isolated workspaces and on-disk module trees."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import pytest

from armory_core.framework import Framework
from armory_core.paths import UserDirs

_BASES = {
    "exploits": "Exploit",
    "auxiliary": "Auxiliary",
    "post": "Post",
    "encoders": "Encoder",
    "nops": "Nop",
    "payloads": "Payload",
}

_METHODS = {
    "Exploit": "def run(self, options):\n        return None",
    "Auxiliary": "def run(self, options):\n        return None",
    "Post": "def run(self, options):\n        return None",
    "Encoder": "def encode(self, buffer):\n        return buffer",
    "Nop": "def generate(self, length):\n        return b'\\x90' * length",
    "Payload": "def generate(self, options):\n        return b''",
}

ModuleWriter = Callable[..., Path]


def _write_module(
    root: Path,
    category_dir: str,
    reference: str,
    *,
    base: str | None = None,
    name: str | None = None,
    class_name: str = "FixtureModule",
) -> Path:
    base = base or _BASES[category_dir]
    decorator = f"@frameworkmodule(name={name!r})" if name else "@frameworkmodule"
    source = "\n".join(
        [
            f"from armory_core.api import {base}, frameworkmodule",
            "",
            "",
            decorator,
            f"class {class_name}({base}):",
            f'    """Fixture module {reference}."""',
            "",
            f"    {_METHODS[base]}",
            "",
        ]
    )
    path = root / category_dir / f"{reference}.py"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source, encoding="utf-8")
    return path


@pytest.fixture
def write_module() -> ModuleWriter:
    return _write_module


@pytest.fixture
def user_dirs(tmp_path: Path) -> UserDirs:
    return UserDirs(
        config_dir_override=tmp_path / "user_config",
        data_dir_override=tmp_path / "user_data",
        log_dir_override=tmp_path / "user_logs",
    )


@pytest.fixture
def framework(
    tmp_path: Path, user_dirs: UserDirs, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Framework]:
    monkeypatch.delenv("ARMORY_DIR", raising=False)
    project = tmp_path / "project"
    project.mkdir()
    instance = Framework(start_dir=project, user_dirs=user_dirs)
    yield instance
    instance.shutdown(timeout=2.0)
