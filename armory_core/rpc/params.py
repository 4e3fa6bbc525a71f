"""Typed parameter schema validated at the dispatch boundary."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from .errors import InvalidArgumentsError

_INTEGER_RE = re.compile(r"[+-]?\d+")


class ParamType(str, Enum):
    STRING = "string"
    SCALAR = "scalar"
    INTEGER = "integer"
    PATH = "path"


def _to_string(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidArgumentsError(f"{name} must be a string, got {type(value).__name__}")
    if not value:
        raise InvalidArgumentsError(f"{name} cannot be empty")
    return value


def _to_scalar(name: str, value: Any) -> str | int | float | bool:
    if not isinstance(value, (str, int, float, bool)):
        raise InvalidArgumentsError(
            f"{name} must be a string, number or boolean, got {type(value).__name__}"
        )
    return value


def _to_integer(name: str, value: Any) -> int:
    # bool is an int subclass but never a valid index
    if isinstance(value, bool):
        raise InvalidArgumentsError(f"{name} must be an integer, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_RE.fullmatch(value.strip()):
        return int(value.strip())
    raise InvalidArgumentsError(f"{name} must be an integer, got {value!r}")


def _to_path(name: str, value: Any) -> Path:
    if isinstance(value, os.PathLike):
        value = os.fspath(value)
    if not isinstance(value, str):
        raise InvalidArgumentsError(f"{name} must be a path string, got {type(value).__name__}")
    if not value.strip():
        raise InvalidArgumentsError(f"{name} cannot be empty")
    return Path(value)


_CONVERTERS: dict[ParamType, Callable[[str, Any], Any]] = {
    ParamType.STRING: _to_string,
    ParamType.SCALAR: _to_scalar,
    ParamType.INTEGER: _to_integer,
    ParamType.PATH: _to_path,
}


@dataclass(frozen=True)
class Param:
    """A required positional parameter of a command."""

    name: str
    type: ParamType = ParamType.STRING

    def convert(self, value: Any) -> Any:
        return _CONVERTERS[self.type](self.name, value)
