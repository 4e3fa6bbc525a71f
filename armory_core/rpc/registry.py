"""Statically declared command table and the dispatch contract."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Sequence

from .errors import CommandRegistrationError, InvalidArgumentsError, UnknownCommandError
from .params import Param

Handler = Callable[..., Mapping[str, Any]]

DEFAULT_GROUP = "core"


@dataclass(frozen=True)
class CommandSpec:
    """A handler bound to ``<group>.<name>`` with its parameter schema."""

    group: str
    name: str
    handler: Handler
    params: tuple[Param, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "group", self._validate_component("group", self.group))
        object.__setattr__(self, "name", self._validate_component("name", self.name))
        object.__setattr__(self, "params", tuple(self.params))
        if not callable(self.handler):
            raise TypeError("handler must be callable.")

    @staticmethod
    def _validate_component(label: str, value: str) -> str:
        if not value:
            raise ValueError(f"{label} cannot be empty.")
        if "." in value:
            raise ValueError(f"{label} may not contain '.'.")
        return value

    @property
    def qualified_name(self) -> str:
        return f"{self.group}.{self.name}"

    @property
    def arity(self) -> int:
        return len(self.params)

    @property
    def description(self) -> str:
        doc = inspect.getdoc(self.handler) or ""
        lines = doc.strip().splitlines()
        return lines[0] if lines else ""

    def bind(self, args: Sequence[Any], kwargs: Mapping[str, Any]) -> list[Any]:
        """Check ``args``/``kwargs`` against the schema and return converted positionals."""

        if len(args) > self.arity:
            raise InvalidArgumentsError(
                f"{self.qualified_name} takes {self.arity} argument(s) but {len(args)} were given"
            )

        positional_names = {param.name for param in self.params[: len(args)]}
        remaining = self.params[len(args):]
        for key in kwargs:
            if key in positional_names:
                raise InvalidArgumentsError(
                    f"{self.qualified_name} got multiple values for {key!r}"
                )
            if key not in {param.name for param in remaining}:
                raise InvalidArgumentsError(
                    f"{self.qualified_name} got an unexpected argument {key!r}"
                )

        missing = [param.name for param in remaining if param.name not in kwargs]
        if missing:
            raise InvalidArgumentsError(
                f"{self.qualified_name} missing required argument(s): {', '.join(missing)}"
            )

        values = list(args) + [kwargs[param.name] for param in remaining]
        return [param.convert(value) for param, value in zip(self.params, values)]


class CommandRegistry:
    """Exact-name lookup table for RPC commands."""

    def __init__(self, default_group: str = DEFAULT_GROUP) -> None:
        self.default_group = default_group
        self._commands: dict[str, CommandSpec] = {}

    def register(self, spec: CommandSpec) -> None:
        """Register ``spec``, raising on qualified name collisions."""

        qualified = spec.qualified_name
        if qualified in self._commands:
            raise CommandRegistrationError(f"{qualified} is already registered.")
        self._commands[qualified] = spec

    def register_all(self, specs: Iterable[CommandSpec]) -> None:
        for spec in specs:
            self.register(spec)

    def resolve(self, method: str) -> CommandSpec:
        """Resolve ``group.name``, or a bare ``name`` within the default group."""

        if not isinstance(method, str) or not method:
            raise UnknownCommandError(str(method))
        spec = self._commands.get(self._qualify(method))
        if spec is None:
            raise UnknownCommandError(method)
        return spec

    def dispatch(
        self,
        method: str,
        args: Sequence[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> Mapping[str, Any]:
        """Validate every argument, then run the handler and check its result shape."""

        spec = self.resolve(method)
        bound = spec.bind(args, kwargs or {})
        result = spec.handler(*bound)
        if not isinstance(result, Mapping):
            raise TypeError(
                f"handler for {spec.qualified_name} returned {type(result).__name__}, "
                "expected a mapping"
            )
        return result

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._commands))

    def specs(self) -> tuple[CommandSpec, ...]:
        return tuple(self._commands[name] for name in self.names())

    def __contains__(self, method: object) -> bool:
        if not isinstance(method, str) or not method:
            return False
        return self._qualify(method) in self._commands

    def _qualify(self, method: str) -> str:
        return method if "." in method else f"{self.default_group}.{method}"
