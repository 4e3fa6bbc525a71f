"""Decorator that marks module classes with loader metadata."""

from __future__ import annotations

from typing import Any, Callable, Type

from .abc import FrameworkModule

_ModuleCandidate = Type[Any]

MODULE_METADATA_ATTR = "__armory_module__"


def _attach_module_metadata(
    cls: type, *, name: str | None, description: str | None
) -> type:
    if not isinstance(cls, type):
        raise TypeError("Decorated object must be a class.")
    if not issubclass(cls, FrameworkModule) or not hasattr(cls, "category"):
        raise TypeError(
            f"{cls.__name__} must subclass one of the category base classes to be a module."
        )

    if description is None:
        doc = (cls.__doc__ or "").strip()
        description = doc.splitlines()[0] if doc else ""
    metadata = {
        "category": cls.category,
        "name": name,
        "description": description,
    }
    setattr(cls, MODULE_METADATA_ATTR, metadata)
    return cls


def frameworkmodule(
    cls: _ModuleCandidate | None = None,
    *,
    name: str | None = None,
    description: str | None = None,
) -> Callable[[_ModuleCandidate], _ModuleCandidate] | _ModuleCandidate:
    """Mark ``cls`` as the module exported by its file.

    ``name`` overrides the display name; the reference name always comes
    from the file's location below the module path.
    """

    def wrap(target: _ModuleCandidate) -> _ModuleCandidate:
        return _attach_module_metadata(target, name=name, description=description)

    if cls is None:
        return wrap
    return wrap(cls)
