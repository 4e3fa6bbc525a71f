"""Import module files below a module path and collect their module classes."""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType

from armory_core.api.decorators import MODULE_METADATA_ATTR
from armory_core.categories import ModuleCategory

from .entry import ModuleEntry
from .errors import ModuleLoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    """Entries found below one module path and the files that failed."""

    entries: tuple[ModuleEntry, ...] = ()
    failures: dict[str, str] = field(default_factory=dict)


class ModuleLoader:
    """Responsible for importing every module file of a single module path."""

    def __init__(self, root: Path) -> None:
        self.root = root
        digest = hashlib.sha1(str(root).encode("utf-8")).hexdigest()[:12]
        self._namespace = f"armory_modules_{digest}"

    def load(self) -> LoadResult:
        entries: list[ModuleEntry] = []
        failures: dict[str, str] = {}

        for category in ModuleCategory:
            category_dir = self.root / category.directory
            if not category_dir.is_dir():
                continue
            for path in sorted(category_dir.rglob("*.py")):
                if path.name.startswith("_"):
                    continue
                reference = path.relative_to(category_dir).with_suffix("").as_posix()
                full_name = f"{category.directory}/{reference}"
                try:
                    entry = self._load_file(category, reference, path)
                except ModuleLoadError as exc:
                    failures[full_name] = str(exc)
                    logger.exception("module %s failed to load", full_name)
                    continue
                if entry is None:
                    logger.debug("no module class exported by %s", path)
                    continue
                entries.append(entry)

        return LoadResult(entries=tuple(entries), failures=failures)

    def _load_file(
        self, category: ModuleCategory, reference: str, path: Path
    ) -> ModuleEntry | None:
        module_name = ".".join(
            (self._namespace, category.directory, *reference.split("/"))
        )
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ModuleLoadError(f"unable to build an import spec for {path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            sys.modules.pop(module_name, None)
            raise ModuleLoadError(f"unable to import {path}: {exc}") from exc

        target = self._find_module_class(module, path)
        if target is None:
            sys.modules.pop(module_name, None)
            return None

        metadata = vars(target)[MODULE_METADATA_ATTR]
        if metadata["category"] is not category:
            sys.modules.pop(module_name, None)
            raise ModuleLoadError(
                f"{target.__name__} is a {metadata['category'].value} module "
                f"but lives under {category.directory}/"
            )

        return ModuleEntry(
            category=category,
            reference=reference,
            name=metadata["name"] or reference,
            description=metadata["description"],
            target=target,
            file=path,
            origin=self.root,
        )

    @staticmethod
    def _find_module_class(module: ModuleType, path: Path) -> type | None:
        candidates = [
            candidate
            for candidate in vars(module).values()
            if isinstance(candidate, type)
            and candidate.__module__ == module.__name__
            and MODULE_METADATA_ATTR in vars(candidate)
        ]
        if not candidates:
            return None
        if len(candidates) > 1:
            names = ", ".join(sorted(candidate.__name__ for candidate in candidates))
            raise ModuleLoadError(f"{path} exports more than one module class: {names}")
        return candidates[0]
