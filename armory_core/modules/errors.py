"""Module registry error types."""


class ModuleError(Exception):
    """Base type for module registry failures."""


class ModulePathError(ModuleError):
    """Raised when a module path cannot be registered."""


class ModuleLoadError(ModuleError):
    """Raised when a single module file cannot be imported or validated."""
