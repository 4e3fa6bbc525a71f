"""Thread table error types."""


class ThreadTableError(Exception):
    """Base type for thread table failures."""


class ThreadNotFoundError(ThreadTableError, LookupError):
    """Raised when no live thread occupies the requested slot."""

    def __init__(self, index: int) -> None:
        super().__init__(f"no thread at index {index}")
        self.index = index
