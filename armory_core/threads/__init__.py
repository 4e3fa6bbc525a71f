"""Worker thread table."""

from .errors import ThreadNotFoundError, ThreadTableError
from .handle import ThreadHandle, ThreadStatus
from .table import KILLED_EVENT, SPAWNED_EVENT, ThreadTable

__all__ = [
    "ThreadHandle",
    "ThreadStatus",
    "ThreadTable",
    "ThreadTableError",
    "ThreadNotFoundError",
    "SPAWNED_EVENT",
    "KILLED_EVENT",
]
