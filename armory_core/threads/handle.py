"""Handles for worker threads tracked by the thread table."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Iterator, Mapping, Sequence

logger = logging.getLogger(__name__)


class ThreadStatus(str, Enum):
    """Execution states reported for a worker thread."""

    RUNNING = "running"
    SLEEPING = "sleeping"
    BLOCKED = "blocked"
    DEAD = "dead"
    UNKNOWN = "unknown"


class ThreadHandle:
    """A daemon worker thread with cooperative termination.

    The target is called as ``target(handle, *args, **kwargs)`` and is expected
    to poll :attr:`stop_requested` or wait through :meth:`sleep`.
    """

    def __init__(
        self,
        index: int,
        name: str,
        target: Callable[..., Any],
        args: Sequence[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
        *,
        critical: bool = False,
        on_exit: Callable[["ThreadHandle"], None] | None = None,
    ) -> None:
        self.index = index
        self.name = name
        self.started_at: datetime | None = None
        self._critical = critical
        self._target = target
        self._args = tuple(args)
        self._kwargs = dict(kwargs or {})
        self._on_exit = on_exit
        self._stop = threading.Event()
        self._state: ThreadStatus | None = None
        self._thread = threading.Thread(
            target=self._run, name=f"armory:{name}", daemon=True
        )

    def start(self) -> None:
        self.started_at = datetime.now().astimezone()
        self._state = ThreadStatus.RUNNING
        self._thread.start()

    def status(self) -> ThreadStatus | None:
        """Current state, or ``None`` once the thread has finished."""

        if not self._thread.is_alive():
            return None
        return self._state

    def is_critical(self) -> bool:
        return self._critical

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    @property
    def stop_requested(self) -> bool:
        return self._stop.is_set()

    def sleep(self, seconds: float) -> bool:
        """Wait up to ``seconds``; returns True when termination was requested."""

        self._state = ThreadStatus.SLEEPING
        try:
            return self._stop.wait(seconds)
        finally:
            self._state = ThreadStatus.RUNNING

    @contextmanager
    def blocked(self) -> Iterator[None]:
        """Report the thread as blocked while the body waits on a resource."""

        self._state = ThreadStatus.BLOCKED
        try:
            yield
        finally:
            self._state = ThreadStatus.RUNNING

    def kill(self) -> None:
        self._stop.set()

    def join(self, timeout: float | None = None) -> bool:
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _run(self) -> None:
        try:
            self._target(self, *self._args, **self._kwargs)
        except Exception:
            logger.exception("thread %d (%s) terminated with an error", self.index, self.name)
        finally:
            self._state = None
            if self._on_exit is not None:
                self._on_exit(self)

    def __repr__(self) -> str:
        return f"ThreadHandle(index={self.index}, name={self.name!r}, critical={self._critical})"
