"""Indexed table of framework worker threads."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Iterator

from armory_core.events import EventBus

from .errors import ThreadNotFoundError
from .handle import ThreadHandle

logger = logging.getLogger(__name__)

SPAWNED_EVENT = "threads.spawned"
KILLED_EVENT = "threads.killed"


class ThreadTable:
    """Slots of worker threads; a slot is reused once its thread is gone."""

    def __init__(self, *, events: EventBus | None = None) -> None:
        self.events = events or EventBus()
        self._slots: list[ThreadHandle | None] = []
        self._lock = threading.RLock()

    def spawn(
        self,
        name: str,
        target: Callable[..., Any],
        *args: Any,
        critical: bool = False,
        **kwargs: Any,
    ) -> ThreadHandle:
        """Start ``target`` in the lowest free slot and return its handle."""

        with self._lock:
            index = self._free_index_locked()
            handle = ThreadHandle(
                index,
                name,
                target,
                args,
                kwargs,
                critical=critical,
                on_exit=self._reap,
            )
            if index == len(self._slots):
                self._slots.append(handle)
            else:
                self._slots[index] = handle
            try:
                handle.start()
            except BaseException:
                self._slots[index] = None
                raise
        logger.info("spawned thread %d (%s)%s", index, name, " [critical]" if critical else "")
        self.events.emit(SPAWNED_EVENT, {"index": index, "name": name, "critical": critical})
        return handle

    def __getitem__(self, index: int) -> ThreadHandle | None:
        with self._lock:
            return self._get_locked(index)

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for handle in self._slots if handle is not None)

    def each_slot(self) -> Iterator[tuple[int, ThreadHandle | None]]:
        """Yield every slot, including empty ones, from a snapshot of the table."""

        with self._lock:
            snapshot = list(self._slots)
        yield from enumerate(snapshot)

    def kill(self, index: int) -> ThreadHandle:
        """Request termination of the thread at ``index`` and free its slot."""

        with self._lock:
            handle = self._get_locked(index)
            if handle is None:
                raise ThreadNotFoundError(index)
            self._slots[index] = None
        if handle.is_critical():
            logger.warning("killing critical thread %d (%s)", index, handle.name)
        handle.kill()
        logger.info("killed thread %d (%s)", index, handle.name)
        self.events.emit(KILLED_EVENT, {"index": index, "name": handle.name})
        return handle

    def kill_all(self, timeout: float | None = None) -> None:
        """Kill every live thread and wait up to ``timeout`` seconds for each."""

        handles: list[ThreadHandle] = []
        for index, handle in self.each_slot():
            if handle is None:
                continue
            try:
                handles.append(self.kill(index))
            except ThreadNotFoundError:
                # reaped after the snapshot
                continue
        for handle in handles:
            if not handle.join(timeout):
                logger.warning("thread %d (%s) did not stop in time", handle.index, handle.name)

    def _get_locked(self, index: int) -> ThreadHandle | None:
        if index < 0 or index >= len(self._slots):
            return None
        return self._slots[index]

    def _free_index_locked(self) -> int:
        for index, handle in enumerate(self._slots):
            if handle is None:
                return index
        return len(self._slots)

    def _reap(self, handle: ThreadHandle) -> None:
        with self._lock:
            if self._get_locked(handle.index) is handle:
                self._slots[handle.index] = None
