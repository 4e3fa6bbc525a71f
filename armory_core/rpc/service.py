"""RPC service: the command registry plus its stop signal."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Mapping

from .core import CoreHandlers, register_core_commands
from .errors import ServiceStoppedError
from .registry import CommandRegistry

if TYPE_CHECKING:
    from armory_core.framework import Framework

logger = logging.getLogger(__name__)

STOPPING_EVENT = "service.stopping"


class RpcService:
    """Dispatch commands against a framework until :meth:`stop` is called.

    The service holds no framework state of its own; concurrent calls run in
    parallel and rely on the framework subsystems for synchronization.
    """

    def __init__(
        self,
        framework: "Framework",
        *,
        registry: CommandRegistry | None = None,
    ) -> None:
        self.framework = framework
        self.registry = registry or CommandRegistry()
        self._stopped = threading.Event()
        register_core_commands(self.registry, CoreHandlers(framework, self))

    @property
    def running(self) -> bool:
        return not self._stopped.is_set()

    def call(self, method: str, /, *args: Any, **kwargs: Any) -> Mapping[str, Any]:
        if self._stopped.is_set():
            raise ServiceStoppedError(f"service stopped; refusing {method!r}")
        return self.registry.dispatch(method, args, kwargs)

    def stop(self) -> None:
        """Signal the transport to stop; returns without waiting for shutdown."""

        if self._stopped.is_set():
            return
        self._stopped.set()
        logger.info("rpc service stop requested")
        self.framework.events.emit(STOPPING_EVENT, {})

    def wait(self, timeout: float | None = None) -> bool:
        """Block until :meth:`stop` is called or ``timeout`` elapses."""

        return self._stopped.wait(timeout)
