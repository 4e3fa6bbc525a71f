from __future__ import annotations

import logging
from typing import Any

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from armory_core.events import Event
from armory_core.rpc import (
    InvalidArgumentsError,
    RpcService,
    ServiceStoppedError,
    UnknownCommandError,
)
from armory_core.rpc.service import STOPPING_EVENT
from armory_core.settings import RpcSettings
from armory_core.version import FRAMEWORK_VERSION

log = logging.getLogger(__name__)


class RpcRequest(BaseModel):
    method: str
    params: list[Any] = Field(default_factory=list)
    kwargs: dict[str, Any] = Field(default_factory=dict)


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": True,
            "error_class": type(exc).__name__,
            "error_message": str(exc),
        },
    )


def create_app(service: RpcService) -> FastAPI:
    app = FastAPI(title="armory-rpc", version=FRAMEWORK_VERSION)

    @app.get("/health")
    def health():
        return {"ok": True, "running": service.running}

    @app.post("/api/v1/rpc")
    def rpc(req: RpcRequest):
        try:
            result = service.call(req.method, *req.params, **req.kwargs)
        except ServiceStoppedError as exc:
            return _error(503, exc)
        except UnknownCommandError as exc:
            return _error(404, exc)
        except InvalidArgumentsError as exc:
            return _error(400, exc)
        except Exception as exc:
            log.exception("command %s failed", req.method)
            return _error(500, exc)
        return dict(result)

    return app


def serve(service: RpcService, settings: RpcSettings) -> None:
    """Run the HTTP transport until the service is stopped or the process is interrupted."""

    config = uvicorn.Config(
        create_app(service),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )
    server = uvicorn.Server(config)

    def _on_stopping(event: Event) -> None:
        log.info("stop signal observed, shutting down transport")
        server.should_exit = True

    service.framework.events.on(STOPPING_EVENT, _on_stopping)
    if not service.running:
        server.should_exit = True
    try:
        server.run()
    finally:
        service.stop()
        service.framework.shutdown()
