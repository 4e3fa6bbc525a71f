"""HTTP transport for the RPC service."""

from .app import RpcRequest, create_app, serve

__all__ = ["RpcRequest", "create_app", "serve"]
