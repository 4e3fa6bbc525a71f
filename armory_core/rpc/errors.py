"""Errors raised by the RPC command layer."""

from __future__ import annotations


class RpcError(Exception):
    """Base class for command dispatch errors."""


class UnknownCommandError(RpcError):
    """Raised when no handler is registered for the requested command."""

    def __init__(self, method: str) -> None:
        super().__init__(f"unknown command {method!r}")
        self.method = method


class InvalidArgumentsError(RpcError):
    """Raised when arguments do not match a command's parameter schema."""


class CommandRegistrationError(RpcError):
    """Raised when a command name is registered twice."""


class ServiceStoppedError(RpcError):
    """Raised when a command arrives after the service was asked to stop."""
