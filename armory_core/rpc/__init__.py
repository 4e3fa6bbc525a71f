"""Administrative RPC command layer."""

from .core import CoreHandlers, core_command_specs, module_stats, register_core_commands
from .errors import (
    CommandRegistrationError,
    InvalidArgumentsError,
    RpcError,
    ServiceStoppedError,
    UnknownCommandError,
)
from .params import Param, ParamType
from .registry import CommandRegistry, CommandSpec
from .service import RpcService

__all__ = [
    "CommandRegistry",
    "CommandSpec",
    "CoreHandlers",
    "Param",
    "ParamType",
    "RpcService",
    "core_command_specs",
    "module_stats",
    "register_core_commands",
    "RpcError",
    "UnknownCommandError",
    "InvalidArgumentsError",
    "CommandRegistrationError",
    "ServiceStoppedError",
]
