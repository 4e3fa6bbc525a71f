"""Core runtime pieces for the Armory framework and its administrative RPC surface."""

from .categories import ModuleCategory
from .config import ConfigStore
from .events import Event, EventBus
from .framework import Framework, FrameworkStatus
from .modules import ModuleManager
from .paths import UserDirs
from .rpc import CommandRegistry, RpcService
from .threads import ThreadTable
from .version import API_VERSION, FRAMEWORK_VERSION, VersionInfo
from .workspace import Workspace, WorkspaceLayout, WorkspaceResolver

__version__ = FRAMEWORK_VERSION

__all__ = [
    "API_VERSION",
    "FRAMEWORK_VERSION",
    "CommandRegistry",
    "ConfigStore",
    "Event",
    "EventBus",
    "Framework",
    "FrameworkStatus",
    "ModuleCategory",
    "ModuleManager",
    "RpcService",
    "ThreadTable",
    "UserDirs",
    "VersionInfo",
    "Workspace",
    "WorkspaceLayout",
    "WorkspaceResolver",
]
