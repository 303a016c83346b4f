"""watchpkg plugin system.

This module provides the plugin host and the types plugins use to hook into
the package manager's lifecycle.
"""

from watchpkg.plugins.base import (
    ConfigurationShapeError,
    HookRegistrationError,
    HookType,
    OperationType,
    Plugin,
    PluginConfigurationError,
    PluginError,
    PluginMetadata,
)
from watchpkg.plugins.manager import PluginHost
from watchpkg.plugins.registry import HookRegistry

__all__ = [
    "ConfigurationShapeError",
    "HookRegistrationError",
    "HookType",
    "OperationType",
    "Plugin",
    "PluginConfigurationError",
    "PluginError",
    "PluginMetadata",
    "PluginHost",
    "HookRegistry",
]
