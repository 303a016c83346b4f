"""Base plugin interface and types for the watchpkg plugin host."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

from watchpkg.core.models import ResultCode

if TYPE_CHECKING:
    from watchpkg.plugins.manager import PluginHost


class HookType(str, Enum):
    """Points in the package manager's lifecycle a plugin can hook into"""

    EVENT = "event"
    POST_INSTALL = "post-install"
    POST_DEINSTALL = "post-deinstall"
    POST_UPGRADE = "post-upgrade"
    POST_AUTOREMOVE = "post-autoremove"


class OperationType(str, Enum):
    """Package operations that make up a batch"""

    INSTALL = "install"
    DEINSTALL = "deinstall"
    UPGRADE = "upgrade"
    AUTOREMOVE = "autoremove"

    @property
    def post_hook(self) -> HookType:
        """Hook fired once the operation has completed."""
        return HookType(f"post-{self.value}")


POST_OPERATION_HOOKS = (
    HookType.POST_INSTALL,
    HookType.POST_DEINSTALL,
    HookType.POST_UPGRADE,
    HookType.POST_AUTOREMOVE,
)


@dataclass
class PluginMetadata:
    """Plugin metadata information."""
    name: str
    version: str
    description: str


class Plugin(ABC):
    """Abstract base class for all plugins."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize plugin with configuration.

        Args:
            config: Plugin-specific configuration, None if not given
        """
        self.config = config

    @property
    @abstractmethod
    def metadata(self) -> PluginMetadata:
        """
        Return plugin metadata.

        Returns:
            PluginMetadata object with plugin information
        """
        pass

    @abstractmethod
    def init(self, host: "PluginHost") -> ResultCode:
        """
        Initialize the plugin and register its hooks with the host.

        Args:
            host: Host the plugin is being loaded into

        Returns:
            ResultCode.OK on success, ResultCode.FATAL otherwise
        """
        pass

    def shutdown(self) -> ResultCode:
        """
        Release plugin resources.

        Called when the host unloads the plugin.
        """
        return ResultCode.OK


# Exception classes for plugin errors

class PluginError(Exception):
    """Base exception for plugin-related errors."""
    pass


class PluginConfigurationError(PluginError):
    """Raised when plugin configuration is invalid."""
    pass


class ConfigurationShapeError(PluginConfigurationError):
    """Raised when the configuration is not a mapping of settings."""
    pass


class HookRegistrationError(PluginError):
    """Raised when a hook cannot be registered with the host."""
    pass
