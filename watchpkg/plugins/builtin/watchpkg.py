"""Run scripts for packages changed by install, deinstall, upgrade and autoremove."""

from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from watchpkg import __version__
from watchpkg.core.collector import ChangeCollector
from watchpkg.core.dispatcher import Dispatcher, DispatchResult, ScriptCallable
from watchpkg.core.models import PackageEvent, ResultCode
from watchpkg.core.session import WatchSession
from watchpkg.infrastructure.logging import get_logger
from watchpkg.infrastructure.script_runner import ScriptRunner
from watchpkg.plugins.base import (
    POST_OPERATION_HOOKS,
    ConfigurationShapeError,
    HookType,
    Plugin,
    PluginConfigurationError,
    PluginMetadata,
)
from watchpkg.plugins.config import WatchPkgConfig, load_config_file, parse_config

if TYPE_CHECKING:
    from watchpkg.plugins.manager import PluginHost

logger = get_logger(__name__)

PLUGIN_NAME = "watchpkg"
PLUGIN_DESCRIPTION = "Watch for package changes"


class WatchPkgPlugin(Plugin):
    """
    Collects changed packages during a batch and runs every configured
    script for each of them once the batch has finished.

    Configuration is read from ``config_file`` unless a mapping is passed as
    ``config``. Without any scripts the plugin loads but hooks nothing.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
        runner: Optional[ScriptCallable] = None,
    ):
        super().__init__(config)
        self.config_file = Path(config_file) if config_file else None
        self.runner = runner or ScriptRunner()
        self.session: Optional[WatchSession] = None
        self.collector: Optional[ChangeCollector] = None
        self.dispatcher: Optional[Dispatcher] = None
        self.last_result: Optional[DispatchResult] = None

    @property
    def metadata(self) -> PluginMetadata:
        return PluginMetadata(
            name=PLUGIN_NAME,
            version=__version__,
            description=PLUGIN_DESCRIPTION,
        )

    def _load_config(self) -> WatchPkgConfig:
        if self.config is not None:
            return parse_config(self.config)
        if self.config_file is not None:
            return load_config_file(self.config_file)
        return WatchPkgConfig()

    def init(self, host: "PluginHost") -> ResultCode:
        try:
            config = self._load_config()
        except ConfigurationShapeError:
            # Stay silent: unattended periodic runs would show this on every call
            return ResultCode.FATAL
        except PluginConfigurationError as e:
            logger.error("configuration_invalid", plugin=PLUGIN_NAME, error=str(e))
            return ResultCode.FATAL

        self.session = WatchSession.from_config(config)
        self.collector = ChangeCollector(self.session)
        self.dispatcher = Dispatcher(self.session, self.runner)

        if not self.session.is_active:
            logger.info(
                "no_scripts_configured",
                plugin=PLUGIN_NAME,
                message="WARNING: No scripts configured. Nothing to do.",
            )
            return ResultCode.OK

        registrations = [(HookType.EVENT, self.collect_package_changes)]
        registrations += [(hook, self.notify_package_changes) for hook in POST_OPERATION_HOOKS]

        for hook, callback in registrations:
            if host.register_hook(self, hook, callback) != ResultCode.OK:
                logger.error(
                    "hook_registration_failed",
                    plugin=PLUGIN_NAME,
                    hook=hook.value,
                    message="failed to hook into the library",
                )
                return ResultCode.FATAL

        logger.debug(
            "plugin_initialized",
            plugin=PLUGIN_NAME,
            scripts=self.session.scripts.to_list(),
            packages=self.session.packages.to_list(),
        )
        return ResultCode.OK

    def shutdown(self) -> ResultCode:
        if self.session is not None:
            self.session.close()
        return ResultCode.OK

    def collect_package_changes(self, event: Optional[PackageEvent]) -> ResultCode:
        """EVENT hook: remember the package behind a finished operation."""
        if self.collector is None:
            return ResultCode.OK
        return self.collector.collect(event)

    def notify_package_changes(self, data: Any = None) -> ResultCode:
        """
        Post-operation hook: run every script for every collected change.

        Returns:
            ResultCode.FATAL if any script failed, ResultCode.OK otherwise
        """
        if self.dispatcher is None:
            return ResultCode.OK
        self.last_result = self.dispatcher.dispatch()
        return self.last_result.code
