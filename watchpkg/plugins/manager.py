"""In-process plugin host delivering package manager hooks."""

from typing import Any, Dict, Iterable, List, Union

from watchpkg.core.models import PackageEvent, ResultCode
from watchpkg.infrastructure.logging import bind_context, get_logger, unbind_context
from watchpkg.plugins.base import (
    HookRegistrationError,
    HookType,
    OperationType,
    Plugin,
    PluginError,
)
from watchpkg.plugins.registry import HookCallback, HookRegistry

logger = get_logger(__name__)


class PluginHost:
    """
    Loads plugins and delivers lifecycle hooks to them.

    Plays the part of the package manager's plugin runtime: events of a
    batch are passed to EVENT callbacks one at a time, then the post hook
    for the batch's operation is fired once. Everything runs on the
    calling thread.
    """

    def __init__(self):
        """Initialize plugin host."""
        self.registry = HookRegistry()
        self._plugins: Dict[str, Plugin] = {}

    @property
    def plugins(self) -> List[Plugin]:
        return list(self._plugins.values())

    def load(self, plugin: Plugin) -> ResultCode:
        """
        Initialize a plugin and keep it loaded if initialization succeeds.

        Args:
            plugin: Plugin instance

        Returns:
            Result of the plugin's init
        """
        name = plugin.metadata.name
        if name in self._plugins:
            raise PluginError(f"Plugin already loaded: {name}")

        try:
            rc = plugin.init(self)
        except PluginError as e:
            logger.error("plugin_init_failed", plugin=name, error=str(e))
            rc = ResultCode.FATAL

        if rc != ResultCode.OK:
            self._unregister_plugin_hooks(plugin)
            return rc

        self._plugins[name] = plugin
        logger.debug("plugin_loaded", plugin=name, version=plugin.metadata.version)
        return ResultCode.OK

    def register_hook(
        self, plugin: Plugin, hook: Union[HookType, str], callback: HookCallback
    ) -> ResultCode:
        """
        Register a plugin callback for a hook.

        Returns:
            ResultCode.OK, or ResultCode.FATAL if the hook cannot be registered
        """
        try:
            self.registry.register(hook, callback)
        except HookRegistrationError as e:
            logger.debug("hook_registration_failed", plugin=plugin.metadata.name, error=str(e))
            return ResultCode.FATAL
        return ResultCode.OK

    def emit(self, event: PackageEvent) -> ResultCode:
        """Deliver one event to every EVENT callback."""
        return self._run_hook(HookType.EVENT, event)

    def finish(self, operation: Union[OperationType, str], data: Any = None) -> ResultCode:
        """Fire the post hook for a completed operation."""
        operation = OperationType(operation)
        return self._run_hook(operation.post_hook, data)

    def run_batch(
        self,
        operation: Union[OperationType, str],
        events: Iterable[PackageEvent],
    ) -> ResultCode:
        """
        Run a whole batch: deliver every event, then fire the post hook.

        Returns:
            Result of the post hook
        """
        operation = OperationType(operation)
        bind_context(operation=operation.value)
        try:
            for event in events:
                self.emit(event)
            return self.finish(operation)
        finally:
            unbind_context("operation")

    def shutdown(self) -> ResultCode:
        """Shut down all plugins; FATAL if any of them reported FATAL."""
        rc = ResultCode.OK
        for name, plugin in list(self._plugins.items()):
            try:
                if plugin.shutdown() != ResultCode.OK:
                    rc = ResultCode.FATAL
            except PluginError as e:
                logger.error("plugin_shutdown_failed", plugin=name, error=str(e))
                rc = ResultCode.FATAL

        self.registry.clear()
        self._plugins.clear()
        return rc

    def _run_hook(self, hook: HookType, data: Any) -> ResultCode:
        rc = ResultCode.OK
        for callback in self.registry.get(hook):
            try:
                if callback(data) != ResultCode.OK:
                    rc = ResultCode.FATAL
            except Exception as e:
                logger.exception("hook_callback_failed", hook=hook.value, error=str(e))
                rc = ResultCode.FATAL
        return rc

    def _unregister_plugin_hooks(self, plugin: Plugin) -> None:
        for hook in HookType:
            for callback in self.registry.get(hook):
                if getattr(callback, "__self__", None) is plugin:
                    self.registry.unregister(hook, callback)
