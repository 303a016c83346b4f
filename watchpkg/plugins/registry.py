"""Registry of hook callbacks."""

from typing import Any, Callable, Dict, List, Union

from watchpkg.core.models import ResultCode
from watchpkg.infrastructure.logging import get_logger
from watchpkg.plugins.base import HookRegistrationError, HookType

logger = get_logger(__name__)

HookCallback = Callable[[Any], ResultCode]


class HookRegistry:
    """Callbacks registered per hook, kept in registration order."""

    def __init__(self):
        """Initialize hook registry."""
        self._hooks: Dict[HookType, List[HookCallback]] = {hook: [] for hook in HookType}

    def register(self, hook: Union[HookType, str], callback: HookCallback) -> None:
        """
        Register a callback for a hook.

        Args:
            hook: Hook to register for
            callback: Callable invoked with the hook's data

        Raises:
            HookRegistrationError: If the hook is unknown or callback is not callable
        """
        try:
            hook = HookType(hook)
        except ValueError:
            raise HookRegistrationError(f"Unknown hook: {hook}")

        if not callable(callback):
            raise HookRegistrationError(f"Callback for {hook.value} is not callable")

        if callback not in self._hooks[hook]:
            self._hooks[hook].append(callback)
            logger.debug("hook_registered", hook=hook.value, callback=_callback_name(callback))

    def unregister(self, hook: HookType, callback: HookCallback) -> bool:
        """
        Remove a callback from a hook.

        Returns:
            True if the callback was registered
        """
        if callback in self._hooks[hook]:
            self._hooks[hook].remove(callback)
            logger.debug("hook_unregistered", hook=hook.value, callback=_callback_name(callback))
            return True
        return False

    def get(self, hook: HookType) -> List[HookCallback]:
        return list(self._hooks[hook])

    def is_registered(self, hook: HookType, callback: HookCallback) -> bool:
        return callback in self._hooks[hook]

    def clear(self) -> None:
        for callbacks in self._hooks.values():
            callbacks.clear()


def _callback_name(callback: HookCallback) -> str:
    return getattr(callback, "__qualname__", repr(callback))
