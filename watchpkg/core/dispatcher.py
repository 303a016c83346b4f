"""Run every configured script for every collected package change."""

from dataclasses import dataclass, field
from typing import Callable, List, Tuple

from watchpkg.core.models import Notification, ResultCode
from watchpkg.core.session import WatchSession
from watchpkg.infrastructure.logging import get_logger

logger = get_logger(__name__)

ScriptCallable = Callable[[str, str, str], bool]


@dataclass(frozen=True)
class Invocation:
    """One script run against one notification."""

    script: str
    notification: Notification
    succeeded: bool


@dataclass
class DispatchResult:
    """Outcome of a dispatch across all scripts and notifications."""

    invocations: List[Invocation] = field(default_factory=list)

    def add(self, script: str, notification: Notification, succeeded: bool) -> None:
        self.invocations.append(Invocation(script, notification, succeeded))

    @property
    def failed(self) -> List[Invocation]:
        return [inv for inv in self.invocations if not inv.succeeded]

    @property
    def all_succeeded(self) -> bool:
        return not self.failed

    @property
    def code(self) -> ResultCode:
        return ResultCode.OK if self.all_succeeded else ResultCode.FATAL

    def calls(self) -> List[Tuple[str, str, str]]:
        """Invocations as (script, name, origin) in the order they ran."""
        return [
            (inv.script, inv.notification.name, inv.notification.origin)
            for inv in self.invocations
        ]


class Dispatcher:
    """
    Drains the notification store at the end of a batch.

    Scripts run in configuration order; each script sees every notification
    before the next script starts. A failed invocation is recorded and the
    loop carries on.
    """

    def __init__(self, session: WatchSession, runner: ScriptCallable):
        self.session = session
        self.runner = runner

    def dispatch(self) -> DispatchResult:
        result = DispatchResult()
        notifications = self.session.store.snapshot()

        try:
            for script in self.session.scripts:
                for notification in notifications:
                    result.add(script, notification, self._run(script, notification))
        finally:
            self.session.store.clear()

        logger.info(
            "dispatch_finished",
            scripts=len(self.session.scripts),
            notifications=len(notifications),
            invocations=len(result.invocations),
            failed=len(result.failed),
        )

        return result

    def _run(self, script: str, notification: Notification) -> bool:
        try:
            return bool(self.runner(script, notification.name, notification.origin))
        except Exception as e:
            logger.exception(
                "script_invocation_failed",
                script=script,
                name=notification.name,
                origin=notification.origin,
                error=str(e),
            )
            return False
