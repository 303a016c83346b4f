"""Collect package changes from lifecycle events."""

from typing import Optional

from watchpkg.core.models import EventType, Package, PackageEvent, ResultCode
from watchpkg.core.session import WatchSession
from watchpkg.infrastructure.logging import get_logger

logger = get_logger(__name__)


class ChangeCollector:
    """Records the package affected by each finished install, deinstall or upgrade"""

    def __init__(self, session: WatchSession):
        self.session = session

    @staticmethod
    def affected_package(event: Optional[PackageEvent]) -> Optional[Package]:
        """
        Return the package an event refers to.

        Upgrades report the package as it is after the upgrade. Events of any
        other kind yield None.
        """
        if event is None:
            return None

        if event.type in (EventType.INSTALL_FINISHED, EventType.DEINSTALL_FINISHED):
            return event.package
        if event.type == EventType.UPGRADE_FINISHED:
            return event.new
        return None

    def collect(self, event: Optional[PackageEvent]) -> ResultCode:
        """Store a notification for the event if it passes the watch list.

        Always returns ResultCode.OK.
        """
        package = self.affected_package(event)
        if package is None or package.name is None or package.origin is None:
            return ResultCode.OK

        if self.session.is_watched(package.name, package.origin):
            self.session.store.insert(package.name, package.origin)
            logger.debug(
                "package_change_collected",
                event_type=event.type.value,
                name=package.name,
                origin=package.origin,
            )
        else:
            logger.debug(
                "package_change_ignored",
                event_type=event.type.value,
                name=package.name,
                origin=package.origin,
            )

        return ResultCode.OK

    __call__ = collect
