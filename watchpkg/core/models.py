"""Domain models for package change events."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class EventType(str, Enum):
    """Kinds of events emitted by the package manager during a batch"""

    INSTALL_BEGIN = "install-begin"
    INSTALL_FINISHED = "install-finished"
    DEINSTALL_BEGIN = "deinstall-begin"
    DEINSTALL_FINISHED = "deinstall-finished"
    UPGRADE_BEGIN = "upgrade-begin"
    UPGRADE_FINISHED = "upgrade-finished"
    FETCH_FINISHED = "fetch-finished"
    NOTICE = "notice"
    ERROR = "error"


@dataclass(frozen=True)
class Package:
    """Identity of a package as reported by the package manager."""

    name: Optional[str]
    origin: Optional[str]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Package":
        # YAML reads names like 2048 as numbers
        name, origin = data.get("name"), data.get("origin")
        return cls(
            name=None if name is None else str(name),
            origin=None if origin is None else str(origin),
        )


@dataclass(frozen=True)
class Notification:
    """One changed package recorded during the current batch."""

    name: str
    origin: str


@dataclass(frozen=True)
class PackageEvent:
    """
    A single lifecycle event.

    Install and deinstall events carry the affected package in ``package``.
    Upgrade events carry both the previous (``old``) and the resulting
    (``new``) package.
    """

    type: EventType
    package: Optional[Package] = None
    old: Optional[Package] = None
    new: Optional[Package] = None

    @classmethod
    def install_finished(cls, name: str, origin: str) -> "PackageEvent":
        return cls(EventType.INSTALL_FINISHED, package=Package(name, origin))

    @classmethod
    def deinstall_finished(cls, name: str, origin: str) -> "PackageEvent":
        return cls(EventType.DEINSTALL_FINISHED, package=Package(name, origin))

    @classmethod
    def upgrade_finished(cls, old: Package, new: Package) -> "PackageEvent":
        return cls(EventType.UPGRADE_FINISHED, old=old, new=new)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PackageEvent":
        """
        Build an event from its serialized form.

        Args:
            data: Mapping with a ``type`` and optional ``package``, ``old``
                and ``new`` package mappings

        Returns:
            PackageEvent instance

        Raises:
            ValueError: If the event type is unknown
        """
        event_type = EventType(str(data.get("type", "")).lower().replace("_", "-"))

        def _package(key: str) -> Optional[Package]:
            value = data.get(key)
            return Package.from_dict(value) if isinstance(value, dict) else None

        return cls(
            type=event_type,
            package=_package("package"),
            old=_package("old"),
            new=_package("new"),
        )


class ResultCode(str, Enum):
    """Return codes reported back to the package manager"""

    OK = "ok"
    FATAL = "fatal"
