"""State shared by the collector and the dispatcher for one plugin session."""

from typing import TYPE_CHECKING, Iterable, Optional

from watchpkg.core.collections import DedupList, NotificationStore

if TYPE_CHECKING:
    from watchpkg.plugins.config import WatchPkgConfig


class WatchSession:
    """
    Configured scripts, the package watch list and the notification store.

    Lives from plugin initialization until shutdown. ``scripts`` and
    ``packages`` are fixed once the session is built; ``store`` is filled
    by the collector and drained by the dispatcher once per batch.
    """

    def __init__(
        self,
        scripts: Optional[Iterable[str]] = None,
        packages: Optional[Iterable[str]] = None,
    ):
        self.scripts = DedupList(scripts)
        self.packages = DedupList(packages)
        self.store = NotificationStore()

    @classmethod
    def from_config(cls, config: "WatchPkgConfig") -> "WatchSession":
        return cls(scripts=config.scripts, packages=config.packages)

    @property
    def is_active(self) -> bool:
        """True when there is at least one script to run."""
        return len(self.scripts) > 0

    @property
    def watches_everything(self) -> bool:
        return len(self.packages) == 0

    def is_watched(self, name: Optional[str], origin: Optional[str]) -> bool:
        # Name and origin are matched independently
        return (
            self.watches_everything
            or self.packages.contains(name)
            or self.packages.contains(origin)
        )

    def close(self) -> None:
        self.store.clear()
        self.packages.clear()
        self.scripts.clear()
