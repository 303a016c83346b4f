"""Containers for configured values and per-batch notifications."""

from typing import Dict, Hashable, Iterable, Iterator, List, Optional

from watchpkg.core.models import Notification


class DedupList:
    """
    Ordered collection of unique values.

    Values keep the position of their first occurrence. ``None`` is a
    regular value: it can be appended once and tested for like any other.
    """

    def __init__(self, values: Optional[Iterable[Optional[str]]] = None):
        self._values: Dict[Hashable, None] = {}
        for value in values or ():
            self.append(value)

    def append(self, value: Optional[str]) -> "DedupList":
        """
        Add a value unless an equal one is already present.

        Returns:
            The list itself, so calls can be chained
        """
        if value not in self._values:
            self._values[value] = None
        return self

    def contains(self, value: Optional[str]) -> bool:
        return value in self._values

    def clear(self) -> None:
        self._values.clear()

    def to_list(self) -> List[Optional[str]]:
        return list(self._values)

    def __contains__(self, value: object) -> bool:
        return value in self._values

    def __iter__(self) -> Iterator[Optional[str]]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DedupList):
            return self.to_list() == other.to_list()
        return NotImplemented

    def __repr__(self) -> str:
        return f"DedupList({self.to_list()!r})"


class NotificationStore:
    """Package changes collected during one batch, in the order they arrived."""

    def __init__(self):
        self._notifications: List[Notification] = []

    def insert(self, name: str, origin: str) -> Notification:
        # Repeats are legitimate: one entry per qualifying event
        notification = Notification(name=name, origin=origin)
        self._notifications.append(notification)
        return notification

    def clear(self) -> None:
        self._notifications.clear()

    def snapshot(self) -> List[Notification]:
        return list(self._notifications)

    def __iter__(self) -> Iterator[Notification]:
        return iter(self._notifications)

    def __len__(self) -> int:
        return len(self._notifications)
