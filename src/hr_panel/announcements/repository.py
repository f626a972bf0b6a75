from __future__ import annotations

from itertools import count
from typing import Optional, Protocol, Sequence

from .model import Announcement


class AnnouncementRepository(Protocol):
    def list_all(self) -> Sequence[Announcement]:
        """Newest first."""
        raise NotImplementedError

    def get(self, announcement_id: str) -> Optional[Announcement]:
        raise NotImplementedError

    def add(self, announcement: Announcement) -> Announcement:
        raise NotImplementedError

    def delete(self, announcement_id: str) -> bool:
        raise NotImplementedError

    def next_id(self) -> str:
        raise NotImplementedError


class InMemoryAnnouncementRepository(AnnouncementRepository):
    def __init__(self, announcements: Sequence[Announcement] = ()):
        self._items: list[Announcement] = list(announcements)
        self._ids = count(len(self._items) + 1)

    def list_all(self) -> Sequence[Announcement]:
        return list(self._items)

    def get(self, announcement_id: str) -> Optional[Announcement]:
        for a in self._items:
            if a.announcement_id == announcement_id:
                return a
        return None

    def add(self, announcement: Announcement) -> Announcement:
        self._items.insert(0, announcement)
        return announcement

    def delete(self, announcement_id: str) -> bool:
        before = len(self._items)
        self._items = [a for a in self._items if a.announcement_id != announcement_id]
        return len(self._items) != before

    def next_id(self) -> str:
        return f"n{next(self._ids)}"
