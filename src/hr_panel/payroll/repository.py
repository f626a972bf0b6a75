from __future__ import annotations

from itertools import count
from typing import Optional, Protocol, Sequence

from .model import PayrollEntry


class PayrollRepository(Protocol):
    def get_for_user_and_month(self, user_id: str, month: str) -> Optional[PayrollEntry]:
        raise NotImplementedError

    def get(self, entry_id: str) -> Optional[PayrollEntry]:
        raise NotImplementedError

    def list_all(self) -> Sequence[PayrollEntry]:
        """Most recently submitted first."""

        raise NotImplementedError

    def upsert(self, entry: PayrollEntry) -> PayrollEntry:
        """Overwrite the entry for (user, month) if one exists, keeping its id."""

        raise NotImplementedError

    def next_id(self) -> str:
        raise NotImplementedError


class InMemoryPayrollRepository(PayrollRepository):
    def __init__(self, entries: Sequence[PayrollEntry] = ()):
        self._entries: list[PayrollEntry] = list(entries)
        self._ids = count(len(self._entries) + 1)

    def get_for_user_and_month(self, user_id: str, month: str) -> Optional[PayrollEntry]:
        for e in self._entries:
            if e.user_id == user_id and e.month == month:
                return e
        return None

    def get(self, entry_id: str) -> Optional[PayrollEntry]:
        for e in self._entries:
            if e.entry_id == entry_id:
                return e
        return None

    def list_all(self) -> Sequence[PayrollEntry]:
        return list(self._entries)

    def upsert(self, entry: PayrollEntry) -> PayrollEntry:
        for idx, e in enumerate(self._entries):
            if e.user_id == entry.user_id and e.month == entry.month:
                self._entries[idx] = entry
                return entry
        self._entries.insert(0, entry)
        return entry

    def next_id(self) -> str:
        return f"p{next(self._ids)}"
