from __future__ import annotations

from datetime import date
from itertools import count
from typing import Optional, Sequence

from ..core.exceptions import ValidationError
from .model import AttendanceRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Records keyed by (user, day); there is no delete."""

    def __init__(self, records: Sequence[AttendanceRecord] = ()):
        self._by_user_date: dict[tuple[str, date], AttendanceRecord] = {}
        self._ids = count(1)
        for r in records:
            self.add(r)

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_user_date.get((user_id, work_date))

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        items = [r for r in self.list_all() if r.user_id == user_id]
        return items[:limit]

    def list_all(self) -> Sequence[AttendanceRecord]:
        items = list(self._by_user_date.values())
        items.sort(key=lambda r: (r.work_date, r.check_in), reverse=True)
        return items

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return [r for r in self._by_user_date.values() if r.work_date == work_date]

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        key = (record.user_id, record.work_date)
        if key in self._by_user_date:
            raise ValidationError("An attendance record already exists for this day")
        self._by_user_date[key] = record
        return record

    def save(self, record: AttendanceRecord) -> bool:
        key = (record.user_id, record.work_date)
        if key not in self._by_user_date:
            return False
        self._by_user_date[key] = record
        return True

    def next_id(self) -> str:
        return f"a{next(self._ids)}"
