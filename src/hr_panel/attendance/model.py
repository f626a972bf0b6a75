from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.constants import FULL_DAY_HOURS
from ..core.enums import ActivityType, AttendanceStatus


@dataclass(frozen=True)
class ActivitySegment:
    """One typed span of a day's activity log; open while ``end`` is None."""

    activity: ActivityType
    start: time
    end: Optional[time] = None

    @property
    def is_open(self) -> bool:
        return self.end is None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per (user, calendar day)."""

    record_id: str
    user_id: str
    work_date: date
    check_in: time
    check_out: Optional[time]
    status: AttendanceStatus
    segments: tuple[ActivitySegment, ...] = ()
    note: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.check_out is not None

    @property
    def open_segment(self) -> Optional[ActivitySegment]:
        if self.segments and self.segments[-1].is_open:
            return self.segments[-1]
        return None


@dataclass(frozen=True)
class DailyStats:
    work_minutes: int
    break_minutes: int

    @property
    def work_hours(self) -> float:
        return self.work_minutes / 60

    @property
    def break_hours(self) -> float:
        return self.break_minutes / 60

    @property
    def total_login_hours(self) -> float:
        return (self.work_minutes + self.break_minutes) / 60

    @property
    def overtime_hours(self) -> float:
        return max(0.0, self.work_hours - FULL_DAY_HOURS)

    def as_dict(self) -> dict:
        return {
            "work_hours": round(self.work_hours, 2),
            "break_hours": round(self.break_hours, 2),
            "total_login_hours": round(self.total_login_hours, 2),
            "overtime_hours": round(self.overtime_hours, 2),
        }
