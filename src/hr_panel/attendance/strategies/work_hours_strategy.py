from __future__ import annotations

from ...core.constants import FULL_DAY_HOURS, HALF_DAY_HOURS
from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord, DailyStats
from .base import AttendanceStrategy, StatusDecision


class WorkHoursStrategy(AttendanceStrategy):
    """Classify by cumulative Work hours only; breaks and meetings do not count."""

    def __init__(self, *, full_day_hours: float = FULL_DAY_HOURS, half_day_hours: float = HALF_DAY_HOURS):
        self._full = full_day_hours
        self._half = half_day_hours

    def classify(self, work_hours: float) -> AttendanceStatus:
        if work_hours >= self._full:
            return AttendanceStatus.PRESENT
        if work_hours >= self._half:
            return AttendanceStatus.HALF_DAY
        return AttendanceStatus.ABSENT

    def decide_checkout(self, *, record: AttendanceRecord, stats: DailyStats) -> StatusDecision:
        return StatusDecision(status=self.classify(stats.work_hours))
