from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord, DailyStats
from .base import AttendanceStrategy, StatusDecision


class ManualStatusStrategy(AttendanceStrategy):
    """Management override; the only path that produces ``Late``."""

    def __init__(self, status: AttendanceStatus, note: Optional[str] = None):
        self._status = status
        self._note = note

    def decide_checkout(self, *, record: AttendanceRecord, stats: DailyStats) -> StatusDecision:
        return StatusDecision(status=self._status, note=self._note)
