from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import AttendanceStatus
from .strategies.base import AttendanceStrategy
from .strategies.manual_strategy import ManualStatusStrategy
from .strategies.work_hours_strategy import WorkHoursStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    work_hours: WorkHoursStrategy = field(default_factory=WorkHoursStrategy)

    def for_checkout(self) -> AttendanceStrategy:
        return self.work_hours

    def for_override(self, status: AttendanceStatus, note: Optional[str] = None) -> AttendanceStrategy:
        return ManualStatusStrategy(status, note)
