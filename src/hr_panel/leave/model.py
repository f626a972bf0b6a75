from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: str
    user_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: RequestStatus
    created_at: datetime
    decided_by: Optional[str] = None
    decided_at: Optional[datetime] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def as_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "user_id": self.user_id,
            "type": self.leave_type.value,
            "start_date": self.start_date.strftime("%Y-%m-%d"),
            "end_date": self.end_date.strftime("%Y-%m-%d"),
            "reason": self.reason,
            "status": self.status.value,
            "decided_by": self.decided_by,
        }
