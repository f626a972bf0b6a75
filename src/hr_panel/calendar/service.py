from __future__ import annotations

from calendar import monthrange
from datetime import date
from typing import Optional

from ..access import policy
from ..attendance import engine
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import is_weekend, now_local
from ..core.enums import AttendanceStatus, DayType, EventType, RequestStatus
from ..core.exceptions import ValidationError
from ..leave.repository import LeaveRepository
from ..users.model import User
from ..users.repository import UserRepository
from .model import CalendarDay
from .repository import EventRepository

_STATUS_DAY_TYPE = {
    AttendanceStatus.PRESENT: DayType.WORK,
    AttendanceStatus.HALF_DAY: DayType.HALF_DAY,
    AttendanceStatus.ABSENT: DayType.ABSENT,
    AttendanceStatus.LATE: DayType.LATE,
}


class CalendarService:
    """Monthly attendance calendar for one employee."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        events: EventRepository,
        users: UserRepository,
    ):
        self._attendance = attendance
        self._leaves = leaves
        self._events = events
        self._users = users

    def classify_day(self, *, user_id: str, day: date, today: date) -> CalendarDay:
        """Holiday, then approved leave, then the attendance record, then weekend/past/future."""

        holiday = self._events.find(event_date=day, event_type=EventType.HOLIDAY)
        if holiday:
            return CalendarDay(day, DayType.HOLIDAY, info=holiday.title)

        for leave in self._leaves.list_requests(status=RequestStatus.APPROVED, user_id=user_id):
            if leave.covers(day):
                return CalendarDay(day, DayType.LEAVE, status=leave.leave_type.value, info=leave.reason)

        record = self._attendance.get_for_user_and_date(user_id, day)
        if record:
            # Past days rely on the segment end or the check-out; open tails are skipped.
            stats = engine.compute_stats(record, open_until=record.check_out)
            return CalendarDay(
                day,
                _STATUS_DAY_TYPE[record.status],
                status=record.status.value,
                hours=stats.work_hours,
            )

        if is_weekend(day):
            return CalendarDay(day, DayType.WEEKEND)
        if day < today:
            return CalendarDay(day, DayType.ABSENT, status=AttendanceStatus.ABSENT.value)
        if day == today:
            return CalendarDay(day, DayType.READY)
        return CalendarDay(day, DayType.FUTURE)

    def month_view(
        self,
        *,
        actor: User,
        year: int,
        month: int,
        target_user_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> dict:
        today = today or now_local().date()

        # Employees outside management always get their own calendar.
        user_id = target_user_id if target_user_id and policy.is_management(actor.role) else actor.user_id
        target = self._users.get_by_id(user_id)
        if not target:
            raise ValidationError("User not found")
        if not 1 <= month <= 12:
            raise ValidationError("Invalid month")

        first_weekday, days_in_month = monthrange(year, month)
        days = [
            self.classify_day(user_id=user_id, day=date(year, month, d), today=today).as_dict()
            for d in range(1, days_in_month + 1)
        ]
        return {
            "user_id": target.user_id,
            "name": target.name,
            "year": year,
            "month": month,
            # Sunday-first grid padding
            "leading_blanks": (first_weekday + 1) % 7,
            "days": days,
        }
