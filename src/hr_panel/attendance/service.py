from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..access import policy
from ..common.datetime_utils import fmt_hhmm, now_local, wall_clock
from ..core.constants import MAX_BREAK_HOURS
from ..core.enums import ActivityType, AttendanceStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from . import engine
from .export import ATTENDANCE_CSV_HEADER, write_csv
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Punch card use cases on top of the pure state machine in ``engine``."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def _require_punch_card(self, actor: User) -> None:
        if not policy.has_punch_card(actor.role):
            raise AuthorizationError("Your role does not use the punch card")

    def _today_record(self, user_id: str, today: date) -> AttendanceRecord:
        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record:
            raise ValidationError("You have not punched in today")
        return record

    def punch_in(self, actor: User, *, now: Optional[datetime] = None) -> AttendanceRecord:
        self._require_punch_card(actor)
        now = now or now_local()
        today = now.date()

        if self._attendance.get_for_user_and_date(actor.user_id, today):
            raise ValidationError("You have already punched in today")

        record = engine.start_day(
            record_id=self._attendance.next_id(),
            user_id=actor.user_id,
            work_date=today,
            now=wall_clock(now),
        )
        self._attendance.add(record)
        return record

    def change_state(self, actor: User, activity: ActivityType, *, now: Optional[datetime] = None) -> AttendanceRecord:
        self._require_punch_card(actor)
        now = now or now_local()

        record = self._today_record(actor.user_id, now.date())
        updated = engine.change_activity(record, activity, wall_clock(now))
        self._attendance.save(updated)
        return updated

    def punch_out(self, actor: User, *, now: Optional[datetime] = None) -> AttendanceRecord:
        self._require_punch_card(actor)
        now = now or now_local()

        record = self._today_record(actor.user_id, now.date())
        updated = engine.finish_day(record, wall_clock(now), self._factory.for_checkout())
        self._attendance.save(updated)
        logger.info("user %s punched out: %s", actor.user_id, updated.status.value)
        return updated

    def set_status(
        self,
        actor: User,
        *,
        user_id: str,
        work_date: date,
        status: AttendanceStatus,
        note: str = "",
    ) -> AttendanceRecord:
        """Manual override by management (the only way to mark a day ``Late``)."""
        if not policy.can_override_attendance(actor.role):
            raise AuthorizationError("Access denied")

        record = self._attendance.get_for_user_and_date(user_id, work_date)
        if not record:
            raise ValidationError("No attendance record for this day")

        stats = engine.compute_stats(record, open_until=record.check_out)
        decision = self._factory.for_override(status, (note or "").strip() or None).decide_checkout(
            record=record, stats=stats
        )
        updated = replace(record, status=decision.status, note=decision.note or record.note)
        self._attendance.save(updated)
        return updated

    def get_today(self, actor: User, *, now: Optional[datetime] = None) -> dict:
        """Live punch card figures; recomputed on every call, nothing is stored."""
        now = now or now_local()
        record = self._attendance.get_for_user_and_date(actor.user_id, now.date())
        stats = engine.compute_stats(record, open_until=wall_clock(now))

        return {
            "has_punch_card": policy.has_punch_card(actor.role),
            "state": engine.current_state(record),
            "record": self._to_ui(record) if record else None,
            "stats": stats.as_dict(),
            "break_over_limit": stats.break_hours > MAX_BREAK_HOURS,
        }

    def list_visible(self, actor: User) -> list[AttendanceRecord]:
        return policy.visible_records(
            actor_id=actor.user_id,
            actor_role=actor.role,
            records=self._attendance.list_all(),
        )

    def get_history_ui(self, actor: User) -> list[dict]:
        return [self._to_ui(r) for r in self.list_visible(actor)]

    def export_csv(self, actor: User) -> str:
        rows = []
        for r in self.list_visible(actor):
            # Only finished segments are reported.
            stats = engine.compute_stats(r, open_until=None)
            rows.append(
                [
                    self._user_name(r.user_id),
                    r.work_date.strftime("%Y-%m-%d"),
                    fmt_hhmm(r.check_in),
                    fmt_hhmm(r.check_out, empty="N/A"),
                    r.status.value,
                    f"{stats.work_hours:.2f}",
                    f"{stats.break_hours:.2f}",
                ]
            )
        return write_csv(ATTENDANCE_CSV_HEADER, rows)

    def _user_name(self, user_id: str) -> str:
        user = self._users.get_by_id(user_id)
        return user.name if user else "Unknown"

    def _to_ui(self, r: AttendanceRecord) -> dict:
        stats = engine.compute_stats(r, open_until=r.check_out)
        return {
            "record_id": r.record_id,
            "user_id": r.user_id,
            "name": self._user_name(r.user_id),
            "date": r.work_date.strftime("%Y-%m-%d"),
            "check_in": fmt_hhmm(r.check_in),
            "check_out": fmt_hhmm(r.check_out),
            "status": r.status.value,
            "note": r.note or "",
            "work_hours": round(stats.work_hours, 2),
            "break_hours": round(stats.break_hours, 2),
            "segments": [
                {
                    "type": s.activity.value,
                    "start": fmt_hhmm(s.start),
                    "end": fmt_hhmm(s.end, empty="") or None,
                }
                for s in r.segments
            ],
        }
