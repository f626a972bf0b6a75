from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..access import policy
from ..calendar.repository import EventRepository
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import EventType, LeaveType, RequestStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import User
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, requests: LeaveRepository, events: EventRepository):
        self._requests = requests
        self._events = events

    def create_leave(
        self,
        *,
        actor: User,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        if not policy.can_request_leave(actor.role):
            raise AuthorizationError("Management roles do not file leave requests here")

        if end_date < start_date:
            raise ValidationError("End date must be on or after the start date")

        reason = require_non_empty(reason, "Reason")
        request = LeaveRequest(
            request_id=self._requests.next_id(),
            user_id=actor.user_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=now or now_local(),
        )
        return self._requests.add(request)

    def _decide(self, *, actor: User, request_id: str, status: RequestStatus, now: Optional[datetime]) -> LeaveRequest:
        if not policy.can_decide_leave(actor.role):
            logger.info("user %s denied deciding leave %s", actor.user_id, request_id)
            raise AuthorizationError("Access denied")

        req = self._requests.get(request_id)
        if not req:
            raise ValidationError("Request not found")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Request has already been decided")

        ok = self._requests.decide(
            request_id=request_id,
            status=status,
            decided_by=actor.user_id,
            decided_at=now or now_local(),
        )
        if not ok:
            raise ValidationError("Failed to update request")
        return self._requests.get(request_id)

    def approve(self, *, actor: User, request_id: str, now: Optional[datetime] = None) -> LeaveRequest:
        return self._decide(actor=actor, request_id=request_id, status=RequestStatus.APPROVED, now=now)

    def reject(self, *, actor: User, request_id: str, now: Optional[datetime] = None) -> LeaveRequest:
        return self._decide(actor=actor, request_id=request_id, status=RequestStatus.REJECTED, now=now)

    def list_visible(self, *, actor: User) -> list[LeaveRequest]:
        return policy.visible_records(
            actor_id=actor.user_id,
            actor_role=actor.role,
            records=self._requests.list_requests(),
        )

    def approved_for_user(self, user_id: str) -> list[LeaveRequest]:
        return list(self._requests.list_requests(status=RequestStatus.APPROVED, user_id=user_id))

    def count_pending(self, *, user_id: Optional[str] = None) -> int:
        return len(self._requests.list_requests(status=RequestStatus.PENDING, user_id=user_id))

    def list_holidays(self):
        return self._events.list_by_type(EventType.HOLIDAY)
