from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from itertools import count
from typing import Optional, Sequence

from ..core.enums import RequestStatus
from .model import LeaveRequest
from .repository import LeaveRepository


class InMemoryLeaveRepository(LeaveRepository):
    def __init__(self, requests: Sequence[LeaveRequest] = ()):
        self._items: dict[str, LeaveRequest] = {r.request_id: r for r in requests}
        self._ids = count(len(self._items) + 1)

    def add(self, request: LeaveRequest) -> LeaveRequest:
        self._items[request.request_id] = request
        return request

    def get(self, request_id: str) -> Optional[LeaveRequest]:
        return self._items.get(request_id)

    def list_requests(self, *, status: Optional[RequestStatus] = None, user_id: Optional[str] = None) -> Sequence[LeaveRequest]:
        items = [
            r
            for r in self._items.values()
            if (status is None or r.status == status) and (user_id is None or r.user_id == user_id)
        ]
        items.sort(key=lambda r: r.created_at, reverse=True)
        return items

    def decide(self, *, request_id: str, status: RequestStatus, decided_by: str, decided_at: datetime) -> bool:
        req = self._items.get(request_id)
        if not req or req.status != RequestStatus.PENDING:
            return False
        self._items[request_id] = replace(req, status=status, decided_by=decided_by, decided_at=decided_at)
        return True

    def next_id(self) -> str:
        return f"l{next(self._ids)}"
