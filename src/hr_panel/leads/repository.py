from __future__ import annotations

from dataclasses import replace
from itertools import count
from typing import Optional, Protocol, Sequence

from ..core.enums import LeadStatus
from .model import Lead


class LeadRepository(Protocol):
    def list_all(self) -> Sequence[Lead]:
        raise NotImplementedError

    def get(self, lead_id: str) -> Optional[Lead]:
        raise NotImplementedError

    def add_many(self, leads: Sequence[Lead]) -> None:
        """New batches go to the top of the list."""

        raise NotImplementedError

    def set_status(self, lead_id: str, status: LeadStatus) -> bool:
        raise NotImplementedError

    def next_id(self) -> str:
        raise NotImplementedError


class InMemoryLeadRepository(LeadRepository):
    def __init__(self, leads: Sequence[Lead] = ()):
        self._leads: list[Lead] = list(leads)
        self._ids = count(len(self._leads) + 1)

    def list_all(self) -> Sequence[Lead]:
        return list(self._leads)

    def get(self, lead_id: str) -> Optional[Lead]:
        for lead in self._leads:
            if lead.lead_id == lead_id:
                return lead
        return None

    def add_many(self, leads: Sequence[Lead]) -> None:
        self._leads = list(leads) + self._leads

    def set_status(self, lead_id: str, status: LeadStatus) -> bool:
        for idx, lead in enumerate(self._leads):
            if lead.lead_id == lead_id:
                self._leads[idx] = replace(lead, status=status)
                return True
        return False

    def next_id(self) -> str:
        return f"lead-{next(self._ids)}"
