from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class PayslipDocument:
    """A payslip uploaded by management instead of the generated one."""

    file_name: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class PayrollEntry:
    entry_id: str
    user_id: str
    month: str  # YYYY-MM
    base_salary: float
    bonus: float
    deductions: float
    status: PayrollStatus = PayrollStatus.PAID
    document: Optional[PayslipDocument] = None

    @property
    def net_salary(self) -> float:
        return self.base_salary + self.bonus - self.deductions

    def as_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "user_id": self.user_id,
            "month": self.month,
            "base_salary": self.base_salary,
            "bonus": self.bonus,
            "deductions": self.deductions,
            "net_salary": self.net_salary,
            "status": self.status.value,
            "file_name": self.document.file_name if self.document else None,
        }
