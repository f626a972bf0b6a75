from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from jinja2 import Environment

from ..core.constants import PAYSLIP_ATTENDANCE_BONUS, PAYSLIP_FESTIVAL_ALLOWANCE, PAYSLIP_REIMBURSEMENT
from ..users.model import User
from .model import PayrollEntry

_env = Environment(autoescape=True)

PAYSLIP_TEMPLATE = _env.from_string(
    """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>Payslip - {{ user.name }}</title>
</head>
<body>
<div class="page">
  <div class="logo">{{ company_name | upper }}</div>
  <h1>EMPLOYEE PAYSLIP</h1>
  <table class="info">
    <tr><td>Employee Name</td><td>{{ user.name }}</td><td>Month</td><td>{{ entry.month }}</td></tr>
    <tr><td>Employee ID</td><td>{{ user.user_id }}</td><td>Pay Date</td><td>{{ pay_date }}</td></tr>
    <tr><td>Department</td><td>{{ user.department or "General" }}</td><td>Payment Mode</td><td>Bank Transfer</td></tr>
    <tr><td>Designation</td><td>{{ user.role.value }}</td><td>Status</td><td>{{ entry.status.value }}</td></tr>
  </table>
  <h2>Earnings</h2>
  <table class="earnings">
    <tr><th>Description</th><th>Amount (INR)</th></tr>
    {% for label, amount in slip.earnings %}
    <tr><td>{{ label }}</td><td>{{ "{:,.2f}".format(amount) }}</td></tr>
    {% endfor %}
    <tr class="total"><td>Total Earnings</td><td>{{ "{:,.2f}".format(slip.total_earnings) }}</td></tr>
  </table>
  <h2>Deductions</h2>
  <table class="deductions">
    <tr><th>Description</th><th>Amount (INR)</th></tr>
    <tr><td>Unpaid leaves / Other</td><td>{{ "{:,.2f}".format(slip.total_deductions) }}</td></tr>
    <tr class="total"><td>Total Deductions</td><td>{{ "{:,.2f}".format(slip.total_deductions) }}</td></tr>
  </table>
  <div class="net-salary">Net Salary (INR) : {{ "{:,.2f}".format(slip.net_salary) }}</div>
  <div class="footer">Authorized by: Finance Manager {{ company_name | upper }}</div>
</div>
</body>
</html>
"""
)


@dataclass(frozen=True)
class PayslipFigures:
    earnings: tuple[tuple[str, float], ...]
    total_earnings: float
    total_deductions: float

    @property
    def net_salary(self) -> float:
        return self.total_earnings - self.total_deductions


def payslip_figures(entry: PayrollEntry) -> PayslipFigures:
    """The generated payslip adds fixed allowances on top of the stored entry."""
    earnings = (
        ("Basic Salary", entry.base_salary),
        ("Incentives", entry.bonus),
        ("Reimbursement", PAYSLIP_REIMBURSEMENT),
        ("Attendance Bonus", PAYSLIP_ATTENDANCE_BONUS),
        ("Festival Allowance", PAYSLIP_FESTIVAL_ALLOWANCE),
    )
    return PayslipFigures(
        earnings=earnings,
        total_earnings=sum(amount for _, amount in earnings),
        total_deductions=entry.deductions,
    )


def render_payslip(*, entry: PayrollEntry, user: User, company_name: str, pay_date: date) -> str:
    return PAYSLIP_TEMPLATE.render(
        entry=entry,
        user=user,
        company_name=company_name,
        pay_date=pay_date.strftime("%Y-%m-%d"),
        slip=payslip_figures(entry),
    )
