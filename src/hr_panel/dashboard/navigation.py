from __future__ import annotations

from dataclasses import dataclass

from ..access import policy
from ..core.enums import Role


@dataclass(frozen=True)
class NavItem:
    item_id: str
    label: str
    roles: frozenset[Role]


ALL_ROLES = frozenset(Role)

NAV_ITEMS: tuple[NavItem, ...] = (
    NavItem("dashboard", "Dashboard", ALL_ROLES),
    NavItem("attendance", "Attendance", ALL_ROLES),
    NavItem("leads", "Leads", ALL_ROLES),
    NavItem("calendar", "Calendar", ALL_ROLES),
    NavItem("payroll", "Payroll", ALL_ROLES),
    NavItem("leave", "Leave/Holidays", ALL_ROLES),
    NavItem("announcements", "Announcements", ALL_ROLES),
    NavItem("chat", "Messages", ALL_ROLES),
    NavItem("roles", "User Roles", policy.ROLE_MANAGEMENT_PAGE_ROLES),
    NavItem("settings", "Settings", ALL_ROLES),
)


def nav_items_for(role: Role) -> list[NavItem]:
    return [item for item in NAV_ITEMS if role in item.roles]
