"""Role-based access rules for every view and mutation in the panel.

All functions are pure: they look at roles (and, for chat groups, at who
created the group) and answer allow/deny. Services consult them before
mutating anything, so a denied action never partially applies.

Two orderings of the roles exist in the product and are kept apart here:

- ``ROLE_RANK`` is the canonical authority ranking.
- ``GROUP_DELETION_RANK`` is only used when an Admin tries to delete a group
  somebody else created. It currently carries the same numbers, but other
  checks treat CEO/Manager as one top tier above Admin, so the two are kept
  as separate tables until product settles the Admin vs. Manager question.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence, TypeVar

from ..core.enums import Role

ROLE_RANK: dict[Role, int] = {
    Role.CEO: 6,
    Role.MANAGER: 5,
    Role.ADMIN: 4,
    Role.HR: 3,
    Role.TEAM_LEADER: 2,
    Role.EXECUTIVE: 1,
}

GROUP_DELETION_RANK: dict[Role, int] = {
    Role.CEO: 6,
    Role.MANAGER: 5,
    Role.ADMIN: 4,
    Role.HR: 3,
    Role.TEAM_LEADER: 2,
    Role.EXECUTIVE: 1,
}

MANAGEMENT_ROLES = frozenset({Role.CEO, Role.ADMIN, Role.MANAGER, Role.HR})
TOP_TIER_ROLES = frozenset({Role.CEO, Role.MANAGER})
GROUP_CREATOR_ROLES = frozenset({Role.CEO, Role.ADMIN, Role.MANAGER})
LEAD_DISTRIBUTOR_ROLES = frozenset({Role.CEO, Role.ADMIN, Role.MANAGER})
ROLE_MANAGEMENT_PAGE_ROLES = frozenset({Role.CEO, Role.ADMIN, Role.HR})
PROFILE_LOCKED_ROLES = frozenset({Role.EXECUTIVE, Role.TEAM_LEADER})

# Who may create/edit/delete/reset whom.
MANAGEABLE_ROLES: dict[Role, frozenset[Role]] = {
    Role.CEO: frozenset(Role),
    Role.ADMIN: frozenset(Role) - {Role.CEO},
    Role.HR: frozenset({Role.MANAGER, Role.TEAM_LEADER, Role.EXECUTIVE}),
}

# Choices disabled in the role-assignment dropdown, per actor.
BLOCKED_ASSIGNMENTS: dict[Role, frozenset[Role]] = {
    Role.HR: frozenset({Role.CEO, Role.ADMIN, Role.HR}),
    Role.ADMIN: frozenset({Role.CEO}),
}

# Lowest-privilege role; leads are distributed among its holders.
LEAD_ASSIGNEE_ROLE = min(ROLE_RANK, key=ROLE_RANK.__getitem__)


class OwnedRecord(Protocol):
    user_id: str


class GroupLike(Protocol):
    created_by: str


T = TypeVar("T", bound=OwnedRecord)


def rank(role: Role) -> int:
    return ROLE_RANK.get(role, 0)


def is_management(role: Role) -> bool:
    return role in MANAGEMENT_ROLES


def visible_records(*, actor_id: str, actor_role: Role, records: Iterable[T]) -> list[T]:
    """Management sees everybody's records; everyone else only their own."""
    if is_management(actor_role):
        return list(records)
    return [r for r in records if r.user_id == actor_id]


def can_view_user_records(*, actor_id: str, actor_role: Role, target_user_id: str) -> bool:
    return is_management(actor_role) or actor_id == target_user_id


# --- Chat groups ---


def can_create_group(role: Role) -> bool:
    return role in GROUP_CREATOR_ROLES


def can_delete_group(*, actor_id: str, actor_role: Role, group: GroupLike, creator_role: Optional[Role]) -> bool:
    """``creator_role`` is None when the creator's account no longer exists."""
    if actor_role in TOP_TIER_ROLES:
        return True
    if group.created_by == actor_id:
        return True
    if actor_role == Role.ADMIN:
        if creator_role is None:
            return True
        return GROUP_DELETION_RANK[creator_role] <= GROUP_DELETION_RANK[Role.ADMIN]
    return False


def can_manage_members(*, actor_id: str, actor_role: Role, group: GroupLike) -> bool:
    if actor_role in TOP_TIER_ROLES:
        return True
    return group.created_by == actor_id


def can_remove_member(*, actor_id: str, actor_role: Role, group: GroupLike, member_role: Optional[Role]) -> bool:
    """``member_role`` is None when the member's account no longer exists."""
    if member_role is None:
        return False
    if actor_role in TOP_TIER_ROLES:
        return True
    if group.created_by == actor_id:
        return member_role not in TOP_TIER_ROLES
    return False


# --- User records ---


def can_manage_user(actor_role: Role, target_role: Role) -> bool:
    return target_role in MANAGEABLE_ROLES.get(actor_role, frozenset())


def can_assign_role(actor_role: Role, new_role: Role) -> bool:
    if actor_role not in MANAGEABLE_ROLES:
        return False
    return new_role not in BLOCKED_ASSIGNMENTS.get(actor_role, frozenset())


def assignable_roles(actor_role: Role) -> Sequence[Role]:
    """Dropdown choices, lowest rank first."""
    ordered = sorted(Role, key=rank)
    return [r for r in ordered if can_assign_role(actor_role, r)]


def is_last_ceo(target_role: Role, ceo_count: int) -> bool:
    return target_role == Role.CEO and ceo_count <= 1


def can_edit_own_profile(role: Role) -> bool:
    return role not in PROFILE_LOCKED_ROLES


def can_access_role_management(role: Role) -> bool:
    return role in ROLE_MANAGEMENT_PAGE_ROLES


# --- Other features ---


def can_distribute_leads(role: Role) -> bool:
    return role in LEAD_DISTRIBUTOR_ROLES


def can_view_all_leads(role: Role) -> bool:
    return role != LEAD_ASSIGNEE_ROLE


def can_post_announcements(role: Role) -> bool:
    return is_management(role)


def can_manage_payroll(role: Role) -> bool:
    return is_management(role)


def can_decide_leave(role: Role) -> bool:
    return is_management(role)


def can_request_leave(role: Role) -> bool:
    return not is_management(role)


def can_override_attendance(role: Role) -> bool:
    return is_management(role)


def can_edit_company_branding(role: Role) -> bool:
    return role == Role.CEO


def has_punch_card(role: Role) -> bool:
    return role != Role.CEO
