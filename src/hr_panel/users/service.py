from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from ..access import policy
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, DataIntegrityError, ValidationError
from .model import User, default_avatar
from .repository import UserRepository
from .security import PasswordHasher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    name: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository, hasher: Optional[PasswordHasher] = None):
        self._users = users
        self._hasher = hasher or PasswordHasher()

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email(email)
        if not user or not self._hasher.verify(user.password_hash, password):
            raise AuthenticationError("Invalid email or password")

        return SessionUser(user_id=user.user_id, name=user.name, role=user.role)


class UserService:
    """Use case: manage user records (role management page, profile settings)."""

    def __init__(self, users: UserRepository, hasher: Optional[PasswordHasher] = None):
        self._users = users
        self._hasher = hasher or PasswordHasher()

    def get(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User not found")
        return user

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def list_manageable(self, *, actor: User) -> list[dict]:
        """Rows for the role management table, with the per-row affordances."""
        if not policy.can_access_role_management(actor.role):
            raise AuthorizationError("Access denied")

        ceo_count = self._users.count_by_role(Role.CEO)
        rows = []
        for u in self._users.list_all():
            can_manage = policy.can_manage_user(actor.role, u.role)
            rows.append(
                {
                    **u.public_view(),
                    "can_manage": can_manage,
                    "can_delete": can_manage and not policy.is_last_ceo(u.role, ceo_count),
                }
            )
        return rows

    def _check_assignment(self, actor: User, role: Role) -> None:
        if not policy.can_assign_role(actor.role, role):
            raise AuthorizationError(f"You cannot assign the {role.value} role")

    def _check_email_free(self, email: str, *, except_id: Optional[str] = None) -> None:
        existing = self._users.get_by_email(email)
        if existing and existing.user_id != except_id:
            raise ValidationError("Email already in use")

    def create_user(
        self,
        *,
        actor: User,
        name: str,
        email: str,
        role: Role,
        department: str = "",
        password: str = "",
    ) -> User:
        if not policy.can_manage_user(actor.role, role):
            raise AuthorizationError("You cannot create users with this role")
        self._check_assignment(actor, role)

        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email")
        self._check_email_free(email)

        user = User(
            user_id=self._users.next_id(),
            name=name,
            email=email,
            role=role,
            department=(department or "").strip(),
            password_hash=self._hasher.hash(password),
            avatar=default_avatar(name),
        )
        self._users.add(user)
        logger.info("user %s created %s (%s)", actor.user_id, user.user_id, role.value)
        return user

    def update_user(
        self,
        *,
        actor: User,
        user_id: str,
        name: str,
        email: str,
        role: Role,
        department: str = "",
        password: str = "",
    ) -> User:
        target = self.get(user_id)
        if not policy.can_manage_user(actor.role, target.role):
            raise AuthorizationError("You cannot manage this user")
        if role != target.role:
            self._check_assignment(actor, role)
            if policy.is_last_ceo(target.role, self._users.count_by_role(Role.CEO)):
                raise DataIntegrityError("At least one CEO account must remain")

        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email")
        self._check_email_free(email, except_id=target.user_id)

        updated = replace(
            target,
            name=name,
            email=email,
            role=role,
            department=(department or "").strip(),
            # keep old password if not changed
            password_hash=self._hasher.hash(password) if password else target.password_hash,
        )
        self._users.save(updated)
        return updated

    def reset_password(self, *, actor: User, user_id: str, new_password: str) -> None:
        target = self.get(user_id)
        if not policy.can_manage_user(actor.role, target.role):
            raise AuthorizationError("You cannot manage this user")
        new_password = require_non_empty(new_password, "New password")
        self._users.save(replace(target, password_hash=self._hasher.hash(new_password)))

    def delete_user(self, *, actor: User, user_id: str) -> None:
        target = self.get(user_id)
        if not policy.can_manage_user(actor.role, target.role):
            logger.info("user %s denied deleting %s", actor.user_id, user_id)
            raise AuthorizationError("You cannot manage this user")
        if policy.is_last_ceo(target.role, self._users.count_by_role(Role.CEO)):
            raise DataIntegrityError("Cannot delete the only CEO account")

        if not self._users.delete_by_id(user_id):
            raise ValidationError("Failed to delete user")

    def update_profile(self, *, actor: User, name: str, avatar: str = "") -> User:
        if not policy.can_edit_own_profile(actor.role):
            raise AuthorizationError("Profile editing is disabled for your role")
        current = self.get(actor.user_id)
        updated = replace(
            current,
            name=require_non_empty(name, "Name"),
            avatar=(avatar or "").strip() or current.avatar,
        )
        self._users.save(updated)
        return updated
