from __future__ import annotations

from itertools import count
from typing import Optional, Sequence

from ..core.enums import Role
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """Keeps users in insertion order; that order drives lead distribution."""

    def __init__(self, users: Sequence[User] = ()):
        self._users: dict[str, User] = {u.user_id: u for u in users}
        self._ids = count(len(self._users) + 1)

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        needle = (email or "").strip().lower()
        for user in self._users.values():
            if user.email.lower() == needle:
                return user
        return None

    def list_all(self) -> Sequence[User]:
        return list(self._users.values())

    def list_by_role(self, role: Role) -> Sequence[User]:
        return [u for u in self._users.values() if u.role == role]

    def count_by_role(self, role: Role) -> int:
        return len(self.list_by_role(role))

    def add(self, user: User) -> User:
        self._users[user.user_id] = user
        return user

    def save(self, user: User) -> bool:
        if user.user_id not in self._users:
            return False
        self._users[user.user_id] = user
        return True

    def delete_by_id(self, user_id: str) -> bool:
        return self._users.pop(user_id, None) is not None

    def next_id(self) -> str:
        while True:
            candidate = f"u{next(self._ids)}"
            if candidate not in self._users:
                return candidate
