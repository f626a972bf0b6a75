from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

from ..core.enums import Role


def default_avatar(name: str) -> str:
    return f"https://ui-avatars.com/api/?name={quote(name)}&background=random"


@dataclass(frozen=True)
class User:
    """Domain entity: a panel account.

    Note: a plain data object; the password is only ever held as a hash.
    """

    user_id: str
    name: str
    email: str
    role: Role
    department: str
    password_hash: str
    avatar: str = ""

    def public_view(self) -> dict:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "department": self.department,
            "avatar": self.avatar,
        }
