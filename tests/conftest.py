from __future__ import annotations

from datetime import datetime

import pytest

from hr_panel.core.enums import Role
from hr_panel.users.memory_user_repository import InMemoryUserRepository
from hr_panel.users.model import User

# Wednesday
FIXED_NOW = datetime(2025, 1, 15, 10, 0)


def _user(user_id: str, name: str, role: Role, department: str = "Sales") -> User:
    return User(
        user_id=user_id,
        name=name,
        email=f"{name.lower().replace(' ', '.')}@example.com",
        role=role,
        department=department,
        password_hash="not-a-real-hash",
    )


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def people() -> dict[str, User]:
    return {
        "ceo": _user("u1", "Chief Boss", Role.CEO, "Administration"),
        "admin": _user("u2", "Ada Admin", Role.ADMIN, "Administration"),
        "manager": _user("u3", "Max Manager", Role.MANAGER),
        "hr": _user("u4", "Hana HR", Role.HR, "Human Resources"),
        "tl": _user("u5", "Tom Lead", Role.TEAM_LEADER),
        "exec_a": _user("u6", "Eve Exec", Role.EXECUTIVE),
        "exec_b": _user("u7", "Eli Exec", Role.EXECUTIVE),
    }


@pytest.fixture
def users_repo(people) -> InMemoryUserRepository:
    return InMemoryUserRepository(list(people.values()))
