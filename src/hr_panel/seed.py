from __future__ import annotations

import logging

from .core.constants import DEFAULT_PASSWORD
from .core.enums import Role
from .users.model import User, default_avatar
from .users.repository import UserRepository
from .users.security import PasswordHasher

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_EMAIL = "admin@teleexpro.com"

# (name, email, role, department)
DEMO_USERS = (
    ("Priya Sharma", "priya.admin@teleexpro.com", Role.ADMIN, "Administration"),
    ("Rahul Verma", "rahul.manager@teleexpro.com", Role.MANAGER, "Sales"),
    ("Anita Desai", "anita.hr@teleexpro.com", Role.HR, "Human Resources"),
    ("Vikram Singh", "vikram.tl@teleexpro.com", Role.TEAM_LEADER, "Sales"),
    ("Neha Gupta", "neha.exec@teleexpro.com", Role.EXECUTIVE, "Sales"),
    ("Arjun Mehta", "arjun.exec@teleexpro.com", Role.EXECUTIVE, "Sales"),
)


def ensure_admin_account(users: UserRepository, hasher: PasswordHasher) -> User:
    """The panel always starts with one CEO account so somebody can log in."""
    existing = users.get_by_email(DEFAULT_ADMIN_EMAIL)
    if existing:
        return existing

    admin = User(
        user_id="u1",
        name="Admin",
        email=DEFAULT_ADMIN_EMAIL,
        role=Role.CEO,
        department="Administration",
        password_hash=hasher.hash(DEFAULT_PASSWORD),
        avatar="https://ui-avatars.com/api/?name=Admin&background=0D8ABC&color=fff",
    )
    users.add(admin)
    return admin


def ensure_demo_users(users: UserRepository, hasher: PasswordHasher) -> int:
    """One account per role, all on the default password. Returns how many were added."""
    added = 0
    for name, email, role, department in DEMO_USERS:
        if users.get_by_email(email):
            continue
        users.add(
            User(
                user_id=users.next_id(),
                name=name,
                email=email,
                role=role,
                department=department,
                password_hash=hasher.hash(None),
                avatar=default_avatar(name),
            )
        )
        added += 1
    logger.info("demo seed ready (%d users added)", added)
    return added
