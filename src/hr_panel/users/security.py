from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.constants import DEFAULT_PASSWORD


class PasswordHasher:
    """Single place where credentials are hashed and checked."""

    def hash(self, password: str | None) -> str:
        # Accounts created without a password share the default one.
        return generate_password_hash(password or DEFAULT_PASSWORD)

    def verify(self, password_hash: str, password: str) -> bool:
        try:
            return check_password_hash(password_hash, password or "")
        except (TypeError, ValueError):
            # e.g. placeholder or corrupted hashes
            return False
