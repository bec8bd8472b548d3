"""Password hashing for account credentials."""

from __future__ import annotations

import bcrypt

# bcrypt only looks at the first 72 bytes; recent releases reject longer input.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash plain text password using bcrypt."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password longer than {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a stored bcrypt hash."""
    encoded = plain_password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, hashed_password.encode("utf-8"))
    except ValueError:
        return False


__all__ = ["MAX_PASSWORD_BYTES", "hash_password", "verify_password"]
