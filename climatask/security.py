"""
Password hashing helpers (bcrypt).
"""

from __future__ import annotations

import bcrypt

DEFAULT_ROUNDS = 10


def hash_password(plain_password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Salted one-way hash; every call yields a different string."""
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise ValueError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    # checkpw compares in constant time.
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False
