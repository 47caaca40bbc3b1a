"""Password hashing for stored credentials."""

from __future__ import annotations

import re
import secrets

import bcrypt

from photo_accounts.core.config import settings
from photo_accounts.interfaces.crypto import ICryptoRepository


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password using bcrypt."""
    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    try:
        password_bytes = password.encode("utf-8")
        hashed_bytes = hashed_password.encode("utf-8")
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except ValueError:
        return False


def generate_random_password(num_bytes: int | None = None) -> str:
    """Generate a random password made of word characters only."""
    raw = secrets.token_urlsafe(num_bytes or settings.GENERATED_PASSWORD_BYTES)
    return re.sub(r"\W|_", "", raw)


class BcryptCryptoRepository(ICryptoRepository):
    """Credential hasher backed by bcrypt."""

    def __init__(self, rounds: int | None = None):
        self._rounds = rounds

    async def hash_password(self, password: str) -> str:
        return hash_password(password, rounds=self._rounds)

    async def compare_password(self, password: str, hashed_password: str) -> bool:
        return verify_password(password, hashed_password)
