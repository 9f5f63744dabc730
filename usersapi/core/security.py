"""Password hashing for stored user credentials."""

import asyncio

import bcrypt

# Bcrypt cost (rounds) used when settings do not override it.
BCRYPT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of the secret.
BCRYPT_MAX_BYTES = 72


class HashingFailure(Exception):
    """Raised when a password cannot be hashed (missing input or bcrypt error)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def _hash_sync(pw_bytes: bytes, rounds: int) -> bytes:
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds))


async def hash_password(plain_password: str | None, rounds: int = BCRYPT_ROUNDS) -> str:
    """
    Hash a plain-text password for storage. Do not store plain passwords.

    The result is a modular-crypt string ($2b$<cost>$<salt+digest>) so the
    algorithm, cost and salt needed for verification travel with it. Hashing
    runs in a worker thread because the work factor makes it slow on purpose.
    """
    if plain_password is None:
        raise HashingFailure("No password supplied for hashing")
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        hashed = await asyncio.to_thread(_hash_sync, pw_bytes, rounds)
    except (ValueError, TypeError, MemoryError) as e:
        raise HashingFailure(f"Password hashing failed: {type(e).__name__}") from e
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False
