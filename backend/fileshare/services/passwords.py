"""bcrypt password hashing.

bcrypt is CPU bound, so both calls run in a worker thread to keep the event
loop free for other requests.
"""
import asyncio
import logging
from typing import Optional

import bcrypt

from fileshare.config import settings

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def normalize_password(value: Optional[str]) -> Optional[str]:
    """Absent and empty passwords both mean "not protected"."""
    if not value:
        return None
    return value


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:MAX_PASSWORD_BYTES]


def _hash(plain: str, rounds: int) -> str:
    return bcrypt.hashpw(_encode(plain), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def _check(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed, treating as mismatch")
        return False


async def hash_password(plain: str) -> str:
    """Salted one-way hash of `plain` at the configured work factor.

    Passwords longer than 72 bytes are cut to 72 bytes, as bcrypt does.
    """
    return await asyncio.to_thread(_hash, plain, settings.BCRYPT_ROUNDS)


async def verify_password(plain: str, hashed: str) -> bool:
    return await asyncio.to_thread(_check, plain, hashed)
