"""Password Hashing — salted one-way bcrypt hashes, computed off the event loop.

Invariants:
    - Plaintext passwords are never stored or logged
    - hash/check run in a worker thread: bcrypt is CPU-bound and would block the loop
"""

import asyncio

import bcrypt

# bcrypt ignores input past 72 bytes; truncate explicitly so newer releases don't raise
_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_BYTES]


def _hash_sync(password: str, rounds: int) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds)).decode("utf-8")


def _check_sync(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(password), hashed.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


async def hash_password(password: str, rounds: int = 10) -> str:
    return await asyncio.to_thread(_hash_sync, password, rounds)


async def check_password(password: str, hashed: str) -> bool:
    return await asyncio.to_thread(_check_sync, password, hashed)
