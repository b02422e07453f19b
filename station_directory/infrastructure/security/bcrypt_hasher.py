"""
Bcrypt Password Hasher.

Hashes are stored as UTF-8 strings ("$2b$..."). bcrypt only looks at the
first 72 bytes of a password, so longer passwords are rejected upstream
by UserDirectory rather than silently truncated here.
"""

import logging
from typing import Optional

import bcrypt

from station_directory.domain.ports.password_hasher import (
    MAX_PASSWORD_BYTES,
    PasswordHasher,
)

logger = logging.getLogger(__name__)


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = 12):
        self._rounds = rounds
        # Compared against when there is no account, so the miss costs a full check
        self._dummy_hash = bcrypt.hashpw(b"station-directory", bcrypt.gensalt(rounds))

    def hash(self, password: str) -> str:
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(self._rounds))
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: Optional[str]) -> bool:
        candidate = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
        if not password_hash:
            bcrypt.checkpw(candidate, self._dummy_hash)
            return False
        try:
            return bcrypt.checkpw(candidate, password_hash.encode("utf-8"))
        except ValueError:
            logger.warning("[Hasher] Stored password hash is malformed")
            return False
