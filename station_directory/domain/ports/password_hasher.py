"""
Password Hasher Port - One-way hash and verify.
"""

from abc import ABC, abstractmethod
from typing import Optional

# bcrypt only reads this many bytes of a password
MAX_PASSWORD_BYTES = 72


class PasswordHasher(ABC):
    @abstractmethod
    def hash(self, password: str) -> str: ...

    @abstractmethod
    def verify(self, password: str, password_hash: Optional[str]) -> bool:
        """Check a password against a stored hash.

        ``password_hash=None`` means there is no account: implementations
        still spend the time of a real check and return False, so callers
        cannot tell a missing user from a wrong password by timing.
        """
