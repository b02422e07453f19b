"""
Username Value Object - Case-sensitive account name.

Usernames end up inside storage keys ("user:{username}", "chat:{a}:{b}"),
so whitespace and the ":" separator are rejected.
"""

import re
from dataclasses import dataclass

USERNAME_MAX_LENGTH = 64
_USERNAME_RE = re.compile(r"^[^\s:]+$")


@dataclass(frozen=True, order=True)
class Username:
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value:
            raise ValueError("Username cannot be empty")
        if len(self.value) > USERNAME_MAX_LENGTH:
            raise ValueError(
                f"Username cannot exceed {USERNAME_MAX_LENGTH} characters"
            )
        if not _USERNAME_RE.match(self.value):
            raise ValueError(
                f"Invalid username: {self.value!r} (no spaces or ':' allowed)"
            )

    def __str__(self) -> str:
        return self.value
