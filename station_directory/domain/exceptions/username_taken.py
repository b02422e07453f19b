"""
UsernameTakenError - Account creation with a username that already exists.
Maps to: HTTP 409 Conflict
"""

from station_directory.domain.exceptions.base import DomainError


class UsernameTakenError(DomainError):
    kind = "UsernameTaken"
    default_message = "Username already exists"

    def __init__(self, username: str | None = None):
        message = f"Username {username!r} already exists" if username else None
        super().__init__(message)
