"""
InvalidCredentialsError - Login failed.

Deliberately identical for "no such user" and "wrong password".
Maps to: HTTP 401 Unauthorized
"""

from station_directory.domain.exceptions.base import DomainError


class InvalidCredentialsError(DomainError):
    kind = "InvalidCredentials"
    default_message = "Invalid username or password"

    def __init__(self):
        super().__init__(self.default_message)
