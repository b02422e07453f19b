"""
UnauthorizedError - No session, unknown session or expired session.
Maps to: HTTP 401 Unauthorized
"""

from station_directory.domain.exceptions.base import DomainError


class UnauthorizedError(DomainError):
    kind = "Unauthorized"
    default_message = "Not authenticated"
