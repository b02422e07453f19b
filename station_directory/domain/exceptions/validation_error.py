"""
DomainValidationError - Raised when input breaks a business rule.
Maps to: HTTP 400 Bad Request
"""

from station_directory.domain.exceptions.base import DomainError


class DomainValidationError(DomainError):
    """Exception raised for malformed or missing input."""

    kind = "ValidationError"
    default_message = "Invalid input"
