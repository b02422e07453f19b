"""
StorageUnavailableError - Backend unreachable, unreadable or corrupt.
Maps to: HTTP 503 Service Unavailable
"""

from station_directory.domain.exceptions.base import DomainError


class StorageUnavailableError(DomainError):
    kind = "StorageUnavailable"
    default_message = "Storage backend unavailable"
