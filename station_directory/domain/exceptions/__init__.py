"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain, application and storage code and
caught by the presentation layer, which maps each ``kind`` to an HTTP
status code. None of them is fatal to the process.
"""

from station_directory.domain.exceptions.base import DomainError
from station_directory.domain.exceptions.unauthorized import UnauthorizedError
from station_directory.domain.exceptions.validation_error import DomainValidationError
from station_directory.domain.exceptions.username_taken import UsernameTakenError
from station_directory.domain.exceptions.invalid_credentials import InvalidCredentialsError
from station_directory.domain.exceptions.entity_not_found import EntityNotFoundError
from station_directory.domain.exceptions.concurrent_modification import (
    ConcurrentModificationError,
)
from station_directory.domain.exceptions.storage_unavailable import StorageUnavailableError

__all__ = [
    "DomainError",
    "UnauthorizedError",
    "DomainValidationError",
    "UsernameTakenError",
    "InvalidCredentialsError",
    "EntityNotFoundError",
    "ConcurrentModificationError",
    "StorageUnavailableError",
]
