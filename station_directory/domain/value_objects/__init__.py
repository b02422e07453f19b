"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Is immutable (frozen dataclass)
- Validates itself on creation (raises ValueError)
- Pure Python (no framework dependencies)
"""

from station_directory.domain.value_objects.user_id import UserId
from station_directory.domain.value_objects.username import Username
from station_directory.domain.value_objects.message_id import MessageId
from station_directory.domain.value_objects.auth_identity import AuthIdentity

__all__ = [
    "UserId",
    "Username",
    "MessageId",
    "AuthIdentity",
]
