"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from station_directory.domain.entities.user import User
from station_directory.domain.entities.message import Message
from station_directory.domain.entities.session import Session

__all__ = [
    "User",
    "Message",
    "Session",
]
