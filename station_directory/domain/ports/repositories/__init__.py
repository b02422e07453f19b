"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines methods the application needs
- Does NOT specify implementation (JSON file, Redis, ...)
"""

from station_directory.domain.ports.repositories.user_repository import UserRepository
from station_directory.domain.ports.repositories.message_repository import MessageRepository

__all__ = [
    "UserRepository",
    "MessageRepository",
]
