"""
PersistenceBackend Port - One storage engine behind both repositories.

The cascading part of ``delete_user`` needs to reach message indices,
so a single backend object serves as both the UserRepository and the
MessageRepository. Application services still only see the narrow port
they own.

Implementations:
- JsonFileBackend (users.json + messages.json, full rewrite per mutation)
- RedisBackend (one key per entity plus index sets/lists)
"""

from station_directory.domain.ports.repositories.message_repository import MessageRepository
from station_directory.domain.ports.repositories.user_repository import UserRepository


class PersistenceBackend(UserRepository, MessageRepository):
    name: str = "backend"

    async def close(self) -> None:
        """Release connections or handles. Default: nothing to release."""
        return None
