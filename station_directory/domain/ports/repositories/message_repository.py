"""
Message Repository Port - Interface for message persistence.
Implementations: station_directory/infrastructure/persistence/
"""

from abc import ABC, abstractmethod
from typing import Optional

from station_directory.domain.entities.message import Message
from station_directory.domain.value_objects.message_id import MessageId
from station_directory.domain.value_objects.username import Username


class MessageRepository(ABC):
    @abstractmethod
    async def append_message(self, message: Message) -> Message:
        """Append a message; no check that sender or recipient exist."""

    @abstractmethod
    async def get_message(self, message_id: MessageId) -> Optional[Message]: ...

    @abstractmethod
    async def get_history(self, user_a: Username, user_b: Username) -> list[Message]:
        """Messages between the two users in either direction, oldest first."""
