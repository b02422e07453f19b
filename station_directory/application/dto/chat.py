"""Chat DTOs for API responses."""

from datetime import datetime
from pydantic import BaseModel

from station_directory.domain.entities.message import Message


class MessageDTO(BaseModel):
    """DTO for message data returned to the chat client."""

    id: str
    from_user: str
    to_user: str
    text: str
    timestamp: datetime

    @classmethod
    def from_entity(cls, message: Message) -> "MessageDTO":
        return cls(
            id=message.id.value,
            from_user=message.sender.value,
            to_user=message.recipient.value,
            text=message.text,
            timestamp=message.created_at,
        )
