"""
Message Entity - A direct message between two users.

Immutable once created: there is no edit and no per-message delete.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone

from station_directory.domain.value_objects.message_id import MessageId
from station_directory.domain.value_objects.username import Username


@dataclass(frozen=True)
class Message:
    id: MessageId
    sender: Username
    recipient: Username
    text: str
    created_at: datetime

    def __post_init__(self):
        if not self.text or not self.text.strip():
            raise ValueError("Message text cannot be empty")

    @classmethod
    def create(cls, sender: Username, recipient: Username, text: str) -> Message:
        """Factory method to create a new Message with a generated ID and timestamp."""
        return cls(
            id=MessageId.generate(),
            sender=sender,
            recipient=recipient,
            text=text,
            created_at=datetime.now(timezone.utc),
        )

    def involves(self, username: Username) -> bool:
        return username in (self.sender, self.recipient)

    def is_between(self, user_a: Username, user_b: Username) -> bool:
        return {self.sender, self.recipient} == {user_a, user_b}
