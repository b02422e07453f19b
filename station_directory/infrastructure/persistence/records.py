"""
Record mapping shared by both storage backends.

Domain entity → plain dict (JSON-ready) and back. Field names follow the
users.json layout (``station_ids``, ``station_titles``,
``created_at`` as ISO-8601).
"""

from datetime import datetime
from typing import Any

from station_directory.domain.entities.message import Message
from station_directory.domain.entities.user import User
from station_directory.domain.value_objects.message_id import MessageId
from station_directory.domain.value_objects.user_id import UserId
from station_directory.domain.value_objects.username import Username


def user_to_record(user: User) -> dict[str, Any]:
    return {
        "id": user.id.value if user.id else None,
        "username": user.username.value,
        "phone": user.phone,
        "password_hash": user.password_hash,
        "station_ids": list(user.station_ids),
        "station_titles": dict(user.station_titles),
        "created_at": user.created_at.isoformat(),
    }


def user_from_record(record: dict[str, Any]) -> User:
    return User(
        id=UserId(int(record["id"])),
        username=Username(record["username"]),
        phone=record.get("phone") or "",
        password_hash=record["password_hash"],
        created_at=datetime.fromisoformat(record["created_at"]),
        # Older records may miss these
        station_ids=list(record.get("station_ids") or []),
        station_titles=dict(record.get("station_titles") or {}),
    )


def message_to_record(message: Message) -> dict[str, Any]:
    return {
        "id": message.id.value,
        "sender": message.sender.value,
        "recipient": message.recipient.value,
        "text": message.text,
        "created_at": message.created_at.isoformat(),
    }


def message_from_record(record: dict[str, Any]) -> Message:
    return Message(
        id=MessageId(record["id"]),
        sender=Username(record["sender"]),
        recipient=Username(record["recipient"]),
        text=record["text"],
        created_at=datetime.fromisoformat(record["created_at"]),
    )


def sort_chronologically(messages: list[Message]) -> list[Message]:
    """Oldest first; equal timestamps keep their stored order (sort is stable)."""
    return sorted(messages, key=lambda message: message.created_at)
