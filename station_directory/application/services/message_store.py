"""
MessageStore - Direct messages between two users.

Append-only: a message is never edited or deleted through this service.
History is symmetric, so history(A, B) and history(B, A) return the same
sequence, oldest first.
"""

import logging

from station_directory.domain.entities.message import Message
from station_directory.domain.exceptions import DomainValidationError, EntityNotFoundError
from station_directory.domain.ports.repositories.message_repository import MessageRepository
from station_directory.domain.value_objects.auth_identity import AuthIdentity
from station_directory.domain.value_objects.message_id import MessageId
from station_directory.application.services.user_directory import parse_username

logger = logging.getLogger(__name__)


class MessageStore:
    def __init__(self, message_repository: MessageRepository, max_length: int = 2000):
        self._messages = message_repository
        self._max_length = max_length

    async def send(self, acting_user: AuthIdentity, recipient: str, text: str) -> Message:
        """
        Append a message from the acting user.

        The recipient is not checked against the directory.

        Raises:
            DomainValidationError: Recipient missing or invalid, text blank
                or longer than the configured maximum
        """
        if not recipient:
            raise DomainValidationError("Recipient is required")
        to_user = parse_username(recipient)
        if not text or not text.strip():
            raise DomainValidationError("Message text cannot be empty")
        if len(text) > self._max_length:
            raise DomainValidationError(
                f"Message text cannot exceed {self._max_length} characters"
            )

        message = Message.create(sender=acting_user.username, recipient=to_user, text=text)
        await self._messages.append_message(message)
        logger.info(f"[MessageStore] {message.sender} -> {message.recipient} ({message.id})")
        return message

    async def history(self, acting_user: AuthIdentity, other_user: str) -> list[Message]:
        other = parse_username(other_user)
        return await self._messages.get_history(acting_user.username, other)

    async def get(self, acting_user: AuthIdentity, message_id: str) -> Message:
        """
        One message by id, only for its sender or recipient.

        Raises:
            EntityNotFoundError: Unknown id, or the acting user took no part
        """
        try:
            identifier = MessageId(message_id)
        except ValueError as e:
            raise EntityNotFoundError(f"Message {message_id} not found") from e

        message = await self._messages.get_message(identifier)
        if message is None or not message.involves(acting_user.username):
            raise EntityNotFoundError(f"Message {message_id} not found")
        return message
