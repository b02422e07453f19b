"""
Redis Backend - Key/value persistence for users and messages.

Redis Data Structures (all keys carry the configured prefix):
- "user:{username}"      STRING  JSON user record
- "users"                SET     every live username
- "user_ids"             HASH    user id → username
- "counter:user_id"      STRING  INCR counter for user ids
- "message:{id}"         STRING  JSON message record
- "chat:{a}:{b}"         LIST    message ids of one chat pair, append order
                                 (a <= b so both directions share the list)
- "partners:{username}"  SET     usernames this user has a chat list with

Guarantees:
- Username uniqueness is claimed with SADD on "users", which is atomic:
  of two concurrent registrations exactly one gets 1 back.
- get_history reads one list and one MGET, no scan over all messages.

Not guaranteed:
- Multi-key writes are not transactional. A crash in the middle of
  put_user, append_message or the delete cascade can leave partial
  index state behind. The delete cascade runs before the user keys go,
  so a delete that fails partway can simply be retried.

Error Handling:
- Every redis.RedisError becomes StorageUnavailableError.
"""

import json
import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from station_directory.domain.entities.message import Message
from station_directory.domain.entities.user import User
from station_directory.domain.exceptions import (
    EntityNotFoundError,
    StorageUnavailableError,
    UsernameTakenError,
)
from station_directory.domain.ports.persistence_backend import PersistenceBackend
from station_directory.domain.value_objects.message_id import MessageId
from station_directory.domain.value_objects.user_id import UserId
from station_directory.domain.value_objects.username import Username
from station_directory.infrastructure.cache.redis_client import close_redis_client
from station_directory.infrastructure.persistence.records import (
    message_from_record,
    message_to_record,
    sort_chronologically,
    user_from_record,
    user_to_record,
)

logger = logging.getLogger(__name__)


class RedisBackend(PersistenceBackend):
    """
    PersistenceBackend over Redis.

    The client must be created with decode_responses=True.
    """

    name = "redis"

    def __init__(self, redis: Redis, key_prefix: str = "stationdir:"):
        self._redis = redis
        self._prefix = key_prefix

    # ==================== KEYS ====================

    def _key(self, *parts: str) -> str:
        return self._prefix + ":".join(parts)

    def _user_key(self, username: Username) -> str:
        return self._key("user", username.value)

    def _message_key(self, message_id: MessageId | str) -> str:
        return self._key("message", str(message_id))

    def _partners_key(self, username: Username | str) -> str:
        return self._key("partners", str(username))

    def _chat_key(self, user_a: Username | str, user_b: Username | str) -> str:
        first, second = sorted((str(user_a), str(user_b)))
        return self._key("chat", first, second)

    @contextmanager
    def _storage_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except RedisError as e:
            logger.error(f"[RedisBackend] {operation} failed: {e}")
            raise StorageUnavailableError(f"Redis error during {operation}: {e}") from e

    # ==================== USERS ====================

    async def get_user(self, username: Username) -> Optional[User]:
        with self._storage_errors("get_user"):
            raw = await self._redis.get(self._user_key(username))
        return user_from_record(json.loads(raw)) if raw else None

    async def get_user_by_id(self, user_id: UserId) -> Optional[User]:
        with self._storage_errors("get_user_by_id"):
            username = await self._redis.hget(self._key("user_ids"), str(user_id.value))
        if not username:
            return None
        return await self.get_user(Username(username))

    async def put_user(self, user: User) -> User:
        username = user.username.value
        with self._storage_errors("put_user"):
            added = await self._redis.sadd(self._key("users"), username)
            if not added:
                raise UsernameTakenError(username)
            try:
                next_id = await self._redis.incr(self._key("counter", "user_id"))
                stored = replace(user, id=UserId(int(next_id)))
                pipe = self._redis.pipeline(transaction=False)
                pipe.set(self._user_key(user.username), json.dumps(user_to_record(stored)))
                pipe.hset(self._key("user_ids"), str(next_id), username)
                await pipe.execute()
            except RedisError:
                # Give the username back so the account can be retried
                await self._redis.srem(self._key("users"), username)
                raise

        logger.info(f"[RedisBackend] Created user {username} (id={next_id})")
        return stored

    async def update_user(self, user: User) -> User:
        key = self._user_key(user.username)
        with self._storage_errors("update_user"):
            raw = await self._redis.get(key)
            if not raw:
                raise EntityNotFoundError(f"User {user.username} not found")
            current = json.loads(raw)
            record = user_to_record(user)
            record["id"] = current["id"]
            record["created_at"] = current["created_at"]
            await self._redis.set(key, json.dumps(record))
        return user_from_record(record)

    async def list_users(self) -> list[User]:
        with self._storage_errors("list_users"):
            usernames = await self._redis.smembers(self._key("users"))
            if not usernames:
                return []
            raws = await self._redis.mget(
                [self._key("user", username) for username in usernames]
            )
        # A username whose record is missing is a half-written account
        return [user_from_record(json.loads(raw)) for raw in raws if raw]

    async def delete_user(self, user_id: UserId) -> None:
        with self._storage_errors("delete_user"):
            username = await self._redis.hget(self._key("user_ids"), str(user_id.value))
            if not username:
                raise EntityNotFoundError(f"User {user_id.value} not found")

            # The user keys go last so a failed prune leaves a retryable delete
            pruned = await self._prune_chat_indices(username)

            pipe = self._redis.pipeline(transaction=False)
            pipe.delete(self._key("user", username))
            pipe.srem(self._key("users"), username)
            pipe.hdel(self._key("user_ids"), str(user_id.value))
            await pipe.execute()

        logger.info(
            f"[RedisBackend] Deleted user {username} (id={user_id.value}), "
            f"pruned {pruned} chat index(es)"
        )

    async def _prune_chat_indices(self, username: str) -> int:
        """Drop every chat list involving the user. Message records stay."""
        partners = await self._redis.smembers(self._partners_key(username))
        for partner in partners:
            pipe = self._redis.pipeline(transaction=False)
            pipe.delete(self._chat_key(username, partner))
            pipe.srem(self._partners_key(partner), username)
            await pipe.execute()
        await self._redis.delete(self._partners_key(username))
        return len(partners)

    # ==================== MESSAGES ====================

    async def append_message(self, message: Message) -> Message:
        sender, recipient = message.sender.value, message.recipient.value
        with self._storage_errors("append_message"):
            pipe = self._redis.pipeline(transaction=False)
            pipe.set(self._message_key(message.id), json.dumps(message_to_record(message)))
            pipe.rpush(self._chat_key(sender, recipient), message.id.value)
            pipe.sadd(self._partners_key(sender), recipient)
            pipe.sadd(self._partners_key(recipient), sender)
            await pipe.execute()
        logger.debug(f"[RedisBackend] Appended message {message.id}")
        return message

    async def get_message(self, message_id: MessageId) -> Optional[Message]:
        with self._storage_errors("get_message"):
            raw = await self._redis.get(self._message_key(message_id))
        return message_from_record(json.loads(raw)) if raw else None

    async def get_history(self, user_a: Username, user_b: Username) -> list[Message]:
        with self._storage_errors("get_history"):
            message_ids = await self._redis.lrange(self._chat_key(user_a, user_b), 0, -1)
            if not message_ids:
                return []
            raws = await self._redis.mget(
                [self._message_key(message_id) for message_id in message_ids]
            )
        messages = [message_from_record(json.loads(raw)) for raw in raws if raw]
        return sort_chronologically(messages)

    async def close(self) -> None:
        await close_redis_client(self._redis)
