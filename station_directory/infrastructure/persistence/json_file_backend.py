"""
JSON File Backend - Whole-file persistence for users and messages.

Layout (under Config.DATA_DIR):
    users.json     → JSON array of user records
    messages.json  → JSON array of message records

Every mutation reads the whole collection, changes it in memory and
rewrites the whole file. Reads never hold a handle open.

Concurrency:
- Inside one process an asyncio.Lock serialises every read-modify-write,
  and the file I/O itself runs in a worker thread so the event loop is
  not blocked while a large collection is rewritten.
- Across processes two writers can still race. Each load remembers a
  SHA-256 fingerprint of the bytes it read; before writing, the file is
  fingerprinted again and a mismatch raises ConcurrentModificationError
  instead of overwriting the other writer's change. A short window
  between that check and the replace remains.
- ``conflict_check=False`` gives the plain last-writer-wins behaviour.

Cascading delete:
- There are no chat indices in this layout. Deleting a user marks every
  message record that involves the username as ``archived``;
  ``get_history`` skips archived records while ``get_message`` still
  returns them. The message content is never changed.
- Messages are archived before the user record is removed, so a delete
  that fails halfway leaves the user in place and can be retried.
"""

import asyncio
import hashlib
import json
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from station_directory.domain.entities.message import Message
from station_directory.domain.entities.user import User
from station_directory.domain.exceptions import (
    ConcurrentModificationError,
    EntityNotFoundError,
    StorageUnavailableError,
    UsernameTakenError,
)
from station_directory.domain.ports.persistence_backend import PersistenceBackend
from station_directory.domain.value_objects.message_id import MessageId
from station_directory.domain.value_objects.user_id import UserId
from station_directory.domain.value_objects.username import Username
from station_directory.infrastructure.persistence.records import (
    message_from_record,
    message_to_record,
    sort_chronologically,
    user_from_record,
    user_to_record,
)

logger = logging.getLogger(__name__)

ARCHIVED_FIELD = "archived"

T = TypeVar("T")


class JsonFileBackend(PersistenceBackend):
    """
    PersistenceBackend over two JSON files.

    Each public method takes the lock and runs its synchronous
    counterpart in a worker thread.
    """

    name = "file"

    def __init__(
        self,
        data_dir: str | Path,
        users_file: str = "users.json",
        messages_file: str = "messages.json",
        conflict_check: bool = True,
    ):
        self._data_dir = Path(data_dir)
        self._users_path = self._data_dir / users_file
        self._messages_path = self._data_dir / messages_file
        self._conflict_check = conflict_check
        self._lock = asyncio.Lock()
        self._ensure_files()

    @property
    def users_path(self) -> Path:
        return self._users_path

    @property
    def messages_path(self) -> Path:
        return self._messages_path

    # ==================== FILE HELPERS ====================

    def _ensure_files(self) -> None:
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            for path in (self._users_path, self._messages_path):
                if not path.exists():
                    path.write_text("[]", encoding="utf-8")
                    logger.info(f"[FileBackend] Created {path}")
        except OSError as e:
            raise StorageUnavailableError(
                f"Cannot initialise data directory {self._data_dir}: {e}"
            ) from e

    @staticmethod
    def _fingerprint(raw: bytes) -> str:
        return hashlib.sha256(raw).hexdigest()

    def _read_bytes(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return b"[]"
        except OSError as e:
            raise StorageUnavailableError(f"Cannot read {path.name}: {e}") from e

    def _load(self, path: Path) -> tuple[list[dict[str, Any]], str]:
        """Read a whole collection; returns (records, fingerprint)."""
        raw = self._read_bytes(path)
        try:
            records = json.loads(raw.decode("utf-8") or "[]")
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageUnavailableError(f"{path.name} is not valid JSON: {e}") from e
        if not isinstance(records, list):
            raise StorageUnavailableError(f"{path.name} must hold a JSON array")
        return records, self._fingerprint(raw)

    def _store(self, path: Path, records: list[dict[str, Any]], fingerprint: str) -> None:
        """Rewrite a whole collection, refusing if the file changed since it was loaded."""
        if self._conflict_check:
            current = self._fingerprint(self._read_bytes(path))
            if current != fingerprint:
                logger.warning(f"[FileBackend] {path.name} changed since it was read")
                raise ConcurrentModificationError(
                    f"{path.name} was modified by another writer, retry the operation"
                )

        payload = json.dumps(records, indent=2, ensure_ascii=False)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageUnavailableError(f"Cannot write {path.name}: {e}") from e

    async def _locked(self, operation: Callable[..., T], *args: Any) -> T:
        """Run one whole read-modify-write off the event loop, one at a time."""
        async with self._lock:
            return await asyncio.to_thread(operation, *args)

    # ==================== USERS ====================

    async def get_user(self, username: Username) -> Optional[User]:
        return await self._locked(self._find_user, "username", username.value)

    async def get_user_by_id(self, user_id: UserId) -> Optional[User]:
        return await self._locked(self._find_user, "id", user_id.value)

    def _find_user(self, field: str, value: Any) -> Optional[User]:
        records, _ = self._load(self._users_path)
        for record in records:
            if record.get(field) == value:
                return user_from_record(record)
        return None

    async def put_user(self, user: User) -> User:
        return await self._locked(self._put_user, user)

    def _put_user(self, user: User) -> User:
        records, fingerprint = self._load(self._users_path)
        if any(record.get("username") == user.username.value for record in records):
            raise UsernameTakenError(user.username.value)

        next_id = max((int(record["id"]) for record in records), default=0) + 1
        stored = replace(user, id=UserId(next_id))
        records.append(user_to_record(stored))
        self._store(self._users_path, records, fingerprint)

        logger.info(f"[FileBackend] Created user {stored.username} (id={next_id})")
        return stored

    async def update_user(self, user: User) -> User:
        return await self._locked(self._update_user, user)

    def _update_user(self, user: User) -> User:
        records, fingerprint = self._load(self._users_path)
        for index, record in enumerate(records):
            if record.get("username") == user.username.value:
                updated = replace(user, id=UserId(int(record["id"])))
                # created_at and id are fixed at creation
                new_record = user_to_record(updated)
                new_record["created_at"] = record["created_at"]
                records[index] = new_record
                self._store(self._users_path, records, fingerprint)
                return user_from_record(new_record)
        raise EntityNotFoundError(f"User {user.username} not found")

    async def list_users(self) -> list[User]:
        return await self._locked(self._list_users)

    def _list_users(self) -> list[User]:
        records, _ = self._load(self._users_path)
        return [user_from_record(record) for record in records]

    async def delete_user(self, user_id: UserId) -> None:
        await self._locked(self._delete_user, user_id)

    def _delete_user(self, user_id: UserId) -> None:
        deleted = self._find_user("id", user_id.value)
        if deleted is None:
            raise EntityNotFoundError(f"User {user_id.value} not found")

        # The user record goes last so a failed archive leaves a retryable delete
        archived = self._archive_conversations(deleted.username)

        records, fingerprint = self._load(self._users_path)
        remaining = [record for record in records if record.get("id") != user_id.value]
        self._store(self._users_path, remaining, fingerprint)

        logger.info(
            f"[FileBackend] Deleted user {deleted.username} (id={user_id.value}), "
            f"archived {archived} message(s)"
        )

    def _archive_conversations(self, username: Username) -> int:
        records, fingerprint = self._load(self._messages_path)
        count = 0
        for record in records:
            if record.get(ARCHIVED_FIELD):
                continue
            if username.value in (record.get("sender"), record.get("recipient")):
                record[ARCHIVED_FIELD] = True
                count += 1
        if count:
            self._store(self._messages_path, records, fingerprint)
        return count

    # ==================== MESSAGES ====================

    async def append_message(self, message: Message) -> Message:
        return await self._locked(self._append_message, message)

    def _append_message(self, message: Message) -> Message:
        records, fingerprint = self._load(self._messages_path)
        records.append(message_to_record(message))
        self._store(self._messages_path, records, fingerprint)
        logger.debug(f"[FileBackend] Appended message {message.id}")
        return message

    async def get_message(self, message_id: MessageId) -> Optional[Message]:
        return await self._locked(self._get_message, message_id)

    def _get_message(self, message_id: MessageId) -> Optional[Message]:
        records, _ = self._load(self._messages_path)
        for record in records:
            if record.get("id") == message_id.value:
                return message_from_record(record)
        return None

    async def get_history(self, user_a: Username, user_b: Username) -> list[Message]:
        return await self._locked(self._get_history, user_a, user_b)

    def _get_history(self, user_a: Username, user_b: Username) -> list[Message]:
        records, _ = self._load(self._messages_path)
        pair = {user_a.value, user_b.value}
        # Linear scan: this layout has no per-pair index
        messages = [
            message_from_record(record)
            for record in records
            if not record.get(ARCHIVED_FIELD)
            and {record.get("sender"), record.get("recipient")} == pair
        ]
        return sort_chronologically(messages)
