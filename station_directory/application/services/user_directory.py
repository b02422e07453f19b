"""
UserDirectory - Account use cases on top of the UserRepository port.

Registration, authentication and the admin operations (listing, station
assignment, removal, password reset). Every result handed out is a
UserView; password hashes never leave this service.

Hashing is CPU-bound, so hasher calls run in a worker thread.
"""

import asyncio
import logging
from typing import Iterable, Mapping, Optional

from station_directory.application.dto.user import DirectoryStats, UserView
from station_directory.domain.entities.user import User
from station_directory.domain.exceptions import (
    DomainValidationError,
    EntityNotFoundError,
    InvalidCredentialsError,
    UnauthorizedError,
)
from station_directory.domain.ports.password_hasher import (
    MAX_PASSWORD_BYTES,
    PasswordHasher,
)
from station_directory.domain.ports.repositories.user_repository import UserRepository
from station_directory.domain.value_objects.auth_identity import AuthIdentity
from station_directory.domain.value_objects.user_id import UserId
from station_directory.domain.value_objects.username import Username

logger = logging.getLogger(__name__)


def parse_username(raw: Optional[str]) -> Username:
    """Username from user input; ValueError becomes DomainValidationError."""
    try:
        return Username((raw or "").strip())
    except ValueError as e:
        raise DomainValidationError(str(e)) from e


def parse_user_id(raw: int | str) -> UserId:
    try:
        return UserId(int(raw))
    except (TypeError, ValueError) as e:
        raise DomainValidationError(f"Invalid user id: {raw!r}") from e


def check_password(password: Optional[str]) -> str:
    if not password:
        raise DomainValidationError("Password is required")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise DomainValidationError(
            f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes"
        )
    return password


class UserDirectory:
    def __init__(self, user_repository: UserRepository, password_hasher: PasswordHasher):
        self._users = user_repository
        self._hasher = password_hasher

    # ==================== ACCOUNTS ====================

    async def register(
        self,
        username: str,
        phone: str,
        password: str,
        password_confirmation: Optional[str] = None,
        station_ids: Iterable[str] = (),
        station_titles: Optional[Mapping[str, str]] = None,
    ) -> UserView:
        """
        Create an account.

        Args:
            password_confirmation: When given, must equal ``password``

        Raises:
            DomainValidationError: Missing field, bad username, password mismatch
                or password longer than bcrypt accepts
            UsernameTakenError: If the username already exists
        """
        if not username or not (phone or "").strip() or not password:
            raise DomainValidationError("Username, phone and password are required")
        if password_confirmation is not None and password != password_confirmation:
            raise DomainValidationError("Passwords do not match")
        name = parse_username(username)
        check_password(password)

        password_hash = await asyncio.to_thread(self._hasher.hash, password)
        user = User.create(
            username=name,
            phone=phone.strip(),
            password_hash=password_hash,
            station_ids=station_ids,
            station_titles=station_titles,
        )
        stored = await self._users.put_user(user)
        logger.info(f"[UserDirectory] Registered {stored.username} (id={stored.id})")
        return UserView.from_entity(stored)

    async def authenticate(self, username: str, password: str) -> AuthIdentity:
        """
        Check credentials.

        Unknown usernames and wrong passwords fail the same way, and both
        pay for one bcrypt check.

        Raises:
            InvalidCredentialsError: On any mismatch
        """
        try:
            name = Username(username or "")
        except ValueError:
            name = None
        user = await self._users.get_user(name) if name else None

        password_hash = user.password_hash if user else None
        valid = await asyncio.to_thread(self._hasher.verify, password or "", password_hash)
        if user is None or not valid:
            logger.info("[UserDirectory] Failed login attempt")
            raise InvalidCredentialsError()
        return AuthIdentity(username=user.username)

    async def change_password(self, username: str, new_password: str) -> None:
        name = parse_username(username)
        check_password(new_password)
        user = await self._users.get_user(name)
        if user is None:
            raise EntityNotFoundError(f"User {name} not found")

        user.change_password_hash(await asyncio.to_thread(self._hasher.hash, new_password))
        await self._users.update_user(user)
        logger.info(f"[UserDirectory] Password changed for {name}")

    # ==================== LOOKUPS ====================

    async def profile(self, acting_user: AuthIdentity) -> UserView:
        user = await self._users.get_user(acting_user.username)
        if user is None:
            # Session outlived its account
            raise UnauthorizedError("User not found")
        return UserView.from_entity(user)

    async def others(self, acting_user: AuthIdentity) -> list[UserView]:
        """Every user except the acting one, ordered by username."""
        users = await self._users.list_users()
        return [
            UserView.from_entity(user)
            for user in sorted(users, key=lambda user: user.username)
            if user.username != acting_user.username
        ]

    async def list_all(self) -> list[UserView]:
        users = await self._users.list_users()
        return [UserView.from_entity(user) for user in sorted(users, key=lambda user: user.id)]

    async def stats(self) -> DirectoryStats:
        users = await self._users.list_users()
        assigned = [user for user in users if user.station_ids]
        distinct = {station_id for user in users for station_id in user.station_ids}
        return DirectoryStats(
            user_count=len(users),
            users_with_stations=len(assigned),
            station_assignments=sum(len(user.station_ids) for user in users),
            distinct_stations=len(distinct),
        )

    # ==================== ADMIN ====================

    async def assign_stations(
        self,
        user_id: int | str,
        station_ids: Iterable[str],
        station_titles: Optional[Mapping[str, str]] = None,
    ) -> UserView:
        """Replace a user's station assignments.

        Titles default to the ones already stored for stations that stay assigned.
        """
        user = await self._require(parse_user_id(user_id))
        user.assign_stations(station_ids, station_titles)
        updated = await self._users.update_user(user)
        logger.info(
            f"[UserDirectory] {updated.username} now has {len(updated.station_ids)} station(s)"
        )
        return UserView.from_entity(updated)

    async def remove(self, user_id: int | str) -> UserView:
        """
        Delete an account and prune its chat indices.

        Raises:
            EntityNotFoundError: If no user has this id
        """
        user = await self._require(parse_user_id(user_id))
        await self._users.delete_user(user.id)
        logger.info(f"[UserDirectory] Removed {user.username} (id={user.id})")
        return UserView.from_entity(user)

    async def _require(self, user_id: UserId) -> User:
        user = await self._users.get_user_by_id(user_id)
        if user is None:
            raise EntityNotFoundError(f"User {user_id.value} not found")
        return user
