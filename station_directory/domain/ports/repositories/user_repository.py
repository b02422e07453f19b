"""
User Repository Port - Interface for user persistence.
Implementations: station_directory/infrastructure/persistence/
"""

from abc import ABC, abstractmethod
from typing import Optional

from station_directory.domain.entities.user import User
from station_directory.domain.value_objects.user_id import UserId
from station_directory.domain.value_objects.username import Username


class UserRepository(ABC):
    @abstractmethod
    async def get_user(self, username: Username) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_id(self, user_id: UserId) -> Optional[User]: ...

    @abstractmethod
    async def put_user(self, user: User) -> User:
        """Create a user and assign its id.

        Raises:
            UsernameTakenError: If the username is already registered.
        """

    @abstractmethod
    async def update_user(self, user: User) -> User:
        """Overwrite an existing user's fields, without the uniqueness check.

        Raises:
            EntityNotFoundError: If no user has this username.
        """

    @abstractmethod
    async def list_users(self) -> list[User]:
        """All registered users, in no particular order."""

    @abstractmethod
    async def delete_user(self, user_id: UserId) -> None:
        """Remove a user and prune its chat indices.

        Messages themselves are kept and stay readable by id, but no chat
        pair involving the removed username is reachable through history.

        Raises:
            EntityNotFoundError: If no user has this id.
        """
