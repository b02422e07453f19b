"""
Session Store Port - Server-side session table.

Owned by the HTTP layer (creates and destroys sessions); AuthGate only
looks sessions up.
"""

from abc import ABC, abstractmethod
from typing import Optional

from station_directory.domain.entities.session import Session
from station_directory.domain.value_objects.username import Username


class SessionStore(ABC):
    @abstractmethod
    async def create(self, username: Username) -> Session: ...

    @abstractmethod
    async def get(self, token: str) -> Optional[Session]:
        """Live session for the token, refreshing its idle timer; None if absent or expired."""

    @abstractmethod
    async def destroy(self, token: str) -> bool: ...

    @abstractmethod
    async def destroy_all_for(self, username: Username) -> int:
        """Destroy every session of a user; returns how many were removed."""
