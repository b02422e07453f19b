"""
AuthGate - Resolves a session token to the acting user.

Every authenticated operation starts here. The gate holds no state of its
own; sessions live in the injected SessionStore.
"""

import logging
from typing import Optional

from station_directory.domain.exceptions import UnauthorizedError
from station_directory.domain.ports.session_store import SessionStore
from station_directory.domain.value_objects.auth_identity import AuthIdentity
from station_directory.domain.value_objects.username import Username

logger = logging.getLogger(__name__)


class AuthGate:
    def __init__(self, session_store: SessionStore):
        self._sessions = session_store

    async def resolve(self, token: Optional[str]) -> AuthIdentity:
        """
        Raises:
            UnauthorizedError: Missing, unknown or idle-expired token
        """
        if not token:
            raise UnauthorizedError("Authentication required")
        session = await self._sessions.get(token)
        if session is None:
            raise UnauthorizedError("Session is invalid or has expired")
        return AuthIdentity(username=session.username, session_token=session.token)

    async def open_session(self, identity: AuthIdentity) -> AuthIdentity:
        session = await self._sessions.create(identity.username)
        logger.info(f"[AuthGate] Session opened for {identity.username}")
        return AuthIdentity(username=session.username, session_token=session.token)

    async def close_session(self, token: Optional[str]) -> bool:
        if not token:
            return False
        return await self._sessions.destroy(token)

    async def close_all_sessions(self, username: Username) -> int:
        return await self._sessions.destroy_all_for(username)
