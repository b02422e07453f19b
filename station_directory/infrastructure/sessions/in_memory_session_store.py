"""
In-Memory Session Store - Process-scoped session table.

Sessions live in a dict keyed by token and are lost on restart, which
logs everyone out. An expired session is dropped when it is looked up,
and every new session sweeps out the expired ones that were never
presented again.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from station_directory.domain.entities.session import Session
from station_directory.domain.ports.session_store import SessionStore
from station_directory.domain.value_objects.username import Username

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemorySessionStore(SessionStore):
    def __init__(
        self,
        idle_timeout: timedelta,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Args:
            idle_timeout: Inactivity after which a session stops resolving
            clock: Source of "now", replaceable in tests
        """
        self._sessions: dict[str, Session] = {}
        self._idle_timeout = idle_timeout
        self._clock = clock

    def __len__(self) -> int:
        return len(self._sessions)

    async def create(self, username: Username) -> Session:
        now = self._clock()
        self._sweep_expired(now)
        session = Session(
            token=secrets.token_urlsafe(TOKEN_BYTES),
            username=username,
            created_at=now,
            last_seen_at=now,
        )
        self._sessions[session.token] = session
        logger.debug(f"[Sessions] Opened session for {username}")
        return session

    def _sweep_expired(self, now: datetime) -> None:
        expired = [
            token
            for token, session in self._sessions.items()
            if session.is_expired(now, self._idle_timeout)
        ]
        for token in expired:
            del self._sessions[token]
        if expired:
            logger.debug(f"[Sessions] Swept {len(expired)} expired session(s)")

    async def get(self, token: str) -> Optional[Session]:
        session = self._sessions.get(token)
        if session is None:
            return None

        now = self._clock()
        if session.is_expired(now, self._idle_timeout):
            del self._sessions[token]
            logger.debug(f"[Sessions] Session for {session.username} expired")
            return None

        session.touch(now)
        return session

    async def destroy(self, token: str) -> bool:
        session = self._sessions.pop(token, None)
        if session is not None:
            logger.debug(f"[Sessions] Closed session for {session.username}")
        return session is not None

    async def destroy_all_for(self, username: Username) -> int:
        tokens = [
            token
            for token, session in self._sessions.items()
            if session.username == username
        ]
        for token in tokens:
            del self._sessions[token]
        if tokens:
            logger.info(f"[Sessions] Closed {len(tokens)} session(s) for {username}")
        return len(tokens)
