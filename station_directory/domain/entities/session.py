"""
Session Entity - Server-side proof of authentication.

The token is opaque to clients; the identity it maps to is a username.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta

from station_directory.domain.value_objects.username import Username


@dataclass
class Session:
    token: str
    username: Username
    created_at: datetime
    last_seen_at: datetime

    def is_expired(self, now: datetime, idle_timeout: timedelta) -> bool:
        return now - self.last_seen_at > idle_timeout

    def touch(self, now: datetime) -> None:
        self.last_seen_at = now
