"""
AuthIdentity Value Object - The acting user resolved from a session.

Produced by AuthGate (from a session token) or by a successful
UserDirectory.authenticate call (before a session exists).
"""

from dataclasses import dataclass
from typing import Optional

from station_directory.domain.value_objects.username import Username


@dataclass(frozen=True)
class AuthIdentity:
    username: Username
    session_token: Optional[str] = None
