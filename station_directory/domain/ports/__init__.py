"""
PORTS - Interfaces that infrastructure implements

A "port" defines WHAT the application needs without saying HOW:
- repositories/          → user and message persistence
- persistence_backend.py → one storage engine serving both repositories
- password_hasher.py     → one-way password hashing
- session_store.py       → server-side session table
"""

from station_directory.domain.ports.persistence_backend import PersistenceBackend
from station_directory.domain.ports.password_hasher import PasswordHasher
from station_directory.domain.ports.session_store import SessionStore

__all__ = [
    "PersistenceBackend",
    "PasswordHasher",
    "SessionStore",
]
