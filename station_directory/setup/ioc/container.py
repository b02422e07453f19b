"""
Dishka DI Container Setup.

- Registers the storage backend, session store, hasher and services
- Maps abstract ports to concrete adapters
- Manages lifecycle (APP = one per container, REQUEST = per HTTP request)

Config is read when a dependency is first built, not at import time, so
tests can patch Config before creating the app.

Flow:
  Container → provides → JsonFileBackend | RedisBackend → as → UserRepository
                                                          → as → MessageRepository
                     UserRepository + PasswordHasher → UserDirectory
"""

import logging
from datetime import timedelta
from typing import AsyncIterator, Awaitable, Callable

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide

from station_directory.application.services.auth_gate import AuthGate
from station_directory.application.services.message_store import MessageStore
from station_directory.application.services.user_directory import UserDirectory
from station_directory.config.settings import Config
from station_directory.domain.ports.password_hasher import PasswordHasher
from station_directory.domain.ports.persistence_backend import PersistenceBackend
from station_directory.domain.ports.repositories import (
    MessageRepository,
    UserRepository,
)
from station_directory.domain.ports.session_store import SessionStore
from station_directory.infrastructure.persistence import create_persistence_backend
from station_directory.infrastructure.security.bcrypt_hasher import BcryptPasswordHasher
from station_directory.infrastructure.sessions.in_memory_session_store import (
    InMemorySessionStore,
)

logger = logging.getLogger(__name__)

BackendFactory = Callable[[type[Config]], Awaitable[PersistenceBackend]]


class AppProvider(Provider):
    """
    Application dependency provider.

    Registers all dependencies and their implementations.

    Args:
        backend_factory: Builds the storage backend from Config
            (default: create_persistence_backend)
    """

    def __init__(
        self,
        backend_factory: BackendFactory = create_persistence_backend,
    ):
        super().__init__()
        self._backend_factory = backend_factory

    # ==================== STORAGE ====================

    @provide(scope=Scope.APP)
    async def get_persistence_backend(self) -> AsyncIterator[PersistenceBackend]:
        """
        Provide the configured backend (singleton, app-scoped).

        - async because the Redis backend pings the server on creation
        - closed when the container closes (app shutdown)
        """
        backend = await self._backend_factory(Config)
        logger.info(f"[IoC] Storage backend: {backend.name}")
        yield backend
        await backend.close()

    @provide(scope=Scope.APP)
    def get_user_repository(self, backend: PersistenceBackend) -> UserRepository:
        return backend

    @provide(scope=Scope.APP)
    def get_message_repository(self, backend: PersistenceBackend) -> MessageRepository:
        return backend

    # ==================== AUTH ====================

    @provide(scope=Scope.APP)
    def get_session_store(self) -> SessionStore:
        return InMemorySessionStore(
            idle_timeout=timedelta(seconds=Config.SESSION_IDLE_TIMEOUT)
        )

    @provide(scope=Scope.APP)
    def get_password_hasher(self) -> PasswordHasher:
        return BcryptPasswordHasher(rounds=Config.BCRYPT_ROUNDS)

    @provide(scope=Scope.APP)
    def get_auth_gate(self, session_store: SessionStore) -> AuthGate:
        return AuthGate(session_store)

    # ==================== SERVICES ====================

    @provide(scope=Scope.REQUEST)
    def get_user_directory(
        self, user_repository: UserRepository, password_hasher: PasswordHasher
    ) -> UserDirectory:
        return UserDirectory(user_repository, password_hasher)

    @provide(scope=Scope.REQUEST)
    def get_message_store(self, message_repository: MessageRepository) -> MessageStore:
        return MessageStore(message_repository, max_length=Config.MESSAGE_MAX_LENGTH)


def create_container(provider: Provider | None = None) -> AsyncContainer:
    """
    Create the DI container.

    Args:
        provider: Replacement for the default AppProvider()
    """
    return make_async_container(provider or AppProvider())
