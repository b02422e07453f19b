from datetime import timedelta

import fakeredis
import pytest
from fastapi.testclient import TestClient

from station_directory.application.services.auth_gate import AuthGate
from station_directory.application.services.message_store import MessageStore
from station_directory.application.services.user_directory import UserDirectory
from station_directory.config.settings import Config
from station_directory.fastapi_app import create_fastapi_app
from station_directory.infrastructure.persistence import JsonFileBackend, RedisBackend
from station_directory.infrastructure.security.bcrypt_hasher import BcryptPasswordHasher
from station_directory.infrastructure.sessions.in_memory_session_store import (
    InMemorySessionStore,
)
from station_directory.setup.ioc.container import AppProvider

TEST_KEY_PREFIX = "test:"


@pytest.fixture(autouse=True)
def test_config(tmp_path, monkeypatch):
    """Point every test at a fresh data directory with cheap bcrypt."""
    monkeypatch.setattr(Config, "STORAGE_BACKEND", "file")
    monkeypatch.setattr(Config, "DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setattr(Config, "FILE_CONFLICT_CHECK", True)
    monkeypatch.setattr(Config, "BCRYPT_ROUNDS", 4)
    monkeypatch.setattr(Config, "SESSION_COOKIE_SECURE", False)
    return Config


@pytest.fixture()
def fake_redis():
    return fakeredis.aioredis.FakeRedis(
        server=fakeredis.FakeServer(), decode_responses=True
    )


@pytest.fixture(params=["file", "redis"])
async def backend(request, tmp_path, fake_redis):
    """Both storage engines; contract tests run once per engine."""
    if request.param == "file":
        store = JsonFileBackend(tmp_path / "store")
    else:
        store = RedisBackend(fake_redis, key_prefix=TEST_KEY_PREFIX)
    yield store
    await store.close()


@pytest.fixture()
def file_backend(tmp_path):
    return JsonFileBackend(tmp_path / "store")


@pytest.fixture()
async def redis_backend(fake_redis):
    store = RedisBackend(fake_redis, key_prefix=TEST_KEY_PREFIX)
    yield store
    await store.close()


@pytest.fixture(scope="session")
def hasher():
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture()
def directory(backend, hasher):
    return UserDirectory(backend, hasher)


@pytest.fixture()
def message_store(backend):
    return MessageStore(backend, max_length=200)


@pytest.fixture()
def session_store():
    return InMemorySessionStore(idle_timeout=timedelta(hours=1))


@pytest.fixture()
def auth_gate(session_store):
    return AuthGate(session_store)


@pytest.fixture(params=["file", "redis"])
def app(request, fake_redis):
    """Create a new FastAPI app instance for each test, once per storage engine."""
    if request.param == "file":
        return create_fastapi_app()

    async def redis_backend_factory(config):
        return RedisBackend(fake_redis, key_prefix=TEST_KEY_PREFIX)

    return create_fastapi_app(AppProvider(backend_factory=redis_backend_factory))


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app; runs startup and shutdown."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def signup(client):
    """Create an account through the API; returns Bearer headers for it."""

    def _signup(username, password="secret-pw", phone="555-0100", **extra):
        res = client.post(
            "/signup",
            json={
                "username": username,
                "phone": phone,
                "password": password,
                "password2": password,
                **extra,
            },
        )
        assert res.status_code == 201, res.text
        return {"Authorization": f"Bearer {res.json()['token']}"}

    return _signup
