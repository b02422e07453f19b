from datetime import datetime, timedelta, timezone

import pytest

from station_directory.application.services.auth_gate import AuthGate
from station_directory.domain.exceptions import UnauthorizedError
from station_directory.domain.value_objects import AuthIdentity, Username
from station_directory.infrastructure.sessions.in_memory_session_store import (
    InMemorySessionStore,
)

ALICE = Username("alice")


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def timed_gate(clock):
    return AuthGate(InMemorySessionStore(idle_timeout=timedelta(minutes=30), clock=clock))


async def test_tokens_are_unique_and_opaque(session_store):
    first = await session_store.create(ALICE)
    second = await session_store.create(ALICE)

    assert first.token != second.token
    assert "alice" not in first.token
    assert len(session_store) == 2


async def test_resolve_returns_session_user(auth_gate):
    opened = await auth_gate.open_session(AuthIdentity(username=ALICE))

    identity = await auth_gate.resolve(opened.session_token)

    assert identity.username == ALICE
    assert identity.session_token == opened.session_token


@pytest.mark.parametrize("token", [None, "", "made-up-token"])
async def test_resolve_rejects_missing_or_unknown_tokens(auth_gate, token):
    with pytest.raises(UnauthorizedError):
        await auth_gate.resolve(token)


async def test_closed_session_no_longer_resolves(auth_gate):
    opened = await auth_gate.open_session(AuthIdentity(username=ALICE))

    assert await auth_gate.close_session(opened.session_token) is True
    assert await auth_gate.close_session(opened.session_token) is False
    with pytest.raises(UnauthorizedError):
        await auth_gate.resolve(opened.session_token)


async def test_idle_session_expires(timed_gate, clock):
    opened = await timed_gate.open_session(AuthIdentity(username=ALICE))

    clock.advance(minutes=31)

    with pytest.raises(UnauthorizedError):
        await timed_gate.resolve(opened.session_token)


async def test_activity_keeps_session_alive(timed_gate, clock):
    opened = await timed_gate.open_session(AuthIdentity(username=ALICE))

    for _ in range(3):
        clock.advance(minutes=20)
        await timed_gate.resolve(opened.session_token)


async def test_close_all_sessions_for_user(auth_gate):
    first = await auth_gate.open_session(AuthIdentity(username=ALICE))
    await auth_gate.open_session(AuthIdentity(username=ALICE))
    bob = await auth_gate.open_session(AuthIdentity(username=Username("bob")))

    assert await auth_gate.close_all_sessions(ALICE) == 2
    with pytest.raises(UnauthorizedError):
        await auth_gate.resolve(first.session_token)
    assert (await auth_gate.resolve(bob.session_token)).username == Username("bob")


async def test_abandoned_sessions_are_swept_on_create(clock):
    store = InMemorySessionStore(idle_timeout=timedelta(minutes=30), clock=clock)
    for _ in range(1000):
        await store.create(ALICE)
    clock.advance(days=30)

    fresh = await store.create(Username("bob"))

    assert len(store) == 1
    assert await store.get(fresh.token) is fresh


async def test_sweep_keeps_live_sessions(clock):
    store = InMemorySessionStore(idle_timeout=timedelta(minutes=30), clock=clock)
    old = await store.create(ALICE)
    clock.advance(minutes=20)
    recent = await store.create(ALICE)
    clock.advance(minutes=15)

    await store.create(Username("bob"))

    assert len(store) == 2
    assert await store.get(old.token) is None
    assert await store.get(recent.token) is recent
