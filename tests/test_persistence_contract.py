"""Storage contract shared by the JSON file and Redis backends."""

from datetime import datetime, timedelta, timezone

import pytest

from station_directory.domain.entities.message import Message
from station_directory.domain.entities.user import User
from station_directory.domain.exceptions import EntityNotFoundError, UsernameTakenError
from station_directory.domain.value_objects import MessageId, UserId, Username

ALICE = Username("alice")
BOB = Username("bob")
CAROL = Username("carol")


def make_user(name, password_hash="hash-1", stations=()):
    return User.create(Username(name), "555-0100", password_hash, station_ids=stations)


def make_message(sender, recipient, text, at=None):
    return Message(
        id=MessageId.generate(),
        sender=sender,
        recipient=recipient,
        text=text,
        created_at=at or datetime.now(timezone.utc),
    )


# ==================== USERS ====================


async def test_put_user_assigns_increasing_ids(backend):
    first = await backend.put_user(make_user("alice"))
    second = await backend.put_user(make_user("bob"))

    assert first.id == UserId(1)
    assert second.id == UserId(2)


async def test_get_user_returns_stored_fields(backend):
    await backend.put_user(make_user("alice", stations=["S1", "S2"]))

    user = await backend.get_user(ALICE)

    assert user.username == ALICE
    assert user.phone == "555-0100"
    assert user.password_hash == "hash-1"
    assert user.station_ids == ["S1", "S2"]
    assert await backend.get_user(BOB) is None


async def test_get_user_by_id(backend):
    stored = await backend.put_user(make_user("alice"))

    assert (await backend.get_user_by_id(stored.id)).username == ALICE
    assert await backend.get_user_by_id(UserId(99)) is None


async def test_duplicate_username_is_rejected_without_overwrite(backend):
    await backend.put_user(make_user("alice", password_hash="original"))

    with pytest.raises(UsernameTakenError):
        await backend.put_user(make_user("alice", password_hash="attacker"))

    assert (await backend.get_user(ALICE)).password_hash == "original"
    assert len(await backend.list_users()) == 1


async def test_usernames_are_case_sensitive(backend):
    await backend.put_user(make_user("alice"))
    await backend.put_user(make_user("Alice"))

    assert {u.username.value for u in await backend.list_users()} == {"alice", "Alice"}


async def test_update_user_overwrites_mutable_fields(backend):
    stored = await backend.put_user(make_user("alice"))
    stored.assign_stations(["S9"], {"S9": "Main hall"})
    stored.change_password_hash("hash-2")

    updated = await backend.update_user(stored)
    fetched = await backend.get_user(ALICE)

    assert updated.id == stored.id
    assert fetched.station_ids == ["S9"]
    assert fetched.station_titles == {"S9": "Main hall"}
    assert fetched.password_hash == "hash-2"
    assert fetched.created_at == stored.created_at


async def test_update_missing_user_fails(backend):
    with pytest.raises(EntityNotFoundError):
        await backend.update_user(make_user("ghost"))


async def test_delete_user_removes_record(backend):
    alice = await backend.put_user(make_user("alice"))
    await backend.put_user(make_user("bob"))

    await backend.delete_user(alice.id)

    assert await backend.get_user(ALICE) is None
    assert await backend.get_user_by_id(alice.id) is None
    assert [u.username for u in await backend.list_users()] == [BOB]


async def test_delete_missing_user_fails(backend):
    with pytest.raises(EntityNotFoundError):
        await backend.delete_user(UserId(42))


# ==================== MESSAGES ====================


async def test_history_is_symmetric(backend):
    sent = await backend.append_message(make_message(ALICE, BOB, "hello"))

    from_alice = await backend.get_history(ALICE, BOB)
    from_bob = await backend.get_history(BOB, ALICE)

    assert from_alice == from_bob == [sent]
    assert (sent.sender, sent.recipient, sent.text) == (ALICE, BOB, "hello")


async def test_history_is_chronological_in_both_directions(backend):
    start = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    # Appended out of order on purpose
    later = make_message(BOB, ALICE, "second", at=start + timedelta(seconds=5))
    earlier = make_message(ALICE, BOB, "first", at=start)
    await backend.append_message(later)
    await backend.append_message(earlier)

    texts = [m.text for m in await backend.get_history(BOB, ALICE)]

    assert texts == ["first", "second"]


async def test_equal_timestamps_keep_append_order(backend):
    at = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    for text in ("one", "two", "three"):
        await backend.append_message(make_message(ALICE, BOB, text, at=at))

    assert [m.text for m in await backend.get_history(ALICE, BOB)] == ["one", "two", "three"]


async def test_history_excludes_other_pairs(backend):
    await backend.append_message(make_message(ALICE, BOB, "for bob"))
    await backend.append_message(make_message(ALICE, CAROL, "for carol"))
    await backend.append_message(make_message(CAROL, BOB, "carol to bob"))

    assert [m.text for m in await backend.get_history(ALICE, BOB)] == ["for bob"]
    assert await backend.get_history(BOB, Username("dave")) == []


async def test_append_does_not_require_existing_users(backend):
    await backend.append_message(make_message(Username("nobody"), BOB, "hi"))

    assert len(await backend.get_history(BOB, Username("nobody"))) == 1


async def test_get_message_by_id(backend):
    sent = await backend.append_message(make_message(ALICE, BOB, "hello"))

    assert await backend.get_message(sent.id) == sent
    assert await backend.get_message(MessageId.generate()) is None


# ==================== CASCADING DELETE ====================


async def test_deleted_users_messages_stay_readable_by_id(backend):
    alice = await backend.put_user(make_user("alice"))
    await backend.put_user(make_user("bob"))
    sent = await backend.append_message(make_message(BOB, ALICE, "hi alice"))

    await backend.delete_user(alice.id)

    assert await backend.get_message(sent.id) == sent
    assert ALICE not in [u.username for u in await backend.list_users()]


async def test_delete_user_hides_its_conversations(backend):
    alice = await backend.put_user(make_user("alice"))
    await backend.append_message(make_message(ALICE, BOB, "to bob"))
    await backend.append_message(make_message(CAROL, ALICE, "to alice"))
    await backend.append_message(make_message(BOB, CAROL, "unrelated"))

    await backend.delete_user(alice.id)

    assert await backend.get_history(BOB, ALICE) == []
    assert await backend.get_history(ALICE, CAROL) == []
    assert [m.text for m in await backend.get_history(BOB, CAROL)] == ["unrelated"]


async def test_reregistered_username_starts_with_empty_history(backend):
    alice = await backend.put_user(make_user("alice"))
    await backend.append_message(make_message(BOB, ALICE, "old"))
    await backend.delete_user(alice.id)

    await backend.put_user(make_user("alice"))
    await backend.append_message(make_message(BOB, ALICE, "new"))

    assert [m.text for m in await backend.get_history(ALICE, BOB)] == ["new"]
