import pytest
from fastapi.testclient import TestClient

from station_directory.config.settings import Config
from station_directory.fastapi_app import create_fastapi_app


def test_health(client):
    res = client.get("/health")

    assert res.status_code == 200
    assert res.json()["status"] == "healthy"
    assert res.json()["storage"] in {"file", "redis"}


def test_signup_sets_session_cookie(client):
    res = client.post(
        "/signup",
        json={
            "username": "alice",
            "phone": "555-0100",
            "password": "pw-alice",
            "password2": "pw-alice",
            "station_ids": "S1, S2",
        },
    )

    assert res.status_code == 201
    body = res.json()
    assert body["user"]["station_ids"] == ["S1", "S2"]
    assert "password_hash" not in body["user"]
    assert client.cookies.get("session") == body["token"]

    # The cookie alone authenticates
    assert client.get("/me").json()["username"] == "alice"
    assert client.get("/session").json() == {"logged_in": True, "username": "alice"}


def test_signup_validation_and_conflict(client, signup):
    mismatch = client.post(
        "/signup",
        json={"username": "alice", "phone": "1", "password": "a", "password2": "b"},
    )
    assert mismatch.status_code == 400
    assert mismatch.json()["error"]["kind"] == "ValidationError"

    signup("alice")
    taken = client.post(
        "/signup",
        json={"username": "alice", "phone": "1", "password": "x", "password2": "x"},
    )
    assert taken.status_code == 409
    assert taken.json()["error"]["kind"] == "UsernameTaken"


def test_login_failures_are_indistinguishable(client, signup):
    signup("alice", password="right-pw")
    client.cookies.clear()

    wrong_password = client.post("/login", json={"username": "alice", "password": "wrongpass"})
    unknown_user = client.post("/login", json={"username": "nosuchuser", "password": "x"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()
    assert wrong_password.json()["error"]["kind"] == "InvalidCredentials"


def test_login_then_logout(client, signup):
    signup("alice", password="right-pw")
    client.cookies.clear()

    res = client.post("/login", json={"username": "alice", "password": "right-pw"})
    assert res.status_code == 200
    headers = {"Authorization": f"Bearer {res.json()['token']}"}
    assert client.get("/me", headers=headers).status_code == 200

    assert client.post("/logout", headers=headers).json() == {"success": True}
    assert client.get("/me", headers=headers).status_code == 401


def test_protected_routes_require_a_session(client):
    for method, path in [
        ("get", "/me"),
        ("get", "/users"),
        ("get", "/chat/history?user=bob"),
        ("get", "/admin/users"),
        ("delete", "/admin/users/1"),
    ]:
        res = getattr(client, method)(path)
        assert res.status_code == 401, path
        assert res.json()["error"]["kind"] == "Unauthorized"


def test_unauthenticated_send_persists_nothing(client, signup):
    bob = signup("bob")
    client.cookies.clear()

    res = client.post("/chat/send", json={"to": "bob", "text": "hi"})

    assert res.status_code == 401
    assert client.get("/chat/history", params={"user": "alice"}, headers=bob).json() == []


def test_users_lists_everyone_but_me(client, signup):
    alice = signup("alice")
    signup("carol")
    signup("bob")

    names = [user["username"] for user in client.get("/users", headers=alice).json()]

    assert names == ["bob", "carol"]


def test_chat_round_trip(client, signup):
    alice = signup("alice")
    bob = signup("bob")

    first = client.post("/chat/send", json={"to": "bob", "text": "M1"}, headers=alice)
    client.post("/chat/send", json={"to": "alice", "text": "M2"}, headers=bob)

    assert first.status_code == 201
    message = first.json()["message"]
    assert (message["from_user"], message["to_user"], message["text"]) == ("alice", "bob", "M1")

    for headers, other in [(alice, "bob"), (bob, "alice")]:
        history = client.get("/chat/history", params={"user": other}, headers=headers).json()
        assert [m["text"] for m in history] == ["M1", "M2"]


def test_chat_send_validation(client, signup):
    alice = signup("alice")

    res = client.post("/chat/send", json={"to": "bob", "text": "   "}, headers=alice)

    assert res.status_code == 400
    assert res.json()["error"]["kind"] == "ValidationError"


def test_message_by_id_is_participant_only(client, signup):
    alice = signup("alice")
    bob = signup("bob")
    carol = signup("carol")
    sent = client.post("/chat/send", json={"to": "bob", "text": "secret"}, headers=alice)
    message_id = sent.json()["message"]["id"]

    assert client.get(f"/chat/messages/{message_id}", headers=bob).json()["text"] == "secret"
    assert client.get(f"/chat/messages/{message_id}", headers=carol).status_code == 404


def test_admin_user_management(client, signup):
    admin = signup("admin")

    created = client.post(
        "/admin/users",
        json={
            "username": "driver",
            "phone": "555-0199",
            "password": "pw",
            "password2": "pw",
            "station_ids": ["S1"],
        },
        headers=admin,
    )
    assert created.status_code == 201
    driver_id = created.json()["id"]

    updated = client.put(
        f"/admin/users/{driver_id}/stations",
        json={"station_ids": ["S2", "S3"], "station_titles": {"S2": "Harbour"}},
        headers=admin,
    )
    assert updated.json()["station_ids"] == ["S2", "S3"]
    assert updated.json()["station_titles"] == {"S2": "Harbour"}

    names = [user["username"] for user in client.get("/admin/users", headers=admin).json()]
    assert names == ["admin", "driver"]

    missing = client.put(
        "/admin/users/999/stations", json={"station_ids": []}, headers=admin
    )
    assert missing.status_code == 404


def test_admin_delete_cascades(client, signup):
    alice = signup("alice")
    bob = signup("bob")
    sent = client.post("/chat/send", json={"to": "alice", "text": "hi alice"}, headers=bob)
    message_id = sent.json()["message"]["id"]
    alice_id = client.get("/me", headers=alice).json()["id"]

    res = client.delete(f"/admin/users/{alice_id}", headers=bob)

    assert res.status_code == 200
    assert res.json()["sessions_closed"] == 1
    # Alice's session died with her account
    assert client.get("/me", headers=alice).status_code == 401
    assert "alice" not in [u["username"] for u in client.get("/users", headers=bob).json()]
    assert client.get("/chat/history", params={"user": "alice"}, headers=bob).json() == []
    assert client.get(f"/chat/messages/{message_id}", headers=bob).json()["text"] == "hi alice"

    assert client.delete(f"/admin/users/{alice_id}", headers=bob).status_code == 404


def test_correlation_id_is_echoed(client):
    res = client.get("/health", headers={"X-Correlation-ID": "abc-123"})

    assert res.headers["X-Correlation-ID"] == "abc-123"


@pytest.fixture()
def cors_client(monkeypatch):
    def _client(origins):
        monkeypatch.setattr(Config, "CORS_ORIGINS", origins)
        return TestClient(create_fastapi_app())

    return _client


def test_cors_allows_configured_origin_with_credentials(cors_client):
    with cors_client(["https://stations.example"]) as client:
        allowed = client.get("/health", headers={"Origin": "https://stations.example"})
        foreign = client.get("/health", headers={"Origin": "https://evil.example"})

    assert allowed.headers["access-control-allow-origin"] == "https://stations.example"
    assert allowed.headers["access-control-allow-credentials"] == "true"
    assert "access-control-allow-origin" not in foreign.headers


def test_cors_wildcard_never_allows_credentials(cors_client):
    with cors_client(["*"]) as client:
        res = client.get("/health", headers={"Origin": "https://any.example"})

    assert res.headers["access-control-allow-origin"] == "*"
    assert "access-control-allow-credentials" not in res.headers
