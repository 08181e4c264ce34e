"""End-to-end tests through the FastAPI app against the in-memory database."""
import pytest
from dependency_injector import providers
from httpx import ASGITransport, AsyncClient

from api.features.users.credentials import CredentialService
from api.main import app
from api.shared.db import get_db_session


@pytest.fixture
async def client(session_factory):
    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_session
    fast_credentials = providers.Object(CredentialService(rounds=4))
    with app.container.services.credential_service.override(fast_credentials):
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as c:
            yield c
    app.dependency_overrides.clear()


async def _signup(client, username, password="secret"):
    response = await client.post(
        "/api/v1/users", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def _send(client, sender, recipient, message_type, content, metadata=None):
    body = {
        "sender": sender,
        "recipient": recipient,
        "messageType": message_type,
        "content": content,
    }
    if metadata is not None:
        body["metadata"] = metadata
    return await client.post("/api/v1/messages", json=body)


async def test_create_user(client):
    response = await client.post(
        "/api/v1/users", json={"username": "alice", "password": "secret"}
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["data"]["username"] == "alice"
    assert payload["data"]["id"] > 0


async def test_duplicate_user_conflicts(client):
    await _signup(client, "alice")

    response = await client.post(
        "/api/v1/users", json={"username": "Alice", "password": "other"}
    )

    assert response.status_code == 409
    assert response.json()["error_code"] == "CONFLICT"


@pytest.mark.parametrize(
    "username,password",
    [("abcdefghijk", "secret"), ("", "secret"), ("alice", ""), ("alice", "p" * 49)],
)
async def test_invalid_signup_is_rejected(client, username, password):
    response = await client.post(
        "/api/v1/users", json={"username": username, "password": password}
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


async def test_user_exists(client):
    await _signup(client, "alice")

    found = await client.get("/api/v1/users/ALICE/exists")
    missing = await client.get("/api/v1/users/bob/exists")

    assert found.json()["data"] == {"username": "ALICE", "exists": True}
    assert missing.json()["data"] == {"username": "bob", "exists": False}


async def test_login(client):
    await _signup(client, "alice", "secret")

    ok = await client.post(
        "/api/v1/users/login", json={"username": "alice", "password": "secret"}
    )
    wrong = await client.post(
        "/api/v1/users/login", json={"username": "alice", "password": "Secret"}
    )
    unknown = await client.post(
        "/api/v1/users/login", json={"username": "bob", "password": "secret"}
    )

    assert ok.status_code == 200
    assert ok.json()["data"]["authenticated"] is True
    assert wrong.status_code == 401
    assert wrong.json()["error_code"] == "UNAUTHORIZED"
    assert wrong.json()["details"] == {"username": "alice"}
    assert unknown.status_code == 404


async def test_send_and_fetch_conversation(client):
    await _signup(client, "alice")
    await _signup(client, "bob")

    sent = await _send(client, "alice", "bob", "plaintext", "hi bob")
    assert sent.status_code == 200
    assert sent.json()["data"]["message_id"] > 0
    await _send(client, "bob", "alice", "image_link", "https://img/1", {"width": 3, "height": 4})
    await _send(client, "alice", "bob", "video_link", "https://vid/1")

    response = await client.get(
        "/api/v1/messages", params={"sender": "bob", "recipient": "alice"}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total"] == 3
    assert data["items"] == [
        {
            "sender": "alice",
            "recipient": "bob",
            "messageType": "plaintext",
            "content": "hi bob",
            "metadata": None,
        },
        {
            "sender": "bob",
            "recipient": "alice",
            "messageType": "image_link",
            "content": "https://img/1",
            "metadata": {"width": 3, "height": 4},
        },
        {
            "sender": "alice",
            "recipient": "bob",
            "messageType": "video_link",
            "content": "https://vid/1",
            "metadata": {"length": 300, "source": "YouTube"},
        },
    ]


async def test_fetch_page(client):
    await _signup(client, "alice")
    await _signup(client, "bob")
    for n in range(5):
        await _send(client, "alice", "bob", "plaintext", f"m{n}")

    last = await client.get(
        "/api/v1/messages",
        params={"sender": "alice", "recipient": "bob", "messagesPerPage": 2, "pageToLoad": 2},
    )
    beyond = await client.get(
        "/api/v1/messages",
        params={"sender": "alice", "recipient": "bob", "messagesPerPage": 2, "pageToLoad": 3},
    )

    assert [m["content"] for m in last.json()["data"]["items"]] == ["m4"]
    assert beyond.status_code == 400


async def test_fetch_with_one_page_parameter_is_rejected(client):
    await _signup(client, "alice")
    await _signup(client, "bob")

    response = await client.get(
        "/api/v1/messages",
        params={"sender": "alice", "recipient": "bob", "messagesPerPage": 2},
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


async def test_oversized_page_is_rejected(client):
    await _signup(client, "alice")
    await _signup(client, "bob")

    response = await client.get(
        "/api/v1/messages",
        params={"sender": "alice", "recipient": "bob", "messagesPerPage": 501, "pageToLoad": 0},
    )

    assert response.status_code == 400


async def test_message_to_unknown_user(client):
    await _signup(client, "alice")

    response = await _send(client, "alice", "ghost", "plaintext", "anyone there?")

    assert response.status_code == 404
    body = response.json()
    assert body["error_code"] == "NOT_FOUND"
    assert body["message"] == "no such user ghost"


@pytest.mark.parametrize(
    "message_type,content,metadata",
    [
        ("audio", "hello", None),
        ("plaintext", "", None),
        ("plaintext", "hello", {"width": 1, "height": 1}),
        ("image_link", "https://img/2", {"length": 1, "source": "YouTube"}),
        ("video_link", "https://vid/2", {"length": -1, "source": "YouTube"}),
        ("image_link", "https://img/3", {"width": 1, "height": 1, "source": "YouTube"}),
        ("video_link", "https://vid/3", {"length": 1, "source": "YouTube", "width": 1}),
    ],
)
async def test_invalid_message_is_rejected(client, message_type, content, metadata):
    await _signup(client, "alice")
    await _signup(client, "bob")

    response = await _send(client, "alice", "bob", message_type, content, metadata)

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


async def test_missing_body_field_is_unprocessable(client):
    response = await client.post("/api/v1/messages", json={"sender": "alice"})

    assert response.status_code == 422


async def test_health_without_database_connection(client):
    # The ASGI transport skips lifespan, so the engine is never created
    response = await client.get("/health")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "unavailable"
    assert body["dependencies"] == {"database": "unreachable"}
