"""
API тесты: регистрация, логин, /me.
"""

import pytest

from personal_blog.api.dependencies import get_token_service
from personal_blog.domain.entities.user import User


@pytest.mark.asyncio
async def test_register(client):
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "ann@example.com", "password": "secret1", "name": "Ann"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User created"
    assert body["token"]
    assert body["user"]["email"] == "ann@example.com"
    assert "password_hash" not in body["user"]


@pytest.mark.asyncio
async def test_register_duplicate_email(client, register):
    await register()

    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "ann@example.com", "password": "secret1", "name": "Ann again"},
    )

    assert response.status_code == 409
    assert response.json() == {"error": "User already exists", "kind": "conflict"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"email": "ann@example.com", "password": "secret1"},
        {"email": "ann@example.com", "password": "12345", "name": "Ann"},
        {"email": "nope", "password": "secret1", "name": "Ann"},
        {},
    ],
)
async def test_register_invalid(client, payload):
    response = await client.post("/api/v1/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json()["kind"] == "validation"


@pytest.mark.asyncio
async def test_login(client, register):
    await register()

    response = await client.post(
        "/api/v1/auth/login", json={"email": "ann@example.com", "password": "secret1"}
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Login successful"
    assert response.json()["user"]["name"] == "Ann"


@pytest.mark.asyncio
async def test_login_wrong_password_and_unknown_email_look_the_same(client, register):
    await register()

    wrong = await client.post(
        "/api/v1/auth/login", json={"email": "ann@example.com", "password": "wrong-pass"}
    )
    unknown = await client.post(
        "/api/v1/auth/login", json={"email": "ghost@example.com", "password": "secret1"}
    )

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json() == {"error": "Invalid email or password", "kind": "unauthenticated"}
    assert wrong.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_login_missing_fields(client):
    response = await client.post("/api/v1/auth/login", json={"email": "ann@example.com"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_me(client, register):
    headers, user = await register()

    response = await client.get("/api/v1/auth/me", headers=headers)

    assert response.status_code == 200
    assert response.json()["user"]["id"] == user["id"]


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer not-a-token"}])
async def test_me_requires_valid_token(client, headers):
    response = await client.get("/api/v1/auth/me", headers=headers)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_for_deleted_user(client):
    """Подпись валидна, но пользователя в БД нет."""
    token = get_token_service().generate_token(User(email="gone@example.com", name="Gone"))

    response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 404
