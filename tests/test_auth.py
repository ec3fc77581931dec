from datetime import timedelta

import pytest

from devconnector.core.security import create_access_token

from .conftest import DEFAULT_USER, register


@pytest.mark.asyncio
async def test_login_returns_token(client):
    await register(client)

    response = await client.post(
        "/api/auth",
        json={"email": DEFAULT_USER["email"], "password": DEFAULT_USER["password"]},
    )

    assert response.status_code == 200
    assert response.json()["token"]


@pytest.mark.asyncio
async def test_login_rejects_wrong_password(client):
    await register(client)

    response = await client.post(
        "/api/auth", json={"email": DEFAULT_USER["email"], "password": "wrong-password"}
    )

    assert response.status_code == 400
    assert response.json() == {"errors": [{"msg": "Invalid Credentials"}]}


@pytest.mark.asyncio
async def test_login_rejects_unknown_email(client):
    response = await client.post(
        "/api/auth", json={"email": "nobody@devconnector.io", "password": "secret123"}
    )

    assert response.status_code == 400
    assert response.json() == {"errors": [{"msg": "Invalid Credentials"}]}


@pytest.mark.asyncio
async def test_login_requires_password(client):
    response = await client.post("/api/auth", json={"email": DEFAULT_USER["email"]})

    assert response.status_code == 400
    assert response.json()["errors"] == [
        {"msg": "Password is required", "param": "password", "location": "body"}
    ]


@pytest.mark.asyncio
async def test_get_auth_user_with_x_auth_token(client, auth_headers):
    response = await client.get("/api/auth", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == DEFAULT_USER["name"]
    assert body["email"] == DEFAULT_USER["email"]
    assert body["_id"]
    assert "password" not in body


@pytest.mark.asyncio
async def test_get_auth_user_with_bearer_token(client, token):
    response = await client.get("/api/auth", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["email"] == DEFAULT_USER["email"]


@pytest.mark.asyncio
async def test_get_auth_user_without_token(client):
    response = await client.get("/api/auth")

    assert response.status_code == 401
    assert response.json() == {"msg": "No token, authorization denied"}


@pytest.mark.asyncio
async def test_get_auth_user_with_tampered_token(client, token):
    response = await client.get("/api/auth", headers={"x-auth-token": token + "x"})

    assert response.status_code == 401
    assert response.json() == {"msg": "Token is not valid"}


@pytest.mark.asyncio
async def test_get_auth_user_with_expired_token(client, token):
    me = await client.get("/api/auth", headers={"x-auth-token": token})
    expired = create_access_token(me.json()["_id"], expires_delta=timedelta(seconds=-10))

    response = await client.get("/api/auth", headers={"x-auth-token": expired})

    assert response.status_code == 401
    assert response.json() == {"msg": "Token is not valid"}


@pytest.mark.asyncio
async def test_token_for_malformed_user_id_is_rejected(client):
    token = create_access_token("not-an-object-id")

    response = await client.get("/api/auth", headers={"x-auth-token": token})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_token_for_missing_user(client):
    token = create_access_token("507f1f77bcf86cd799439011")

    response = await client.get("/api/auth", headers={"x-auth-token": token})

    assert response.status_code == 400
    assert response.json() == {"msg": "User not found"}
