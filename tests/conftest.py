import pytest
from httpx import ASGITransport, AsyncClient

from devconnector.main import create_app
from devconnector.services.profile_service import get_profile_service
from devconnector.services.user_service import get_user_service

from .fakes import InMemoryProfileService, InMemoryUserService

DEFAULT_USER = {
    "name": "Jane Doe",
    "email": "jane@devconnector.io",
    "password": "secret123",
}


@pytest.fixture(scope="function")
def user_store():
    return InMemoryUserService()


@pytest.fixture(scope="function")
def profile_store():
    return InMemoryProfileService()


@pytest.fixture(scope="function")
def app(user_store, profile_store):
    """App without the lifespan hook, storage swapped for in-memory services."""
    app = create_app(use_lifespan=False)
    app.dependency_overrides[get_user_service] = lambda: user_store
    app.dependency_overrides[get_profile_service] = lambda: profile_store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def register(client, **overrides) -> str:
    """Register a user and return its token."""
    body = {**DEFAULT_USER, **overrides}
    response = await client.post("/api/users", json=body)
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture(scope="function")
async def token(client):
    return await register(client)


@pytest.fixture(scope="function")
def auth_headers(token):
    return {"x-auth-token": token}
