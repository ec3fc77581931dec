"""
Storage services against a real MongoDB.

Uses MONGO_URI (default mongodb://localhost:27017); skipped when no server answers.
"""

import os
from datetime import datetime

import pytest
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import DuplicateKeyError, PyMongoError

from devconnector.config import settings
from devconnector.db import session
from devconnector.models.profile import Experience, Profile
from devconnector.models.user import User
from devconnector.services.profile_service import ProfileService
from devconnector.services.user_service import UserService

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
TEST_DB = "devconnector_test"


@pytest.fixture(scope="function")
async def mongo_db():
    """Create a test database and drop it after the test."""
    client = AsyncIOMotorClient(MONGO_URI, serverSelectionTimeoutMS=500)
    try:
        await client.admin.command("ping")
    except PyMongoError:
        client.close()
        pytest.skip("MongoDB is not available")

    db = client[TEST_DB]
    await session.ensure_indexes(db)
    try:
        yield db
    finally:
        await client.drop_database(TEST_DB)
        client.close()  # Motor client's close() is not async


def make_user(email="alice@devconnector.io") -> User:
    return User(name="Alice", email=email, password="hashed", avatar="//gravatar")


@pytest.mark.asyncio
async def test_user_crud(mongo_db):
    users = UserService(mongo_db)
    user = await users.create(make_user())

    fetched = await users.get(user.id)
    assert fetched.email == "alice@devconnector.io"
    assert (await users.find_by_email("alice@devconnector.io")).id == user.id
    assert [u.id for u in await users.get_many([user.id, ObjectId()])] == [user.id]

    assert await users.delete(user.id) is True
    assert await users.get(user.id) is None
    assert await users.delete(user.id) is False


@pytest.mark.asyncio
async def test_duplicate_email_is_rejected(mongo_db):
    users = UserService(mongo_db)
    await users.create(make_user())

    with pytest.raises(DuplicateKeyError):
        await users.create(make_user())


@pytest.mark.asyncio
async def test_profile_round_trip_keeps_nested_records(mongo_db):
    profiles = ProfileService(mongo_db)
    owner = ObjectId()
    profile = Profile(user=owner, status="Developer", skills=["Python"])
    profile.add_experience(
        Experience(title="Dev", company="Acme", from_date=datetime(2020, 1, 1))
    )
    await profiles.save(profile)

    stored = await profiles.get_by_user(owner)
    assert stored.id == profile.id
    assert stored.experience[0].title == "Dev"
    assert stored.experience[0].id == profile.experience[0].id

    stored.status = "Lead"
    await profiles.save(stored)
    assert len(await profiles.list_all()) == 1
    assert (await profiles.get_by_user(owner)).status == "Lead"

    assert await profiles.delete_by_user(owner) is True
    assert await profiles.get_by_user(owner) is None


@pytest.mark.asyncio
async def test_second_profile_for_same_user_updates_the_first(mongo_db):
    profiles = ProfileService(mongo_db)
    owner = ObjectId()
    first = Profile(user=owner, status="Developer")
    await profiles.save(first)

    await profiles.save(Profile(user=owner, status="Other"))

    [stored] = await profiles.list_all()
    assert stored.id == first.id
    assert stored.status == "Other"


@pytest.mark.asyncio
async def test_profile_user_index_is_unique(mongo_db):
    owner = ObjectId()
    collection = mongo_db[session.PROFILES_COLLECTION]
    await collection.insert_one(Profile(user=owner, status="Developer").to_mongo())

    with pytest.raises(DuplicateKeyError):
        await collection.insert_one(Profile(user=owner, status="Other").to_mongo())


@pytest.mark.asyncio
async def test_connect_db_exits_when_server_unreachable(monkeypatch):
    monkeypatch.setattr(settings, "MONGO_URI", "mongodb://127.0.0.1:1")
    monkeypatch.setattr(settings, "MONGODB_SERVER_SELECTION_TIMEOUT_MS", 100)

    try:
        with pytest.raises(SystemExit) as exc_info:
            await session.connect_db()
        assert exc_info.value.code == 1
    finally:
        session.close_db()


def test_get_database_requires_connection():
    session.close_db()

    with pytest.raises(RuntimeError):
        session.get_database()
