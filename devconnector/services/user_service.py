"""MongoDB storage for users."""

import logging
from typing import Iterable, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from devconnector.db.session import USERS_COLLECTION, get_database
from devconnector.models.user import User

logger = logging.getLogger(__name__)


class UserService:
    """CRUD operations on the ``users`` collection."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[USERS_COLLECTION]

    async def get(self, user_id: ObjectId) -> Optional[User]:
        return User.from_mongo(await self.collection.find_one({"_id": user_id}))

    async def get_many(self, user_ids: Iterable[ObjectId]) -> List[User]:
        cursor = self.collection.find({"_id": {"$in": list(user_ids)}})
        return [User.from_mongo(doc) async for doc in cursor]

    async def find_by_email(self, email: str) -> Optional[User]:
        return User.from_mongo(await self.collection.find_one({"email": email}))

    async def create(self, user: User) -> User:
        """
        Insert a new user.

        Raises:
            DuplicateKeyError: if the email is already registered
        """
        await self.collection.insert_one(user.to_mongo())
        logger.info(f"Created user {user.id}")
        return user

    async def delete(self, user_id: ObjectId) -> bool:
        result = await self.collection.delete_one({"_id": user_id})
        return result.deleted_count > 0


def get_user_service() -> UserService:
    """Dependency returning the user service bound to the app database."""
    return UserService(get_database())
