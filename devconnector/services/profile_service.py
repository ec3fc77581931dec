"""MongoDB storage for profiles."""

import logging
from typing import List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from devconnector.db.session import PROFILES_COLLECTION, get_database
from devconnector.models.profile import Profile

logger = logging.getLogger(__name__)


class ProfileService:
    """CRUD operations on the ``profiles`` collection."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[PROFILES_COLLECTION]

    async def get_by_user(self, user_id: ObjectId) -> Optional[Profile]:
        return Profile.from_mongo(await self.collection.find_one({"user": user_id}))

    async def list_all(self) -> List[Profile]:
        return [Profile.from_mongo(doc) async for doc in self.collection.find({})]

    async def save(self, profile: Profile) -> Profile:
        """
        Upsert the profile keyed on its owner.

        The stored ``_id`` is kept when the user already has a profile, so
        concurrent first saves for one user end up as a single document.
        """
        doc = profile.to_mongo()
        profile_id = doc.pop("_id")
        doc.pop("user")
        await self.collection.update_one(
            {"user": profile.user},
            {"$set": doc, "$setOnInsert": {"_id": profile_id}},
            upsert=True,
        )
        return profile

    async def delete_by_user(self, user_id: ObjectId) -> bool:
        result = await self.collection.delete_one({"user": user_id})
        if result.deleted_count:
            logger.info(f"Deleted profile of user {user_id}")
        return result.deleted_count > 0


def get_profile_service() -> ProfileService:
    """Dependency returning the profile service bound to the app database."""
    return ProfileService(get_database())
