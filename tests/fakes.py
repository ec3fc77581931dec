"""In-memory stand-ins for the MongoDB services, used through dependency overrides."""

from typing import Dict, Iterable, List, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from devconnector.models.profile import Profile
from devconnector.models.user import User


class InMemoryUserService:
    def __init__(self):
        self.users: Dict[ObjectId, User] = {}

    async def get(self, user_id: ObjectId) -> Optional[User]:
        user = self.users.get(user_id)
        return user.model_copy(deep=True) if user else None

    async def get_many(self, user_ids: Iterable[ObjectId]) -> List[User]:
        return [u.model_copy(deep=True) for i, u in self.users.items() if i in set(user_ids)]

    async def find_by_email(self, email: str) -> Optional[User]:
        for user in self.users.values():
            if user.email == email:
                return user.model_copy(deep=True)
        return None

    async def create(self, user: User) -> User:
        if any(u.email == user.email for u in self.users.values()):
            raise DuplicateKeyError("E11000 duplicate key error collection: users index: email_1")
        self.users[user.id] = user.model_copy(deep=True)
        return user

    async def delete(self, user_id: ObjectId) -> bool:
        return self.users.pop(user_id, None) is not None


class InMemoryProfileService:
    def __init__(self):
        self.profiles: Dict[ObjectId, Profile] = {}

    async def get_by_user(self, user_id: ObjectId) -> Optional[Profile]:
        for profile in self.profiles.values():
            if profile.user == user_id:
                return profile.model_copy(deep=True)
        return None

    async def list_all(self) -> List[Profile]:
        return [p.model_copy(deep=True) for p in self.profiles.values()]

    async def save(self, profile: Profile) -> Profile:
        # Keyed on the owner like the Mongo upsert; an existing document keeps its id
        stored = profile.model_copy(deep=True)
        for other in self.profiles.values():
            if other.user == profile.user:
                stored.id = other.id
                break
        self.profiles[stored.id] = stored
        return profile

    async def delete_by_user(self, user_id: ObjectId) -> bool:
        for profile_id, profile in list(self.profiles.items()):
            if profile.user == user_id:
                del self.profiles[profile_id]
                return True
        return False
