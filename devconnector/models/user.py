"""User model."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from devconnector.db.base import MongoModel


class User(MongoModel):
    """User document used for authentication (collection ``users``)."""

    name: str
    email: str
    password: str
    avatar: Optional[str] = None
    date: datetime = Field(default_factory=datetime.utcnow)

    def __repr__(self):
        return f"<User {self.email}>"
