"""Profile model with embedded experience and education records."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pydantic import BaseModel, Field

from devconnector.db.base import MongoModel


class Experience(MongoModel):
    """A single job held by the profile owner."""

    title: str
    company: str
    location: Optional[str] = None
    from_date: datetime = Field(..., alias="from")
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None


class Education(MongoModel):
    """A single school attended by the profile owner."""

    school: str
    degree: str
    fieldofstudy: str
    from_date: datetime = Field(..., alias="from")
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None


class Social(BaseModel):
    """Social network links."""

    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


class Profile(MongoModel):
    """Developer profile, one per user (collection ``profiles``)."""

    user: ObjectId
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    status: str
    skills: List[str] = Field(default_factory=list)
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    # Most recent entry first
    experience: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    social: Social = Field(default_factory=Social)
    date: datetime = Field(default_factory=datetime.utcnow)

    def apply_update(self, fields: Dict[str, Any], social: Social) -> None:
        """Overwrite the given fields; social links are replaced as a whole."""
        for name, value in fields.items():
            setattr(self, name, value)
        self.social = social

    def add_experience(self, entry: Experience) -> None:
        self.experience.insert(0, entry)

    def add_education(self, entry: Education) -> None:
        self.education.insert(0, entry)

    def remove_experience(self, exp_id: str) -> bool:
        """Drop the experience entry with ``exp_id``. Returns True if one was removed."""
        remaining = [e for e in self.experience if str(e.id) != exp_id]
        removed = len(remaining) != len(self.experience)
        self.experience = remaining
        return removed

    def remove_education(self, edu_id: str) -> bool:
        """Drop the education entry with ``edu_id``. Returns True if one was removed."""
        remaining = [e for e in self.education if str(e.id) != edu_id]
        removed = len(remaining) != len(self.education)
        self.education = remaining
        return removed
