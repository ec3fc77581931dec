"""Profile request and response schemas."""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devconnector.utils.helpers import split_skills
from devconnector.utils.validators import is_blank

SOCIAL_FIELDS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


def _required(message: str):
    def check(v):
        if is_blank(v):
            raise ValueError(message)
        return v.strip() if isinstance(v, str) else v

    return check


# ==================== Requests ====================

class ProfileUpsert(BaseModel):
    """
    Create-or-update body for the current user's profile.

    Only ``status`` and ``skills`` are required; other fields are applied
    when present. Social links are given flat and stored under ``social``.
    """

    status: Optional[str] = Field(None, validate_default=True)
    skills: Optional[Union[str, List[str]]] = Field(None, validate_default=True)
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None

    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None

    check_status = field_validator("status")(_required("Status is required"))

    @field_validator("skills")
    @classmethod
    def validate_skills(cls, v):
        skills = split_skills(v)
        if not skills:
            raise ValueError("Skills is required")
        return skills


class ExperienceCreate(BaseModel):
    """New experience entry."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, validate_default=True)
    company: Optional[str] = Field(None, validate_default=True)
    location: Optional[str] = None
    from_date: Optional[datetime] = Field(None, alias="from", validate_default=True)
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None

    check_title = field_validator("title")(_required("Title is required"))
    check_company = field_validator("company")(_required("Company is required"))
    check_from = field_validator("from_date", mode="before")(
        _required("From date is required")
    )


class EducationCreate(BaseModel):
    """New education entry."""

    model_config = ConfigDict(populate_by_name=True)

    school: Optional[str] = Field(None, validate_default=True)
    degree: Optional[str] = Field(None, validate_default=True)
    fieldofstudy: Optional[str] = Field(None, validate_default=True)
    from_date: Optional[datetime] = Field(None, alias="from", validate_default=True)
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None

    check_school = field_validator("school")(_required("School is required"))
    check_degree = field_validator("degree")(_required("Degree is required"))
    check_field = field_validator("fieldofstudy")(
        _required("Field of study is required")
    )
    check_from = field_validator("from_date", mode="before")(
        _required("From date is required")
    )


# ==================== Responses ====================

class UserSummary(BaseModel):
    """Owner fields embedded in profile responses."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    avatar: Optional[str] = None


class ExperienceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    title: str
    company: str
    location: Optional[str] = None
    from_date: datetime = Field(..., alias="from")
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None


class EducationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    school: str
    degree: str
    fieldofstudy: str
    from_date: datetime = Field(..., alias="from")
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None


class SocialResponse(BaseModel):
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


class ProfileResponse(BaseModel):
    """Profile as returned to clients."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    # Populated owner, or the bare id when the user document is gone
    user: Union[UserSummary, str]
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    status: str
    skills: List[str] = []
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    experience: List[ExperienceResponse] = []
    education: List[EducationResponse] = []
    social: SocialResponse = SocialResponse()
    date: datetime


def build_profile_response(profile, user=None) -> ProfileResponse:
    """Build profile response, populating the owner when ``user`` is given."""
    if user is not None:
        owner = UserSummary(id=str(user.id), name=user.name, avatar=user.avatar)
    else:
        owner = str(profile.user)

    experience = [
        ExperienceResponse(
            id=str(e.id),
            title=e.title,
            company=e.company,
            location=e.location,
            from_date=e.from_date,
            to=e.to,
            current=e.current,
            description=e.description,
        )
        for e in profile.experience
    ]
    education = [
        EducationResponse(
            id=str(e.id),
            school=e.school,
            degree=e.degree,
            fieldofstudy=e.fieldofstudy,
            from_date=e.from_date,
            to=e.to,
            current=e.current,
            description=e.description,
        )
        for e in profile.education
    ]

    return ProfileResponse(
        id=str(profile.id),
        user=owner,
        company=profile.company,
        website=profile.website,
        location=profile.location,
        status=profile.status,
        skills=profile.skills or [],
        bio=profile.bio,
        githubusername=profile.githubusername,
        experience=experience,
        education=education,
        social=SocialResponse(**profile.social.model_dump()),
        date=profile.date,
    )
