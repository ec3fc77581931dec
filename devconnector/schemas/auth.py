"""Authentication schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devconnector.utils.validators import is_blank, normalize_email

PASSWORD_MIN_LENGTH = 6


def _check_email(v: Optional[str]) -> str:
    if is_blank(v):
        raise ValueError("Please include a valid email")
    try:
        return normalize_email(v)
    except ValueError:
        raise ValueError("Please include a valid email")


class RegisterRequest(BaseModel):
    """Register request schema."""

    name: Optional[str] = Field(None, validate_default=True)
    email: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if is_blank(v):
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if v is None or len(v) < PASSWORD_MIN_LENGTH:
            raise ValueError(
                f"Please enter a password with {PASSWORD_MIN_LENGTH} or more characters"
            )
        return v


class LoginRequest(BaseModel):
    """Login request schema."""

    email: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if not v:
            raise ValueError("Password is required")
        return v


class TokenResponse(BaseModel):
    """Token returned by register and login."""

    token: str


class UserResponse(BaseModel):
    """User response schema (never carries the password hash)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    email: str
    avatar: Optional[str] = None
    date: datetime

    @classmethod
    def from_document(cls, user) -> "UserResponse":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            avatar=user.avatar,
            date=user.date,
        )
