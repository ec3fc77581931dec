"""
API Dependencies
Common dependencies for API endpoints (authentication, object ids)
"""

from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Depends, HTTPException, status

from devconnector.core.security import get_current_user_id
from devconnector.models.user import User
from devconnector.services.user_service import UserService, get_user_service


def parse_object_id(value: str) -> Optional[ObjectId]:
    """Return ``value`` as an ObjectId, or None when it is malformed."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


async def get_current_user_oid(
    user_id: str = Depends(get_current_user_id),
) -> ObjectId:
    """
    Get the authenticated user's id as an ObjectId
    """
    oid = parse_object_id(user_id)
    if oid is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is not valid",
        )
    return oid


async def get_current_user(
    user_oid: ObjectId = Depends(get_current_user_oid),
    users: UserService = Depends(get_user_service),
) -> User:
    """
    Get current authenticated user document
    """
    user = await users.get(user_oid)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User not found",
        )
    return user
