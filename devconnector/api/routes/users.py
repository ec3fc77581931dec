"""User registration endpoint."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from pymongo.errors import DuplicateKeyError

from devconnector.core.exceptions import SERVER_ERROR, error_list
from devconnector.core.security import create_access_token, get_password_hash
from devconnector.models.user import User
from devconnector.schemas.auth import RegisterRequest, TokenResponse
from devconnector.services.user_service import UserService, get_user_service
from devconnector.utils.helpers import gravatar_url

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("", response_model=TokenResponse)
async def register(
    request: RegisterRequest,
    users: UserService = Depends(get_user_service),
):
    """Register a new user and return a token for it."""
    try:
        # Check if user already exists
        existing_user = await users.find_by_email(request.email)
        if existing_user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=error_list("User already exists"),
            )

        new_user = User(
            name=request.name,
            email=request.email,
            avatar=gravatar_url(request.email),
            password=get_password_hash(request.password),
        )
        await users.create(new_user)
        logger.info("user_registered", user_id=str(new_user.id))

        return TokenResponse(token=create_access_token(str(new_user.id)))
    except HTTPException:
        raise
    except DuplicateKeyError:
        # Lost a race with a concurrent registration for the same email
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_list("User already exists"),
        )
    except Exception as e:
        logger.error("register_failed", error=str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=SERVER_ERROR,
        )
