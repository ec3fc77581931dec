"""Authentication endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from devconnector.api.deps import get_current_user
from devconnector.core.exceptions import SERVER_ERROR, error_list
from devconnector.core.security import create_access_token, verify_password
from devconnector.models.user import User
from devconnector.schemas.auth import LoginRequest, TokenResponse, UserResponse
from devconnector.services.user_service import UserService, get_user_service

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=UserResponse)
async def get_authenticated_user(current_user: User = Depends(get_current_user)):
    """Get the user the token belongs to."""
    return UserResponse.from_document(current_user)


@router.post("", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    users: UserService = Depends(get_user_service),
):
    """Login with email and password."""
    try:
        user = await users.find_by_email(request.email)

        # Same message for unknown email and wrong password
        if not user or not verify_password(request.password, user.password):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=error_list("Invalid Credentials"),
            )

        logger.info("user_logged_in", user_id=str(user.id))
        return TokenResponse(token=create_access_token(str(user.id)))
    except HTTPException:
        raise
    except Exception as e:
        logger.error("login_failed", error=str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=SERVER_ERROR,
        )
