"""API routes."""

from fastapi import APIRouter

from devconnector.api.routes import auth, posts, profile, users

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(profile.router, prefix="/profile", tags=["Profile"])
api_router.include_router(posts.router, prefix="/posts", tags=["Posts"])
