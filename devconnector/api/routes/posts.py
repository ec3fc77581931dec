"""Posts endpoints (placeholder)."""

from fastapi import APIRouter

router = APIRouter()


@router.get("")
async def list_posts():
    """Test route."""
    return {"msg": "Posts route"}
