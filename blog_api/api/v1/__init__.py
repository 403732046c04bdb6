"""API v1 routes."""

from datetime import UTC, datetime

from fastapi import APIRouter

from blog_api.api.v1 import auth, blogs, comments, health, likes, users
from blog_api.core.config import API_VERSION

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(blogs.router, prefix="/blogs", tags=["blogs"])
router.include_router(comments.router, prefix="/comments", tags=["comments"])
router.include_router(likes.router, prefix="/likes", tags=["likes"])


@router.get("/")
def welcome() -> dict[str, str]:
    """Version banner for API discovery."""
    return {
        "message": "Welcome to the Blog API!",
        "status": "success",
        "version": API_VERSION,
        "timestamp": datetime.now(UTC).isoformat(),
    }
