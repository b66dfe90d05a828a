"""API v1 routes."""

from fastapi import APIRouter

from blog_api.api.v1 import auth, comments, health, images, posts, users
from blog_api.schemas.common import ErrorResponse

# Every route may answer with the uniform error body.
_ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 500)
}

router = APIRouter(responses=_ERROR_RESPONSES)
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(posts.router, prefix="/posts", tags=["posts"])
router.include_router(comments.router, prefix="/comments", tags=["comments"])
router.include_router(images.router, prefix="/images", tags=["images"])
