"""API v1 router configuration."""

from typing import Any

from fastapi import APIRouter

from api.v1.routes.auth import router as auth_router
from api.v1.routes.posts import router as posts_router
from api.v1.routes.profile import router as profile_router
from api.v1.routes.users import router as users_router
from api.v1.schemas.common import ErrorResponse

# Every v1 route can fail with these; documented once in the OpenAPI schema
_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Validation or business rule error"},
    401: {"model": ErrorResponse, "description": "Missing, invalid or unauthorized token"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    500: {"model": ErrorResponse, "description": "Server Error"},
}

router = APIRouter(responses=_ERROR_RESPONSES)
router.include_router(users_router)
router.include_router(auth_router)
router.include_router(profile_router)
router.include_router(posts_router)
