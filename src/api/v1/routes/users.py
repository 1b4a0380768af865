"""User registration routes."""

from fastapi import APIRouter, Depends, Request, status

from api.v1.dependencies import get_user_service
from api.v1.schemas.user import TokenResponse, UserRegister
from core.rate_limit import limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Register a user",
    responses={
        200: {"description": "User registered, token issued"},
        400: {"description": "Validation failed or user already exists"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def register_user(
    request: Request,
    body: UserRegister,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Create an account and return a signed token for it."""
    token = await service.register(
        name=body.name,
        email=body.email,
        password=body.password,
    )
    return TokenResponse(token=token)
