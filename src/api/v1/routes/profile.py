"""Profile API routes."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_github_client, get_profile_service
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    ProfileResponse,
    ProfileUpsert,
)
from core.rate_limit import limiter
from domain.services.profile_service import ProfileService
from infrastructure.github.client import GitHubClient

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get my profile",
    responses={404: {"description": "No profile for this user"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the authenticated user's profile."""
    return ProfileResponse.from_entity(await service.get_for_user(user.id))


@router.post(
    "",
    response_model=ProfileResponse,
    summary="Create or update my profile",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Create the caller's profile, or update the fields sent if it exists."""
    item = await service.upsert(user.id, body.model_dump(exclude_unset=True))
    return ProfileResponse.from_entity(item)


@router.get(
    "",
    response_model=list[ProfileResponse],
    summary="List all profiles",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> list[ProfileResponse]:
    """Get every profile. Public."""
    return [ProfileResponse.from_entity(item) for item in await service.get_all()]


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    summary="Get a profile by user ID",
    responses={404: {"description": "Profile not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: UUID,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the profile of any user. Public."""
    return ProfileResponse.from_entity(await service.get_by_user_id(user_id))


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete my account",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the caller's posts, profile and user record."""
    await service.delete_account(user.id)
    return MessageResponse(msg="User deleted")


@router.post(
    "/experience",
    response_model=ProfileResponse,
    summary="Add an experience entry",
    responses={404: {"description": "No profile for this user"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an experience entry at the top of the caller's profile."""
    item = await service.add_experience(user.id, body.model_dump())
    return ProfileResponse.from_entity(item)


@router.put(
    "/experience/{exp_id}",
    response_model=ProfileResponse,
    summary="Update an experience entry",
    responses={404: {"description": "Profile or experience not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_experience(
    request: Request,
    exp_id: UUID,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Replace an experience entry, keeping its id and position."""
    item = await service.update_experience(user.id, exp_id, body.model_dump())
    return ProfileResponse.from_entity(item)


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileResponse,
    summary="Remove an experience entry",
    responses={404: {"description": "Profile or experience not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    exp_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an experience entry from the caller's profile."""
    return ProfileResponse.from_entity(await service.remove_experience(user.id, exp_id))


@router.post(
    "/education",
    response_model=ProfileResponse,
    summary="Add an education entry",
    responses={404: {"description": "No profile for this user"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an education entry at the top of the caller's profile."""
    item = await service.add_education(user.id, body.model_dump())
    return ProfileResponse.from_entity(item)


@router.put(
    "/education/{edu_id}",
    response_model=ProfileResponse,
    summary="Update an education entry",
    responses={404: {"description": "Profile or education not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_education(
    request: Request,
    edu_id: UUID,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Replace an education entry, keeping its id and position."""
    item = await service.update_education(user.id, edu_id, body.model_dump())
    return ProfileResponse.from_entity(item)


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileResponse,
    summary="Remove an education entry",
    responses={404: {"description": "Profile or education not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def remove_education(
    request: Request,
    edu_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an education entry from the caller's profile."""
    return ProfileResponse.from_entity(await service.remove_education(user.id, edu_id))


@router.get(
    "/github/{username}",
    summary="List a user's GitHub repositories",
    responses={404: {"description": "No Github profile found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_github_repos(
    request: Request,
    username: str = Path(..., min_length=1, max_length=39, pattern=r"^[A-Za-z0-9-]+$"),
    client: GitHubClient = Depends(get_github_client),
) -> Any:
    """Relay the GitHub repository list for a username. Public."""
    return await client.list_repositories(username)
