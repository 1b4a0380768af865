"""Profile service layer with business logic."""

from collections.abc import Callable
from dataclasses import replace
from typing import Any
from uuid import UUID

import structlog

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileNotFoundError,
    UserNotFoundError,
)
from domain.entities.profile import (
    Education,
    Experience,
    Profile,
    ProfileWithOwner,
    SocialLinks,
)
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

# Scalar profile fields a user may set through the upsert operation
_PROFILE_FIELDS = (
    "headline",
    "company",
    "website",
    "location",
    "bio",
    "skills",
    "github_username",
)


class ProfileService:
    """Service layer for Profile business logic.

    Every mutation loads the profile document, changes it in memory and
    writes the whole document back. There is no row lock, so two concurrent
    edits of the same profile can overwrite each other.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_for_user(self, user_id: UUID) -> ProfileWithOwner:
        """Get the authenticated user's own profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_for_user(user_id)
            if not profile:
                raise ProfileNotFoundError(
                    str(user_id), message="There is no profile for this user"
                )
            return await self._with_owner(uow, profile)

    async def get_by_user_id(self, user_id: UUID) -> ProfileWithOwner:
        """Get any user's profile by the owner's ID."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_for_user(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            return await self._with_owner(uow, profile)

    async def get_all(self) -> list[ProfileWithOwner]:
        """Get all profiles with their owners' display fields."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.get_all()
            owners = await uow.users.get_many([p.user_id for p in profiles])

            result = []
            for profile in profiles:
                owner = owners.get(profile.user_id)
                result.append(
                    ProfileWithOwner(
                        profile=profile,
                        name=owner.name if owner else None,
                        avatar=owner.avatar if owner else None,
                    )
                )
            return result

    async def upsert(self, user_id: UUID, fields: dict[str, Any]) -> ProfileWithOwner:
        """Create the user's profile, or update the fields given if it exists.

        Fields absent from ``fields`` keep their stored value on update.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            profile = await uow.profiles.get_for_user(user_id)
            if profile:
                self._apply_fields(profile, fields)
                profile.touch()
                saved = await uow.profiles.update(profile)
                logger.info("profile_updated", user_id=str(user_id))
            else:
                profile = Profile(user_id=user_id, headline=fields["headline"])
                self._apply_fields(profile, fields)
                saved = await uow.profiles.create(profile)
                logger.info("profile_created", user_id=str(user_id))

            await uow.commit()
            return ProfileWithOwner(profile=saved, name=user.name, avatar=user.avatar)

    async def delete_account(self, user_id: UUID) -> None:
        """Delete the user's posts, profile and the user record itself."""
        async with self._uow_factory() as uow:
            removed_posts = await uow.posts.delete_all_for_user(user_id)
            await uow.profiles.delete_for_user(user_id)
            deleted = await uow.users.delete(user_id)
            if not deleted:
                raise UserNotFoundError(str(user_id))
            await uow.commit()

        logger.info(
            "account_deleted",
            user_id=str(user_id),
            removed_posts=removed_posts,
        )

    async def add_experience(
        self, user_id: UUID, fields: dict[str, Any]
    ) -> ProfileWithOwner:
        """Prepend a new experience entry to the user's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_experience(Experience(**fields))
            return await self._save(uow, profile)

    async def update_experience(
        self, user_id: UUID, experience_id: UUID, fields: dict[str, Any]
    ) -> ProfileWithOwner:
        """Replace an experience entry in place, keeping its id and position."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            existing = profile.find_experience(experience_id)
            if not existing:
                raise ExperienceNotFoundError(str(experience_id))
            profile.replace_experience(replace(existing, **fields))
            return await self._save(uow, profile)

    async def remove_experience(
        self, user_id: UUID, experience_id: UUID
    ) -> ProfileWithOwner:
        """Remove an experience entry by id."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            if not profile.remove_experience(experience_id):
                raise ExperienceNotFoundError(str(experience_id))
            return await self._save(uow, profile)

    async def add_education(
        self, user_id: UUID, fields: dict[str, Any]
    ) -> ProfileWithOwner:
        """Prepend a new education entry to the user's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_education(Education(**fields))
            return await self._save(uow, profile)

    async def update_education(
        self, user_id: UUID, education_id: UUID, fields: dict[str, Any]
    ) -> ProfileWithOwner:
        """Replace an education entry in place, keeping its id and position."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            existing = profile.find_education(education_id)
            if not existing:
                raise EducationNotFoundError(str(education_id))
            profile.replace_education(replace(existing, **fields))
            return await self._save(uow, profile)

    async def remove_education(
        self, user_id: UUID, education_id: UUID
    ) -> ProfileWithOwner:
        """Remove an education entry by id."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            if not profile.remove_education(education_id):
                raise EducationNotFoundError(str(education_id))
            return await self._save(uow, profile)

    async def _require_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_for_user(user_id)
        if not profile:
            raise ProfileNotFoundError(
                str(user_id), message="There is no profile for this user"
            )
        return profile

    async def _save(self, uow: IUnitOfWork, profile: Profile) -> ProfileWithOwner:
        saved = await uow.profiles.update(profile)
        await uow.commit()
        return await self._with_owner(uow, saved)

    async def _with_owner(self, uow: IUnitOfWork, profile: Profile) -> ProfileWithOwner:
        owner = await uow.users.get(profile.user_id)
        return ProfileWithOwner(
            profile=profile,
            name=owner.name if owner else None,
            avatar=owner.avatar if owner else None,
        )

    @staticmethod
    def _apply_fields(profile: Profile, fields: dict[str, Any]) -> None:
        for name in _PROFILE_FIELDS:
            if name in fields:
                setattr(profile, name, fields[name])
        if fields.get("social") is not None:
            merged = {**vars(profile.social), **fields["social"]}
            profile.social = SocialLinks(**merged)
