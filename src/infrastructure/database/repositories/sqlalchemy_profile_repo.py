"""SQLAlchemy implementation of Profile repository."""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Education, Experience, Profile, SocialLinks
from infrastructure.database.models import ProfileModel


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Profile]:
        """Get every profile."""
        stmt = select(ProfileModel).order_by(ProfileModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Write the whole profile document back."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        model.headline = profile.headline
        model.company = profile.company
        model.website = profile.website
        model.location = profile.location
        model.bio = profile.bio
        model.skills = list(profile.skills)
        model.github_username = profile.github_username
        model.social = self._social_to_dict(profile.social)
        # Fresh lists so SQLAlchemy sees the JSON columns as changed
        model.experience = [self._experience_to_dict(e) for e in profile.experience]
        model.education = [self._education_to_dict(e) for e in profile.education]
        model.updated_at = profile.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete_for_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user."""
        stmt = delete(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            headline=model.headline,
            company=model.company,
            website=model.website,
            location=model.location,
            bio=model.bio,
            skills=list(model.skills or []),
            github_username=model.github_username,
            social=SocialLinks(**(model.social or {})),
            experience=[self._experience_from_dict(d) for d in model.experience or []],
            education=[self._education_from_dict(d) for d in model.education or []],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            headline=entity.headline,
            company=entity.company,
            website=entity.website,
            location=entity.location,
            bio=entity.bio,
            skills=list(entity.skills),
            github_username=entity.github_username,
            social=self._social_to_dict(entity.social),
            experience=[self._experience_to_dict(e) for e in entity.experience],
            education=[self._education_to_dict(e) for e in entity.education],
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def _social_to_dict(social: SocialLinks) -> dict[str, Any]:
        return {k: v for k, v in vars(social).items() if v is not None}

    @staticmethod
    def _experience_to_dict(entry: Experience) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "title": entry.title,
            "company": entry.company,
            "location": entry.location,
            "from_date": entry.from_date.isoformat(),
            "to_date": entry.to_date.isoformat() if entry.to_date else None,
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _experience_from_dict(data: dict[str, Any]) -> Experience:
        return Experience(
            id=UUID(data["id"]),
            title=data["title"],
            company=data["company"],
            location=data.get("location"),
            from_date=date.fromisoformat(data["from_date"]),
            to_date=_date_or_none(data.get("to_date")),
            current=data.get("current", False),
            description=data.get("description"),
        )

    @staticmethod
    def _education_to_dict(entry: Education) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "school": entry.school,
            "degree": entry.degree,
            "field_of_study": entry.field_of_study,
            "from_date": entry.from_date.isoformat(),
            "to_date": entry.to_date.isoformat() if entry.to_date else None,
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _education_from_dict(data: dict[str, Any]) -> Education:
        return Education(
            id=UUID(data["id"]),
            school=data["school"],
            degree=data["degree"],
            field_of_study=data["field_of_study"],
            from_date=date.fromisoformat(data["from_date"]),
            to_date=_date_or_none(data.get("to_date")),
            current=data.get("current", False),
            description=data.get("description"),
        )
