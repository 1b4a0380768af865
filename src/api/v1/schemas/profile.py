"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from typing import Any, Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from domain.entities.profile import ProfileWithOwner


class SocialLinksSchema(BaseModel):
    """Social network links."""

    model_config = ConfigDict(from_attributes=True)

    youtube: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile."""

    headline: str = Field(..., max_length=255)
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = Field(None, max_length=2000)
    skills: list[str] = Field(default_factory=list)
    github_username: str | None = Field(None, max_length=100)
    social: SocialLinksSchema | None = None

    @field_validator("headline")
    @classmethod
    def validate_headline(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Headline is required")
        return v

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v: Any) -> Any:
        """Accept a comma-separated string as well as a list."""
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, list):
            return [s.strip() for s in v if isinstance(s, str) and s.strip()]
        return v


class _DatedEntry(BaseModel):
    from_date: date
    to_date: date | None = None
    current: bool = False
    description: str | None = Field(None, max_length=2000)

    @model_validator(mode="after")
    def check_dates(self) -> Self:
        if self.current and self.to_date is not None:
            raise ValueError("to_date must be empty for a current entry")
        if self.to_date is not None and self.to_date < self.from_date:
            raise ValueError("to_date cannot be before from_date")
        return self


class ExperienceCreate(_DatedEntry):
    """Schema for an experience entry."""

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)


class EducationCreate(_DatedEntry):
    """Schema for an education entry."""

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    field_of_study: str = Field(..., min_length=1, max_length=255)


class ExperienceResponse(BaseModel):
    """Schema for an experience entry response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date
    to_date: date | None = None
    current: bool
    description: str | None = None


class EducationResponse(BaseModel):
    """Schema for an education entry response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    school: str
    degree: str
    field_of_study: str
    from_date: date
    to_date: date | None = None
    current: bool
    description: str | None = None


class ProfileOwner(BaseModel):
    """The profile owner's current display fields."""

    id: UUID
    name: str | None = None
    avatar: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user": {
                    "id": "456e4567-e89b-12d3-a456-426614174000",
                    "name": "Ada Lovelace",
                    "avatar": "https://www.gravatar.com/avatar/abc?s=200&r=pg&d=mm",
                },
                "headline": "Developer",
                "skills": ["python", "sql"],
                "experience": [],
                "education": [],
            }
        },
    )

    id: UUID
    user: ProfileOwner
    headline: str
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    skills: list[str]
    github_username: str | None = None
    social: SocialLinksSchema
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, item: ProfileWithOwner) -> "ProfileResponse":
        profile = item.profile
        return cls(
            id=profile.id,
            user=ProfileOwner(id=profile.user_id, name=item.name, avatar=item.avatar),
            headline=profile.headline,
            company=profile.company,
            website=profile.website,
            location=profile.location,
            bio=profile.bio,
            skills=profile.skills,
            github_username=profile.github_username,
            social=SocialLinksSchema.model_validate(profile.social),
            experience=[ExperienceResponse.model_validate(e) for e in profile.experience],
            education=[EducationResponse.model_validate(e) for e in profile.education],
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
