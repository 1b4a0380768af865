"""Profile domain entities."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4


@dataclass
class SocialLinks:
    """Links to the user's social network accounts."""

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


@dataclass
class Experience:
    """A single job held by the profile owner."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class Education:
    """A single school attended by the profile owner."""

    school: str
    degree: str
    field_of_study: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class Profile:
    """Domain entity for a user's profile document.

    ``experience`` and ``education`` are ordered most recent first: new
    entries go to the head of the list.
    """

    user_id: UUID
    headline: str
    id: UUID = field(default_factory=uuid4)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    skills: list[str] = field(default_factory=list)
    github_username: str | None = None
    social: SocialLinks = field(default_factory=SocialLinks)
    experience: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def touch(self) -> None:
        """Mark the profile as modified now."""
        self.updated_at = datetime.utcnow()

    def add_experience(self, entry: Experience) -> None:
        self.experience.insert(0, entry)
        self.touch()

    def find_experience(self, experience_id: UUID) -> Experience | None:
        return next((e for e in self.experience if e.id == experience_id), None)

    def remove_experience(self, experience_id: UUID) -> bool:
        """Remove an experience entry by id. Returns False if absent."""
        entry = self.find_experience(experience_id)
        if entry is None:
            return False
        self.experience.remove(entry)
        self.touch()
        return True

    def replace_experience(self, entry: Experience) -> bool:
        """Swap in a new version of an experience entry, keeping its position."""
        for index, existing in enumerate(self.experience):
            if existing.id == entry.id:
                self.experience[index] = entry
                self.touch()
                return True
        return False

    def add_education(self, entry: Education) -> None:
        self.education.insert(0, entry)
        self.touch()

    def find_education(self, education_id: UUID) -> Education | None:
        return next((e for e in self.education if e.id == education_id), None)

    def remove_education(self, education_id: UUID) -> bool:
        """Remove an education entry by id. Returns False if absent."""
        entry = self.find_education(education_id)
        if entry is None:
            return False
        self.education.remove(entry)
        self.touch()
        return True

    def replace_education(self, entry: Education) -> bool:
        """Swap in a new version of an education entry, keeping its position."""
        for index, existing in enumerate(self.education):
            if existing.id == entry.id:
                self.education[index] = entry
                self.touch()
                return True
        return False


@dataclass(frozen=True, slots=True)
class ProfileWithOwner:
    """Read-only value object: a Profile bundled with its owner's display fields."""

    profile: Profile
    name: str | None
    avatar: str | None
