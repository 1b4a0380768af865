"""Unit tests for ProfileService."""

from datetime import date
from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileNotFoundError,
    UserNotFoundError,
)
from domain.entities.profile import Education, Experience, Profile, SocialLinks
from domain.entities.user import User
from domain.services.profile_service import ProfileService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> ProfileService:
    return ProfileService(lambda: uow)


@pytest.fixture
def profile(user_id: UUID) -> Profile:
    return Profile(user_id=user_id, headline="Developer", skills=["python"])


def _echo(uow: FakeUnitOfWork) -> None:
    uow.profiles.create.side_effect = lambda p: p
    uow.profiles.update.side_effect = lambda p: p


class TestGetProfile:
    async def test_get_for_user_attaches_owner(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User, profile: Profile
    ):
        uow.profiles.get_for_user.return_value = profile
        uow.users.get.return_value = user

        result = await service.get_for_user(user.id)

        assert result.profile is profile
        assert result.name == "Ada Lovelace"
        assert result.avatar == user.avatar

    async def test_get_for_user_without_profile(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get_for_user.return_value = None

        with pytest.raises(ProfileNotFoundError) as exc_info:
            await service.get_for_user(user_id)

        assert exc_info.value.message == "There is no profile for this user"

    async def test_get_by_user_id_missing(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get_for_user.return_value = None

        with pytest.raises(ProfileNotFoundError) as exc_info:
            await service.get_by_user_id(user_id)

        assert exc_info.value.message == "Profile not found"

    async def test_get_all_tolerates_missing_owner(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User, profile: Profile
    ):
        orphan = Profile(user_id=uuid4(), headline="Ghost")
        uow.profiles.get_all.return_value = [profile, orphan]
        uow.users.get_many.return_value = {user.id: user}

        result = await service.get_all()

        assert [r.name for r in result] == ["Ada Lovelace", None]


class TestUpsert:
    async def test_creates_profile_when_absent(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User
    ):
        uow.users.get.return_value = user
        uow.profiles.get_for_user.return_value = None
        _echo(uow)

        result = await service.upsert(
            user.id,
            {"headline": "Developer", "skills": ["python", "sql"], "social": {"twitter": "t"}},
        )

        created: Profile = uow.profiles.create.call_args.args[0]
        assert created.user_id == user.id
        assert created.skills == ["python", "sql"]
        assert created.social.twitter == "t"
        assert result.profile is created
        assert uow.committed

    async def test_updates_only_given_fields(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User, profile: Profile
    ):
        profile.company = "Analytical Engines Ltd"
        profile.social = SocialLinks(twitter="t", youtube="y")
        uow.users.get.return_value = user
        uow.profiles.get_for_user.return_value = profile
        _echo(uow)

        await service.upsert(user.id, {"headline": "Mathematician", "social": {"youtube": "y2"}})

        updated: Profile = uow.profiles.update.call_args.args[0]
        assert updated.id == profile.id
        assert updated.headline == "Mathematician"
        assert updated.company == "Analytical Engines Ltd"
        assert updated.social == SocialLinks(twitter="t", youtube="y2")
        uow.profiles.create.assert_not_awaited()

    async def test_unknown_user(self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID):
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.upsert(user_id, {"headline": "Developer"})


class TestDeleteAccount:
    async def test_removes_posts_profile_and_user(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.posts.delete_all_for_user.return_value = 3
        uow.users.delete.return_value = True

        await service.delete_account(user_id)

        uow.posts.delete_all_for_user.assert_awaited_once_with(user_id)
        uow.profiles.delete_for_user.assert_awaited_once_with(user_id)
        uow.users.delete.assert_awaited_once_with(user_id)
        assert uow.committed

    async def test_missing_user_is_not_committed(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.posts.delete_all_for_user.return_value = 0
        uow.users.delete.return_value = False

        with pytest.raises(UserNotFoundError):
            await service.delete_account(user_id)

        assert not uow.committed


class TestExperience:
    async def test_add_goes_to_head(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User, profile: Profile
    ):
        older = Experience(title="Clerk", company="A", from_date=date(2010, 1, 1))
        profile.experience = [older]
        uow.profiles.get_for_user.return_value = profile
        uow.users.get.return_value = user
        _echo(uow)

        result = await service.add_experience(
            user.id, {"title": "Engineer", "company": "B", "from_date": date(2020, 1, 1)}
        )

        assert [e.title for e in result.profile.experience] == ["Engineer", "Clerk"]
        assert uow.committed

    async def test_update_keeps_id_and_position(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User, profile: Profile
    ):
        first = Experience(title="Engineer", company="B", from_date=date(2020, 1, 1))
        second = Experience(title="Clerk", company="A", from_date=date(2010, 1, 1))
        profile.experience = [first, second]
        uow.profiles.get_for_user.return_value = profile
        uow.users.get.return_value = user
        _echo(uow)

        result = await service.update_experience(
            user.id,
            second.id,
            {"title": "Senior Clerk", "company": "A", "from_date": date(2010, 1, 1)},
        )

        assert [e.title for e in result.profile.experience] == ["Engineer", "Senior Clerk"]
        assert result.profile.experience[1].id == second.id

    async def test_remove_by_id(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User, profile: Profile
    ):
        entry = Experience(title="Clerk", company="A", from_date=date(2010, 1, 1))
        profile.experience = [entry]
        uow.profiles.get_for_user.return_value = profile
        uow.users.get.return_value = user
        _echo(uow)

        result = await service.remove_experience(user.id, entry.id)

        assert result.profile.experience == []

    async def test_remove_unknown_id(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User, profile: Profile
    ):
        uow.profiles.get_for_user.return_value = profile

        with pytest.raises(ExperienceNotFoundError):
            await service.remove_experience(user.id, uuid4())

        uow.profiles.update.assert_not_awaited()

    async def test_requires_profile(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get_for_user.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.add_experience(
                user_id, {"title": "Engineer", "company": "B", "from_date": date(2020, 1, 1)}
            )


class TestEducation:
    async def test_add_goes_to_head(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User, profile: Profile
    ):
        profile.education = [
            Education(school="Old", degree="BA", field_of_study="Maths", from_date=date(2000, 1, 1))
        ]
        uow.profiles.get_for_user.return_value = profile
        uow.users.get.return_value = user
        _echo(uow)

        result = await service.add_education(
            user.id,
            {
                "school": "New",
                "degree": "MSc",
                "field_of_study": "CS",
                "from_date": date(2005, 1, 1),
            },
        )

        assert [e.school for e in result.profile.education] == ["New", "Old"]

    async def test_update_unknown_id(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User, profile: Profile
    ):
        uow.profiles.get_for_user.return_value = profile

        with pytest.raises(EducationNotFoundError):
            await service.update_education(
                user.id,
                uuid4(),
                {
                    "school": "New",
                    "degree": "MSc",
                    "field_of_study": "CS",
                    "from_date": date(2005, 1, 1),
                },
            )

    async def test_remove_unknown_id(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User, profile: Profile
    ):
        uow.profiles.get_for_user.return_value = profile

        with pytest.raises(EducationNotFoundError):
            await service.remove_education(user.id, uuid4())
