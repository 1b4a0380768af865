"""Unit tests for PostService."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    PostAlreadyLikedError,
    PostNotFoundError,
    PostNotLikedError,
    UserNotFoundError,
)
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.services.post_service import PostService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> PostService:
    uow.posts.create.side_effect = lambda p: p
    uow.posts.update.side_effect = lambda p: p
    return PostService(lambda: uow)


@pytest.fixture
def post(user_id: UUID) -> Post:
    return Post(user_id=user_id, text="hello", name="Ada Lovelace")


class TestCreate:
    async def test_snapshots_author(self, service: PostService, uow: FakeUnitOfWork, user: User):
        uow.users.get.return_value = user

        post = await service.create(user.id, "hello")

        assert post.user_id == user.id
        assert post.name == user.name
        assert post.avatar == user.avatar
        assert post.likes == []
        assert post.comments == []
        assert uow.committed

    async def test_unknown_author(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.create(user_id, "hello")


class TestReadAndDelete:
    async def test_get_missing_post(self, service: PostService, uow: FakeUnitOfWork):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError) as exc_info:
            await service.get_by_id(uuid4())

        assert exc_info.value.message == "Post not found"

    async def test_owner_can_delete(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        uow.posts.get.return_value = post

        await service.delete(post.id, user_id)

        uow.posts.delete.assert_awaited_once_with(post.id)
        assert uow.committed

    async def test_non_owner_cannot_delete(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, other_user_id: UUID
    ):
        uow.posts.get.return_value = post

        with pytest.raises(AuthorizationError) as exc_info:
            await service.delete(post.id, other_user_id)

        assert exc_info.value.status_code == 401
        uow.posts.delete.assert_not_awaited()

    async def test_non_owner_cannot_edit(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, other_user_id: UUID
    ):
        uow.posts.get.return_value = post

        with pytest.raises(AuthorizationError):
            await service.update_text(post.id, other_user_id, "changed")

        assert post.text == "hello"

    async def test_owner_can_edit(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        uow.posts.get.return_value = post

        updated = await service.update_text(post.id, user_id, "changed")

        assert updated.text == "changed"


class TestLikes:
    async def test_like_prepends(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, other_user_id: UUID
    ):
        earlier = Like(user_id=uuid4())
        post.likes = [earlier]
        uow.posts.get.return_value = post

        likes = await service.like(post.id, other_user_id)

        assert [like.user_id for like in likes] == [other_user_id, earlier.user_id]

    async def test_like_twice_is_rejected(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        post.likes = [Like(user_id=user_id)]
        uow.posts.get.return_value = post

        with pytest.raises(PostAlreadyLikedError) as exc_info:
            await service.like(post.id, user_id)

        assert exc_info.value.message == "Post already liked"
        assert len(post.likes) == 1

    async def test_unlike_removes_only_callers_like(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        other = Like(user_id=uuid4())
        post.likes = [Like(user_id=user_id), other]
        uow.posts.get.return_value = post

        likes = await service.unlike(post.id, user_id)

        assert likes == [other]

    async def test_unlike_without_like(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        uow.posts.get.return_value = post

        with pytest.raises(PostNotLikedError) as exc_info:
            await service.unlike(post.id, user_id)

        assert exc_info.value.message == "Post has not yet been liked"


class TestComments:
    async def test_add_comment_prepends_with_author_snapshot(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user: User
    ):
        older = Comment(user_id=uuid4(), text="first", name="Grace")
        post.comments = [older]
        uow.users.get.return_value = user
        uow.posts.get.return_value = post

        comments = await service.add_comment(post.id, user.id, "second")

        assert [c.text for c in comments] == ["second", "first"]
        assert comments[0].name == user.name
        assert comments[0].avatar == user.avatar

    async def test_author_can_edit_comment(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, other_user_id: UUID
    ):
        comment = Comment(user_id=other_user_id, text="typo", name="Grace")
        post.comments = [comment]
        uow.posts.get.return_value = post

        comments = await service.edit_comment(post.id, comment.id, other_user_id, "fixed")

        assert comments[0].text == "fixed"
        assert comments[0].id == comment.id

    async def test_post_owner_cannot_edit_others_comment(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        post: Post,
        user_id: UUID,
        other_user_id: UUID,
    ):
        comment = Comment(user_id=other_user_id, text="mine", name="Grace")
        post.comments = [comment]
        uow.posts.get.return_value = post

        with pytest.raises(AuthorizationError):
            await service.edit_comment(post.id, comment.id, user_id, "hijacked")

    async def test_post_owner_delete_leaves_comments_unchanged(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        post: Post,
        user_id: UUID,
        other_user_id: UUID,
    ):
        comment = Comment(user_id=other_user_id, text="spam", name="Grace")
        keep = Comment(user_id=user_id, text="keep", name="Ada")
        post.comments = [comment, keep]
        uow.posts.get.return_value = post

        comments = await service.delete_comment(post.id, comment.id, user_id)

        assert comments == [comment, keep]
        uow.posts.update.assert_not_awaited()
        assert uow.committed is False

    async def test_stranger_cannot_delete_comment(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, other_user_id: UUID
    ):
        comment = Comment(user_id=other_user_id, text="mine", name="Grace")
        post.comments = [comment]
        uow.posts.get.return_value = post

        with pytest.raises(AuthorizationError) as exc_info:
            await service.delete_comment(post.id, comment.id, uuid4())

        assert exc_info.value.message == "User not authorized"
        assert post.comments == [comment]

    async def test_unknown_comment(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        uow.posts.get.return_value = post

        with pytest.raises(CommentNotFoundError) as exc_info:
            await service.delete_comment(post.id, uuid4(), user_id)

        assert exc_info.value.message == "Comment does not exist"
