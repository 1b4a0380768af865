"""Post service layer with business logic."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    PostAlreadyLikedError,
    PostNotFoundError,
    PostNotLikedError,
    UserNotFoundError,
)
from domain.entities.post import Comment, Like, Post
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class PostService:
    """Service layer for the post feed.

    Likes and comments live inside the post document. Each mutation is a
    load, modify, save cycle on the whole post without locking, so concurrent
    writers to the same post can lose each other's change.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post, snapshotting the author's name and avatar."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            post = Post(
                user_id=user_id,
                text=text,
                name=user.name,
                avatar=user.avatar,
            )
            created = await uow.posts.create(post)
            await uow.commit()

        logger.info("post_created", post_id=str(created.id), user_id=str(user_id))
        return created

    async def get_all(self) -> list[Post]:
        """Get all posts, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()  # type: ignore[no-any-return]

    async def get_by_id(self, post_id: UUID) -> Post:
        """Get a single post."""
        async with self._uow_factory() as uow:
            return await self._require_post(uow, post_id)

    async def update_text(self, post_id: UUID, user_id: UUID, text: str) -> Post:
        """Replace the text of a post. Only the owner may edit."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if post.user_id != user_id:
                raise AuthorizationError()

            post.text = text
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated

    async def delete(self, post_id: UUID, user_id: UUID) -> None:
        """Delete a post. Only the owner may delete."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if post.user_id != user_id:
                logger.warning(
                    "post_delete_denied", post_id=str(post_id), user_id=str(user_id)
                )
                raise AuthorizationError()

            await uow.posts.delete(post_id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post_id))

    async def like(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Add the user's like. A user may like a post at most once."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if post.is_liked_by(user_id):
                raise PostAlreadyLikedError(str(post_id))

            post.add_like(user_id)
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.likes

    async def unlike(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Remove the user's like."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if not post.remove_like(user_id):
                raise PostNotLikedError(str(post_id))

            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.likes

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> list[Comment]:
        """Prepend a comment, snapshotting the author's name and avatar."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            post = await self._require_post(uow, post_id)

            post.add_comment(
                Comment(
                    user_id=user_id,
                    text=text,
                    name=user.name,
                    avatar=user.avatar,
                )
            )
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.comments

    async def edit_comment(
        self, post_id: UUID, comment_id: UUID, user_id: UUID, text: str
    ) -> list[Comment]:
        """Replace the text of a comment. Only its author may edit."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            comment = post.find_comment(comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))
            if comment.user_id != user_id:
                raise AuthorizationError()

            comment.text = text
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.comments

    async def delete_comment(
        self, post_id: UUID, comment_id: UUID, user_id: UUID
    ) -> list[Comment]:
        """Check a comment removal. Allowed for the comment's author or the post's owner.

        Removal is a no-op kept for client compatibility: the comment list is
        returned as stored and nothing is written.
        """
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            comment = post.find_comment(comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))
            if user_id not in (comment.user_id, post.user_id):
                raise AuthorizationError()

        logger.info(
            "comment_delete_ignored", post_id=str(post_id), comment_id=str(comment_id)
        )
        return post.comments

    async def _require_post(self, uow: IUnitOfWork, post_id: UUID) -> Post:
        post = await uow.posts.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post
