"""Post API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_post_service
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.post import (
    CommentCreate,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
)
from core.rate_limit import limiter
from domain.services.post_service import PostService

router = APIRouter(prefix="/post", tags=["posts"])


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Create a post as the authenticated user."""
    post = await service.create(user.id, body.text)
    return PostResponse.model_validate(post)


@router.get(
    "",
    response_model=list[PostResponse],
    summary="List posts",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    """Get all posts, newest first."""
    return [PostResponse.model_validate(p) for p in await service.get_all()]


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Get a single post by ID."""
    return PostResponse.model_validate(await service.get_by_id(post_id))


@router.put(
    "/edit-post/{post_id}",
    response_model=PostResponse,
    summary="Edit a post",
    responses={
        401: {"description": "Not the post owner"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def edit_post(
    request: Request,
    post_id: UUID,
    body: PostUpdate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Replace the text of one of the caller's posts."""
    post = await service.update_text(post_id, user.id, body.text)
    return PostResponse.model_validate(post)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={
        401: {"description": "Not the post owner"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    """Delete one of the caller's posts."""
    await service.delete(post_id, user.id)
    return MessageResponse(msg="Post removed")


@router.put(
    "/like/{post_id}",
    response_model=list[LikeResponse],
    summary="Like a post",
    responses={
        400: {"description": "Post already liked"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    """Like a post. Returns the post's likes."""
    likes = await service.like(post_id, user.id)
    return [LikeResponse.model_validate(like) for like in likes]


@router.put(
    "/unlike/{post_id}",
    response_model=list[LikeResponse],
    summary="Unlike a post",
    responses={
        400: {"description": "Post has not yet been liked"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def unlike_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    """Remove the caller's like. Returns the post's likes."""
    likes = await service.unlike(post_id, user.id)
    return [LikeResponse.model_validate(like) for like in likes]


@router.post(
    "/comment/{post_id}",
    response_model=list[CommentResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: UUID,
    body: CommentCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    """Add a comment. Returns the post's comments, newest first."""
    comments = await service.add_comment(post_id, user.id, body.text)
    return [CommentResponse.model_validate(c) for c in comments]


@router.put(
    "/edit-comment/{post_id}/{comment_id}",
    response_model=list[CommentResponse],
    summary="Edit a comment",
    responses={
        401: {"description": "Not the comment author"},
        404: {"description": "Post or comment not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def edit_comment(
    request: Request,
    post_id: UUID,
    comment_id: UUID,
    body: CommentCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    """Replace the text of one of the caller's comments."""
    comments = await service.edit_comment(post_id, comment_id, user.id, body.text)
    return [CommentResponse.model_validate(c) for c in comments]


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=list[CommentResponse],
    summary="Delete a comment",
    responses={
        401: {"description": "Neither the comment author nor the post owner"},
        404: {"description": "Post or comment not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_comment(
    request: Request,
    post_id: UUID,
    comment_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    """Accept a comment removal. Returns the post's comments as stored."""
    comments = await service.delete_comment(post_id, comment_id, user.id)
    return [CommentResponse.model_validate(c) for c in comments]
