"""Unit of Work protocol."""

from types import TracebackType
from typing import Optional, Protocol

from domain.repositories.post_repository import IPostRepository
from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.user_repository import IUserRepository


class IUnitOfWork(Protocol):
    """A transaction spanning the user, profile and post stores.

    Repositories are only usable inside ``async with``. Nothing is persisted
    unless ``commit()`` is awaited before the block ends.
    """

    users: IUserRepository
    profiles: IProfileRepository
    posts: IPostRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def __aenter__(self) -> "IUnitOfWork": ...

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None: ...
