"""User service layer: registration, login and account lookup."""

from collections.abc import Callable
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from core.security import (
    dummy_password_hash,
    get_password_hash,
    gravatar_url,
    verify_password,
)
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IAuthProvider, TokenUser

logger = structlog.get_logger()


class UserService:
    """Service layer for User business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        auth_provider: IAuthProvider,
    ) -> None:
        self._uow_factory = uow_factory
        self._auth = auth_provider

    async def register(self, name: str, email: str, password: str) -> str:
        """Create a user account and return a token for it.

        Raises:
            UserAlreadyExistsError: If the email is already registered
        """
        email = email.strip().lower()
        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email):
                raise UserAlreadyExistsError(email)

            user = User(
                name=name,
                email=email,
                password=get_password_hash(password),
                avatar=gravatar_url(email),
            )

            try:
                created = await uow.users.create(user)
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                # Only a unique-constraint violation means a concurrent
                # registration won the race; anything else is a real bug.
                orig = str(exc.orig).lower() if exc.orig else ""
                if "unique" in orig or "duplicate" in orig:
                    raise UserAlreadyExistsError(email) from exc
                raise

        logger.info("user_registered", user_id=str(created.id))
        return self._auth.create_token(TokenUser(id=created.id))

    async def authenticate(self, email: str, password: str) -> str:
        """Check credentials and return a fresh token.

        Raises:
            InvalidCredentialsError: For an unknown email or a wrong password
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email.strip().lower())

        stored_hash = user.password if user is not None else dummy_password_hash()
        password_ok = verify_password(password, stored_hash)
        if user is None or not password_ok:
            logger.info("login_failed")
            raise InvalidCredentialsError()

        return self._auth.create_token(TokenUser(id=user.id))

    async def get_by_id(self, user_id: UUID) -> User:
        """Get a user by ID."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user
