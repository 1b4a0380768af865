"""JWT authentication provider implementation.

Tokens are signed with a shared secret (HS256 by default) and carry the
user id twice: as the standard ``sub`` claim and nested under ``user``.

Payload structure:
    {
        "user": { "id": "user-uuid" },
        "sub": "user-uuid",
        "iat": 1234567800,
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)


class JWTAuthProvider:
    """JWT-based authentication provider.

    Verification is stateless: no database lookup is made, so a token stays
    valid until it expires even if the user is deleted.
    """

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_seconds: int = settings.jwt_expire_seconds,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_seconds = expire_seconds

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT and extract the user it was issued for.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if the signature is wrong, the token is
            expired, or the payload carries no usable user id
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except JWTError as e:
            logger.debug("Rejected token: %s", e)
            return None

        user_claim = payload.get("user") or {}
        user_id = user_claim.get("id") if isinstance(user_claim, dict) else None
        user_id = user_id or payload.get("sub")
        if not user_id:
            return None

        try:
            parsed_id = UUID(str(user_id))
        except ValueError:
            return None

        exp = payload.get("exp")
        expires_at = None
        if isinstance(exp, (int, float)):
            expires_at = datetime.fromtimestamp(exp, timezone.utc).replace(tzinfo=None)
        return TokenUser(id=parsed_id, expires_at=expires_at)

    def create_token(self, user: TokenUser) -> str:
        """
        Create a signed JWT for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated JWT string
        """
        now = datetime.utcnow()
        expire = now + timedelta(seconds=self._expire_seconds)

        payload: dict = {
            "user": {"id": str(user.id)},
            "sub": str(user.id),
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
