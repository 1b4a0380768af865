"""Authentication provider protocol."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol
from uuid import UUID


@dataclass(frozen=True)
class TokenUser:
    """The identity carried by a verified token.

    Only the user id is trusted; name, email and avatar are always read
    from the database.
    """

    id: UUID
    expires_at: Optional[datetime] = None


class IAuthProvider(Protocol):
    """Issues and verifies the tokens sent in the ``x-auth-token`` header."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Return the token's user, or None if it is forged, expired or malformed."""
        ...

    def create_token(self, user: TokenUser) -> str:
        """Sign a new token for ``user``."""
        ...
