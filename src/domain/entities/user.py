"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class User:
    """Domain entity for a registered user.

    ``password`` always holds the bcrypt hash, never the plaintext.
    """

    name: str
    email: str
    password: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Normalize email so uniqueness is case-insensitive."""
        self.email = self.email.strip().lower()
