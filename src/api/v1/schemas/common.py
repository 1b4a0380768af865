"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel


class ErrorItem(BaseModel):
    """One entry of the ``errors`` list in an error response."""

    msg: str
    param: str | None = None
    location: str | None = None


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None
    errors: list[ErrorItem] = []


class MessageResponse(BaseModel):
    """Simple message response."""

    msg: str
