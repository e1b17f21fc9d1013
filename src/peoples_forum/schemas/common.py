"""Shared Pydantic helpers for common API elements."""
from __future__ import annotations

import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str) -> str:
    """Trim and lower-case an email address, rejecting obvious garbage."""
    value = value.strip().lower()
    if not _EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email address")
    return value


Email = Annotated[str, Field(max_length=320), AfterValidator(normalize_email)]


class Message(BaseModel):
    """Plain acknowledgement returned by write endpoints."""

    message: str = Field(..., description="Human readable status")
