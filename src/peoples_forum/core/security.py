"""Bearer credential issuance and verification built on python-jose."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from peoples_forum.core.errors import Unauthorized
from peoples_forum.core.settings import settings


class TokenClaims(BaseModel):
    """Claim set recovered from a verified access token."""

    email: str
    name: str | None = None
    exp: int


def create_access_token(
    email: str,
    *,
    name: str | None = None,
    issued_at: datetime | None = None,
) -> str:
    """Create a signed access token for the given identity.

    Args:
        email: Identity asserted by the client; becomes the ``sub`` claim.
        name: Optional display name carried along for convenience.
        issued_at: Issue time, defaults to now. The token expires
            ``settings.access_token_expire_minutes`` after it.

    Returns:
        Encoded JWT string.
    """
    issued = issued_at or datetime.now(UTC)
    to_encode: dict[str, Any] = {
        "sub": email,
        "email": email,
        "iat": issued,
        "exp": issued + timedelta(minutes=settings.access_token_expire_minutes),
    }
    if name:
        to_encode["name"] = name
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> TokenClaims:
    """Verify signature and expiry of ``token`` and return its claims.

    Raises:
        Unauthorized: If the token is malformed, badly signed, expired or
            carries no email claim.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise Unauthorized() from err

    payload.setdefault("email", payload.get("sub"))
    try:
        return TokenClaims.model_validate(payload)
    except ValidationError as err:
        raise Unauthorized() from err
