"""Shared API dependencies for authentication and authorization.

Protected routes compose two stages explicitly: ``get_current_claims``
authenticates the bearer token without touching the store, then
``require_admin`` resolves the verified email to a role.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from peoples_forum.core.errors import Forbidden, Unauthorized
from peoples_forum.core.security import TokenClaims, decode_access_token
from peoples_forum.db.session import get_db
from peoples_forum.models import User
from peoples_forum.repositories.store import StoreAdapter
from peoples_forum.services.user_service import get_user_by_email

# HTTP Bearer scheme; a missing header is reported by get_current_claims itself.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_store(db: SessionDep) -> StoreAdapter:
    """Wrap the request's database session in a store adapter."""
    return StoreAdapter(db)


StoreDep = Annotated[StoreAdapter, Depends(get_store)]


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenClaims:
    """Verify the bearer token and return its claims.

    Args:
        credentials: HTTP Bearer token credentials, None when the header is absent

    Returns:
        Decoded claim set of the caller

    Raises:
        Unauthorized: If the header is missing, or the token is invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Missing bearer token")
    return decode_access_token(credentials.credentials)


# Type alias for verified caller dependency
ClaimsDep = Annotated[TokenClaims, Depends(get_current_claims)]


def require_admin(claims: ClaimsDep, store: StoreDep) -> User:
    """Resolve the verified caller to an admin member.

    Raises:
        Forbidden: If the caller is not registered or is not an admin
    """
    user = get_user_by_email(store, claims.email)
    if user is None or not user.is_admin:
        raise Forbidden("Admin access required")
    return user


AdminDep = Annotated[User, Depends(require_admin)]


def require_self(claims: TokenClaims, email: str) -> None:
    """Ensure the caller is asking about their own account.

    Raises:
        Forbidden: If ``email`` is not the caller's verified email
    """
    if claims.email != email.strip().lower():
        raise Forbidden("You can only access your own account")
