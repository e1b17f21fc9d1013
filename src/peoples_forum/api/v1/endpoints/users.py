"""Member registration and role endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from peoples_forum.api.v1.dependencies import AdminDep, ClaimsDep, StoreDep, require_self
from peoples_forum.models import User
from peoples_forum.schemas.user import AdminStatus, RegisterResponse, UserCreate, UserResponse
from peoples_forum.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=RegisterResponse, status_code=status.HTTP_200_OK)
async def register_user(payload: UserCreate, store: StoreDep) -> RegisterResponse:
    """Record a member on first sign-in; later sign-ins report 'user already exists'."""
    result = user_service.register_user(store, payload)
    return RegisterResponse(
        inserted_id=result.inserted_id,
        created=result.created,
        message=result.message,
    )


@router.get("", response_model=list[UserResponse])
async def list_users(
    _admin: AdminDep,
    store: StoreDep,
    search: str | None = Query(None, max_length=200, description="Name or email substring"),
) -> list[User]:
    """List members (admin only)."""
    return user_service.list_users(store, search)


@router.get("/{email}/admin", response_model=AdminStatus)
async def get_admin_status(email: str, claims: ClaimsDep, store: StoreDep) -> AdminStatus:
    """Tell the caller whether they hold the admin role.

    Only the owner of ``email`` may ask; the ownership check runs before any
    database access.
    """
    require_self(claims, email)
    return AdminStatus(email=claims.email, admin=user_service.is_admin(store, claims.email))


@router.patch("/{email}/admin", response_model=UserResponse)
async def promote_user(email: str, _admin: AdminDep, store: StoreDep) -> User:
    """Promote a member to admin (admin only)."""
    return user_service.promote_to_admin(store, email.strip().lower())
