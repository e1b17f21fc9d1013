# src/peoples_forum/api/v1/endpoints/auth.py
"""Credential issuance endpoint for the forum API."""

from fastapi import APIRouter, status

from peoples_forum.core.security import create_access_token
from peoples_forum.schemas.user import TokenRequest, TokenResponse

router = APIRouter(prefix="/jwt", tags=["authentication"])


@router.post(
    "",
    summary="Issue a bearer token for a signed-in identity",
    status_code=status.HTTP_200_OK,
    response_model=TokenResponse,
)
async def issue_token(payload: TokenRequest) -> TokenResponse:
    """Exchange the client-asserted identity for a one-hour access token."""
    token = create_access_token(payload.email, name=payload.name)
    return TokenResponse(token=token, token_type="bearer")
