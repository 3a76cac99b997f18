"""Auth Routes — registration and login.

Invariants:
    - Both endpoints unauthenticated; both return {"token": ...}
    - Duplicate email -> 409 CONFLICT; login mismatch -> 401 INVALID_CREDENTIALS
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_password_hasher, get_token_codec
from app.infrastructure.database import get_db
from app.infrastructure.passwords import PasswordHasher
from app.infrastructure.tokens import TokenCodec
from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from app.services.credential_service import CredentialService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


def get_credential_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenCodec = Depends(get_token_codec),
) -> CredentialService:
    return CredentialService(db, hasher, tokens)


@router.post("/register", response_model=TokenResponse)
async def register(
    body: RegisterRequest,
    credentials: CredentialService = Depends(get_credential_service),
):
    """Create a customer account and return a session token."""
    token = await credentials.register(body.full_name, body.email, body.password)
    return TokenResponse(token=token)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    credentials: CredentialService = Depends(get_credential_service),
):
    token = await credentials.login(body.email, body.password)
    return TokenResponse(token=token)
