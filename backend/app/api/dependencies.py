"""Request Dependencies — credential primitives and the authorization gate as FastAPI Depends.

Invariants:
    - Token read from the x-auth-token header only
    - get_principal: missing -> UnauthenticatedError, invalid -> InvalidTokenError
    - get_admin: non-admin -> ForbiddenError (after authentication succeeded)
    - PasswordHasher and TokenCodec built once per process from settings

Design Decisions:
    - Principal returned as a dependency value: identity is explicit per request,
      nothing stored on the app or in module state
"""

from functools import lru_cache

from fastapi import Depends, Header

from app.config import get_settings
from app.core.domain_types import Principal, Role
from app.infrastructure.passwords import PasswordHasher
from app.infrastructure.tokens import TokenCodec
from app.services.credential_service import authorize, require_role


@lru_cache
def get_password_hasher() -> PasswordHasher:
    settings = get_settings()
    return PasswordHasher(
        rounds=settings.password_hash_rounds,
        timeout_seconds=settings.password_hash_timeout_seconds,
    )


@lru_cache
def get_token_codec() -> TokenCodec:
    settings = get_settings()
    return TokenCodec(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiry_minutes=settings.token_expiry_minutes,
    )


async def get_principal(
    x_auth_token: str | None = Header(None),
    tokens: TokenCodec = Depends(get_token_codec),
) -> Principal:
    return authorize(x_auth_token, tokens)


async def get_admin(
    principal: Principal = Depends(get_principal),
) -> Principal:
    return require_role(principal, Role.ADMIN)
