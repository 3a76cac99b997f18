"""Credential Service — registration, login, token issue and the authorization gate.

Invariants:
    - register() always creates role=customer; admins only via scripts/create_admin
    - login() raises the same InvalidCredentialsError for unknown email and wrong password
    - authorize() turns a raw header value into a Principal or raises
      UnauthenticatedError (missing/blank) / InvalidTokenError (bad token)
    - require_role() raises ForbiddenError, never UnauthenticatedError

Design Decisions:
    - Principal passed explicitly per request, no ambient identity
    - The token's role claim is trusted for authorization (signed by us);
      role changes take effect on next login
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import Principal, Role, UserId
from app.core.repository_protocols import IdentityRepository
from app.core.errors import (
    ConflictError, ForbiddenError, InvalidCredentialsError,
    UnauthenticatedError,
)
from app.infrastructure.passwords import PasswordHasher
from app.infrastructure.tokens import TokenCodec
from app.services.identity_store import IdentityStore

logger = logging.getLogger(__name__)


class CredentialService:
    """Account flows on top of an IdentityRepository, PasswordHasher and TokenCodec."""

    def __init__(
        self,
        db: AsyncSession,
        hasher: PasswordHasher,
        tokens: TokenCodec,
        identities: IdentityRepository | None = None,
    ):
        self.db = db
        self.identities = identities or IdentityStore(db)
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, full_name: str, email: str, password: str) -> str:
        # checked before hashing so duplicates don't pay the bcrypt cost
        if await self.identities.find_by_email(email) is not None:
            logger.info("Registration rejected: email already registered")
            raise ConflictError("User already exists")

        password_hash = await self.hasher.hash(password)
        user = await self.identities.create(
            full_name, email, password_hash, Role.CUSTOMER.value,
        )
        await self.db.commit()
        logger.info("User registered", extra={"user_id": str(user.id)})
        return self.issue_token(UserId(user.id), Role.CUSTOMER, user.full_name)

    async def login(self, email: str, password: str) -> str:
        user = await self.identities.find_by_email(email)
        if user is None:
            await self.hasher.dummy_verify()
            raise InvalidCredentialsError()
        if not await self.hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()
        return self.issue_token(UserId(user.id), Role(user.role), user.full_name)

    def issue_token(self, user_id: UserId, role: Role, display_name: str) -> str:
        return self.tokens.issue(user_id, role, display_name)


def authorize(token: str | None, tokens: TokenCodec) -> Principal:
    """Authorization gate: raw header value -> Principal."""
    if token is None or not token.strip():
        raise UnauthenticatedError()
    return tokens.decode(token.strip())


def require_role(principal: Principal, role: Role) -> Principal:
    if principal.role != role:
        raise ForbiddenError(role.value)
    return principal
