"""Identity Store — user lookup by email and creation.

Invariants:
    - Email uniqueness enforced at creation (pre-check + UNIQUE constraint backstop)
    - Never commits: the caller owns the transaction
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import Role
from app.core.errors import ConflictError
from app.models.user import User

logger = logging.getLogger(__name__)


class IdentityStore:
    """User persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def create(
        self, full_name: str, email: str, password_hash: str,
        role: str = Role.CUSTOMER.value,
    ) -> User:
        if await self.find_by_email(email) is not None:
            raise ConflictError("User already exists")
        user = User(
            full_name=full_name, email=email,
            password_hash=password_hash, role=Role(role).value,
        )
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError:
            # concurrent registration won the UNIQUE race
            await self.db.rollback()
            raise ConflictError("User already exists")
        return user
