"""Session Tokens — HS256 JWTs carrying identity, role and display name.

Invariants:
    - Claims: _id (user id), role, name, sub, iat; exp only when expiry is configured
    - decode() returns a Principal or raises InvalidTokenError — never returns partial data
    - Role claim must be a known Role; unknown roles are rejected, not downgraded

Design Decisions:
    - python-jose for signing/verification
    - _id/name claim names match the previous deployment, but its tokens carry a
      Mongo ObjectId _id and are rejected; users log in again after migration
    - No expiry by default (TOKEN_EXPIRY_MINUTES unset); revocation is out of scope
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import jwt, JWTError, ExpiredSignatureError

from app.core.domain_types import Principal, Role, UserId
from app.core.errors import InvalidTokenError

logger = logging.getLogger(__name__)


class TokenCodec:
    """Issues and verifies signed session tokens."""

    def __init__(
        self, secret: str, algorithm: str = "HS256",
        expiry_minutes: int | None = None,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._expiry_minutes = expiry_minutes

    def issue(self, user_id: UserId, role: Role, display_name: str) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "_id": str(user_id),
            "role": Role(role).value,
            "name": display_name,
            "iat": now,
        }
        if self._expiry_minutes is not None:
            claims["exp"] = now + timedelta(minutes=self._expiry_minutes)
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> Principal:
        try:
            claims = jwt.decode(
                token, self._secret, algorithms=[self._algorithm],
            )
        except ExpiredSignatureError:
            raise InvalidTokenError("Token expired")
        except JWTError as e:
            logger.info(f"Token rejected: {e}")
            raise InvalidTokenError()

        try:
            user_id = UserId(UUID(str(claims["_id"])))
            role = Role(claims["role"])
        except (KeyError, ValueError):
            raise InvalidTokenError("Token claims are malformed")
        return Principal(
            user_id=user_id, role=role, display_name=str(claims.get("name") or ""),
        )
