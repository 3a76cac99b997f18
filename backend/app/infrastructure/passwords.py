"""Password Hashing — bcrypt via passlib, run off the event loop with a bounded timeout.

Invariants:
    - Plaintext passwords are never stored or compared by equality
    - Every hash is salted (bcrypt generates a fresh salt per call)
    - Hash/verify never exceed timeout_seconds; a timeout raises UnavailableError
    - A corrupt stored hash verifies as False, never raises to the caller

Design Decisions:
    - asyncio.to_thread: bcrypt is deliberately slow and CPU-bound, keeping it
      off the loop lets unrelated requests proceed
    - dummy_verify() on unknown users: login time does not reveal whether an email exists
"""

import asyncio
import logging

from passlib.context import CryptContext

from app.core.errors import ErrorCategory, UnavailableError

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Async facade over a bcrypt CryptContext."""

    def __init__(self, rounds: int = 12, timeout_seconds: float = 5.0):
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds,
        )
        self.timeout_seconds = timeout_seconds

    async def hash(self, password: str) -> str:
        return await self._run(self._context.hash, password, operation="hash")

    async def verify(self, password: str, password_hash: str) -> bool:
        try:
            return await self._run(
                self._context.verify, password, password_hash, operation="verify",
            )
        except ValueError as e:
            logger.error(f"Stored password hash is unreadable: {e}")
            return False

    async def dummy_verify(self) -> None:
        """Spend the same work as a real verify (unknown-user login path)."""
        await self._run(self._context.dummy_verify, operation="verify")

    async def _run(self, fn, *args, operation: str):
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(fn, *args), timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.error(
                f"Password {operation} exceeded {self.timeout_seconds}s",
            )
            raise UnavailableError(
                "credential hashing timed out", f"password {operation}",
                category=ErrorCategory.TIMEOUT,
            )
