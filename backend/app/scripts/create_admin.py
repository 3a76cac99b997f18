"""Admin Bootstrap — create an admin account directly in the database.

Usage:
    python -m app.scripts.create_admin --email ops@example.com --name "Ops" --password ...

Invariants:
    - The HTTP API only ever registers customers; this is the only admin path
    - Fails (exit 1) if the email is already registered, never changes an existing role
"""

import argparse
import asyncio
import getpass
import logging
import sys

from app.config import get_settings
from app.core.domain_types import Role
from app.core.errors import ConflictError
from app.db.session import create_session_factory
from app.infrastructure.observability import setup_logging
from app.infrastructure.passwords import PasswordHasher
from app.services.identity_store import IdentityStore

logger = logging.getLogger(__name__)


async def create_admin(full_name: str, email: str, password: str) -> str:
    settings = get_settings()
    engine, session_factory = create_session_factory(settings.database_url)
    hasher = PasswordHasher(
        rounds=settings.password_hash_rounds,
        timeout_seconds=settings.password_hash_timeout_seconds,
    )
    try:
        async with session_factory() as db:
            password_hash = await hasher.hash(password)
            user = await IdentityStore(db).create(
                full_name, email, password_hash, Role.ADMIN.value,
            )
            await db.commit()
            return str(user.id)
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a RigStore admin account")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", default="Administrator")
    parser.add_argument(
        "--password", help="omit to be prompted (keeps it out of shell history)",
    )
    args = parser.parse_args(argv)

    setup_logging("INFO", "text")
    password = args.password or getpass.getpass("Admin password: ")
    if len(password) < 6:
        logger.error("Password must be at least 6 characters")
        return 1
    try:
        user_id = asyncio.run(create_admin(args.name, args.email, password))
    except ConflictError:
        logger.error(f"An account for {args.email} already exists")
        return 1
    logger.info(f"Admin {args.email} created", extra={"user_id": user_id})
    return 0


if __name__ == "__main__":
    sys.exit(main())
