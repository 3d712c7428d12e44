"""Grant or revoke administrator rights for an existing user.

Usage:
    python -m scripts.grant_admin <email> [--revoke]
Uses DATABASE_URL and the other settings of the service.
"""

import asyncio
import dataclasses
import logging
import sys

from accounts.application.context import AppContext
from accounts.core.config import get_settings
from accounts.domain.entities import User
from accounts.domain.exceptions import NotFoundDomainError
from accounts.infrastructure.app_context import SqlAlchemyAppContext
from accounts.infrastructure.persistence.database import (
    create_engine_from_settings,
    create_session_factory,
    create_tables,
)
from accounts.infrastructure.security.password import BcryptPasswordHasher
from accounts.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


async def set_admin(app_context: AppContext, email: str, is_admin: bool) -> User:
    """Set is_admin on the user with email; raise NotFoundDomainError if absent."""
    async with app_context.transaction() as repositories:
        user = await repositories.users.find_by_email(email)
        if user is None:
            raise NotFoundDomainError(f"No user with email {email}")
        updated = await repositories.users.update(
            dataclasses.replace(user, is_admin=is_admin)
        )
    if updated is None:
        raise NotFoundDomainError(f"No user with email {email}")
    return updated


async def main() -> None:
    args = [arg for arg in sys.argv[1:] if not arg.startswith("--")]
    if len(args) != 1:
        print("Usage: python -m scripts.grant_admin <email> [--revoke]", file=sys.stderr)
        sys.exit(1)
    revoke = "--revoke" in sys.argv[1:]

    settings = get_settings()
    setup_logging()
    engine = create_engine_from_settings(settings)
    try:
        if settings.database_create_tables:
            await create_tables(engine)
        app_context = SqlAlchemyAppContext(
            session_factory=create_session_factory(engine),
            password_hasher=BcryptPasswordHasher(rounds=settings.bcrypt_rounds),
        )
        try:
            user = await set_admin(app_context, args[0], is_admin=not revoke)
        except NotFoundDomainError as exc:
            print(exc.message, file=sys.stderr)
            sys.exit(1)
    finally:
        await engine.dispose()

    action = "Revoked admin from" if revoke else "Granted admin to"
    logger.info("%s %s (%s)", action, user.email, user.id)
    print(f"{action} {user.email} ({user.id})")


if __name__ == "__main__":
    asyncio.run(main())
