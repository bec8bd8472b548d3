"""Seed the first super admin account.

Usage: ``python init_admin.py [username] [password]``. Does nothing when a
staff account already exists.
"""
import asyncio
import logging
import sys

from sqlalchemy import select

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.db.models import Account
from app.infrastructure.database import atomic, get_session, init_db
from app.modules.accounts import STAFF_ROLES, AccountCreateInput, AccountRole, AccountService

logger = logging.getLogger("init_admin")


async def create_default_admin(username: str = "admin", password: str = "admin123") -> bool:
    await init_db()

    created = False
    async for db in get_session():
        result = await db.execute(select(Account.id).where(Account.role.in_(sorted(STAFF_ROLES))).limit(1))
        if result.scalar_one_or_none() is not None:
            logger.info("Staff account already present, nothing to do")
            continue

        async with atomic(db):
            account = await AccountService.with_session(db).create_account(
                AccountCreateInput(
                    username=username,
                    password=password,
                    role=AccountRole.SUPER_ADMIN.value,
                    name="Administrator",
                )
            )
        logger.info("Super admin %r created (id %s), change the password after first login", username, account.id)
        created = True
    return created


if __name__ == "__main__":
    configure_logging(get_settings())
    asyncio.run(create_default_admin(*sys.argv[1:3]))
