"""
Create the default admin account for a fresh installation.

Does nothing when an admin already exists. Credentials can be overridden with
INKWELL_ADMIN_USERNAME / INKWELL_ADMIN_EMAIL / INKWELL_ADMIN_PASSWORD.
"""
import asyncio
import os

from inkwell.core.config import get_settings
from inkwell.infrastructure.database import build_engine, build_session_factory, init_db, session_scope
from inkwell.modules.accounts import AccountCreateInput, AccountService


async def create_default_admin() -> None:
    settings = get_settings()
    engine = build_engine(settings)
    await init_db(engine)

    username = os.getenv("INKWELL_ADMIN_USERNAME", "admin")
    email = os.getenv("INKWELL_ADMIN_EMAIL", "admin@example.com")
    password = os.getenv("INKWELL_ADMIN_PASSWORD", "admin123")

    try:
        async with session_scope(build_session_factory(engine)) as db:
            service = AccountService.with_session(db)
            if await service.has_admin():
                print("An admin account already exists, nothing to do")
                return

            await service.create_account(
                AccountCreateInput(
                    username=username,
                    email=email,
                    password=password,
                    role="admin",
                    is_active=True,
                )
            )

            print("=" * 50)
            print("Default admin account created")
            print("=" * 50)
            print(f"Email: {email}")
            print(f"Password: {password}")
            print("=" * 50)
            print("Change the password after the first sign-in!")
            print("=" * 50)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(create_default_admin())
