"""Unit-of-work helper used by maintenance scripts."""

import pytest

from inkwell.infrastructure.database import session_scope
from inkwell.modules.accounts import AccountCreateInput, AccountService


def _admin_input() -> AccountCreateInput:
    return AccountCreateInput(
        username="bootstrap",
        email="bootstrap@example.com",
        password="secret123",
        role="admin",
        is_active=True,
    )


async def test_commits_when_block_succeeds(container):
    async with session_scope(container.session_factory) as db:
        await AccountService.with_session(db).create_account(_admin_input())

    async with container.session_factory() as session:
        assert await AccountService.with_session(session).has_admin()


async def test_rolls_back_when_block_raises(container):
    with pytest.raises(RuntimeError):
        async with session_scope(container.session_factory) as db:
            await AccountService.with_session(db).create_account(_admin_input())
            raise RuntimeError("boom")

    async with container.session_factory() as session:
        assert not await AccountService.with_session(session).has_admin()


async def test_early_return_leaves_nothing_pending(container):
    async def bootstrap() -> str:
        async with session_scope(container.session_factory) as db:
            service = AccountService.with_session(db)
            if await service.has_admin():
                return "skipped"
            await service.create_account(_admin_input())
            return "created"

    assert await bootstrap() == "created"
    assert await bootstrap() == "skipped"
