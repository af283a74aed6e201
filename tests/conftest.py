"""Shared fixtures: an isolated SQLite database, blob directory and HTTP client."""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from httpx import ASGITransport, AsyncClient

from inkwell.core.config import DatabaseSettings, SecuritySettings, Settings, StorageSettings
from inkwell.core.container import ApplicationContainer
from inkwell.main import create_app
from inkwell.modules.accounts import Account, AccountCreateInput, AccountService


@dataclass
class Member:
    account: Account
    token: str
    password: str

    @property
    def id(self) -> str:
        return self.account.id

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'inkwell-test.db'}"),
        security=SecuritySettings(secret_key="test-secret-key-1234"),
        storage=StorageSettings(blob_dir=tmp_path / "blobs", max_upload_bytes=1024 * 1024),
    )


@pytest.fixture
async def container(settings):
    container = ApplicationContainer(settings=settings)
    await container.startup()
    yield container
    await container.shutdown()


@pytest.fixture
def app(container):
    return create_app(container=container)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def session(container):
    async with container.session_factory() as session:
        yield session


@pytest.fixture
def make_member(container):
    """Create an account straight through the service and sign a token for it."""

    counter = {"n": 0}

    async def _make(role: str = "user", *, username: str | None = None, is_active: bool = True) -> Member:
        counter["n"] += 1
        username = username or f"member{counter['n']}"
        password = "secret123"
        async with container.session_factory() as session:
            account = await AccountService.with_session(session).create_account(
                AccountCreateInput(
                    username=username,
                    email=f"{username}@example.com",
                    password=password,
                    role=role,
                    is_active=is_active,
                )
            )
            await session.commit()
        return Member(account=account, token=container.tokens.issue(account.id, account.role), password=password)

    return _make


@pytest.fixture
async def admin(make_member) -> Member:
    return await make_member("admin", username="chiefadmin")


@pytest.fixture
async def user(make_member) -> Member:
    return await make_member("user", username="plainuser")
