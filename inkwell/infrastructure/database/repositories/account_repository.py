"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy import delete, func, select, update

from inkwell.infrastructure.database.models import Account as AccountModel, utc_now
from inkwell.modules.accounts.models import Account
from inkwell.modules.accounts.repository import AccountRepository

from .base import SqlRepository


class SqlAccountRepository(SqlRepository, AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    conflict_message = "Username or email is already in use"

    async def get_by_id(self, account_id: str) -> Account | None:
        return self._to_domain(await self._fetch_one(AccountModel.id == account_id))

    async def get_by_email(self, email: str) -> Account | None:
        return self._to_domain(await self._fetch_one(AccountModel.email == email))

    async def get_by_username(self, username: str) -> Account | None:
        return self._to_domain(
            await self._fetch_one(func.lower(AccountModel.username) == username.lower())
        )

    async def list_accounts(
        self,
        *,
        skip: int = 0,
        limit: Optional[int] = None,
        ascending: bool = False,
    ) -> Sequence[Account]:
        order = AccountModel.created_at.asc() if ascending else AccountModel.created_at.desc()
        stmt = select(AccountModel).order_by(order).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def count(self, *, created_since: Optional[datetime] = None) -> int:
        stmt = select(func.count()).select_from(AccountModel)
        if created_since is not None:
            stmt = stmt.where(AccountModel.created_at >= created_since)
        result = await self._execute(stmt)
        return int(result.scalar_one())

    async def has_admin(self) -> bool:
        stmt = select(AccountModel.id).where(AccountModel.role == "admin").limit(1)
        result = await self._execute(stmt)
        return result.scalar_one_or_none() is not None

    async def create_account(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
        role: str,
        auth_provider: str,
        provider_subject_id: str | None,
        profile_picture: str | None,
        is_active: bool,
    ) -> Account:
        model = AccountModel(
            username=username,
            email=email,
            password_hash=password_hash,
            role=role,
            auth_provider=auth_provider,
            provider_subject_id=provider_subject_id,
            profile_picture=profile_picture,
            is_active=is_active,
        )
        await self._add(model)
        return self._to_domain(model)

    async def update_account(
        self,
        account_id: str,
        *,
        username: str | None = None,
        email: str | None = None,
        password_hash: str | None = None,
        profile_picture: str | None = None,
    ) -> Account | None:
        values: dict[str, Any] = {
            key: value
            for key, value in (
                ("username", username),
                ("email", email),
                ("password_hash", password_hash),
                ("profile_picture", profile_picture),
            )
            if value is not None
        }
        return await self._update(account_id, values)

    async def set_role(self, account_id: str, role: str) -> Account | None:
        return await self._update(account_id, {"role": role})

    async def set_active(self, account_id: str, is_active: bool) -> Account | None:
        return await self._update(account_id, {"is_active": is_active})

    async def delete_account(self, account_id: str) -> bool:
        stmt = delete(AccountModel).where(AccountModel.id == account_id)
        result = await self._execute(stmt)
        return result.rowcount > 0

    async def _fetch_one(self, criterion: Any, *, refresh: bool = False) -> AccountModel | None:
        stmt = select(AccountModel).where(criterion)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def _update(self, account_id: str, values: dict[str, Any]) -> Account | None:
        # A single UPDATE statement; no read-modify-write in application code.
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(**values, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(stmt)
        if result.rowcount == 0:
            return None
        return self._to_domain(await self._fetch_one(AccountModel.id == account_id, refresh=True))

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=str(model.id),
            username=model.username,
            email=model.email,
            role=model.role or "user",
            is_active=bool(model.is_active),
            password_hash=model.password_hash,
            auth_provider=model.auth_provider or "local",
            provider_subject_id=model.provider_subject_id,
            profile_picture=model.profile_picture,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
