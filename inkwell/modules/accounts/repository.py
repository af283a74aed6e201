"""Repository protocol for accounts."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .models import Account


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence."""

    async def get_by_id(self, account_id: str) -> Account | None:
        ...

    async def get_by_email(self, email: str) -> Account | None:
        ...

    async def get_by_username(self, username: str) -> Account | None:
        """Case-insensitive lookup."""
        ...

    async def list_accounts(self, *, skip: int, limit: Optional[int], ascending: bool) -> Sequence[Account]:
        ...

    async def count(self, *, created_since: Optional[datetime] = None) -> int:
        ...

    async def has_admin(self) -> bool:
        ...

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
        ...

    async def update_account(
        self,
        account_id: str,
        *,
        username: str | None = None,
        email: str | None = None,
        password_hash: str | None = None,
        profile_picture: str | None = None,
    ) -> Account | None:
        ...

    async def set_role(self, account_id: str, role: str) -> Account | None:
        ...

    async def set_active(self, account_id: str, is_active: bool) -> Account | None:
        ...

    async def delete_account(self, account_id: str) -> bool:
        ...
