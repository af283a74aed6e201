"""Domain services for account management."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.core.crypto import hash_password, placeholder_password_hash, verify_password

from .exceptions import (
    AccountAlreadyExistsError,
    AccountInactiveError,
    AccountNotFoundError,
    InvalidAccountDataError,
    InvalidPasswordError,
)
from .models import (
    PASSWORD_MAX_BYTES,
    PASSWORD_MIN_LENGTH,
    PROVIDER_LOCAL,
    ROLES,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    UNSET,
    Account,
    AccountCreateInput,
    AccountPage,
    AccountUpdateInput,
    FederatedProfile,
    default_profile_picture,
    normalize_email,
)
from .repository import AccountRepository

logger = logging.getLogger(__name__)

PROFILE_USERNAME_PATTERN = re.compile(r"^[a-z0-9]+$")
PROFILE_USERNAME_MIN_LENGTH = 7


class AccountService:
    """Encapsulates core account use cases."""

    def __init__(self, repository: AccountRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AccountService":
        # Deferred to avoid a circular import with the repository module.
        from inkwell.infrastructure.database.repositories.account_repository import SqlAccountRepository

        return cls(SqlAccountRepository(session))

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._repository.get_by_id(account_id)

    async def get_by_email(self, email: str) -> Account | None:
        return await self._repository.get_by_email(normalize_email(email))

    async def require(self, account_id: str) -> Account:
        account = await self._repository.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError()
        return account

    async def list_accounts(
        self,
        *,
        skip: int = 0,
        limit: Optional[int] = None,
        ascending: bool = False,
    ) -> AccountPage:
        if skip < 0 or (limit is not None and limit < 0):
            raise InvalidAccountDataError("Invalid pagination parameters")
        accounts = await self._repository.list_accounts(skip=skip, limit=limit, ascending=ascending)
        total = await self._repository.count()
        one_month_ago = datetime.now(timezone.utc) - timedelta(days=30)
        last_month = await self._repository.count(created_since=one_month_ago)
        return AccountPage(accounts=list(accounts), total=total, last_month=last_month)

    async def has_admin(self) -> bool:
        return await self._repository.has_admin()

    async def authenticate(self, email: str, password: str) -> Account:
        """Resolve a local sign-in.

        Failure order matters: unknown email, then deactivated account (even
        with the right password), then password mismatch.
        """
        if not email or not password:
            raise InvalidAccountDataError("All fields are required")
        account = await self._repository.get_by_email(normalize_email(email))
        if account is None:
            raise AccountNotFoundError()
        if not account.is_active:
            raise AccountInactiveError()
        if not verify_password(password, account.password_hash):
            raise InvalidPasswordError()
        return account

    async def create_account(self, payload: AccountCreateInput) -> Account:
        username = (payload.username or "").strip()
        email = normalize_email(payload.email or "")
        if not username or not email or not payload.password:
            raise InvalidAccountDataError("All fields are required")
        _validate_username_length(username)
        _validate_email(email)
        _validate_password(payload.password)
        if payload.role not in ROLES:
            raise InvalidAccountDataError("Role must be 'user' or 'admin'")

        await self._ensure_available(username=username, email=email)
        account = await self._repository.create_account(
            username=username,
            email=email,
            password_hash=hash_password(payload.password),
            role=payload.role,
            auth_provider=PROVIDER_LOCAL,
            provider_subject_id=None,
            profile_picture=default_profile_picture(email),
            is_active=payload.is_active,
        )
        logger.info("Created local account %s (%s)", account.id, account.role)
        return account

    async def provision_federated(self, profile: FederatedProfile) -> Account:
        """Create the account for a first-seen federated identity."""
        if not profile.email:
            raise InvalidAccountDataError("Email is not available from the identity provider")
        email = normalize_email(profile.email)
        username = await self._available_username(profile.display_name or email.split("@")[0])
        account = await self._repository.create_account(
            username=username,
            email=email,
            # The column is required but federated accounts never sign in locally.
            password_hash=placeholder_password_hash(),
            role="user",
            auth_provider=profile.provider,
            provider_subject_id=profile.subject_id or None,
            profile_picture=profile.picture_url or default_profile_picture(email),
            is_active=True,
        )
        logger.info("Provisioned %s account %s on first login", profile.provider, account.id)
        return account

    async def update_profile(self, account_id: str, payload: AccountUpdateInput) -> Account:
        """Apply a partial profile update; absent fields stay unchanged."""
        if payload.is_empty():
            raise InvalidAccountDataError("At least one field must be updated")
        current = await self.require(account_id)

        username = None
        if payload.username is not UNSET and payload.username is not None:
            username = _validate_profile_username(payload.username)

        email = None
        if payload.email is not UNSET and payload.email is not None:
            email = normalize_email(payload.email)
            _validate_email(email)
            existing = await self._repository.get_by_email(email)
            if existing is not None and existing.id != current.id:
                raise InvalidAccountDataError("Email is already in use")

        password_hash = None
        if payload.password is not UNSET and payload.password is not None:
            _validate_password(payload.password)
            password_hash = hash_password(payload.password)

        profile_picture = None
        if payload.profile_picture is not UNSET and payload.profile_picture is not None:
            profile_picture = payload.profile_picture

        if username is not None:
            holder = await self._repository.get_by_username(username)
            if holder is not None and holder.id != current.id:
                raise AccountAlreadyExistsError("Username is already in use")

        updated = await self._repository.update_account(
            account_id,
            username=username,
            email=email,
            password_hash=password_hash,
            profile_picture=profile_picture,
        )
        if updated is None:
            raise AccountNotFoundError()
        return updated

    async def change_role(self, account_id: str, role: Optional[str]) -> Account:
        if not role or role not in ROLES:
            raise InvalidAccountDataError("Role must be 'user' or 'admin'")
        updated = await self._repository.set_role(account_id, role)
        if updated is None:
            raise AccountNotFoundError()
        logger.info("Role of account %s set to %s", account_id, role)
        return updated

    async def set_active(self, account_id: str, is_active: bool) -> Account:
        updated = await self._repository.set_active(account_id, is_active)
        if updated is None:
            raise AccountNotFoundError()
        logger.info("Account %s %s", account_id, "activated" if is_active else "deactivated")
        return updated

    async def delete_account(self, account_id: str) -> None:
        if not await self._repository.delete_account(account_id):
            raise AccountNotFoundError()
        logger.info("Deleted account %s", account_id)

    async def _ensure_available(self, *, username: str, email: str) -> None:
        if await self._repository.get_by_email(email) is not None:
            raise AccountAlreadyExistsError("Email is already in use")
        if await self._repository.get_by_username(username) is not None:
            raise AccountAlreadyExistsError("Username is already in use")

    async def _available_username(self, display_name: str) -> str:
        base = " ".join(display_name.split())[:USERNAME_MAX_LENGTH]
        base = base.ljust(USERNAME_MIN_LENGTH, "0")
        candidate = base
        suffix = 1
        while await self._repository.get_by_username(candidate) is not None:
            tail = str(suffix)
            candidate = f"{base[: USERNAME_MAX_LENGTH - len(tail)]}{tail}"
            suffix += 1
        return candidate


def _validate_username_length(username: str) -> None:
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise InvalidAccountDataError(
            f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters"
        )


def _validate_profile_username(username: str) -> str:
    if not PROFILE_USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise InvalidAccountDataError(
            f"Username must be between {PROFILE_USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters"
        )
    if any(char.isspace() for char in username):
        raise InvalidAccountDataError("Username cannot contain spaces")
    if username != username.lower():
        raise InvalidAccountDataError("Username must be lowercase")
    if not PROFILE_USERNAME_PATTERN.match(username):
        raise InvalidAccountDataError("Username can only contain letters and numbers")
    return username


def _validate_email(email: str) -> None:
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as exc:
        raise InvalidAccountDataError("Please enter a valid email") from exc


def _validate_password(password: str) -> None:
    if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
        raise InvalidAccountDataError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise InvalidAccountDataError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes long")
