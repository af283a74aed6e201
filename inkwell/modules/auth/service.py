"""Identity resolution: local signup/signin and federated login.

Every successful flow ends with a freshly issued session token embedding the
resolved account's id and role.

Federated accounts are linked to existing accounts purely by email: a local
account whose email matches the provider's profile is reused as-is, which
means whoever controls that mailbox at the provider controls the account.
The provider profile never overwrites the stored username, role or provider.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.core.errors import DomainError
from inkwell.core.security import TokenService
from inkwell.modules.accounts import (
    Account,
    AccountCreateInput,
    AccountInactiveError,
    AccountService,
    FederatedProfile,
    InvalidAccountDataError,
)
from inkwell.modules.accounts.models import ROLE_USER

from .models import AuthResult, SignupInput

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, accounts: AccountService, tokens: TokenService) -> None:
        self._accounts = accounts
        self._tokens = tokens

    @classmethod
    def with_session(cls, session: AsyncSession, tokens: TokenService) -> "AuthService":
        return cls(AccountService.with_session(session), tokens)

    async def signup(self, payload: SignupInput) -> AuthResult:
        if not payload.username or not payload.email or not payload.password:
            raise InvalidAccountDataError("All fields are required")
        if payload.requested_role and payload.requested_role != ROLE_USER:
            logger.warning("Ignoring requested role %r on signup", payload.requested_role)

        account = await self._accounts.create_account(
            AccountCreateInput(
                username=payload.username,
                email=payload.email,
                password=payload.password,
                role=ROLE_USER,
            )
        )
        return self._issue(account)

    async def signin(self, email: str, password: str) -> AuthResult:
        try:
            account = await self._accounts.authenticate(email, password)
        except DomainError as exc:
            logger.info("Sign-in rejected: %s", exc)
            raise
        return self._issue(account)

    async def federated_login(self, profile: FederatedProfile) -> AuthResult:
        if not profile.email:
            raise InvalidAccountDataError("Email is not available from the identity provider")

        account = await self._accounts.get_by_email(profile.email)
        if account is None:
            account = await self._accounts.provision_federated(profile)
        else:
            logger.info("Linked %s login to existing account %s", profile.provider, account.id)
        if not account.is_active:
            raise AccountInactiveError()
        return self._issue(account)

    def _issue(self, account: Account) -> AuthResult:
        return AuthResult(account=account, access_token=self._tokens.issue(account.id, account.role))
