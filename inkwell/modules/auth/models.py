"""Models used by the sign-up / sign-in flows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from inkwell.modules.accounts.models import Account


@dataclass(slots=True)
class SignupInput:
    username: str
    email: str
    password: str
    # Accepted from clients but never honoured; see AuthService.signup.
    requested_role: Optional[str] = None


@dataclass(slots=True)
class AuthResult:
    account: Account
    access_token: str
