"""Domain models for accounts."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)

PROVIDER_LOCAL = "local"
PROVIDER_GOOGLE = "google"

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 6
# bcrypt only accepts this many bytes of input.
PASSWORD_MAX_BYTES = 72


@dataclass(slots=True)
class Account:
    id: str
    username: str
    email: str
    role: str
    is_active: bool
    password_hash: str = field(repr=False)
    auth_provider: str = PROVIDER_LOCAL
    provider_subject_id: Optional[str] = None
    profile_picture: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class AccountCreateInput:
    username: str
    email: str
    password: str
    role: str = ROLE_USER
    is_active: bool = True


@dataclass(slots=True)
class FederatedProfile:
    """Profile handed over by an external identity provider."""

    provider: str
    subject_id: Optional[str]
    email: Optional[str]
    display_name: Optional[str] = None
    picture_url: Optional[str] = None


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class AccountUpdateInput:
    username: Optional[str] | object = UNSET
    email: Optional[str] | object = UNSET
    password: Optional[str] | object = UNSET
    profile_picture: Optional[str] | object = UNSET

    def is_empty(self) -> bool:
        return all(
            value is UNSET
            for value in (self.username, self.email, self.password, self.profile_picture)
        )


@dataclass(slots=True)
class AccountPage:
    accounts: list[Account]
    total: int
    last_month: int


def normalize_email(email: str) -> str:
    return email.strip().lower()


def default_profile_picture(email: str) -> str:
    digest = hashlib.md5(normalize_email(email).encode("utf-8")).hexdigest()
    return f"https://www.gravatar.com/avatar/{digest}?d=identicon"
