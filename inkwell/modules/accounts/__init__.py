"""Account domain services and models."""

from .exceptions import (
    AccountAlreadyExistsError,
    AccountInactiveError,
    AccountNotFoundError,
    InvalidAccountDataError,
    InvalidPasswordError,
)
from .models import (
    Account,
    AccountCreateInput,
    AccountPage,
    AccountUpdateInput,
    FederatedProfile,
    UNSET,
)
from .service import AccountService

__all__ = [
    "Account",
    "AccountCreateInput",
    "AccountPage",
    "AccountUpdateInput",
    "AccountService",
    "FederatedProfile",
    "AccountAlreadyExistsError",
    "AccountInactiveError",
    "AccountNotFoundError",
    "InvalidAccountDataError",
    "InvalidPasswordError",
    "UNSET",
]
