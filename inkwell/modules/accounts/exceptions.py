"""Account domain specific exceptions."""

from inkwell.core.errors import (
    ConflictError,
    ForbiddenError,
    InvalidCredentialError,
    InvalidInputError,
    NotFoundError,
)


class AccountAlreadyExistsError(ConflictError):
    """Raised when the username or email already belongs to another account."""


class AccountNotFoundError(NotFoundError):
    """Raised when the requested account cannot be found."""

    default_message = "User not found"


class AccountInactiveError(ForbiddenError):
    """Raised when a deactivated account tries to sign in."""

    default_message = "Your account has been deactivated"


class InvalidPasswordError(InvalidCredentialError):
    """Raised when the supplied password does not match the stored hash."""


class InvalidAccountDataError(InvalidInputError):
    """Raised when a username, email, password or role fails validation."""
