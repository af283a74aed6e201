"""Identity resolution for local and federated logins."""

from .models import AuthResult, SignupInput
from .service import AuthService

__all__ = ["AuthResult", "AuthService", "SignupInput"]
