"""Session token issuance and verification.

Tokens are stateless HS256 JWTs carrying the account id (``sub``) and its role
as of issuance. Verification is a pure signature/expiry check and never touches
the database, so a role change only takes effect once the holder signs in
again (or the token expires). Revocation is only possible by rotating the
secret key.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from inkwell.core.config import Settings
from inkwell.core.errors import UnauthenticatedError

logger = logging.getLogger(__name__)

ROLES = frozenset({"user", "admin"})


@dataclass(frozen=True, slots=True)
class Identity:
    """Verified caller identity attached to a request."""

    account_id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class TokenService:
    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_days: int = 7) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._lifetime = timedelta(days=expire_days)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            settings.secret_key,
            algorithm=settings.algorithm,
            expire_days=settings.security.access_token_expire_days,
        )

    def issue(self, account_id: str, role: str, *, issued_at: Optional[datetime] = None) -> str:
        if role not in ROLES:
            raise ValueError(f"unknown role: {role!r}")
        now = issued_at or datetime.now(timezone.utc)
        payload = {
            "sub": str(account_id),
            "role": role,
            "iat": now,
            "exp": now + self._lifetime,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: Optional[str]) -> Identity:
        if not token:
            raise UnauthenticatedError("Unauthorized! No token provided.")
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError as exc:
            logger.info("Rejected expired token")
            raise UnauthenticatedError("Token has expired") from exc
        except JWTError as exc:
            logger.info("Rejected invalid token: %s", exc)
            raise UnauthenticatedError("Invalid token") from exc

        account_id = payload.get("sub")
        role = payload.get("role")
        if not account_id or role not in ROLES:
            raise UnauthenticatedError("Invalid token")
        return Identity(account_id=account_id, role=role)


__all__ = ["Identity", "ROLES", "TokenService"]
