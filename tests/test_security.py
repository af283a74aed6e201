"""Token lifecycle and authorization guard."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from inkwell.core.authorization import can_mutate, ensure_admin, ensure_can_mutate, require_admin
from inkwell.core.errors import ForbiddenError, UnauthenticatedError
from inkwell.core.security import Identity, TokenService

SECRET = "unit-test-secret"


@pytest.fixture
def tokens():
    return TokenService(SECRET)


# =============================================================================
# Token service
# =============================================================================


class TestTokenService:
    def test_roundtrip_returns_embedded_claims(self, tokens):
        token = tokens.issue("acc-1", "admin")
        identity = tokens.verify(token)
        assert identity == Identity(account_id="acc-1", role="admin")
        assert identity.is_admin

    def test_payload_carries_only_subject_role_and_times(self, tokens):
        issued_at = datetime(2026, 1, 1, tzinfo=timezone.utc)
        token = tokens.issue("acc-1", "user", issued_at=issued_at)
        claims = jwt.get_unverified_claims(token)
        assert set(claims) == {"sub", "role", "iat", "exp"}
        assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())

    def test_unknown_role_cannot_be_issued(self, tokens):
        with pytest.raises(ValueError):
            tokens.issue("acc-1", "superuser")

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token(self, tokens, token):
        with pytest.raises(UnauthenticatedError):
            tokens.verify(token)

    def test_expired_token(self, tokens):
        token = tokens.issue("acc-1", "user", issued_at=datetime.now(timezone.utc) - timedelta(days=8))
        with pytest.raises(UnauthenticatedError) as excinfo:
            tokens.verify(token)
        assert excinfo.value.message == "Token has expired"

    def test_token_signed_with_other_secret(self, tokens):
        forged = TokenService("another-secret").issue("acc-1", "admin")
        with pytest.raises(UnauthenticatedError):
            tokens.verify(forged)

    def test_garbage_token(self, tokens):
        with pytest.raises(UnauthenticatedError):
            tokens.verify("not-a-jwt")

    def test_token_with_tampered_role_claim(self, tokens):
        token = jwt.encode(
            {"sub": "acc-1", "role": "owner", "exp": datetime.now(timezone.utc) + timedelta(days=1)},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(UnauthenticatedError):
            tokens.verify(token)


# =============================================================================
# Authorization guard
# =============================================================================


class TestGuard:
    def test_admin_may_mutate_anything(self):
        assert can_mutate("a", "admin", "someone-else")
        assert can_mutate("a", "admin", None)

    def test_owner_may_mutate_own_resource(self):
        assert can_mutate("a", "user", "a")

    def test_other_user_may_not(self):
        assert not can_mutate("a", "user", "b")

    def test_resource_without_owner_is_admin_only(self):
        assert not can_mutate("a", "user", None)

    def test_require_admin(self):
        assert require_admin("admin")
        assert not require_admin("user")

    def test_ensure_helpers_raise_forbidden(self):
        with pytest.raises(ForbiddenError):
            ensure_can_mutate(Identity("a", "user"), "b", "nope")
        with pytest.raises(ForbiddenError):
            ensure_admin(Identity("a", "user"))
        ensure_can_mutate(Identity("a", "user"), "a", "fine")
        ensure_admin(Identity("a", "admin"))
