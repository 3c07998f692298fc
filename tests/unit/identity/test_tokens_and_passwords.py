"""
Name: Token and Password Primitive Tests

Responsibilities:
  - Validate Argon2 hashing/verification
  - Validate JWT issue/verify, expiry, signature and token type checks
  - Validate Bearer header extraction
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from sweetshop.domain.errors import UnauthenticatedError
from sweetshop.identity.auth_users import (
    AuthSettings,
    JWTTokenService,
    extract_bearer_token,
)

pytestmark = pytest.mark.unit

SECRET = "test-secret-for-unit-tests"


def _encode(payload: dict, secret: str = SECRET) -> str:
    return jwt.encode(payload, secret, algorithm="HS256")


def _claims(**overrides) -> dict:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": "alice",
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=5)).timestamp()),
        "typ": "access",
    }
    claims.update(overrides)
    return claims


# =============================================================================
# Passwords
# =============================================================================


def test_hash_is_not_plaintext_and_verifies(password_hasher):
    hashed = password_hasher.hash("secret1")

    assert hashed != "secret1"
    assert hashed.startswith("$argon2")
    assert password_hasher.verify("secret1", hashed) is True
    assert password_hasher.verify("wrong", hashed) is False


def test_verify_with_garbage_hash_is_false(password_hasher):
    assert password_hasher.verify("secret1", "not-a-hash") is False


# =============================================================================
# Tokens
# =============================================================================


def test_issue_then_verify_returns_username(token_service):
    issued = token_service.issue("alice")

    assert token_service.verify(issued.token) == "alice"
    assert issued.expires_in_ms == 30 * 60 * 1000


def test_issued_token_carries_access_claims(token_service):
    issued = token_service.issue("alice")
    payload = jwt.decode(issued.token, SECRET, algorithms=["HS256"])

    assert payload["sub"] == "alice"
    assert payload["typ"] == "access"
    assert payload["exp"] - payload["iat"] == 30 * 60


def test_expired_token_is_rejected(token_service):
    past = datetime.now(timezone.utc) - timedelta(hours=1)
    token = _encode(
        _claims(
            iat=int(past.timestamp()),
            exp=int((past + timedelta(minutes=5)).timestamp()),
        )
    )

    with pytest.raises(UnauthenticatedError, match="Token expired"):
        token_service.verify(token)


def test_wrong_signature_is_rejected(token_service):
    token = _encode(_claims(), secret="another-secret-entirely")

    with pytest.raises(UnauthenticatedError, match="Invalid token"):
        token_service.verify(token)


def test_garbage_token_is_rejected(token_service):
    with pytest.raises(UnauthenticatedError, match="Invalid token"):
        token_service.verify("not.a.jwt")


def test_missing_required_claim_is_rejected(token_service):
    claims = _claims()
    del claims["iat"]

    with pytest.raises(UnauthenticatedError, match="Invalid token"):
        token_service.verify(_encode(claims))


def test_wrong_token_type_is_rejected(token_service):
    with pytest.raises(UnauthenticatedError, match="Invalid token type"):
        token_service.verify(_encode(_claims(typ="refresh")))


def test_ttl_comes_from_settings():
    service = JWTTokenService(AuthSettings(jwt_secret=SECRET, jwt_access_ttl_minutes=1))

    assert service.ttl_seconds == 60
    assert service.issue("bob").expires_in_ms == 60_000


# =============================================================================
# Header extraction
# =============================================================================


@pytest.mark.parametrize(
    "header,expected",
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer abc", "abc"),
        ("  Bearer   abc  ", "abc"),
        ("Basic abc", None),
        ("Bearer", None),
        ("Bearer ", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected
