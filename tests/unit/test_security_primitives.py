"""Password hashing and JWT session tokens."""

from datetime import timedelta

import pytest
from jose import jwt

from app.domain.exceptions import TokenExpiredException, UnauthenticatedException
from app.infrastructure.security.jwt import (
    JwtTokenCodec,
    TokenError,
    TokenExpiredError,
    create_access_token,
    verify_token,
)
from app.infrastructure.security.password import PasswordHasher
from app.shared.utils.datetime import utc_now

SECRET = "unit-test-secret"


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


def test_hash_and_verify(hasher: PasswordHasher) -> None:
    hashed = hasher.hash("Temp0rary-Pass")
    assert hashed.startswith("$2")
    assert hasher.verify("Temp0rary-Pass", hashed)
    assert not hasher.verify("temp0rary-pass", hashed)


def test_long_passwords_are_not_truncated(hasher: PasswordHasher) -> None:
    base = "x" * 72
    hashed = hasher.hash(base + "A")
    assert not hasher.verify(base + "B", hashed)


def test_malformed_hash_never_matches(hasher: PasswordHasher) -> None:
    assert hasher.verify("anything", "not-a-bcrypt-hash") is False


def test_token_round_trip_carries_claims() -> None:
    now = utc_now()
    token = create_access_token(
        {"sub": "EDIS_1", "role": "client"},
        secret=SECRET,
        algorithm="HS256",
        issued_at=now,
        expires_at=now + timedelta(hours=1),
    )
    payload = verify_token(token, secret=SECRET, algorithm="HS256")
    assert payload["sub"] == "EDIS_1"
    assert payload["role"] == "client"
    assert payload["exp"] - payload["iat"] == 3600


def test_expired_token() -> None:
    now = utc_now()
    token = create_access_token(
        {"sub": "EDIS_1"},
        secret=SECRET,
        algorithm="HS256",
        issued_at=now - timedelta(hours=2),
        expires_at=now - timedelta(hours=1),
    )
    with pytest.raises(TokenExpiredError):
        verify_token(token, secret=SECRET, algorithm="HS256")


def test_wrong_secret_rejected() -> None:
    now = utc_now()
    token = create_access_token(
        {"sub": "EDIS_1"},
        secret="other",
        algorithm="HS256",
        issued_at=now,
        expires_at=now + timedelta(hours=1),
    )
    with pytest.raises(TokenError):
        verify_token(token, secret=SECRET, algorithm="HS256")


def test_token_without_exp_rejected() -> None:
    token = jwt.encode({"sub": "EDIS_1", "iat": 0}, SECRET, algorithm="HS256")
    with pytest.raises(TokenError):
        verify_token(token, secret=SECRET, algorithm="HS256")


def test_codec_maps_errors_to_domain_exceptions() -> None:
    codec = JwtTokenCodec(SECRET)
    now = utc_now()
    expired = codec.encode({"sub": "a"}, now - timedelta(hours=2), now - timedelta(hours=1))
    with pytest.raises(TokenExpiredException):
        codec.decode(expired)
    with pytest.raises(UnauthenticatedException):
        codec.decode("garbage")


def test_codec_requires_secret() -> None:
    with pytest.raises(ValueError):
        JwtTokenCodec("")
