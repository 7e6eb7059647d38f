"""
Session token tests.

Covers issuing and verifying tokens with a fixed secret and a controllable clock,
and checks that every kind of bad input is rejected by returning None.
"""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from app.services.token_service import TokenService

SECRET = "unit-test-secret"
ISSUED_AT = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(ISSUED_AT)


@pytest.fixture
def service(clock: FakeClock) -> TokenService:
    return TokenService(SECRET, clock=clock)


def test_issued_token_verifies_to_subject(service: TokenService):
    token = service.issue("65a1b2c3d4e5f60718293a4b")
    assert service.verify(token) == "65a1b2c3d4e5f60718293a4b"


def test_token_carries_seven_day_expiry(service: TokenService):
    token = service.issue("65a1b2c3d4e5f60718293a4b")
    claims = jwt.get_unverified_claims(token)

    assert claims["userId"] == "65a1b2c3d4e5f60718293a4b"
    assert claims["iat"] == int(ISSUED_AT.timestamp())
    assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60
    assert service.max_age_seconds == 604800


def test_token_valid_until_expiry(service: TokenService, clock: FakeClock):
    token = service.issue("65a1b2c3d4e5f60718293a4b")

    clock.now = ISSUED_AT + timedelta(days=7) - timedelta(seconds=1)
    assert service.verify(token) == "65a1b2c3d4e5f60718293a4b"

    clock.now = ISSUED_AT + timedelta(days=7)
    assert service.verify(token) is None, "A token must not verify at its expiry"

    clock.now = ISSUED_AT + timedelta(days=30)
    assert service.verify(token) is None


def test_token_signed_with_other_secret_is_rejected(clock: FakeClock):
    other = TokenService("some-other-secret", clock=clock)
    token = other.issue("65a1b2c3d4e5f60718293a4b")
    assert TokenService(SECRET, clock=clock).verify(token) is None


@pytest.mark.parametrize(
    "bad_token",
    [
        "",
        None,
        "not-a-jwt",
        "a.b.c",
        "eyJhbGciOiJIUzI1NiJ9.eyJ1c2VySWQiOiJ4In0.",
        12345,
        b"bytes-token",
    ],
)
def test_garbage_never_raises(service: TokenService, bad_token):
    assert service.verify(bad_token) is None


def test_tampered_payload_is_rejected(service: TokenService):
    token = service.issue("65a1b2c3d4e5f60718293a4b")
    header, payload, signature = token.split(".")
    forged = jwt.encode(
        {"userId": "ffffffffffffffffffffffff", "exp": 4102444800}, "guess"
    )
    _, forged_payload, _ = forged.split(".")
    assert service.verify(f"{header}.{forged_payload}.{signature}") is None


def test_token_without_subject_is_rejected(service: TokenService):
    exp = int((ISSUED_AT + timedelta(days=1)).timestamp())
    token = jwt.encode({"exp": exp}, SECRET, algorithm="HS256")
    assert service.verify(token) is None


def test_token_without_expiry_is_rejected(service: TokenService):
    token = jwt.encode({"userId": "65a1b2c3d4e5f60718293a4b"}, SECRET, algorithm="HS256")
    assert service.verify(token) is None


def test_token_with_other_algorithm_is_rejected(service: TokenService):
    exp = int((ISSUED_AT + timedelta(days=1)).timestamp())
    token = jwt.encode(
        {"userId": "65a1b2c3d4e5f60718293a4b", "exp": exp}, SECRET, algorithm="HS512"
    )
    assert service.verify(token) is None


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        TokenService("")
