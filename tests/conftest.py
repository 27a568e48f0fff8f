"""Shared test fixtures for the signedtoken test suite.

Every codec built here gets an explicit secret and, where expiry matters,
a ``FakeClock`` so tests never depend on wall-clock timing.
"""

import os

# Keep a developer's .env or shell settings out of the tests.
for _var in ("JWT_SECRET_KEY", "JWT_EXPIRE_SECONDS", "JWT_ALGORITHM",
             "LOGIN_USERNAME", "LOGIN_PASSWORD", "ENVIRONMENT"):
    os.environ.pop(_var, None)
os.environ["LOG_FORMAT"] = "text"

import pytest

from signedtoken.core.config import Settings
from signedtoken.core.token_codec import TokenCodec

SECRET = "my_secret_key"

# HS256, default secret, no expiry, payload {"name": "ภาษาไทย", "id": 1234567890}
REFERENCE_TOKEN = (
    "eyJ0eXAiOiJKV1QiLCJhbGciOiJIUzI1NiJ9"
    ".eyJuYW1lIjoiXHUwZTIwXHUwZTMyXHUwZTI5XHUwZTMyXHUwZTQ0XHUwZTE3XHUwZTIyIiwiaWQiOjEyMzQ1Njc4OTB9"
    ".fAdzmsl4AIGAyNGt7MfNum9DUIxn6DGMhdn1hw4PwwE"
)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: float = 1_700_000_000):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def codec() -> TokenCodec:
    """HS256 codec with the placeholder secret and no expiry."""
    return TokenCodec(SECRET)


@pytest.fixture()
def expiring_codec(clock) -> TokenCodec:
    """HS256 codec whose tokens live for one second of ``clock`` time."""
    return TokenCodec(SECRET, expire_seconds=1, clock=clock)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        jwt_secret_key="test-secret",
        login_username="admin",
        login_password="hunter22",
    )
