"""
Session token issuing and verification.

Tokens are HS256 JWTs carrying the account id (``userId`` and ``sub``), ``iat`` and
``exp``. Verification is the only gate in front of every admin operation, so it
accepts arbitrary attacker-controlled input and reports every failure the same way:
by returning None. The reason is only written to the log.
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from app.config import settings
from app.utils.logger import setup_logger

logger = setup_logger("token_service")

SUBJECT_CLAIM = "userId"
DEFAULT_TOKEN_TTL = timedelta(days=7)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Issues and verifies signed, time-limited session tokens."""

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] | None = None,
    ):
        if not secret:
            raise ValueError("A non-empty signing secret is required")
        self._secret = secret
        self.ttl = ttl
        self.algorithm = algorithm
        self._clock = clock or _utc_now

    @property
    def max_age_seconds(self) -> int:
        return int(self.ttl.total_seconds())

    def issue(self, subject_id: str, **extra_claims: Any) -> str:
        """Create a token for ``subject_id`` that expires ``ttl`` from now."""
        issued_at = self._clock()
        claims = dict(extra_claims)
        claims.update(
            {
                SUBJECT_CLAIM: subject_id,
                "sub": subject_id,
                "iat": int(issued_at.timestamp()),
                "exp": int((issued_at + self.ttl).timestamp()),
            }
        )
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: Any) -> str | None:
        """Return the subject id of a valid token, otherwise None. Never raises."""
        if not token or not isinstance(token, str):
            logger.debug("Token verification skipped: no token supplied")
            return None

        try:
            # Expiry is checked below against the injected clock
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except (JWTError, ValueError, TypeError) as e:
            logger.info(f"Token rejected: malformed or bad signature ({e})")
            return None

        subject = payload.get(SUBJECT_CLAIM)
        if not subject or not isinstance(subject, str):
            logger.info("Token rejected: missing subject claim")
            return None

        exp = payload.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            logger.info("Token rejected: missing or invalid expiry")
            return None

        if exp <= self._clock().timestamp():
            logger.info(f"Token rejected: expired for subject {subject}")
            return None

        return subject


def build_token_service() -> TokenService:
    """Construct the process-wide token service from settings."""
    if not settings.jwt_secret:
        raise ValueError("JWT_SECRET environment variable not set")
    return TokenService(
        secret=settings.jwt_secret,
        ttl=timedelta(days=settings.auth_token_ttl_days),
        algorithm=settings.jwt_algorithm,
    )
