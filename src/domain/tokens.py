"""
Verification tokens - signed, stateless claims for the email-link flow.

A token carries {roll_number, generated_time} and is valid for a fixed
window after generated_time. Validity depends only on the signature and
elapsed time: there is no server-side record, so the only way to revoke
outstanding tokens early is to rotate the signing key.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

import jwt

from .exceptions import InvalidToken

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL_SECONDS = 15 * 60

_ALGORITHM = "HS256"


@dataclass(frozen=True)
class VerificationClaims:
    """Identity claim carried by a verification token."""

    roll_number: str
    generated_time: int  # epoch milliseconds


@dataclass
class VerificationTokenService:
    """
    Signs and validates verification tokens (JWT, HS256).

    The signing key is process-wide configuration loaded once at startup.
    """

    secret: str = field(repr=False)
    ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS
    clock: Callable[[], float] = time.time

    def now_ms(self) -> int:
        return int(self.clock() * 1000)

    def sign(self, claims: VerificationClaims) -> str:
        """Sign claims; the token expires at generated_time + ttl."""
        payload = {
            "roll_number": claims.roll_number,
            "generated_time": claims.generated_time,
            "exp": claims.generated_time // 1000 + self.ttl_seconds,
        }
        return jwt.encode(payload, self.secret, algorithm=_ALGORITHM)

    def verify(self, token: str) -> VerificationClaims:
        """
        Validate token and return its claims.

        Raises:
            InvalidToken: Bad signature, expired, or malformed payload.
                The three cases are deliberately indistinguishable.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[_ALGORITHM],
                options={"require": ["exp", "roll_number", "generated_time"]},
            )
            roll_number = payload["roll_number"]
            generated_time = payload["generated_time"]
            if not isinstance(roll_number, str) or not isinstance(generated_time, int):
                raise InvalidToken("Malformed claims")
        except (jwt.InvalidTokenError, InvalidToken) as e:
            logger.info("Verification token rejected: %s", type(e).__name__)
            raise InvalidToken("Invalid or expired token") from None

        # Recheck against the service clock; exp is checked by PyJWT on wall time
        if self.now_ms() - generated_time > self.ttl_seconds * 1000:
            logger.info("Verification token rejected: elapsed window")
            raise InvalidToken("Invalid or expired token")

        return VerificationClaims(roll_number=roll_number, generated_time=generated_time)
