"""
Verification methods - interchangeable proofs of identifier ownership.

Both registration paths implement the same VerificationMethod capability
so the registration state machine is written once:

- OtpVerification: a 6-digit code, bcrypt-hashed and stored in the
  key-value store under the identifier with a TTL. Single use.
- LinkVerification: a signed token embedded in a link. Stateless; the
  token itself is the only state.
"""

import json
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from .codes import new_otp
from .exceptions import (
    InvalidOtp,
    InvalidToken,
    OtpExpired,
    StoreUnavailable,
    ValidationError,
    VerificationExpiredOrNotStarted,
)
from .hashing import CredentialHasher
from .identifiers import Identifier, RollNumberIdentifier, classify
from .ports import EmailMessage, KeyValueStore, RegistrationState
from .tokens import VerificationClaims, VerificationTokenService

logger = logging.getLogger(__name__)

DEFAULT_OTP_TTL_SECONDS = 10 * 60


class VerificationMethod(Protocol):
    """Port for a verification strategy used by RegistrationService."""

    issued_state: RegistrationState

    def issue(self, identifier: Identifier) -> str:
        """Create a secret for identifier and return its plaintext for delivery."""
        ...

    def compose(self, address: str, secret: str) -> EmailMessage:
        """Build the notification carrying the secret."""
        ...

    def redeem(self, proof: str, identifier: Identifier | None = None) -> Identifier:
        """
        Validate proof and return the verified identifier.

        Raises a RegistrationError subclass on failure.
        """
        ...

    def discard(self, identifier: Identifier) -> None:
        """Withdraw an issued secret whose notification never went out."""
        ...


@dataclass
class OtpVerification:
    """
    Stored one-time code verification.

    Pending record: JSON {"hashedOTP": <bcrypt digest>, "time": <epoch ms>}
    under the identifier key. A new request overwrites any earlier record
    (last request wins).

    Expiry is enforced twice: by the store TTL, and by comparing "time"
    with the service clock on redeem. The second check covers backends
    without native TTL such as the Postgres key store.
    """

    store: KeyValueStore
    hasher: CredentialHasher
    ttl_seconds: int = DEFAULT_OTP_TTL_SECONDS
    clock: Callable[[], float] = time.time

    issued_state = RegistrationState.CODE_REQUESTED

    def issue(self, identifier: Identifier) -> str:
        otp = new_otp()
        record = json.dumps({"hashedOTP": self.hasher.hash(otp), "time": self._now_ms()})
        if not self.store.set(identifier.key, record, self.ttl_seconds):
            raise StoreUnavailable("Could not start verification")
        return otp

    def compose(self, address: str, secret: str) -> EmailMessage:
        minutes = self.ttl_seconds // 60
        return EmailMessage(
            to=address,
            subject="Anant Registration: Your Verification Code",
            text=f"Your verification code is {secret}. It will expire in {minutes} minutes.",
        )

    def redeem(self, proof: str, identifier: Identifier | None = None) -> Identifier:
        if identifier is None:
            raise ValidationError("Identifier is required")

        raw = self.store.get(identifier.key)
        if raw is None:
            raise VerificationExpiredOrNotStarted("Verification expired or not initiated.")

        try:
            record = json.loads(raw)
            hashed_otp = record["hashedOTP"]
            issued_at = int(record["time"])
        except (ValueError, TypeError, KeyError):
            logger.warning("Discarding malformed pending verification for %s", identifier.key)
            self.store.delete(identifier.key)
            raise VerificationExpiredOrNotStarted("Verification expired or not initiated.") from None

        if self._now_ms() - issued_at > self.ttl_seconds * 1000:
            self.store.delete(identifier.key)
            raise OtpExpired("OTP has expired.")

        if not self.hasher.compare(proof, hashed_otp):
            raise InvalidOtp("Invalid OTP.")

        # Single consumption: the account is only created once the entry is gone
        if not self.store.delete(identifier.key):
            raise StoreUnavailable("Could not complete verification")

        return identifier

    def discard(self, identifier: Identifier) -> None:
        if not self.store.delete(identifier.key):
            logger.warning("Could not discard undelivered code for %s; it expires with its TTL", identifier.key)

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)


@dataclass
class LinkVerification:
    """Signed-link verification for roll numbers. Nothing is stored server-side."""

    tokens: VerificationTokenService
    base_url: str

    issued_state = RegistrationState.LINK_ISSUED

    def issue(self, identifier: Identifier) -> str:
        if not isinstance(identifier, RollNumberIdentifier):
            raise ValidationError("Roll number invalid!")
        claims = VerificationClaims(roll_number=identifier.raw, generated_time=self.tokens.now_ms())
        return self.tokens.sign(claims)

    def compose(self, address: str, secret: str) -> EmailMessage:
        link = f"{self.base_url.rstrip('/')}/register?token={secret}"
        minutes = self.tokens.ttl_seconds // 60
        return EmailMessage(
            to=address,
            subject="Verify Registration for Anant",
            text=(
                "Click the following link to verify your identity and complete registration:"
                f"\n\n{link}\n\nThis link is valid for {minutes} minutes.\n\nThank You"
            ),
            html=(
                "<p>Click the following link to verify your identity and complete registration:</p>"
                f'<p><a href="{link}">{link}</a></p>'
                f"<p>This link is valid for {minutes} minutes.</p><p>Thank You</p>"
            ),
        )

    def redeem(self, proof: str, identifier: Identifier | None = None) -> Identifier:
        claims = self.tokens.verify(proof)
        try:
            verified = classify(claims.roll_number)
        except ValidationError:
            raise InvalidToken("Invalid or expired token") from None
        if not isinstance(verified, RollNumberIdentifier):
            raise InvalidToken("Invalid or expired token")
        if identifier is not None and identifier.key != verified.key:
            raise InvalidToken("Invalid or expired token")
        return verified

    def discard(self, identifier: Identifier) -> None:
        """Nothing is stored for a link; an undelivered token is never seen."""
