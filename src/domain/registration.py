"""
Registration domain service - verification-gated account creation.

This module contains the core business logic for user registration,
driving one state machine over either verification method.

Registration State Machine
==========================

States:
- IDLE: No verification in progress (also the state after any failure)
- CODE_REQUESTED: Hashed OTP stored under the identifier with a TTL
- LINK_ISSUED: Signed token sent; nothing stored server-side
- VERIFIED: Proof accepted (pending OTP consumed)
- CREATED: Account created

Transitions:
    IDLE -> CODE_REQUESTED            (send_code)
    IDLE -> LINK_ISSUED               (issue_link)
    CODE_REQUESTED -> VERIFIED        (create_user, correct OTP)
    LINK_ISSUED -> VERIFIED           (create_user_from_link, valid token)
    VERIFIED -> CREATED               (account repository insert)

Failed requests persist nothing: the caller is back in IDLE.

Note: The existing-account check at request time is a fast path only.
The repository's uniqueness constraints are the authoritative duplicate
check at creation time, closing the window between issuance and
redemption.
"""

import logging
import re
from dataclasses import dataclass

from .exceptions import AlreadyRegistered, InvalidCredentials, NotificationFailed, ValidationError
from .hashing import MAX_PLAINTEXT_BYTES, CredentialHasher
from .identifiers import EmailIdentifier, Identifier, IdentifierResolver, RollNumberIdentifier
from .ports import (
    Account,
    AccountRepository,
    EmailMessage,
    EmailSender,
    NewAccount,
    RegistrationState,
    RosterLookup,
    RosterProfile,
)
from .verification import VerificationMethod

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

# ASCII digits only; \d would also admit other scripts
_OTP_PATTERN = re.compile(r"[0-9]{6}")


@dataclass(frozen=True)
class RegistrationOutcome:
    """Result of a successful transition."""

    state: RegistrationState
    identifier: str
    address: str | None = None


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates identifier resolution, secret issuance and redemption,
    notification dispatch, roster enrichment, and account creation.
    """

    resolver: IdentifierResolver
    accounts: AccountRepository
    email_sender: EmailSender
    hasher: CredentialHasher
    otp: VerificationMethod
    link: VerificationMethod
    roster: RosterLookup | None = None

    def send_code(self, identifier: str) -> RegistrationOutcome:
        """
        Start the code flow: IDLE -> CODE_REQUESTED.

        Raises:
            ValidationError: Identifier is neither email nor roll number
            AlreadyRegistered: An account exists for the identifier
            StoreUnavailable: Pending code could not be stored
            NotificationFailed: Email could not be dispatched
        """
        return self._request(self.otp, self.resolver.classify(identifier))

    def create_user(
        self,
        identifier: str,
        name: str,
        password: str,
        confirm_password: str,
        otp: str,
    ) -> RegistrationOutcome:
        """
        Complete the code flow: CODE_REQUESTED -> VERIFIED -> CREATED.

        All input shape checks run before any store or hash operation.

        Raises:
            ValidationError: Malformed input or password confirmation mismatch
            VerificationExpiredOrNotStarted: No pending code (or already consumed)
            OtpExpired: Pending code is older than the OTP window
            InvalidOtp: Code does not match
            AlreadyRegistered: Account creation hit a uniqueness constraint
            StoreUnavailable: Storage failure
        """
        self._validate_account_fields(name, password, confirm_password)
        if not _OTP_PATTERN.fullmatch(otp):
            raise ValidationError("OTP must be 6 digits")
        parsed = self.resolver.classify(identifier)
        return self._complete(self.otp, otp, parsed, name.strip(), password)

    def issue_link(self, roll_number: str) -> RegistrationOutcome:
        """
        Start the link flow: IDLE -> LINK_ISSUED.

        Only roll numbers can be verified by link.
        """
        parsed = self.resolver.classify(roll_number)
        if not isinstance(parsed, RollNumberIdentifier):
            raise ValidationError("Roll number invalid!")
        return self._request(self.link, parsed)

    def create_user_from_link(
        self,
        token: str,
        name: str,
        password: str,
        confirm_password: str,
    ) -> RegistrationOutcome:
        """
        Complete the link flow: LINK_ISSUED -> VERIFIED -> CREATED.

        Raises:
            ValidationError: Malformed input or password confirmation mismatch
            InvalidToken: Bad signature, expired, or malformed token
            AlreadyRegistered: Account creation hit a uniqueness constraint
        """
        self._validate_account_fields(name, password, confirm_password)
        if not token:
            raise ValidationError("Token is required")
        return self._complete(self.link, token, None, name.strip(), password)

    def authenticate(self, identifier: str, password: str) -> Account:
        """
        Password login by email address or roll number.

        An unknown identifier and a wrong password fail the same way and
        cost the same bcrypt comparison, so login cannot be used to discover
        which identifiers are registered.

        Raises:
            ValidationError: Missing field, or identifier is neither kind
            InvalidCredentials: Unknown identifier or wrong password
        """
        if not identifier or not identifier.strip() or not password:
            raise ValidationError("Identifier and Password are required")
        parsed = self.resolver.classify(identifier)

        account = self.resolver.lookup_existing(parsed)
        if account is None or account.password_hash is None:
            self.hasher.compare_absent(password)
            logger.info("Login rejected for %s: no account", parsed.key)
            raise InvalidCredentials("Invalid identifier or password")

        if not self.hasher.compare(password, account.password_hash):
            logger.info("Login rejected for %s: wrong password", parsed.key)
            raise InvalidCredentials("Invalid identifier or password")

        logger.info("Login succeeded for account %d", account.id)
        return account

    def _request(self, method: VerificationMethod, identifier: Identifier) -> RegistrationOutcome:
        if self.resolver.lookup_existing(identifier) is not None:
            raise AlreadyRegistered("User already registered")

        address = self.resolver.notification_address(identifier)
        secret = method.issue(identifier)
        try:
            self._notify(method.compose(address, secret))
        except NotificationFailed:
            method.discard(identifier)
            raise

        logger.info(
            "Registration %s -> %s for %s",
            RegistrationState.IDLE.value,
            method.issued_state.value,
            identifier.key,
        )
        return RegistrationOutcome(state=method.issued_state, identifier=identifier.key, address=address)

    def _complete(
        self,
        method: VerificationMethod,
        proof: str,
        identifier: Identifier | None,
        name: str,
        password: str,
    ) -> RegistrationOutcome:
        verified = method.redeem(proof, identifier)
        logger.info(
            "Registration %s -> %s for %s",
            method.issued_state.value,
            RegistrationState.VERIFIED.value,
            verified.key,
        )

        new_account = NewAccount(
            name=name,
            password_hash=self.hasher.hash(password),
            email=verified.address if isinstance(verified, EmailIdentifier) else None,
            roll_number=verified.number if isinstance(verified, RollNumberIdentifier) else None,
            profile=self._enrich(verified),
        )
        self.accounts.create(new_account)

        logger.info(
            "Registration %s -> %s for %s",
            RegistrationState.VERIFIED.value,
            RegistrationState.CREATED.value,
            verified.key,
        )
        return RegistrationOutcome(state=RegistrationState.CREATED, identifier=verified.key)

    def _enrich(self, identifier: Identifier) -> RosterProfile:
        """Roster fields for roll numbers; a missing profile is not an error."""
        if self.roster is None or not isinstance(identifier, RollNumberIdentifier):
            return RosterProfile()
        profile = self.roster.lookup(identifier.number)
        if profile is None:
            logger.info("No roster profile for %s, creating with base fields", identifier.key)
            return RosterProfile()
        return profile

    def _notify(self, message: EmailMessage) -> None:
        try:
            self.email_sender.send(message)
        except Exception:
            logger.exception("Notification dispatch to %s failed", message.to)
            raise NotificationFailed("Sending email failed") from None

    def _validate_account_fields(self, name: str, password: str, confirm_password: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Username is required")
        if password != confirm_password:
            raise ValidationError("Passwords do not match")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if len(password.encode()) > MAX_PLAINTEXT_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PLAINTEXT_BYTES} bytes")
