"""
Domain layer - Pure business logic with zero framework imports.

This package contains the identity-verification core: secret generation,
credential hashing, verification tokens, identifier resolution, and the
registration state machine. It defines its own port interfaces for
infrastructure abstraction.
"""

from .codes import new_otp, new_signing_key
from .exceptions import (
    AlreadyRegistered,
    InvalidCredentials,
    InvalidOtp,
    InvalidToken,
    NotificationFailed,
    OtpExpired,
    RegistrationError,
    StoreUnavailable,
    ValidationError,
    VerificationExpiredOrNotStarted,
)
from .hashing import CredentialHasher
from .identifiers import EmailIdentifier, IdentifierResolver, RollNumberIdentifier, classify
from .ports import (
    Account,
    AccountRepository,
    EmailMessage,
    EmailSender,
    KeyValueStore,
    NewAccount,
    RegistrationState,
    RosterLookup,
    RosterProfile,
)
from .registration import RegistrationOutcome, RegistrationService
from .tokens import VerificationClaims, VerificationTokenService
from .verification import LinkVerification, OtpVerification, VerificationMethod

__all__ = [
    "Account",
    "AccountRepository",
    "AlreadyRegistered",
    "CredentialHasher",
    "EmailIdentifier",
    "EmailMessage",
    "EmailSender",
    "IdentifierResolver",
    "InvalidCredentials",
    "InvalidOtp",
    "InvalidToken",
    "KeyValueStore",
    "LinkVerification",
    "NewAccount",
    "NotificationFailed",
    "OtpExpired",
    "OtpVerification",
    "RegistrationError",
    "RegistrationOutcome",
    "RegistrationService",
    "RegistrationState",
    "RollNumberIdentifier",
    "RosterLookup",
    "RosterProfile",
    "StoreUnavailable",
    "ValidationError",
    "VerificationClaims",
    "VerificationExpiredOrNotStarted",
    "VerificationMethod",
    "VerificationTokenService",
    "classify",
    "new_otp",
    "new_signing_key",
]
