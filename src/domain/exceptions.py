"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Every kind is scoped to a single request; none is fatal to the process.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class ValidationError(RegistrationError):
    """Malformed input: shape, length, or password confirmation mismatch."""

    pass


class AlreadyRegistered(RegistrationError):
    """An account already exists for the identifier."""

    pass


class VerificationExpiredOrNotStarted(RegistrationError):
    """No pending verification exists (never requested, expired, or consumed)."""

    pass


class OtpExpired(RegistrationError):
    """Pending verification is older than the OTP window."""

    pass


class InvalidOtp(RegistrationError):
    """Submitted code does not match the stored hash."""

    pass


class InvalidCredentials(RegistrationError):
    """Login failed: unknown identifier or wrong password, deliberately not distinguished."""

    pass


class InvalidToken(RegistrationError):
    """Verification token has a bad signature, is expired, or is malformed."""

    pass


class StoreUnavailable(RegistrationError):
    """Key-value store or account storage failed. Cause is logged, not exposed."""

    pass


class NotificationFailed(RegistrationError):
    """Notification could not be dispatched. Cause is logged, not exposed."""

    pass
