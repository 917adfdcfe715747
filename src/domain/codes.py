"""
Secret generation - one-time codes and signing material.

Uses the secrets module for cryptographic randomness; codes are
security credentials and must not be predictable.
"""

import secrets

OTP_MIN = 100000
OTP_MAX = 999999


def new_otp() -> str:
    """
    Generate a 6-digit one-time code.

    Drawn uniformly from [100000, 999999] so the leading digit is never
    zero and the code always has exactly six characters.
    """
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


def new_signing_key(nbytes: int = 32) -> str:
    """Generate URL-safe random material for REGISTRATION_SECRET."""
    return secrets.token_urlsafe(nbytes)
