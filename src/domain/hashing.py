"""
Credential hashing - bcrypt with per-value salt.

Used identically for passwords and one-time codes: only the digest is
ever persisted.

Security Design - Timing Oracle Prevention:
------------------------------------------
bcrypt.checkpw() compares in constant time and its cost dominates the
response time. When a stored digest is malformed we still run bcrypt
against a dummy digest so a corrupted record cannot be told apart from a
wrong guess by timing.
"""

import logging
from dataclasses import dataclass

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_COST = 10

# bcrypt only reads the first 72 bytes; registration rejects longer passwords,
# comparison truncates them since bcrypt 5 raises on longer input
MAX_PLAINTEXT_BYTES = 72

_DUMMY_BCRYPT_HASH = bcrypt.hashpw(b"dummy_value_for_timing_safety", bcrypt.gensalt(DEFAULT_COST))


def _encode(plaintext: str) -> bytes:
    return plaintext.encode()[:MAX_PLAINTEXT_BYTES]


@dataclass(frozen=True)
class CredentialHasher:
    """One-way hashing with a fresh random salt per value."""

    rounds: int = DEFAULT_COST

    def hash(self, plaintext: str) -> str:
        """Hash plaintext with a fresh salt at the configured cost factor."""
        return bcrypt.hashpw(_encode(plaintext), bcrypt.gensalt(rounds=self.rounds)).decode()

    def compare(self, plaintext: str, digest: str) -> bool:
        """Check plaintext against digest in constant time."""
        try:
            return bcrypt.checkpw(_encode(plaintext), digest.encode())
        except ValueError:
            logger.warning("Malformed bcrypt digest encountered during comparison")
            bcrypt.checkpw(_encode(plaintext), _DUMMY_BCRYPT_HASH)
            return False

    def compare_absent(self, plaintext: str) -> bool:
        """
        Spend one comparison when there is no digest to check against.

        Always False. Login calls this for unknown identifiers so the
        response takes as long as a wrong password would.
        """
        bcrypt.checkpw(_encode(plaintext), _DUMMY_BCRYPT_HASH)
        return False
