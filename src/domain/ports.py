"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure, plus the plain data records that cross them.
Adapters implement these protocols via structural subtyping.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol


class RegistrationState(str, Enum):
    """
    Registration state machine states.

    Code flow:  IDLE -> CODE_REQUESTED -> VERIFIED -> CREATED
    Link flow:  IDLE -> LINK_ISSUED -> VERIFIED -> CREATED

    Failed attempts are never persisted; from the caller's point of view
    every rejected request leaves the flow in IDLE.
    """

    IDLE = "IDLE"
    CODE_REQUESTED = "CODE_REQUESTED"
    LINK_ISSUED = "LINK_ISSUED"
    VERIFIED = "VERIFIED"
    CREATED = "CREATED"


@dataclass(frozen=True)
class EmailMessage:
    """Outbound notification handed to an EmailSender."""

    to: str
    subject: str
    text: str
    html: str | None = None


@dataclass(frozen=True)
class RosterProfile:
    """Optional profile fields from the external roster dataset."""

    batch: str | None = None
    branch: str | None = None
    position: str | None = None
    club_dept: str | None = None


@dataclass(frozen=True)
class NewAccount:
    """Fields derived by the registration flow for account creation."""

    name: str
    password_hash: str
    email: str | None = None
    roll_number: int | None = None
    profile: RosterProfile = field(default_factory=RosterProfile)


@dataclass(frozen=True)
class Account:
    """Existing account as returned by the AccountRepository."""

    id: int
    name: str
    email: str | None = None
    roll_number: int | None = None
    password_hash: str | None = field(default=None, repr=False, compare=False)


class KeyValueStore(Protocol):
    """
    Port interface for string key-value storage with optional expiry.

    Contract:
    - get() after expiry or delete() returns None, never a stale value
    - set() is an upsert and never partially applies
    - delete() of an absent key returns True (idempotent under retry)
    """

    def get(self, key: str) -> str | None:
        """Return the value stored under key, or None if absent."""
        ...

    def set(self, key: str, value: str, ttl_seconds: int | None = None) -> bool:
        """Store value under key. Returns True on success, False on failure."""
        ...

    def delete(self, key: str) -> bool:
        """Remove key. Returns True on success (including absent key)."""
        ...


class AccountRepository(Protocol):
    """Port interface for account lookup and creation."""

    def find_by_email(self, email: str) -> Account | None:
        ...

    def find_by_roll_number(self, roll_number: int) -> Account | None:
        ...

    def create(self, account: NewAccount) -> Account:
        """
        Create an account.

        Raises:
            AlreadyRegistered: If the email or roll number is already taken.
                This is the authoritative duplicate check.
        """
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send(self, message: EmailMessage) -> None:
        """
        Deliver message.

        Raises any transport exception to the caller; no retry is attempted.
        """
        ...


class RosterLookup(Protocol):
    """Port interface for roster enrichment."""

    def lookup(self, roll_number: int) -> RosterProfile | None:
        ...
