"""
Test doubles shared across the unit, integration, and adversarial suites.
"""

import threading
import time
from unittest.mock import Mock

from src.domain.exceptions import AlreadyRegistered
from src.domain.ports import Account, NewAccount

TEST_SECRET = "test-signing-secret-0123456789abcdef"

# Low bcrypt cost keeps the suite fast; production uses 10
TEST_ROUNDS = 4


class FakeClock:
    """Manually advanced clock returning epoch seconds, starting at wall time."""

    def __init__(self, start: float | None = None) -> None:
        self.now = time.time() if start is None else start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryAccountRepository:
    """AccountRepository fake with uniqueness enforced under a lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.accounts: list[tuple[Account, NewAccount]] = []

    def find_by_email(self, email: str) -> Account | None:
        return next((a for a, _ in self.accounts if a.email == email), None)

    def find_by_roll_number(self, roll_number: int) -> Account | None:
        return next((a for a, _ in self.accounts if a.roll_number == roll_number), None)

    def create(self, account: NewAccount) -> Account:
        with self._lock:
            for existing, _ in self.accounts:
                if account.email is not None and existing.email == account.email:
                    raise AlreadyRegistered("User already registered")
                if account.roll_number is not None and existing.roll_number == account.roll_number:
                    raise AlreadyRegistered("User already registered")
            created = Account(
                id=len(self.accounts) + 1,
                name=account.name,
                email=account.email,
                roll_number=account.roll_number,
                password_hash=account.password_hash,
            )
            self.accounts.append((created, account))
            return created


class DurableDictStore:
    """KeyValueStore without TTL support, like the Postgres emulation."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str, ttl_seconds: int | None = None) -> bool:
        self.data[key] = value
        return True

    def delete(self, key: str) -> bool:
        self.data.pop(key, None)
        return True


def sent_otp(sender: Mock) -> str:
    """Extract the plaintext code from the last message sent."""
    message = sender.send.call_args[0][0]
    return message.text.split("verification code is ")[1][:6]


def sent_token(sender: Mock) -> str:
    """Extract the token from the last verification link sent."""
    message = sender.send.call_args[0][0]
    return message.text.split("?token=")[1].split()[0]
