"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A controllable clock for TTL and token expiry tests
- In-memory account repository and key store
- A fully wired RegistrationService with a spy email sender
"""

import os

# Settings refuse to load without a signing secret
os.environ.setdefault("REGISTRATION_SECRET", "test-registration-secret-0123456789abcdef")

from unittest.mock import Mock

import pytest

from fakes import TEST_ROUNDS, TEST_SECRET, FakeClock, InMemoryAccountRepository
from src.adapters.keystore.memory import MemoryKeyStore
from src.domain.hashing import CredentialHasher
from src.domain.identifiers import IdentifierResolver
from src.domain.registration import RegistrationService
from src.domain.tokens import VerificationTokenService
from src.domain.verification import LinkVerification, OtpVerification


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def hasher() -> CredentialHasher:
    return CredentialHasher(rounds=TEST_ROUNDS)


@pytest.fixture
def store(clock: FakeClock) -> MemoryKeyStore:
    return MemoryKeyStore(clock=clock)


@pytest.fixture
def accounts() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def sender() -> Mock:
    return Mock()


@pytest.fixture
def tokens(clock: FakeClock) -> VerificationTokenService:
    return VerificationTokenService(secret=TEST_SECRET, clock=clock)


@pytest.fixture
def service(
    store: MemoryKeyStore,
    accounts: InMemoryAccountRepository,
    sender: Mock,
    hasher: CredentialHasher,
    tokens: VerificationTokenService,
    clock: FakeClock,
) -> RegistrationService:
    """RegistrationService wired to in-memory collaborators."""
    return RegistrationService(
        resolver=IdentifierResolver(accounts=accounts),
        accounts=accounts,
        email_sender=sender,
        hasher=hasher,
        otp=OtpVerification(store=store, hasher=hasher, clock=clock),
        link=LinkVerification(tokens=tokens, base_url="https://anant.example.org"),
    )
