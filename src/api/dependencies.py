"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes, and the
factories used at startup to build the configured backends.
"""

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.keystore import MemoryKeyStore, PostgresKeyStore, RedisKeyStore
from src.adapters.repository.postgres import PostgresAccountRepository
from src.adapters.roster.csv_roster import CsvRosterLookup
from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.sender import SmtpEmailSender
from src.config.settings import Settings, get_settings
from src.domain.hashing import CredentialHasher
from src.domain.identifiers import IdentifierResolver
from src.domain.ports import EmailSender, KeyValueStore
from src.domain.registration import RegistrationService
from src.domain.tokens import VerificationTokenService
from src.domain.verification import LinkVerification, OtpVerification


def build_keystore(settings: Settings, pool: ConnectionPool) -> KeyValueStore:
    """Create the configured key-value store backend."""
    if settings.keystore_backend == "postgres":
        return PostgresKeyStore(pool)
    if settings.keystore_backend == "memory":
        return MemoryKeyStore()
    return RedisKeyStore.from_url(settings.redis_url)


def build_email_sender(settings: Settings) -> EmailSender:
    """Create the configured email sender."""
    if settings.email_backend == "smtp":
        password = settings.smtp_password.get_secret_value() if settings.smtp_password else None
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.mail_from,
            username=settings.smtp_username,
            password=password,
            use_tls=settings.smtp_use_tls,
            timeout=settings.smtp_timeout_seconds,
        )
    return ConsoleEmailSender()


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_keystore(request: Request) -> KeyValueStore:
    """Get the key-value store built at startup."""
    return request.app.state.keystore


def get_email_sender(request: Request) -> EmailSender:
    """Get the email sender built at startup."""
    return request.app.state.email_sender


def get_registration_service(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires the account repository, key-value store, email sender and
    token service into the domain service.
    """
    accounts = PostgresAccountRepository(get_pool(request))
    hasher = CredentialHasher(rounds=settings.bcrypt_cost)
    tokens = VerificationTokenService(
        secret=settings.registration_secret.get_secret_value(),
        ttl_seconds=settings.link_ttl_seconds,
    )
    roster = CsvRosterLookup(settings.roster_csv_path) if settings.roster_csv_path else None

    return RegistrationService(
        resolver=IdentifierResolver(accounts=accounts, mail_domain=settings.mail_domain),
        accounts=accounts,
        email_sender=get_email_sender(request),
        hasher=hasher,
        otp=OtpVerification(
            store=get_keystore(request),
            hasher=hasher,
            ttl_seconds=settings.otp_ttl_seconds,
        ),
        link=LinkVerification(tokens=tokens, base_url=settings.app_base_url),
        roster=roster,
    )
