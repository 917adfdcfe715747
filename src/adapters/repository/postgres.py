"""
PostgreSQL repository adapter - Implements AccountRepository protocol.

This module provides the PostgreSQL implementation of the domain's
account port using psycopg3 with raw SQL, plus the startup migration
runner.

Duplicate Prevention:
--------------------
The users table carries UNIQUE constraints on email and roll_number.
create() relies on them: a UniqueViolation on INSERT is reported as
AlreadyRegistered. The lookup performed when a code or link is issued
is only a fast path; two redemptions racing for the same identifier
cannot both succeed.
"""

import logging
from pathlib import Path

import psycopg
from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.exceptions import AlreadyRegistered, StoreUnavailable
from src.domain.ports import Account, NewAccount

logger = logging.getLogger(__name__)

_ACCOUNT_COLUMNS = "id, name, email, roll_number, password_hash"


class PostgresAccountRepository:
    """
    Implements AccountRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> Account | None:
        return self._find_one(f"SELECT {_ACCOUNT_COLUMNS} FROM users WHERE email = %s", email)

    def find_by_roll_number(self, roll_number: int) -> Account | None:
        return self._find_one(f"SELECT {_ACCOUNT_COLUMNS} FROM users WHERE roll_number = %s", roll_number)

    def create(self, account: NewAccount) -> Account:
        """
        Insert a new user row.

        Args:
            account: Derived fields including the bcrypt password hash

        Returns:
            The created Account

        Raises:
            AlreadyRegistered: email or roll_number already exists
            StoreUnavailable: any other database failure
        """
        sql = """
            INSERT INTO users (name, email, roll_number, password_hash, batch, branch, position, club_dept)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING id
        """
        profile = account.profile
        club_dept = [profile.club_dept] if profile.club_dept else []
        params = (
            account.name,
            account.email,
            account.roll_number,
            account.password_hash,
            profile.batch,
            profile.branch,
            profile.position,
            club_dept,
        )

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
                conn.commit()
        except errors.UniqueViolation:
            raise AlreadyRegistered("User already registered") from None
        except psycopg.Error as e:
            logger.error("User insert failed: %s", e)
            raise StoreUnavailable("Account storage unavailable") from e

        return Account(
            id=row[0],
            name=account.name,
            email=account.email,
            roll_number=account.roll_number,
            password_hash=account.password_hash,
        )

    def _find_one(self, sql: str, value: object) -> Account | None:
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (value,))
                row = cursor.fetchone()
        except psycopg.Error as e:
            logger.error("User lookup failed: %s", e)
            raise StoreUnavailable("Account storage unavailable") from e

        if row is None:
            return None
        return Account(id=row[0], name=row[1], email=row[2], roll_number=row[3], password_hash=row[4])


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
