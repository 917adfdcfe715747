"""
PostgreSQL key store adapter - Implements KeyValueStore protocol.

Durable relational emulation of a key-value store over the key_values
table (migrations/001_create_key_values.sql). There is no TTL concept:
entries live until an explicit delete, and callers that need expiry
check elapsed time themselves.

set() is a single INSERT ... ON CONFLICT DO UPDATE, so the upsert is
atomic at the storage layer. Every psycopg error is logged and turned
into the weakest safe answer (None / False); this adapter never raises
to its caller.
"""

import logging

import psycopg
from psycopg_pool import ConnectionPool

logger = logging.getLogger(__name__)


class PostgresKeyStore:
    """
    Implements KeyValueStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def get(self, key: str) -> str | None:
        sql = "SELECT value FROM key_values WHERE key = %s"
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (key,))
                row = cursor.fetchone()
        except psycopg.Error as e:
            logger.error("Postgres key store get failed: %s", e)
            return None
        return row[0] if row is not None else None

    def set(self, key: str, value: str, ttl_seconds: int | None = None) -> bool:
        """Upsert value under key. ttl_seconds is accepted and ignored."""
        sql = """
            INSERT INTO key_values (key, value)
            VALUES (%s, %s)
            ON CONFLICT (key) DO UPDATE
            SET value = EXCLUDED.value
        """
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (key, value))
                conn.commit()
        except psycopg.Error as e:
            logger.error("Postgres key store set failed: %s", e)
            return False
        return True

    def delete(self, key: str) -> bool:
        sql = "DELETE FROM key_values WHERE key = %s"
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (key,))
                conn.commit()
        except psycopg.Error as e:
            logger.error("Postgres key store delete failed: %s", e)
            return False
        return True
