"""
Redis key store adapter - Implements KeyValueStore protocol.

Expiring-cache backend: a value stays visible until its TTL elapses,
after which Redis drops it without an explicit delete.

SET and EXPIRE are issued as two commands. If EXPIRE fails the key is
left without expiry; this degradation is logged and the write still
counts as successful, since the service rechecks elapsed time on read.
"""

import logging

import redis

logger = logging.getLogger(__name__)


class RedisKeyStore:
    """
    Implements KeyValueStore protocol via redis-py.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Connection errors are logged and converted to None/False.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisKeyStore":
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def get(self, key: str) -> str | None:
        try:
            value = self._client.get(key)
        except redis.RedisError:
            logger.exception("Redis key store get failed")
            return None
        if isinstance(value, bytes):
            return value.decode()
        return value

    def set(self, key: str, value: str, ttl_seconds: int | None = None) -> bool:
        try:
            self._client.set(key, value)
        except redis.RedisError:
            logger.exception("Redis key store set failed")
            return False

        if ttl_seconds is not None:
            try:
                self._client.expire(key, ttl_seconds)
            except redis.RedisError:
                logger.warning("Redis EXPIRE failed, key %s left without expiry", key, exc_info=True)
        return True

    def delete(self, key: str) -> bool:
        # DEL on a missing key returns 0; that still counts as success
        try:
            self._client.delete(key)
        except redis.RedisError:
            logger.exception("Redis key store delete failed")
            return False
        return True
