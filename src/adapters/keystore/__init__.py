"""Key-value store adapters - interchangeable KeyValueStore backends."""

from .memory import MemoryKeyStore
from .postgres import PostgresKeyStore
from .redis_cache import RedisKeyStore

__all__ = ["MemoryKeyStore", "PostgresKeyStore", "RedisKeyStore"]
