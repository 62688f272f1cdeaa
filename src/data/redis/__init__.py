"""Redis module for session-scoped state and notifications."""

from data.redis.connection import RedisConnection, redis_connection
from data.redis.cache_ops import (
    get_cached_value,
    set_cached_value,
    delete_cached_value,
    publish_message,
)
from data.redis.cache_keys import CacheKeys, TTL

__all__ = [
    # Connection
    "RedisConnection",
    "redis_connection",
    # Cache operations
    "get_cached_value",
    "set_cached_value",
    "delete_cached_value",
    "publish_message",
    # Cache keys and TTL
    "CacheKeys",
    "TTL",
]
