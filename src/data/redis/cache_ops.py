import json
from typing import Any

from data.redis.connection import redis_connection
from utils.logger import get_current_logger


async def get_cached_value(key: str) -> Any | None:
    """
    Get value from Redis cache (async).

    Returns:
        Cached value (JSON-decoded when possible) or None if not found
    """
    logger = get_current_logger()
    try:
        redis = await redis_connection.get_client()
        value = await redis.get(key)

        if value is None:
            return None

        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            return value

    except Exception as e:
        logger.error(f"Failed to get cached value for key '{key}': {e}")
        return None


async def set_cached_value(key: str, value: Any, ttl: int = None) -> bool:
    """
    Set value in Redis cache (async).

    Args:
        key: Cache key
        value: Value to cache (will be JSON-encoded if not string)
        ttl: Time to live in seconds (optional)

    Returns:
        True if successful, False otherwise
    """
    logger = get_current_logger()
    try:
        redis = await redis_connection.get_client()

        if not isinstance(value, str):
            value = json.dumps(value)

        if ttl:
            await redis.setex(key, ttl, value)
        else:
            await redis.set(key, value)

        logger.debug(f"Cached value for key '{key}' (TTL: {ttl}s)")
        return True

    except Exception as e:
        logger.error(f"Failed to set cached value for key '{key}': {e}")
        return False


async def delete_cached_value(key: str) -> bool:
    """
    Delete value from Redis cache (async).

    Returns:
        True if deleted, False if not found or error
    """
    logger = get_current_logger()
    try:
        redis = await redis_connection.get_client()
        result = await redis.delete(key)
        return result > 0

    except Exception as e:
        logger.error(f"Failed to delete cached value for key '{key}': {e}")
        return False


async def publish_message(channel: str, payload: dict[str, Any]) -> bool:
    """
    Publish a JSON payload on a Redis Pub/Sub channel.

    Returns:
        True if published, False on error
    """
    logger = get_current_logger()
    try:
        redis = await redis_connection.get_client()
        await redis.publish(channel, json.dumps(payload))
        logger.debug(f"Published message on channel '{channel}'")
        return True

    except Exception as e:
        logger.error(f"Failed to publish on channel '{channel}': {e}")
        return False
