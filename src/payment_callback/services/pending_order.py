from __future__ import annotations

from typing import Any, Optional

from data.redis.cache_keys import CacheKeys, TTL
from data.redis.cache_ops import delete_cached_value, get_cached_value, set_cached_value
from utils.logger import get_current_logger


class PendingOrderStore:
    """
    Session-local marker for the order that is waiting on the gateway.

    Checkout writes it before redirecting to the gateway; the callback removes
    it once the order is confirmed. Removal is idempotent. Without a session
    there is no marker, and every operation is a no-op.
    """

    def __init__(self, session_id: Optional[str]) -> None:
        self.session_id = session_id
        self.key = CacheKeys.pending_order(session_id) if session_id else None

    async def save(self, order: dict[str, Any]) -> bool:
        if self.key is None:
            return False
        return await set_cached_value(self.key, order, ttl=TTL.PENDING_ORDER)

    async def get(self) -> Optional[dict[str, Any]]:
        if self.key is None:
            return None
        return await get_cached_value(self.key)

    async def remove(self) -> bool:
        logger = get_current_logger()
        if self.key is None:
            logger.debug("No session; no pending order marker to clear")
            return False
        removed = await delete_cached_value(self.key)
        logger.info(f"Pending order marker cleared for session {self.session_id} (existed={removed})")
        return removed
