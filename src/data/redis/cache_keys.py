from config import PENDING_ORDER_TTL


class TTL:
    """Time-to-Live constants for different cache types."""
    PENDING_ORDER = PENDING_ORDER_TTL   # checkout marker, cleared on confirmation


class CacheKeys:
    """Cache key generators for all Redis keys."""

    @staticmethod
    def pending_order(session_id: str) -> str:
        """Session-local marker for the order awaiting payment."""
        return f"session:{session_id}:pending_order"

    @staticmethod
    def payment_notification(session_id: str) -> str:
        """Redis channel key for payment notifications shown to one session."""
        return f"payment:notification:{session_id}"
