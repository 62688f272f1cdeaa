"""
Notification surface for the payment callback.

``NotificationCenter`` keeps at most one active notification per id, so the
"Confirming your order..." progress message is replaced by the success or
error message for the same action. When a ``RedisNotificationPublisher`` is
attached, each notification is also published for the client session's
websocket listener.
"""
from __future__ import annotations

import datetime
from typing import Optional

from data.redis.cache_keys import CacheKeys
from data.redis.cache_ops import publish_message
from payment_callback import callback_logger as logger
from payment_callback.schemas import Notification


class RedisNotificationPublisher:
    """Publishes notifications on the session's Redis Pub/Sub channel."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        self.channel = CacheKeys.payment_notification(session_id)

    async def publish(self, notification: Notification) -> bool:
        message = {
            **notification.model_dump(mode="json"),
            "session_id": self.session_id,
            "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
        }
        published = await publish_message(self.channel, message)
        if published:
            logger.info(f"Published notification: id={notification.id}, kind={notification.kind.value}")
        return published


class NotificationCenter:
    def __init__(self, publisher: Optional[RedisNotificationPublisher] = None) -> None:
        self._active: dict[str, Notification] = {}
        self.history: list[Notification] = []
        self._publisher = publisher

    @property
    def active(self) -> list[Notification]:
        return list(self._active.values())

    def get(self, notification_id: str) -> Optional[Notification]:
        return self._active.get(notification_id)

    async def notify(self, notification: Notification) -> None:
        replaced = self._active.get(notification.id)
        if replaced is not None:
            logger.debug("Notification %s replaces %s", notification.kind.value, replaced.kind.value)
        self._active[notification.id] = notification
        self.history.append(notification)

        if self._publisher is not None:
            await self._publisher.publish(notification)

    def dismiss(self, notification_id: str) -> None:
        self._active.pop(notification_id, None)
