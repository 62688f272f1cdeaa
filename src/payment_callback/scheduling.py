from __future__ import annotations

import asyncio
import contextlib
from typing import Optional, Protocol

from payment_callback import callback_logger as logger


class Navigates(Protocol):
    def go(self, path: str) -> None: ...


class NavigationScheduler:
    """
    Issues navigation for one callback instance, now or after a delay.

    A delayed navigation runs as an asyncio task; ``cancel()`` drops it so a
    torn-down instance never navigates against stale state. At most one
    navigation is ever pending.
    """

    def __init__(self, navigator: Navigates) -> None:
        self._navigator = navigator
        self._task: Optional[asyncio.Task] = None
        self._cancelled = False

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self, path: str, delay: float = 0.0) -> None:
        if self._cancelled:
            logger.info("Navigation to %s dropped: callback disposed", path)
            return
        if self.pending:
            self._task.cancel()

        if delay <= 0:
            self._go(path)
            return

        logger.debug("Navigation to %s scheduled in %.1fs", path, delay)
        self._task = asyncio.get_running_loop().create_task(self._go_later(path, delay))

    async def _go_later(self, path: str, delay: float) -> None:
        await asyncio.sleep(delay)
        self._go(path)

    def _go(self, path: str) -> None:
        try:
            self._navigator.go(path)
        except Exception:
            logger.exception("Navigation to %s failed", path)

    def cancel(self) -> None:
        self._cancelled = True
        if self.pending:
            self._task.cancel()
            logger.debug("Pending navigation cancelled")

    async def wait(self) -> None:
        """Wait for a pending navigation to fire (or be cancelled)."""
        if self._task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
