from __future__ import annotations

from typing import Callable, Optional

from payment_callback import callback_logger as logger


class Navigator:
    """
    Navigation target for one client session.

    Navigation is fire-and-forget: ``go`` records the new location and hands
    it to the optional listener, nothing is returned.
    """

    def __init__(self, initial: str = "/payment/callback", listener: Optional[Callable[[str], None]] = None) -> None:
        self.location = initial
        self.history: list[str] = []
        self._listener = listener

    def go(self, path: str) -> None:
        logger.info("Navigating to %s", path)
        self.history.append(path)
        self.location = path
        if self._listener is not None:
            self._listener(path)
