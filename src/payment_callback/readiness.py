"""
Auth readiness for the payment callback.

After the gateway redirect the auth subsystem restores its session
asynchronously. Confirming the order or clearing the cart before that finishes
would act on the wrong (or no) session, so processing waits behind
``ReadinessGate`` until the auth source stops reporting ``loading``.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Protocol

from payment_callback import callback_logger as logger
from payment_callback.schemas import UserInfo
from utils.jwt_utils import get_token_payload


class AuthReadiness(Protocol):
    @property
    def loading(self) -> bool: ...

    async def wait_until_ready(self) -> None: ...


class AuthState:
    """
    Readiness signal of the auth subsystem.

    Both an authenticated user and a definitive anonymous session count as
    ready; only "still loading" blocks.
    """

    def __init__(self) -> None:
        self._ready = asyncio.Event()
        self.user: Optional[UserInfo] = None

    @property
    def loading(self) -> bool:
        return not self._ready.is_set()

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def resolve(self, user: Optional[UserInfo] = None) -> None:
        if self._ready.is_set():
            logger.debug("Auth state already resolved; ignoring")
            return
        self.user = user
        self._ready.set()
        logger.info("Auth ready (user_id=%s)", user.user_id if user else None)

    async def load_token(self, token: Optional[str]) -> Optional[UserInfo]:
        """Resolve from a bearer token; a missing or invalid token resolves anonymously."""
        user = None
        try:
            payload = get_token_payload(token)
            if payload:
                user = UserInfo(user_id=payload.user_id, username=payload.username)
        finally:
            # Waiters must be released even if the token could not be read
            self.resolve(user)
        return self.user

    async def wait_until_ready(self) -> None:
        await self._ready.wait()


class ReadinessGate:
    """
    Suspends callback processing until auth is ready, then releases once.

    ``wait()`` returns True to the first caller released after auth became
    ready. Every other invocation, whether it arrived while waiting or after
    the release, returns False.
    """

    def __init__(self, auth: AuthReadiness) -> None:
        self._auth = auth
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    async def wait(self) -> bool:
        if self._released:
            return False

        if self._auth.loading:
            logger.info("Waiting for auth to load after payment redirect...")
            await self._auth.wait_until_ready()

        # Check again: another waiter may have been released first
        if self._released:
            return False
        self._released = True
        return True
