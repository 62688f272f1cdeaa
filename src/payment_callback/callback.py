from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from config import PAYMENT_FAILURE_REDIRECT_DELAY, PAYMENT_SUCCESS_REDIRECT_DELAY
from payment_callback.orchestrator import (
    ClearsCart,
    ConfirmationOrchestrator,
    ConfirmsOrders,
    Notifies,
    RemovesPendingOrder,
)
from payment_callback.params import CallbackParams, parse_callback_query, parse_callback_url
from payment_callback.readiness import AuthReadiness
from payment_callback.scheduling import Navigates
from payment_callback.schemas import ProcessingView


@dataclass
class CallbackServices:
    """Collaborators a mounted payment callback talks to."""
    auth: AuthReadiness
    orders: ConfirmsOrders
    cart: ClearsCart
    pending_orders: RemovesPendingOrder
    notifier: Notifies
    navigator: Navigates


class PaymentCallback:
    """
    One mounted payment callback.

    The redirect parameters are parsed once, at construction. ``process()``
    may be invoked any number of times (re-renders, duplicate mounts); only
    the first invocation released by the readiness gate does any work.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        *,
        services: CallbackServices,
        query: Optional[Mapping[str, Any]] = None,
        success_delay: float = PAYMENT_SUCCESS_REDIRECT_DELAY,
        failure_delay: float = PAYMENT_FAILURE_REDIRECT_DELAY,
    ) -> None:
        self.params: CallbackParams = parse_callback_query(query) if query is not None else parse_callback_url(url)
        self._orchestrator = ConfirmationOrchestrator(
            auth=services.auth,
            orders=services.orders,
            cart=services.cart,
            pending_orders=services.pending_orders,
            notifier=services.notifier,
            navigator=services.navigator,
            success_delay=success_delay,
            failure_delay=failure_delay,
        )

    @property
    def view(self) -> ProcessingView:
        return self._orchestrator.state.view()

    @property
    def disposed(self) -> bool:
        return self._orchestrator.state.disposed

    async def process(self) -> ProcessingView:
        await self._orchestrator.run(self.params)
        return self.view

    def dispose(self) -> None:
        self._orchestrator.dispose()

    async def wait_for_navigation(self) -> None:
        await self._orchestrator.wait_for_navigation()
