"""
Confirmation orchestrator: the state machine behind one payment callback.

Flow of ``run``:
1. Return immediately if this instance already ran (ProcessingGuard)
2. Wait for auth to be ready (ReadinessGate), then trip the guard
3. Decide the branch; on the confirmation branch call the confirmation RPC once
4. Apply the outcome: terminal phase, notification, cart and pending-order
   cleanup on success, navigation (delayed except for invalid callbacks)

Side-effect failures are logged and never change the decided outcome.
"""
from __future__ import annotations

import inspect
from typing import Any, Callable, Mapping, Optional, Protocol

from config import PAYMENT_FAILURE_REDIRECT_DELAY, PAYMENT_SUCCESS_REDIRECT_DELAY
from payment_callback import callback_logger as logger
from payment_callback.decision import (
    CallbackBranch,
    CallbackOutcome,
    ConfirmationResult,
    confirming_notification,
    failed_outcome,
    resolve_outcome,
    select_branch,
)
from payment_callback.guard import ProcessingGuard
from payment_callback.params import CallbackParams
from payment_callback.readiness import AuthReadiness, ReadinessGate
from payment_callback.scheduling import Navigates, NavigationScheduler
from payment_callback.schemas import ConfirmOrderRequest, ConfirmOrderResponse, Notification
from payment_callback.state import ProcessingState


class ConfirmsOrders(Protocol):
    async def confirm_order(self, order_ref: str, payment: ConfirmOrderRequest) -> ConfirmOrderResponse: ...


class ClearsCart(Protocol):
    async def clear(self) -> Any: ...


class RemovesPendingOrder(Protocol):
    async def remove(self) -> Any: ...


class Notifies(Protocol):
    async def notify(self, notification: Notification) -> Any: ...


class ConfirmationOrchestrator:
    def __init__(
        self,
        *,
        auth: AuthReadiness,
        orders: ConfirmsOrders,
        cart: ClearsCart,
        pending_orders: RemovesPendingOrder,
        notifier: Notifies,
        navigator: Navigates,
        success_delay: float = PAYMENT_SUCCESS_REDIRECT_DELAY,
        failure_delay: float = PAYMENT_FAILURE_REDIRECT_DELAY,
    ) -> None:
        self.state = ProcessingState()
        self._guard = ProcessingGuard()
        self._gate = ReadinessGate(auth)
        self._scheduler = NavigationScheduler(navigator)
        self._orders = orders
        self._cart = cart
        self._pending_orders = pending_orders
        self._notifier = notifier
        self._success_delay = success_delay
        self._failure_delay = failure_delay

    @property
    def has_run(self) -> bool:
        return self._guard.tripped

    @property
    def navigation_pending(self) -> bool:
        return self._scheduler.pending

    async def run(self, params: CallbackParams) -> ProcessingState:
        if self._guard.tripped:
            logger.debug("Payment callback already processed; ignoring re-invocation")
            return self.state

        if not await self._gate.wait():
            return self.state

        if self.state.disposed:
            logger.info("Payment callback disposed while waiting for auth; skipping (ref=%s)", params.order_ref)
            self.state.processing = False
            return self.state

        if not self._guard.trip():
            return self.state

        self.state.order_ref = params.order_ref
        logger.info(
            "Payment callback received: payment=%s, ref=%s, payment_id=%s",
            params.outcome.value, params.order_ref, params.gateway_payment_id,
        )

        try:
            outcome = await self._decide(params)
            if outcome is None or self.state.disposed:
                logger.info("Payment callback disposed before outcome was applied (ref=%s)", params.order_ref)
                return self.state
            await self._apply(outcome)
        except Exception as exc:
            logger.exception("Payment callback error (ref=%s)", params.order_ref)
            if not self.state.disposed and not self.state.phase.is_terminal:
                await self._apply(failed_outcome(str(exc) or None, failure_delay=self._failure_delay))
        finally:
            self.state.processing = False

        return self.state

    async def _decide(self, params: CallbackParams) -> Optional[CallbackOutcome]:
        """Return the outcome to apply, or None when disposal stopped the confirmation from being sent."""
        branch = select_branch(params)
        if branch is not CallbackBranch.CONFIRM:
            logger.info("Payment callback resolved without confirmation (branch=%s)", branch.value)
            return self._resolve(params)

        if self.state.disposed:
            return None
        await self._safely("progress notification", self._notifier.notify, confirming_notification())

        if self.state.disposed:
            return None
        try:
            response = await self._orders.confirm_order(
                params.order_ref,
                ConfirmOrderRequest(**params.gateway_identifiers()),
            )
            if isinstance(response, Mapping):
                response = ConfirmOrderResponse.model_validate(response)
            confirmation = ConfirmationResult.from_response(response)
        except Exception as exc:
            logger.error("Order confirmation failed (ref=%s): %s", params.order_ref, exc)
            confirmation = ConfirmationResult.from_error(exc)

        logger.info("Order confirmation result (ref=%s): success=%s", params.order_ref, confirmation.success)
        return self._resolve(params, confirmation)

    def _resolve(self, params: CallbackParams, confirmation: Optional[ConfirmationResult] = None) -> CallbackOutcome:
        return resolve_outcome(
            params,
            confirmation,
            success_delay=self._success_delay,
            failure_delay=self._failure_delay,
        )

    async def _apply(self, outcome: CallbackOutcome) -> None:
        self.state.transition(outcome.phase)
        self.state.message = outcome.message
        self.state.redirect_to = outcome.redirect_to
        self.state.redirect_delay = outcome.redirect_delay

        await self._safely("outcome notification", self._notifier.notify, outcome.notification)

        if outcome.clear_session:
            await self._safely("cart clear", self._cart.clear)
            if self.state.disposed:
                return
            await self._safely("pending order cleanup", self._pending_orders.remove)

        if self.state.disposed:
            return
        self._scheduler.schedule(outcome.redirect_to, outcome.redirect_delay)

    async def _safely(self, action: str, func: Callable[..., Any], *args: Any) -> bool:
        try:
            result = func(*args)
            if inspect.isawaitable(result):
                await result
            return True
        except Exception:
            logger.exception("Payment callback side effect failed: %s", action)
            return False

    def dispose(self) -> None:
        """Tear down: suppress remaining side effects and cancel pending navigation."""
        self.state.disposed = True
        self._scheduler.cancel()

    async def wait_for_navigation(self) -> None:
        await self._scheduler.wait()
