"""
Pure decision table for a payment callback.

Given the parsed redirect and, on the confirmation branch, the result of the
confirmation RPC, decide the terminal phase, the message shown to the user,
whether the cart and pending-order marker are cleared, and where to navigate.
Nothing here performs I/O.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config import PAYMENT_FAILURE_REDIRECT_DELAY, PAYMENT_SUCCESS_REDIRECT_DELAY
from payment_callback.enums import NotificationKind, PaymentOutcome, ProcessingPhase
from payment_callback.params import CallbackParams
from payment_callback.schemas import ConfirmOrderResponse, Notification

NOTIFICATION_ID = "confirm-order"

CONFIRMING_MESSAGE = "Confirming your order..."
CONFIRMED_MESSAGE = "Order placed successfully!"
PAYMENT_FAILED_MESSAGE = "Payment failed. Please try again."
INVALID_CALLBACK_MESSAGE = "Invalid payment callback"
NOT_CONFIRMED_MESSAGE = "Failed to confirm order"
PROCESSING_ERROR_MESSAGE = "Failed to process payment"

HOME_PATH = "/"


def order_tracking_path(order_ref: str) -> str:
    return f"/track-order/{order_ref}"


class CallbackBranch(str, Enum):
    CONFIRM        = "confirm"
    GATEWAY_FAILED = "gateway_failed"
    INVALID        = "invalid"


@dataclass(frozen=True)
class ConfirmationResult:
    """What the confirmation RPC reported, reduced to what the decision needs."""

    success: bool
    message: Optional[str] = None
    raised: bool = False

    @classmethod
    def from_response(cls, response: ConfirmOrderResponse) -> "ConfirmationResult":
        return cls(success=bool(response.success), message=response.message or None)

    @classmethod
    def from_error(cls, exc: BaseException) -> "ConfirmationResult":
        message = getattr(exc, "message", None) or str(exc) or None
        return cls(success=False, message=message, raised=True)


@dataclass(frozen=True)
class CallbackOutcome:
    phase: ProcessingPhase
    kind: NotificationKind
    message: str
    redirect_to: str
    redirect_delay: float
    clear_session: bool = False

    @property
    def notification(self) -> Notification:
        return Notification(id=NOTIFICATION_ID, kind=self.kind, message=self.message)


def confirming_notification() -> Notification:
    return Notification(id=NOTIFICATION_ID, kind=NotificationKind.LOADING, message=CONFIRMING_MESSAGE)


def select_branch(params: CallbackParams) -> CallbackBranch:
    # A success redirect without a usable ref cannot be confirmed and is
    # handled like any other malformed callback.
    if params.can_confirm:
        return CallbackBranch.CONFIRM
    if params.outcome is PaymentOutcome.FAILED:
        return CallbackBranch.GATEWAY_FAILED
    return CallbackBranch.INVALID


def failed_outcome(message: Optional[str], *, failure_delay: float = PAYMENT_FAILURE_REDIRECT_DELAY) -> CallbackOutcome:
    return CallbackOutcome(
        phase=ProcessingPhase.FAILED,
        kind=NotificationKind.ERROR,
        message=message or PROCESSING_ERROR_MESSAGE,
        redirect_to=HOME_PATH,
        redirect_delay=failure_delay,
    )


def resolve_outcome(
    params: CallbackParams,
    confirmation: Optional[ConfirmationResult] = None,
    *,
    success_delay: float = PAYMENT_SUCCESS_REDIRECT_DELAY,
    failure_delay: float = PAYMENT_FAILURE_REDIRECT_DELAY,
) -> CallbackOutcome:
    """
    Map a callback (and the confirmation result, when one was needed) to its outcome.

    Raises:
        ValueError: If the callback needs confirmation but no result was given
    """
    branch = select_branch(params)

    if branch is CallbackBranch.INVALID:
        return CallbackOutcome(
            phase=ProcessingPhase.FAILED,
            kind=NotificationKind.ERROR,
            message=INVALID_CALLBACK_MESSAGE,
            redirect_to=HOME_PATH,
            redirect_delay=0.0,
        )

    if branch is CallbackBranch.GATEWAY_FAILED:
        return CallbackOutcome(
            phase=ProcessingPhase.FAILED,
            kind=NotificationKind.ERROR,
            message=PAYMENT_FAILED_MESSAGE,
            redirect_to=HOME_PATH,
            redirect_delay=failure_delay,
        )

    if confirmation is None:
        raise ValueError("A confirmation result is required to resolve a confirmable callback")

    if confirmation.success:
        return CallbackOutcome(
            phase=ProcessingPhase.SUCCEEDED,
            kind=NotificationKind.SUCCESS,
            message=CONFIRMED_MESSAGE,
            redirect_to=order_tracking_path(params.order_ref),
            redirect_delay=success_delay,
            clear_session=True,
        )

    fallback = PROCESSING_ERROR_MESSAGE if confirmation.raised else NOT_CONFIRMED_MESSAGE
    return failed_outcome(confirmation.message or fallback, failure_delay=failure_delay)
