from __future__ import annotations

import pytest

from payment_callback.decision import (
    CONFIRMED_MESSAGE,
    INVALID_CALLBACK_MESSAGE,
    NOT_CONFIRMED_MESSAGE,
    NOTIFICATION_ID,
    PAYMENT_FAILED_MESSAGE,
    PROCESSING_ERROR_MESSAGE,
    CallbackBranch,
    ConfirmationResult,
    resolve_outcome,
    select_branch,
)
from payment_callback.enums import NotificationKind, PaymentOutcome, ProcessingPhase
from payment_callback.exceptions import OrderConfirmationError
from payment_callback.params import CallbackParams
from payment_callback.schemas import ConfirmOrderResponse

CONFIRMABLE = CallbackParams(outcome=PaymentOutcome.SUCCESS, order_ref="ORD123")


def test_select_branch() -> None:
    assert select_branch(CONFIRMABLE) is CallbackBranch.CONFIRM
    assert select_branch(CallbackParams(outcome=PaymentOutcome.FAILED)) is CallbackBranch.GATEWAY_FAILED
    assert select_branch(CallbackParams(outcome=PaymentOutcome.FAILED, order_ref="ORD1")) is CallbackBranch.GATEWAY_FAILED
    assert select_branch(CallbackParams()) is CallbackBranch.INVALID
    assert select_branch(CallbackParams(outcome=PaymentOutcome.SUCCESS)) is CallbackBranch.INVALID
    assert select_branch(CallbackParams(outcome=PaymentOutcome.SUCCESS, order_ref="")) is CallbackBranch.INVALID


def test_confirmed_order_goes_to_order_tracking() -> None:
    outcome = resolve_outcome(
        CONFIRMABLE,
        ConfirmationResult(success=True),
        success_delay=1.0,
        failure_delay=2.0,
    )

    assert outcome.phase is ProcessingPhase.SUCCEEDED
    assert outcome.kind is NotificationKind.SUCCESS
    assert outcome.message == CONFIRMED_MESSAGE
    assert outcome.redirect_to == "/track-order/ORD123"
    assert outcome.redirect_delay == 1.0
    assert outcome.clear_session
    assert outcome.notification.id == NOTIFICATION_ID


def test_rejected_confirmation_uses_server_message() -> None:
    outcome = resolve_outcome(
        CONFIRMABLE,
        ConfirmationResult.from_response(ConfirmOrderResponse(success=False, message="Signature mismatch")),
        failure_delay=2.0,
    )

    assert outcome.phase is ProcessingPhase.FAILED
    assert outcome.message == "Signature mismatch"
    assert outcome.redirect_to == "/"
    assert outcome.redirect_delay == 2.0
    assert not outcome.clear_session


def test_rejected_confirmation_without_message_falls_back() -> None:
    outcome = resolve_outcome(CONFIRMABLE, ConfirmationResult.from_response(ConfirmOrderResponse()))

    assert outcome.message == NOT_CONFIRMED_MESSAGE


def test_raised_confirmation_uses_error_text_or_generic_message() -> None:
    with_text = resolve_outcome(CONFIRMABLE, ConfirmationResult.from_error(OrderConfirmationError("Order expired")))
    without_text = resolve_outcome(CONFIRMABLE, ConfirmationResult.from_error(RuntimeError()))

    assert with_text.message == "Order expired"
    assert without_text.message == PROCESSING_ERROR_MESSAGE
    assert without_text.phase is ProcessingPhase.FAILED


def test_gateway_failure_redirects_home_after_delay() -> None:
    outcome = resolve_outcome(CallbackParams(outcome=PaymentOutcome.FAILED), failure_delay=2.0)

    assert outcome.phase is ProcessingPhase.FAILED
    assert outcome.kind is NotificationKind.ERROR
    assert outcome.message == PAYMENT_FAILED_MESSAGE
    assert outcome.redirect_to == "/"
    assert outcome.redirect_delay == 2.0


def test_invalid_callback_redirects_home_immediately() -> None:
    outcome = resolve_outcome(CallbackParams(outcome=PaymentOutcome.SUCCESS, order_ref=None))

    assert outcome.phase is ProcessingPhase.FAILED
    assert outcome.message == INVALID_CALLBACK_MESSAGE
    assert outcome.redirect_to == "/"
    assert outcome.redirect_delay == 0.0


def test_confirmable_callback_requires_a_result() -> None:
    with pytest.raises(ValueError):
        resolve_outcome(CONFIRMABLE)
