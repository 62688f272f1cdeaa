from __future__ import annotations

from typing import Any, Mapping


class PaymentCallbackError(RuntimeError):
    """Base class for errors raised while reconciling a payment redirect."""


class OrderConfirmationError(PaymentCallbackError):
    """Raised when the order-confirmation service cannot confirm an order."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class CartClearError(PaymentCallbackError):
    """Raised when the cart service refuses or fails to clear the cart."""


class InvalidTransition(PaymentCallbackError):
    """Raised when a terminal processing phase is asked to change again."""
