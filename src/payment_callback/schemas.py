from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from payment_callback.enums import NotificationKind, ProcessingPhase


class UserInfo(BaseModel):
    """User identity exposed by the auth subsystem once it is ready."""
    user_id: int
    username: str


class ConfirmOrderRequest(BaseModel):
    """Body of the order-confirmation RPC; identifiers are forwarded verbatim."""
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None


class ConfirmOrderResponse(BaseModel):
    success: bool = Field(default=False, description="Missing flag counts as a failed confirmation")
    message: Optional[str] = None
    order: Optional[dict[str, Any]] = None


class Notification(BaseModel):
    """
    Transient user-facing message.

    Messages sharing an ``id`` replace each other, so a progress message is
    superseded by its success or error message rather than shown alongside it.
    """
    id: str
    kind: NotificationKind
    message: str


class ProcessingView(BaseModel):
    """Read-only projection of a callback's processing state for renderers."""
    phase: ProcessingPhase
    processing: bool
    order_ref: Optional[str] = None
    message: Optional[str] = None
    redirect_to: Optional[str] = None
    redirect_delay: Optional[float] = None
