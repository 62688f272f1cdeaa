"""Parsing of the query string the payment gateway redirects back with."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import parse_qs, urlsplit

from payment_callback.enums import PaymentOutcome

PAYMENT_KEY = "payment"
ORDER_REF_KEY = "ref"
GATEWAY_ORDER_ID_KEY = "razorpay_order_id"
GATEWAY_PAYMENT_ID_KEY = "razorpay_payment_id"
GATEWAY_SIGNATURE_KEY = "razorpay_signature"

_OUTCOME_TOKENS = {
    "success": PaymentOutcome.SUCCESS,
    "failed": PaymentOutcome.FAILED,
}


@dataclass(frozen=True)
class CallbackParams:
    """Redirect parameters, captured once when the callback is mounted."""

    outcome: PaymentOutcome = PaymentOutcome.UNKNOWN
    order_ref: Optional[str] = None
    gateway_order_id: Optional[str] = None
    gateway_payment_id: Optional[str] = None
    gateway_signature: Optional[str] = None

    @property
    def can_confirm(self) -> bool:
        return self.outcome is PaymentOutcome.SUCCESS and bool(self.order_ref)

    def gateway_identifiers(self) -> dict[str, Optional[str]]:
        """Gateway identifiers keyed the way the confirmation service expects them."""
        return {
            GATEWAY_ORDER_ID_KEY: self.gateway_order_id,
            GATEWAY_PAYMENT_ID_KEY: self.gateway_payment_id,
            GATEWAY_SIGNATURE_KEY: self.gateway_signature,
        }


def _first(query: Mapping[str, Any], key: str) -> Optional[str]:
    # Multi-dicts return the last value from get(); the first one wins here
    if hasattr(query, "getlist"):
        values = query.getlist(key)
        value = values[0] if values else None
    else:
        value = query.get(key)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    value = str(value)
    return value or None


def parse_outcome(raw: Optional[str]) -> PaymentOutcome:
    if raw is None:
        return PaymentOutcome.UNKNOWN
    return _OUTCOME_TOKENS.get(raw, PaymentOutcome.UNKNOWN)


def parse_callback_query(query: Mapping[str, Any]) -> CallbackParams:
    """
    Build CallbackParams from an already split query.

    Accepts plain mappings, ``parse_qs`` output (lists of values) and
    Starlette ``QueryParams``. Never raises; absent or empty values become None.
    """
    return CallbackParams(
        outcome=parse_outcome(_first(query, PAYMENT_KEY)),
        order_ref=_first(query, ORDER_REF_KEY),
        gateway_order_id=_first(query, GATEWAY_ORDER_ID_KEY),
        gateway_payment_id=_first(query, GATEWAY_PAYMENT_ID_KEY),
        gateway_signature=_first(query, GATEWAY_SIGNATURE_KEY),
    )


def parse_callback_url(url: Optional[str]) -> CallbackParams:
    """Parse a full redirect URL, a path with a query, or a bare query string."""
    if not url:
        return CallbackParams()

    try:
        parts = urlsplit(url)
    except ValueError:
        return CallbackParams()

    raw_query = parts.query
    if not raw_query and "=" in url and "?" not in url and "/" not in url:
        raw_query = url

    return parse_callback_query(parse_qs(raw_query, keep_blank_values=True))
