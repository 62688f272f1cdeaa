from __future__ import annotations

from starlette.datastructures import QueryParams

from payment_callback.enums import PaymentOutcome
from payment_callback.params import CallbackParams, parse_callback_query, parse_callback_url


def test_parse_success_redirect_keeps_gateway_identifiers_verbatim() -> None:
    params = parse_callback_url(
        "https://shop.example/payment/callback?payment=success&ref=ORD123"
        "&razorpay_order_id=order_Nx1&razorpay_payment_id=pay_Q9%2Bz&razorpay_signature=abc%3D%3D"
    )

    assert params.outcome is PaymentOutcome.SUCCESS
    assert params.order_ref == "ORD123"
    assert params.gateway_order_id == "order_Nx1"
    assert params.gateway_payment_id == "pay_Q9+z"
    assert params.gateway_signature == "abc=="
    assert params.can_confirm


def test_parse_failed_redirect_without_ref() -> None:
    params = parse_callback_url("/payment/callback?payment=failed")

    assert params.outcome is PaymentOutcome.FAILED
    assert params.order_ref is None
    assert not params.can_confirm


def test_parse_accepts_bare_query_string() -> None:
    params = parse_callback_url("payment=success&ref=ORD9")

    assert params.outcome is PaymentOutcome.SUCCESS
    assert params.order_ref == "ORD9"


def test_unrecognised_outcome_tokens_are_unknown() -> None:
    for token in ("SUCCESS", "Failed", "cancelled", ""):
        assert parse_callback_url(f"/cb?payment={token}&ref=ORD1").outcome is PaymentOutcome.UNKNOWN


def test_missing_or_empty_input_degrades_to_defaults() -> None:
    assert parse_callback_url(None) == CallbackParams()
    assert parse_callback_url("") == CallbackParams()
    assert parse_callback_url("/payment/callback") == CallbackParams()


def test_malformed_url_does_not_raise() -> None:
    assert parse_callback_url("http://[::1/cb?payment=success") == CallbackParams()


def test_empty_ref_is_treated_as_absent() -> None:
    params = parse_callback_url("/cb?payment=success&ref=")

    assert params.outcome is PaymentOutcome.SUCCESS
    assert params.order_ref is None
    assert not params.can_confirm


def test_first_value_wins_for_repeated_keys() -> None:
    params = parse_callback_url("/cb?payment=failed&payment=success&ref=A&ref=B")

    assert params.outcome is PaymentOutcome.FAILED
    assert params.order_ref == "A"


def test_parse_query_from_starlette_query_params() -> None:
    query = QueryParams("payment=success&ref=ORD5&ref=ORD6&razorpay_payment_id=P5")

    params = parse_callback_query(query)

    assert params.outcome is PaymentOutcome.SUCCESS
    assert params.order_ref == "ORD5"
    assert params.gateway_payment_id == "P5"
    assert params.gateway_order_id is None


def test_keys_are_case_sensitive() -> None:
    params = parse_callback_query({"Payment": "success", "REF": "ORD1"})

    assert params == CallbackParams()


def test_gateway_identifiers_mapping() -> None:
    params = parse_callback_query({
        "payment": "success",
        "ref": "ORD1",
        "razorpay_order_id": "O1",
        "razorpay_signature": "S1",
    })

    assert params.gateway_identifiers() == {
        "razorpay_order_id": "O1",
        "razorpay_payment_id": None,
        "razorpay_signature": "S1",
    }
