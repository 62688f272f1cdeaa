from __future__ import annotations

import json
import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from config import API_URL, HTTP_TIMEOUT
from payment_callback import callback_logger
from payment_callback.exceptions import OrderConfirmationError
from payment_callback.schemas import ConfirmOrderRequest, ConfirmOrderResponse


class OrderConfirmationClient:
    """Client for the backend's order-confirmation endpoint."""

    def __init__(
        self,
        *,
        base_url: str = API_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = HTTP_TIMEOUT,
        token: Optional[str] = None,
        logger: logging.Logger = callback_logger,
    ) -> None:
        self.logger = logger
        self._base_url = base_url
        self._token = token

        if client is None:
            self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout)
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "OrderConfirmationClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _headers(self) -> dict[str, str]:
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    async def confirm_order(self, order_ref: str, payment: ConfirmOrderRequest) -> ConfirmOrderResponse:
        """
        Confirm an order with the identifiers returned by the gateway.

        Sent exactly once per call; there is no retry.

        Raises:
            OrderConfirmationError: On transport errors, non-2xx responses or
                bodies that are not a JSON object
        """
        path = f"/orders/{quote(order_ref, safe='')}/confirm"
        self.logger.info("POST %s%s", self._base_url, path)
        try:
            response = await self._client.post(
                path,
                json=payment.model_dump(mode="json"),
                headers=self._headers(),
            )
        except httpx.RequestError as exc:
            self.logger.error("Order confirmation request failed (ref=%s): %s", order_ref, exc)
            raise OrderConfirmationError("Could not reach the order service") from exc

        self.logger.info("Received HTTP %s for order confirmation (ref=%s)", response.status_code, order_ref)

        try:
            body = response.json()
        except json.JSONDecodeError as exc:
            self.logger.warning("Non-JSON response from order service (status=%s)", response.status_code)
            raise OrderConfirmationError(
                "Order service returned non-JSON response",
                status_code=response.status_code,
            ) from exc

        if not isinstance(body, dict):
            raise OrderConfirmationError(
                "Order service returned a non-object response",
                status_code=response.status_code,
            )

        if response.is_error:
            message = self._error_message(body) or f"Order confirmation failed with HTTP {response.status_code}"
            self.logger.warning("Order confirmation rejected (ref=%s): %s", order_ref, message)
            raise OrderConfirmationError(message, status_code=response.status_code, details=body)

        return ConfirmOrderResponse.model_validate(body)

    @staticmethod
    def _error_message(body: dict[str, Any]) -> Optional[str]:
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
        return None
