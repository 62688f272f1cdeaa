from __future__ import annotations

import logging
from typing import Optional

import httpx

from config import API_URL, HTTP_TIMEOUT
from payment_callback import callback_logger
from payment_callback.exceptions import CartClearError


class CartClient:
    """Clears the signed-in user's cart through the backend API."""

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
        self._token = token
        if client is None:
            self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout)
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "CartClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def clear(self) -> None:
        """
        Empty the cart. Idempotent: clearing an empty cart succeeds.

        Raises:
            CartClearError: If the request fails or is rejected
        """
        headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}
        try:
            response = await self._client.delete("/cart", headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self.logger.error("Cart clear rejected: HTTP %s", exc.response.status_code)
            raise CartClearError(f"Cart service returned HTTP {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            self.logger.error("Cart clear request failed: %s", exc)
            raise CartClearError("Could not reach the cart service") from exc

        self.logger.info("Cart cleared")
