"""Pytest plugin to execute asyncio marked tests, plus shared callback fixtures."""

from __future__ import annotations

import asyncio
import inspect
from unittest.mock import AsyncMock

import pytest

from payment_callback.callback import CallbackServices
from payment_callback.readiness import AuthState
from payment_callback.schemas import ConfirmOrderResponse, UserInfo
from payment_callback.services import CartClient, Navigator, NotificationCenter, OrderConfirmationClient, PendingOrderStore


@pytest.hookimpl
def pytest_configure(config: pytest.Config) -> None:  # pragma: no cover - pytest hook
    config.addinivalue_line(
        "markers",
        "asyncio: mark test to run inside an event loop",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool:  # pragma: no cover - pytest hook
    if "asyncio" not in pyfuncitem.keywords:
        return False

    test_function = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_function):
        return False

    testargs = {name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames}
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(test_function(**testargs))
    finally:
        loop.close()
    return True


@pytest.fixture
def ready_auth() -> AuthState:
    auth = AuthState()
    auth.resolve(UserInfo(user_id=7, username="asha"))
    return auth


@pytest.fixture
def orders() -> AsyncMock:
    client = AsyncMock(spec=OrderConfirmationClient)
    client.confirm_order.return_value = ConfirmOrderResponse(success=True, message="Order confirmed")
    return client


@pytest.fixture
def cart() -> AsyncMock:
    return AsyncMock(spec=CartClient)


@pytest.fixture
def pending_orders() -> AsyncMock:
    return AsyncMock(spec=PendingOrderStore)


@pytest.fixture
def notifier() -> NotificationCenter:
    return NotificationCenter()


@pytest.fixture
def navigator() -> Navigator:
    return Navigator()


@pytest.fixture
def services(ready_auth, orders, cart, pending_orders, notifier, navigator) -> CallbackServices:
    return CallbackServices(
        auth=ready_auth,
        orders=orders,
        cart=cart,
        pending_orders=pending_orders,
        notifier=notifier,
        navigator=navigator,
    )
