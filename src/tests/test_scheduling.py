from __future__ import annotations

from unittest.mock import Mock

import pytest

from payment_callback.scheduling import NavigationScheduler
from payment_callback.services import Navigator


@pytest.mark.asyncio
async def test_zero_delay_navigates_immediately() -> None:
    navigator = Navigator()
    scheduler = NavigationScheduler(navigator)

    scheduler.schedule("/", 0)

    assert navigator.location == "/"
    assert not scheduler.pending


@pytest.mark.asyncio
async def test_delayed_navigation_fires_after_delay() -> None:
    navigator = Navigator()
    scheduler = NavigationScheduler(navigator)

    scheduler.schedule("/track-order/ORD1", 0.01)
    assert navigator.history == []
    assert scheduler.pending

    await scheduler.wait()
    assert navigator.history == ["/track-order/ORD1"]


@pytest.mark.asyncio
async def test_cancel_drops_pending_and_future_navigation() -> None:
    navigator = Navigator()
    scheduler = NavigationScheduler(navigator)

    scheduler.schedule("/", 0.05)
    scheduler.cancel()
    await scheduler.wait()
    scheduler.schedule("/", 0)

    assert navigator.history == []


@pytest.mark.asyncio
async def test_navigator_errors_are_swallowed() -> None:
    navigator = Mock()
    navigator.go.side_effect = RuntimeError("router unmounted")
    scheduler = NavigationScheduler(navigator)

    scheduler.schedule("/", 0)

    navigator.go.assert_called_once_with("/")


def test_navigator_notifies_listener() -> None:
    seen: list[str] = []
    navigator = Navigator(listener=seen.append)

    navigator.go("/track-order/ORD2")

    assert seen == ["/track-order/ORD2"]
    assert navigator.location == "/track-order/ORD2"
