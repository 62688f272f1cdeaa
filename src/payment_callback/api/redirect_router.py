import asyncio
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse
from starlette.requests import Request

from config import AUTH_COOKIE_NAME, SESSION_COOKIE_NAME
from data.redis.connection import redis_connection
from payment_callback import callback_logger
from payment_callback.callback import CallbackServices, PaymentCallback
from payment_callback.decision import NOTIFICATION_ID, CallbackBranch, select_branch
from payment_callback.enums import ProcessingPhase
from payment_callback.readiness import AuthState
from payment_callback.services import (
    CartClient,
    Navigator,
    NotificationCenter,
    OrderConfirmationClient,
    PendingOrderStore,
    RedisNotificationPublisher,
)
from utils.jwt_utils import extract_bearer_token
from utils.response_format import ResponseFormat
from utils.status import Status

redirect_router = APIRouter(tags=["Payment Redirect"])


@dataclass
class CallbackRequestContext:
    """Per-request collaborators for one payment callback."""
    services: CallbackServices
    notifications: NotificationCenter
    token: Optional[str] = None

    async def load_auth(self) -> None:
        auth = self.services.auth
        if isinstance(auth, AuthState) and auth.loading:
            await auth.load_token(self.token)


async def get_callback_context(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> AsyncIterator[CallbackRequestContext]:
    token = extract_bearer_token(authorization) or request.cookies.get(AUTH_COOKIE_NAME)
    session_id = request.cookies.get(SESSION_COOKIE_NAME)

    notifications = NotificationCenter(
        publisher=RedisNotificationPublisher(session_id) if session_id else None
    )
    async with OrderConfirmationClient(token=token) as orders, CartClient(token=token) as cart:
        services = CallbackServices(
            auth=AuthState(),
            orders=orders,
            cart=cart,
            pending_orders=PendingOrderStore(session_id),
            notifier=notifications,
            navigator=Navigator(),
        )
        yield CallbackRequestContext(services=services, notifications=notifications, token=token)


def _response_status(callback: PaymentCallback) -> Status:
    if callback.view.phase is ProcessingPhase.SUCCEEDED:
        return Status.SUCCESS
    if select_branch(callback.params) is CallbackBranch.INVALID:
        return Status.INVALID_CALLBACK
    return Status.PAYMENT_FAILED


@redirect_router.get("/payment/callback")
async def payment_callback(
    request: Request,
    context: CallbackRequestContext = Depends(get_callback_context),
):
    """
    Handle the redirect back from the payment gateway.

    Flow:
    1. Mount one callback instance from the query string
    2. Restore the auth session while the callback waits on it
    3. Confirm the order (success redirects only) and apply side effects
    4. Return the processing view; the page performs the redirect it names
    """
    callback_logger.info(f"Received payment redirect: {request.url.query}")

    callback = PaymentCallback(query=request.query_params, services=context.services)
    loader = asyncio.create_task(context.load_auth())
    try:
        view = await callback.process()
        await loader
    finally:
        callback.dispose()

    notification = context.notifications.get(NOTIFICATION_ID)
    data = view.model_dump(mode="json")
    data["notification"] = notification.model_dump(mode="json") if notification else None

    return JSONResponse(
        content=ResponseFormat(
            status=_response_status(callback),
            message=view.message or "",
            data=data,
        ).to_dict()
    )


@redirect_router.get("/health")
async def health():
    redis_ok = await redis_connection.health_check()
    return JSONResponse(
        content=ResponseFormat(
            status=Status.SUCCESS if redis_ok else Status.FAILURE,
            message="OK" if redis_ok else "Redis unavailable",
            data={"service": "payment_callback", "redis": redis_ok},
        ).to_dict()
    )
