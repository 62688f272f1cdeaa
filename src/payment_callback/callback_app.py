from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware

from config import CALLBACK_SERVICE_HOST, CALLBACK_SERVICE_PORT
from data.redis.connection import redis_connection
from payment_callback import callback_logger
from payment_callback.api.redirect_router import redirect_router
from utils.logger import set_app_context, AppLogger


class AppContextMiddleware(BaseHTTPMiddleware):
    """Middleware to set app logger context for all requests."""

    async def dispatch(self, request, call_next):
        with set_app_context(AppLogger.PAYMENT_CALLBACK):
            response = await call_next(request)
        return response


@asynccontextmanager
async def lifespan(_: FastAPI):
    callback_logger.info(f"Payment Callback Service starting on {CALLBACK_SERVICE_HOST}:{CALLBACK_SERVICE_PORT}")
    yield
    await redis_connection.close()
    callback_logger.info("Payment Callback Service shutting down")


app = FastAPI(
    title="Payment Callback Service",
    description="Reconciles payment gateway redirects into one order confirmation per callback",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(AppContextMiddleware)

app.include_router(redirect_router)


if __name__ == "__main__":
    import uvicorn
    callback_logger.info(f"Starting Payment Callback Service on {CALLBACK_SERVICE_HOST}:{CALLBACK_SERVICE_PORT}")
    uvicorn.run(app, host=CALLBACK_SERVICE_HOST, port=CALLBACK_SERVICE_PORT)
