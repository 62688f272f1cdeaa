import os
from dotenv import load_dotenv

load_dotenv()

API_URL = os.getenv("API_URL", "http://localhost:5000/api")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "30"))

REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD", None)
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
PENDING_ORDER_TTL = int(os.getenv("PENDING_ORDER_TTL", "3600"))

CALLBACK_SERVICE_HOST = os.getenv("CALLBACK_SERVICE_HOST", "0.0.0.0")
CALLBACK_SERVICE_PORT = int(os.getenv("CALLBACK_SERVICE_PORT", "8083"))

# Seconds the outcome notification stays readable before redirecting
PAYMENT_SUCCESS_REDIRECT_DELAY = float(os.getenv("PAYMENT_SUCCESS_REDIRECT_DELAY", "1.0"))
PAYMENT_FAILURE_REDIRECT_DELAY = float(os.getenv("PAYMENT_FAILURE_REDIRECT_DELAY", "2.0"))

LOG_DIR = os.getenv("LOG_DIR", "logs")

# JWT Configuration
JWT_SECRET = os.getenv("JWT_SECRET", "your-secret-key-change-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "1440"))  # 24 hours default

# Cookies the storefront sets for the callback page
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "session_id")
AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "token")
