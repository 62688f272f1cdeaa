"""
JWT utility functions for authentication.

The callback service never issues tokens for end users; ``create_access_token``
exists for local tooling and tests.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import BaseModel, ValidationError

from config import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRE_MINUTES


class TokenPayload(BaseModel):
    """JWT token payload schema."""
    user_id: int
    username: str
    exp: Optional[datetime] = None


def create_access_token(
    user_id: int,
    username: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT access token.

    Args:
        user_id: The user's ID
        username: The user's username
        expires_delta: Optional expiration time delta. Defaults to JWT_EXPIRE_MINUTES.

    Returns:
        Encoded JWT token string
    """
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=JWT_EXPIRE_MINUTES)

    payload = {
        "user_id": user_id,
        "username": username,
        "exp": expire
    }

    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """
    Decode a JWT token and return its payload.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired
        jwt.InvalidTokenError: If the token is invalid
    """
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])


def get_token_payload(token: Optional[str]) -> Optional[TokenPayload]:
    """
    Get the full token payload as a Pydantic model.

    Returns:
        TokenPayload if the token is present and valid, None otherwise
    """
    if not token:
        return None
    try:
        payload = decode_token(token)
    except (jwt.ExpiredSignatureError, jwt.InvalidTokenError):
        return None

    if payload.get("user_id") is None:
        return None
    try:
        return TokenPayload(
            user_id=payload.get("user_id"),
            username=payload.get("username") or "",
            exp=datetime.fromtimestamp(payload.get("exp"), tz=timezone.utc) if payload.get("exp") else None
        )
    except ValidationError:
        return None


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Extract JWT token from an Authorization header value ("Bearer <token>").
    """
    if not authorization:
        return None

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]
