"""Security utilities for issuing and verifying bearer session tokens."""

import logging
from typing import Optional
from datetime import datetime, timedelta
import jwt
from fastapi import Depends, Request
from pydantic import BaseModel

from .config import Settings, get_settings
from .exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

SESSION_TOKEN_TTL = timedelta(hours=1)


class TokenClaims(BaseModel):
    """Claims carried by a session token."""

    userId: int
    mobileNumber: str
    exp: int
    iat: Optional[int] = None


def create_jwt_token(
    data: dict,
    expires_delta: timedelta = SESSION_TOKEN_TTL,
    settings: Optional[Settings] = None,
) -> str:
    """
    Creates a JWT (JSON Web Token) with the provided data and expiration time.

    Args:
        data (dict): The payload data to be encoded in the JWT.
        expires_delta (timedelta, optional): The time until the token expires.
            Defaults to 1 hour.
        settings (Settings, optional): Source of the signing key and algorithm.

    Returns:
        str: The encoded JWT string.

    Note:
        The token includes standard JWT claims:
        - exp (expiration time)
        - iat (issued at time)
    """
    settings = settings or get_settings()
    to_encode = data.copy()
    now = datetime.utcnow()
    to_encode.update({
        "exp": now + expires_delta,
        "iat": now
    })
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_jwt_token(token: str, settings: Optional[Settings] = None) -> dict:
    """Decodes and validates a JWT token.

    Malformed, expired and badly signed tokens are all reported the same way.

    Args:
        token (str): The JWT token string to decode.
        settings (Settings, optional): Source of the signing key and algorithm.

    Returns:
        dict: The decoded token payload containing the claims.

    Raises:
        InvalidTokenError: If the token is invalid, expired, or improperly formatted.
    """
    settings = settings or get_settings()
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.PyJWTError as e:
        logger.info(f"JWT Decode Error: {str(e)}")
        raise InvalidTokenError()


def issue_session_token(user, settings: Optional[Settings] = None) -> str:
    """Sign a session token for a verified user."""
    settings = settings or get_settings()
    payload = {
        "sub": str(user.id),
        "userId": user.id,
        "mobileNumber": user.mobile_number,
    }
    return create_jwt_token(
        payload,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        settings=settings,
    )


def verify_session_token(token: str, settings: Optional[Settings] = None) -> TokenClaims:
    """Decode a session token into its claims."""
    payload = decode_jwt_token(token, settings=settings)
    try:
        return TokenClaims.model_validate(payload)
    except ValueError:
        raise InvalidTokenError()


def get_request_settings(request: Request) -> Settings:
    """Dependency returning the settings the running app was built with."""
    return request.app.state.settings


async def get_current_user(
    request: Request,
    settings: Settings = Depends(get_request_settings),
) -> TokenClaims:
    """
    Dependency to get the current authenticated user from the Authorization header
    Raises 401 if not authenticated
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise InvalidTokenError("Authorization header missing")

    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise InvalidTokenError("Authorization header missing")

    return verify_session_token(token.strip(), settings=settings)
