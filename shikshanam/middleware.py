"""Request logging, session tokens and the internal sync token check."""

import hmac
import time
import uuid
from datetime import UTC, datetime, timedelta

from fastapi import Header, Request
from jose import JWTError, jwt
from loguru import logger

from .config import settings
from .exceptions import AuthenticationError
from .models import User

REQUEST_ID_HEADER = "X-Request-ID"


async def add_request_id(request: Request, call_next):
    """Tag the request with an ID and log how long it took.

    A client-supplied ``X-Request-ID`` is reused; otherwise one is generated.
    The ID is echoed on the response and bound to every log line emitted
    while handling the request.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    request.state.request_id = request_id
    started = time.perf_counter()

    with logger.contextualize(request_id=request_id):
        # Request data goes in as fields, never into the message format string
        logger.debug(
            "Request started",
            method=request.method,
            path=request.url.path,
            client=request.client.host if request.client else None,
        )

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        logger.debug(
            "Request completed",
            status_code=response.status_code,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response


def create_token(user: User) -> str:
    """Sign a session token for a logged-in user.

    Args:
        user: The authenticated user.

    Returns:
        Encoded JWT carrying the user's ID, email and login provider.
    """
    issued_at = datetime.now(UTC)
    claims = {
        "sub": user.id,
        "email": user.email,
        "provider": user.provider,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.jwt_expiration_minutes),
    }
    token: str = jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)
    return token


def decode_token(token: str) -> str | None:
    """Return the user ID inside a valid session token, or None."""
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug(f"Rejected session token: {e}")
        return None
    return claims.get("sub")


async def require_internal_token(authorization: str | None = Header(None)) -> None:
    """Only the CMS admin, holding the internal token, may call sync routes.

    Raises:
        AuthenticationError: If the bearer token is missing or wrong.
    """
    token = (authorization or "").removeprefix("Bearer ")
    if not token or not hmac.compare_digest(token.encode(), settings.internal_api_token.encode()):
        raise AuthenticationError("Invalid internal API token")
