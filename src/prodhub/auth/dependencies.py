"""FastAPI auth dependencies.

Learn: get_current_user is applied to every protected router via
include_router(dependencies=[...]) in api/__init__.py, and handlers that
need the identity declare it again with Depends(). FastAPI caches a
dependency per request, so the token is verified exactly once.

Per request there are two outcomes:
- authenticated: the user id is stored on request.state and returned
- unauthenticated: AuthenticationError is raised before any handler runs,
  and the error handler answers 401 with the uniform message

The failure reason (missing_token, malformed_header, invalid_token) is
logged but never sent to the client.
"""

import uuid
from typing import Optional

import structlog
from fastapi import Header, Request

from prodhub.auth.jwt import verify_token
from prodhub.errors import AuthenticationError

logger = structlog.get_logger()

BEARER_PREFIX = "Bearer "


class CurrentIdentity:
    """The authenticated user making the request.

    Lives for one request only. Every owned-resource query is scoped
    with `user_id`.
    """

    def __init__(self, user_id: uuid.UUID):
        self.user_id = user_id

    def __repr__(self) -> str:
        return f"CurrentIdentity(user_id={self.user_id})"


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an Authorization header value.

    Requires the exact "Bearer " prefix and a non-empty remainder.
    """
    if not authorization:
        raise AuthenticationError("missing_token")
    if not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError("malformed_header")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthenticationError("malformed_header")
    return token


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> CurrentIdentity:
    """Extract current identity (required — 401 if no valid token)."""
    try:
        token = extract_bearer_token(authorization)
        claims = verify_token(token)
        if claims is None:
            raise AuthenticationError("invalid_token")
    except AuthenticationError as e:
        logger.info("auth.rejected", reason=e.reason, path=request.url.path)
        raise

    request.state.user_id = claims.user_id
    structlog.contextvars.bind_contextvars(user_id=str(claims.user_id))
    return CurrentIdentity(user_id=claims.user_id)
