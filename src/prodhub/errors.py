"""Application errors and the uniform error envelope.

Learn: Handlers raise these instead of building error responses by hand.
Exception handlers registered in main.py turn every failure into
``{"success": false, "error": "..."}`` with the right status code, so the
client-visible shape never depends on where the failure happened.
"""

from typing import Optional

from starlette.responses import JSONResponse

AUTH_REQUIRED_MESSAGE = "Authentication required. Please login."
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
DUPLICATE_ACCOUNT_MESSAGE = "An account with these details already exists"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class AppError(Exception):
    """Base class for errors that map onto an HTTP status and message."""

    status_code: int = 400
    message: str = "Bad request"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class DuplicateKeyError(AppError):
    """Username or email already registered. Does not say which."""

    status_code = 409
    message = DUPLICATE_ACCOUNT_MESSAGE


class InvalidCredentialsError(AppError):
    """Unknown email and wrong password collapse to this one error."""

    status_code = 401
    message = INVALID_CREDENTIALS_MESSAGE


class AuthenticationError(AppError):
    """Missing, malformed, invalid or expired bearer token.

    ``reason`` is for logs only; the response is always the same.
    """

    status_code = 401
    message = AUTH_REQUIRED_MESSAGE

    def __init__(self, reason: str):
        super().__init__()
        self.reason = reason


class NotFoundError(AppError):
    """Resource missing, or owned by another user (indistinguishable)."""

    status_code = 404
    message = "Resource not found"


class RequestValidationFailed(AppError):
    status_code = 400
    message = "Invalid request"


def error_response(
    status_code: int, message: str, headers: Optional[dict] = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )
