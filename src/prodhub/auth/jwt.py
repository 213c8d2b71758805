"""JWT bearer token issuing and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. A token
carries {sub: user id, iat, exp}, signed with HS256 and the server-held
secret. Nothing is stored server-side: a token is valid until it expires,
and logout simply means the client forgets it.

verify_token() never raises. Every failure (bad encoding, wrong signature,
expired, missing claim, non-UUID subject) comes back as None; the reason
is only logged.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog

from prodhub.config import settings

logger = structlog.get_logger()

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of a bearer token."""

    user_id: uuid.UUID
    issued_at: datetime
    expires_at: datetime


def issue_token(
    user_id: uuid.UUID | str,
    now: Optional[datetime] = None,
    secret: Optional[str] = None,
) -> str:
    """Create a signed token for a user.

    `now` and `secret` default to the current time and the configured
    secret; the same inputs always produce the same token.
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.token_expire_days),
    }
    return jwt.encode(
        payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm
    )


def verify_token(token: str, secret: Optional[str] = None) -> Optional[TokenClaims]:
    """Verify signature and expiry in one decode. Returns None on any failure."""
    try:
        payload = jwt.decode(
            token,
            secret or settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
        return TokenClaims(
            user_id=uuid.UUID(str(payload["sub"])),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except jwt.ExpiredSignatureError:
        logger.info("auth.token_expired")
    except jwt.InvalidTokenError as e:
        logger.info("auth.token_invalid", error=str(e))
    except (ValueError, TypeError, OverflowError) as e:
        logger.info("auth.token_invalid", error=str(e))
    return None
