"""Auth API — registration, login, current user, password change.

Learn: Routes for user authentication:
- POST /auth/register → create account, returns {token, user}
- POST /auth/login → email/password → {token, user}
- GET /auth/me → current user info (protected)
- PUT /auth/password → change password (protected)

Register and login are open; the router itself is mounted without the
auth dependency, and the two protected routes declare it per route.
Failures never say which part was wrong: a duplicate registration
doesn't name the colliding field, a bad login doesn't reveal whether
the email exists.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from prodhub.auth.dependencies import CurrentIdentity, get_current_user
from prodhub.auth.jwt import issue_token
from prodhub.db.engine import get_db
from prodhub.schemas.envelope import Envelope, ok
from prodhub.schemas.user import (
    AuthData,
    LoginRequest,
    PasswordChange,
    RegisterRequest,
    UserRead,
)
from prodhub.services.user_service import UserService

router = APIRouter(prefix="/auth")


def _user_svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


def _auth_payload(user) -> dict:
    return {"token": issue_token(user.id), "user": user}


# ─── Register ────────────────────────────────────────────


@router.post("/register", response_model=Envelope[AuthData], status_code=201)
async def register(body: RegisterRequest, svc: UserService = Depends(_user_svc)):
    """Create a new user account and log it in."""
    user = await svc.create_user(
        username=body.username,
        email=body.email,
        password=body.password,
        settings=body.settings,
    )
    return ok(_auth_payload(user), message="Account created")


# ─── Login ───────────────────────────────────────────────


@router.post("/login", response_model=Envelope[AuthData])
async def login(body: LoginRequest, svc: UserService = Depends(_user_svc)):
    """Login with email and password → bearer token."""
    user = await svc.verify_credentials(body.email, body.password)
    return ok(_auth_payload(user), message="Login successful")


# ─── Current user ───────────────────────────────────────


@router.get("/me", response_model=Envelope[UserRead])
async def get_me(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_user_svc),
):
    """Get the current authenticated user's info."""
    return ok(await svc.get_user(identity.user_id))


@router.put("/password", response_model=Envelope[UserRead])
async def change_password(
    body: PasswordChange,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_user_svc),
):
    """Change the password. Existing tokens stay valid until they expire."""
    user = await svc.change_password(
        identity.user_id, body.current_password, body.new_password
    )
    return ok(user, message="Password updated")
