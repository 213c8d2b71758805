"""User service — the credential store.

Learn: This is the only code that touches password hashes.
- create_user: uniqueness check + bcrypt hash, never stores plaintext
- verify_credentials: unknown email and wrong password are the same error,
  and both pay for one bcrypt check so timing doesn't tell them apart
- change_password: re-hashes with a fresh salt

bcrypt is CPU-bound, so hashing runs in Starlette's threadpool rather than
blocking the event loop for other requests.
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from prodhub.auth.password import burn_verification, hash_password, verify_password
from prodhub.db.models import User
from prodhub.errors import DuplicateKeyError, InvalidCredentialsError, NotFoundError
from prodhub.schemas.user import TimerSettings, TimerSettingsUpdate, UserSettings

logger = structlog.get_logger()


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """Accounts, credentials and per-user settings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Credentials ─────────────────────────────────────

    async def create_user(
        self,
        username: str,
        email: str,
        password: str,
        settings: Optional[UserSettings] = None,
    ) -> User:
        """Create an account. DuplicateKeyError if username or email is taken."""
        username = username.strip()
        email = normalize_email(email)

        q = select(User.id).where(or_(User.username == username, User.email == email))
        if (await self.db.execute(q)).first():
            logger.info("auth.register_duplicate")
            raise DuplicateKeyError()

        user = User(
            username=username,
            email=email,
            password_hash=await run_in_threadpool(hash_password, password),
            settings=(settings or UserSettings()).model_dump(),
            timer_settings=TimerSettings().model_dump(),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration
            await self.db.rollback()
            raise DuplicateKeyError()
        await self.db.refresh(user)
        logger.info("auth.registered", user_id=str(user.id))
        return user

    async def verify_credentials(self, email: str, password: str) -> User:
        """Return the user for a correct email/password pair."""
        result = await self.db.execute(
            select(User).where(User.email == normalize_email(email))
        )
        user = result.scalars().first()

        if user is None:
            await run_in_threadpool(burn_verification)
            logger.info("auth.login_failed", reason="unknown_email")
            raise InvalidCredentialsError()

        if not await run_in_threadpool(verify_password, password, user.password_hash):
            logger.info("auth.login_failed", reason="wrong_password", user_id=str(user.id))
            raise InvalidCredentialsError()

        return user

    async def change_password(
        self, user_id: uuid.UUID, current_password: str, new_password: str
    ) -> User:
        user = await self.get_user(user_id)
        if not await run_in_threadpool(
            verify_password, current_password, user.password_hash
        ):
            logger.info("auth.password_change_rejected", user_id=str(user_id))
            raise InvalidCredentialsError()

        user.password_hash = await run_in_threadpool(hash_password, new_password)
        await self.db.commit()
        logger.info("auth.password_changed", user_id=str(user_id))
        return user

    # ─── Lookup ──────────────────────────────────────────

    async def get_user(self, user_id: uuid.UUID) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    # ─── Settings ────────────────────────────────────────

    async def get_settings(self, user_id: uuid.UUID) -> UserSettings:
        user = await self.get_user(user_id)
        return UserSettings.model_validate(user.settings or {})

    async def replace_settings(
        self, user_id: uuid.UUID, new_settings: UserSettings
    ) -> UserSettings:
        user = await self.get_user(user_id)
        # Assign a new dict so the JSON column is flagged dirty
        user.settings = new_settings.model_dump()
        await self.db.commit()
        return new_settings

    async def set_dark_mode(self, user_id: uuid.UUID, dark_mode: bool) -> bool:
        current = await self.get_settings(user_id)
        current.dark_mode = dark_mode
        await self.replace_settings(user_id, current)
        return dark_mode

    async def get_timer_settings(self, user_id: uuid.UUID) -> TimerSettings:
        user = await self.get_user(user_id)
        return TimerSettings.model_validate(user.timer_settings or {})

    async def update_timer_settings(
        self, user_id: uuid.UUID, updates: TimerSettingsUpdate
    ) -> TimerSettings:
        """Merge the provided fields over the stored timer settings."""
        user = await self.get_user(user_id)
        merged = TimerSettings.model_validate(
            {**(user.timer_settings or {}), **updates.model_dump(exclude_none=True)}
        )
        user.timer_settings = merged.model_dump()
        await self.db.commit()
        return merged
