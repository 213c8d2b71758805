"""Settings API — the current user's display and privacy preferences.

Learn: there is no user id in these paths. The row is always the
caller's own, taken from the authenticated identity.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from prodhub.auth.dependencies import CurrentIdentity, get_current_user
from prodhub.db.engine import get_db
from prodhub.schemas.envelope import Envelope, ok
from prodhub.schemas.user import DarkModeUpdate, SettingsUpdate, UserSettings
from prodhub.services.user_service import UserService

router = APIRouter(prefix="/settings")


def _user_svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.get("", response_model=Envelope[UserSettings])
async def get_settings(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_user_svc),
):
    return ok(await svc.get_settings(identity.user_id))


@router.put("", response_model=Envelope[UserSettings])
async def replace_settings(
    body: SettingsUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_user_svc),
):
    """Replace the whole settings document. Omitted fields reset to defaults."""
    updated = await svc.replace_settings(identity.user_id, body.settings)
    return ok(updated, message="Settings updated successfully")


@router.put("/dark-mode", response_model=Envelope[bool])
async def set_dark_mode(
    body: DarkModeUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_user_svc),
):
    dark_mode = await svc.set_dark_mode(identity.user_id, body.dark_mode)
    return ok(dark_mode, message="Dark mode updated")
