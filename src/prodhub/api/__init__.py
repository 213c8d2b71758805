"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Learn: Auth is applied at the include_router level using FastAPI's
dependencies parameter. This protects all routes in each router
without modifying individual handlers. Health and auth routers are
open (the two protected /auth routes declare the dependency themselves).
"""

from fastapi import APIRouter, Depends

from prodhub.api.assistant import router as assistant_router
from prodhub.api.auth import router as auth_router
from prodhub.api.calendar import router as calendar_router
from prodhub.api.goals import router as goals_router
from prodhub.api.health import router as health_router
from prodhub.api.moods import router as moods_router
from prodhub.api.notes import router as notes_router
from prodhub.api.settings import router as settings_router
from prodhub.api.tasks import router as tasks_router
from prodhub.api.timer import router as timer_router
from prodhub.auth.dependencies import get_current_user

# All protected routers require authentication
_auth = [Depends(get_current_user)]

api_router = APIRouter(prefix="/api")

# Open routes, no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes require a valid bearer token
api_router.include_router(tasks_router, tags=["tasks"], dependencies=_auth)
api_router.include_router(notes_router, tags=["notes"], dependencies=_auth)
api_router.include_router(calendar_router, tags=["calendar"], dependencies=_auth)
api_router.include_router(goals_router, tags=["goals"], dependencies=_auth)
api_router.include_router(moods_router, tags=["moods"], dependencies=_auth)
api_router.include_router(timer_router, tags=["timer"], dependencies=_auth)
api_router.include_router(assistant_router, tags=["assistant"], dependencies=_auth)
api_router.include_router(settings_router, tags=["settings"], dependencies=_auth)
