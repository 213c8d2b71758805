"""Health check endpoint.

Learn: Simple GET endpoint that verifies the server is running and
dependencies (database, Redis) are reachable. Open, no auth required.
"""

from fastapi import APIRouter, Request
from sqlalchemy import text

from prodhub import __version__

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Check server health and dependency connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        async with request.app.state.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {type(e).__name__}"

    try:
        from prodhub.cache import get_redis

        await get_redis().ping()
        checks["redis"] = "ok"
    except Exception as e:
        checks["redis"] = f"unavailable: {type(e).__name__}"

    # Redis only backs rate limiting, so it doesn't affect overall status
    status = "healthy" if checks["database"] == "ok" else "degraded"
    return {"status": status, **checks}
