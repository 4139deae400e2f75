"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request, Response

from achexport.core.exceptions import CacheError

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
def ready(request: Request, response: Response) -> dict[str, str]:
    """Ready once the service is wired and the profile cache answers PING."""
    state = request.app.state
    if getattr(state, "service", None) is None:
        return {"status": "starting"}
    cache = getattr(state, "cache", None)
    if cache is not None:
        try:
            cache.ping()
        except CacheError:
            response.status_code = 503
            return {"status": "degraded", "cache": "unavailable"}
    return {"status": "ready", "environment": state.settings.environment}
