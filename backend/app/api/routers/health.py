"""System health endpoint for frontend polling."""

from typing import Any

from fastapi import APIRouter, Depends, Request

from ...api.dependencies import get_settings
from ...config import Settings
from ...infra.metrics import get_metrics_client

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/healthz")
def healthcheck(
    request: Request, settings: Settings = Depends(get_settings)
) -> dict[str, Any]:
    """Return storage readiness plus the operation counters seen so far."""

    ready = getattr(request.app.state, "password_store", None) is not None
    return {
        "status": "ok" if ready else "degraded",
        "environment": settings.environment,
        "storage": "ready" if ready else "unavailable",
        "storageError": getattr(request.app.state, "storage_error", None),
        "counters": get_metrics_client().snapshot(),
    }
