"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from src.user_service.api.http.app_data import ApplicationDependencies

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Basic health check endpoint - checks if app is running.

    This is a liveness probe that returns 200 OK as long as the application
    process is running. It does not check dependencies.
    """
    return {"status": "healthy", "service": "api"}


@router.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness check for the user repository and the storage directories.

    Returns 200 when the repository is attached to the application, 503
    otherwise. Missing storage directories are reported but not fatal, since
    both are created on demand.
    """
    app_deps: ApplicationDependencies | None = getattr(
        request.app.state, "app_dependencies", None
    )
    checks: dict[str, Any] = {}
    all_healthy = True

    if app_deps is None:
        checks["user_store"] = {"status": "unhealthy", "error": "not initialized"}
        all_healthy = False
    else:
        checks["user_store"] = {
            "status": "healthy",
            "users": app_deps.user_repository.count(),
            "last_id": app_deps.user_repository.last_id,
        }
        for name, path in (
            ("static_dir", app_deps.storage.static_path),
            ("upload_dir", app_deps.storage.upload_path),
        ):
            checks[name] = {"path": str(path), "exists": path.is_dir()}

    response = {
        "status": "ready" if all_healthy else "not_ready",
        "environment": request.app.state.config.app.environment,
        "checks": checks,
    }

    if not all_healthy:
        return JSONResponse(status_code=503, content=response)

    return response
