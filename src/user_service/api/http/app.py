"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, PlainTextResponse

from src.user_service.api.http.app_data import ApplicationDependencies
from src.user_service.api.http.routers import demo, health, uploads, users
from src.user_service.api.utils.app_startup import configure_logging
from src.user_service.entities.core.user import UserNotFoundError, UserRepository
from src.user_service.runtime.config.config_data import ConfigData
from src.user_service.runtime.context import get_config

__all__ = ["app", "create_app"]


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        return response


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


# --- Error mapping ---
def format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        message = error.get("msg", "")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> PlainTextResponse:
    logger.bind(errors=exc.errors()).warning("request.bad_request")
    return PlainTextResponse(
        f"Bad Request : {format_validation_errors(exc)}", status_code=400
    )


async def user_not_found_handler(
    request: Request, exc: UserNotFoundError
) -> PlainTextResponse:
    logger.info("User {} not found", exc.user_id)
    return PlainTextResponse(str(exc), status_code=404)


# --- Lifecycle hooks ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    config: ConfigData = app.state.config
    logger.info(
        "Starting up application in {} environment on {}",
        config.app.environment,
        config.app.base_url,
    )
    try:
        yield
    finally:
        app_deps: ApplicationDependencies = app.state.app_dependencies
        logger.info(
            "Shutting down application, dropping {} in-memory users",
            app_deps.user_repository.count(),
        )


# --- FastAPI app setup ---
def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build the application with its own, empty user repository."""
    config = config or get_config()
    configure_logging(config)

    if config.app.environment == "production" and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    application = FastAPI(
        title="User Service",
        lifespan=lifespan,
        docs_url=None if config.app.environment == "production" else "/docs",
        redoc_url=None if config.app.environment == "production" else "/redoc",
    )
    application.state.config = config
    application.state.app_dependencies = ApplicationDependencies(
        user_repository=UserRepository(),
        storage=config.storage,
    )

    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    application.middleware("http")(log_requests)

    application.add_exception_handler(RequestValidationError, validation_error_handler)
    application.add_exception_handler(UserNotFoundError, user_not_found_handler)

    # --- Router registration ---
    application.include_router(demo.router)
    application.include_router(users.router)
    application.include_router(uploads.router)
    application.include_router(health.router)

    config.storage.static_path.mkdir(parents=True, exist_ok=True)
    application.mount(
        "/static", StaticFiles(directory=config.storage.static_dir), name="static"
    )

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    main_config = get_config()
    uvicorn.run(
        app,
        host=main_config.app.host,
        port=main_config.app.port,
        access_log=False,  # We handle access logging in middleware
    )
