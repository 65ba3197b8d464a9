"""FastAPI dependency implementations."""

from fastapi import Request

from src.user_service.api.http.app_data import ApplicationDependencies
from src.user_service.entities.core.user import UserRepository
from src.user_service.runtime.config.config_data import StorageConfig


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_user_repository(request: Request) -> UserRepository:
    """Get the user repository owned by the running application."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.user_repository


def get_storage_config(request: Request) -> StorageConfig:
    """Get the static/upload directory configuration."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.storage
