from dataclasses import dataclass

from src.user_service.entities.core.user import UserRepository
from src.user_service.runtime.config.config_data import StorageConfig


@dataclass
class ApplicationDependencies:
    user_repository: UserRepository
    storage: StorageConfig
