"""Entity package: User."""

from .entity import User, UserPayload
from .repository import UserNotFoundError, UserRepository

__all__ = ["User", "UserPayload", "UserNotFoundError", "UserRepository"]
