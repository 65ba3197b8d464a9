"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model and the request payload it is built from
- repository.py: Data access layer
"""

from .core.user import User, UserNotFoundError, UserPayload, UserRepository

__all__ = [
    "User",
    "UserPayload",
    "UserRepository",
    "UserNotFoundError",
]
