"""In-memory user repository."""

import threading
from datetime import UTC, datetime

from loguru import logger

from src.user_service.entities.core.user.entity import User, UserPayload


class UserNotFoundError(ValueError):
    """Raised when no user exists for the requested identifier."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"No User Id:{user_id}")
        self.user_id = user_id


class UserRepository:
    """Data-access layer for users.

    Holds the id -> User mapping and the last assigned id. Every read and write
    goes through one lock, and callers only ever receive copies of the stored
    records.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[int, User] = {}
        self._last_id = 0

    @property
    def last_id(self) -> int:
        with self._lock:
            return self._last_id

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def create(self, payload: UserPayload) -> User:
        """Store a new user built from the payload.

        The payload's ``id`` and ``created_at`` are ignored; the repository
        assigns the next identifier and the current time.
        """
        with self._lock:
            self._last_id += 1
            user = User(
                id=self._last_id,
                first_name=payload.first_name,
                last_name=payload.last_name,
                email=payload.email,
                created_at=datetime.now(UTC),
            )
            self._users[user.id] = user
            logger.info("Created user {}", user.id)
            return user.model_copy()

    def get(self, user_id: int) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
            return None if user is None else user.model_copy()

    def list_all(self) -> list[User]:
        """All users in ascending id order."""
        with self._lock:
            return [self._users[user_id].model_copy() for user_id in sorted(self._users)]

    def update(self, payload: UserPayload) -> User:
        """Merge the non-empty name and email fields of the payload.

        Raises:
            UserNotFoundError: No user exists for ``payload.id``.
        """
        changes = payload.changes()
        with self._lock:
            user = self._users.get(payload.id)
            if user is None:
                raise UserNotFoundError(payload.id)
            for name, value in changes.items():
                setattr(user, name, value)
            logger.info("Updated user {} fields={}", user.id, sorted(changes))
            return user.model_copy()

    def delete(self, user_id: int) -> bool:
        with self._lock:
            if self._users.pop(user_id, None) is None:
                return False
        logger.info("Deleted user {}", user_id)
        return True
