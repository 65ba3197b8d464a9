"""User domain entity."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from src.user_service.entities.core._base import Entity

MERGE_FIELDS = ("first_name", "last_name", "email")


class User(Entity):
    """User record held by the repository.

    ``id`` and ``created_at`` are assigned by the repository on creation and
    never change afterwards.
    """

    first_name: str = Field(description="User's first name")
    last_name: str = Field(description="User's last name")
    email: str = Field(description="User's email address")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class UserPayload(BaseModel):
    """User-shaped request body for create, update and echo requests.

    Every field is optional. ``null`` is read the same as an absent field.
    """

    # JSON strings, booleans and floats are not ids
    id: int = Field(default=0, strict=True, description="Target user for updates")
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    created_at: datetime | None = None

    @field_validator("id", "first_name", "last_name", "email", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return 0 if info.field_name == "id" else ""
        return value

    def changes(self) -> dict[str, str]:
        """Fields that a merge update should write: the non-empty ones."""
        values = {name: getattr(self, name) for name in MERGE_FIELDS}
        return {name: value for name, value in values.items() if value}
