"""Unit tests for the user entity package."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from src.user_service.entities.core.user import User, UserPayload


class TestUser:
    """Test the User domain entity."""

    def test_user_creation_sets_timestamp(self):
        """User should get a timezone-aware creation time by default."""
        user = User(id=1, first_name="Test", last_name="User", email="test@example.com")

        assert user.id == 1
        assert user.created_at.tzinfo is not None
        assert user.created_at <= datetime.now(UTC)

    def test_user_serializes_to_wire_shape(self):
        """User JSON should carry exactly the public fields."""
        user = User(id=7, first_name="Jane", last_name="Smith", email="j@s.com")

        data = user.model_dump(mode="json")

        assert list(data) == ["id", "first_name", "last_name", "email", "created_at"]
        assert data["id"] == 7
        assert isinstance(data["created_at"], str)

    def test_user_requires_id(self):
        with pytest.raises(ValidationError):
            User(first_name="No", last_name="Id", email="x@y.z")


class TestUserPayload:
    """Test the request payload model."""

    def test_all_fields_optional(self):
        payload = UserPayload()

        assert payload.id == 0
        assert payload.first_name == ""
        assert payload.last_name == ""
        assert payload.email == ""
        assert payload.created_at is None

    def test_null_values_read_as_absent(self):
        payload = UserPayload.model_validate(
            {"id": None, "first_name": None, "email": None}
        )

        assert payload.id == 0
        assert payload.first_name == ""
        assert payload.email == ""

    def test_unknown_keys_ignored(self):
        payload = UserPayload.model_validate({"first_name": "MG", "nickname": "mg"})

        assert payload.first_name == "MG"
        assert not hasattr(payload, "nickname")

    def test_type_mismatch_rejected(self):
        """A number where a string belongs is a decode error."""
        with pytest.raises(ValidationError):
            UserPayload.model_validate({"first_name": 5})

    @pytest.mark.parametrize("bad_id", ["one", "1", True, 1.5])
    def test_non_integer_id_rejected(self, bad_id):
        """Only a JSON integer is an id; no coercion from strings or booleans."""
        with pytest.raises(ValidationError):
            UserPayload.model_validate({"id": bad_id})

    def test_integer_id_accepted(self):
        assert UserPayload.model_validate_json('{"id": 3}').id == 3

    def test_malformed_json_rejected(self):
        with pytest.raises(ValidationError):
            UserPayload.model_validate_json('{"first_name": "MG"')

    def test_changes_keeps_only_non_empty_fields(self):
        payload = UserPayload(id=1, first_name="", email="new@x.com")

        assert payload.changes() == {"email": "new@x.com"}

    def test_changes_never_includes_identity_fields(self):
        payload = UserPayload(
            id=3,
            first_name="A",
            last_name="B",
            email="c@d.e",
            created_at=datetime(2020, 1, 1, tzinfo=UTC),
        )

        assert payload.changes() == {"first_name": "A", "last_name": "B", "email": "c@d.e"}
