"""Unit tests for the configuration context manager."""

import pytest

from src.user_service.runtime.config.config_data import ConfigData
from src.user_service.runtime.context import (
    AppContext,
    get_config,
    get_context,
    merge_config,
    with_context,
)


class TestContextManager:
    """Test the context manager functionality."""

    def test_default_context_available(self):
        context = get_context()
        config = get_config()

        assert isinstance(context, AppContext)
        assert isinstance(config, ConfigData)
        assert context.config is config

    def test_with_context_override_single_field(self):
        original_config = get_config()
        original_port = original_config.app.port

        test_config = ConfigData()
        test_config.app.port = original_port + 1

        with with_context(test_config):
            override_config = get_config()
            assert override_config.app.port == original_port + 1
            # Untouched fields are inherited
            assert override_config.app.host == original_config.app.host
            assert (
                override_config.storage.model_dump()
                == original_config.storage.model_dump()
            )

        assert get_config() is original_config

    def test_with_context_nested_overrides(self):
        original_config = get_config()

        level1 = ConfigData()
        level1.storage.upload_dir = "level1_uploads"

        level2 = ConfigData()
        level2.logging.level = "DEBUG"

        with with_context(level1):
            with with_context(level2):
                config = get_config()
                assert config.storage.upload_dir == "level1_uploads"
                assert config.logging.level == "DEBUG"

            assert get_config().logging.level == original_config.logging.level
            assert get_config().storage.upload_dir == "level1_uploads"

        assert get_config() is original_config

    def test_with_context_none_is_noop(self):
        original_config = get_config()

        with with_context(None):
            assert get_config() is original_config

    def test_with_context_rejects_other_types(self):
        with pytest.raises(ValueError, match="must be ConfigData"):
            with with_context({"app": {"port": 1}}):  # type: ignore[arg-type]
                pass

    def test_with_context_restores_after_error(self):
        original_config = get_config()
        override = ConfigData()
        override.app.port = 9999

        with pytest.raises(RuntimeError):
            with with_context(override):
                raise RuntimeError("inside")

        assert get_config() is original_config

    def test_merge_config_applies_only_explicit_fields(self):
        base = ConfigData()
        base.app.port = 4000
        override = ConfigData()
        override.logging.level = "DEBUG"

        merged = merge_config(base, override)

        assert merged.app.port == 4000
        assert merged.logging.level == "DEBUG"
        assert merged.storage.upload_dir == "uploads"


class TestAppFactoryUsesContext:
    """create_app() without arguments builds from the active context."""

    def test_app_keeps_context_config(self, app_config, application):
        config = application.state.config

        assert config.app.environment == "test"
        assert config.storage.upload_dir == app_config.storage.upload_dir
        assert config.storage.static_dir == app_config.storage.static_dir
        # Sections the override left alone come from the default context
        assert config.logging.level == get_config().logging.level
        assert config.app.port == get_config().app.port

    def test_context_restored_after_app_built(self, app_config, application):
        assert get_config().storage.upload_dir != app_config.storage.upload_dir
