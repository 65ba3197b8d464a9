from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace

from pydantic import BaseModel

from src.user_service.runtime.config.config_data import ConfigData
from src.user_service.runtime.config.config_template import load_default_config


@dataclass
class AppContext:
    """Configuration the application factory reads when it builds an app."""

    config: ConfigData


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=AppContext(config=load_default_config())
)


def get_context() -> AppContext:
    return _app_context.get()


def _explicit_fields(model: BaseModel) -> dict:
    """The fields of ``model`` that were assigned, walking nested sections.

    A section assigned wholesale with none of its own fields set counts as
    fully assigned.
    """
    explicit = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _explicit_fields(value)
            if nested:
                explicit[name] = nested
            elif name in model.model_fields_set:
                explicit[name] = value.model_dump()
        elif name in model.model_fields_set:
            explicit[name] = value
    return explicit


def _overlay(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _overlay(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_config(base: ConfigData, override: ConfigData) -> ConfigData:
    """Return ``base`` with every explicitly set field of ``override`` applied."""
    return ConfigData.model_validate(
        _overlay(base.model_dump(), _explicit_fields(override))
    )


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily layer ``config_override`` over the current configuration.

    Apps built inside the block, e.g. by ``create_app()``, keep the merged
    configuration after the block exits.

    Example:
        override = ConfigData()
        override.storage.upload_dir = "/tmp/uploads"
        with with_context(override):
            app = create_app()  # logging and app sections inherited
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    current = get_context()
    token = _app_context.set(
        replace(current, config=merge_config(current.config, config_override))
    )
    try:
        yield
    finally:
        _app_context.reset(token)


def get_config() -> ConfigData:
    """The configuration of the innermost active context."""
    return get_context().config
