import os

from pydantic import BaseModel

_ENV_PREFIX = "TS_EXPECT_ERRORS_"
_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    checker: str = "tsc"
    unused_directive_code: str = "TS2578"
    ts_directive: str = "@ts-expect-error"
    vue_directive: str = "@vue-expect-error"
    # Attribute errors on an element wrapped by v-if/v-else-if/v-else/v-for are
    # placed before the wrapping construct instead of the element itself.
    forward_attributes: bool = True


def _env(name: str) -> str | None:
    value = os.getenv(_ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def load_settings(**overrides: object) -> Settings:
    """Build settings from ``TS_EXPECT_ERRORS_*`` environment variables.

    Keyword overrides that are not ``None`` win over the environment.
    """
    values: dict[str, object] = {}
    for field in ("checker", "unused_directive_code", "ts_directive", "vue_directive"):
        env_value = _env(field.upper())
        if env_value is not None:
            values[field] = env_value
    forward = _env("FORWARD_ATTRIBUTES")
    if forward is not None:
        values["forward_attributes"] = forward.lower() in _TRUTHY

    values.update({key: value for key, value in overrides.items() if value is not None})
    return Settings.model_validate(values)
