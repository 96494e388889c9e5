from __future__ import annotations

from typing import Literal

from pydantic import PositiveInt, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "SEMLOC_"
DEFAULT_TIMEOUT_MS = 30000


class CliSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    browser: Literal["chromium", "firefox", "webkit"] = "chromium"
    timeout_ms: PositiveInt = DEFAULT_TIMEOUT_MS

    @field_validator("browser", mode="before")
    @classmethod
    def _normalize_browser(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower() or "chromium"
        return value


def load_settings() -> CliSettings:
    return CliSettings()


def describe_settings_error(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors():
        field = str(error["loc"][0]) if error.get("loc") else ""
        messages.append(f"{ENV_PREFIX}{field.upper()}: {error['msg']}")
    return "; ".join(messages)
