"""Client configuration sourced from the environment."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, PositiveFloat
from pydantic_settings import BaseSettings, SettingsConfigDict

from http_facade.models import DEFAULT_TIMEOUT_SECONDS, Timeouts


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    app_env: Literal["dev", "prod", "test"] = Field(default="dev", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    base_url: str = Field(alias="HTTP_BASE_URL")

    # Seconds; the per-phase values fall back to ``timeout`` when unset
    timeout: PositiveFloat = Field(default=DEFAULT_TIMEOUT_SECONDS, alias="HTTP_TIMEOUT")
    connect_timeout: PositiveFloat | None = Field(default=None, alias="HTTP_CONNECT_TIMEOUT")
    receive_timeout: PositiveFloat | None = Field(default=None, alias="HTTP_RECEIVE_TIMEOUT")
    send_timeout: PositiveFloat | None = Field(default=None, alias="HTTP_SEND_TIMEOUT")

    def timeouts(self) -> Timeouts:
        return Timeouts(
            connect=self.connect_timeout or self.timeout,
            receive=self.receive_timeout or self.timeout,
            send=self.send_timeout or self.timeout,
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()  # type: ignore[call-arg]
