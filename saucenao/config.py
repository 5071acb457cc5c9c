"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AnyHttpUrl, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SERVICE = "https://saucenao.com"


class SauceNAOSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SAUCENAO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    service: AnyHttpUrl = Field(
        default=DEFAULT_SERVICE,
        description="Base URL of the SauceNAO service, without the search path.",
    )
    api_key: SecretStr | None = None
    request_timeout_seconds: float = Field(default=30, gt=0, le=600)

    def service_base(self) -> str:
        return str(self.service).rstrip("/")


@lru_cache
def get_settings() -> SauceNAOSettings:
    """Return cached settings instance."""

    return SauceNAOSettings()


__all__ = ["DEFAULT_SERVICE", "SauceNAOSettings", "get_settings"]
