from __future__ import annotations

import os
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "OpenAuth"
    ENV: str = "dev"
    BACKEND_URL: str = "http://localhost:8000"  # Public base URL used to build OAuth callbacks
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "plain"

    # Applied to every provider HTTP call (token exchange, user info)
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # Facebook
    FACEBOOK_APP_ID: str | None = None
    FACEBOOK_APP_SECRET: str | None = None
    FACEBOOK_SCOPE: str = "email"

    # GitHub
    GITHUB_CLIENT_ID: str | None = None
    GITHUB_CLIENT_SECRET: str | None = None

    # Google
    GOOGLE_CLIENT_ID: str | None = None
    GOOGLE_CLIENT_SECRET: str | None = None
    GOOGLE_SCOPES: list[str] = ["userinfo.profile", "userinfo.email"]

    @field_validator("HTTP_TIMEOUT_SECONDS")
    @classmethod
    def _positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("HTTP_TIMEOUT_SECONDS must be positive")
        return v

    @model_validator(mode="after")
    def _validate_provider_credentials(self) -> BaseAppSettings:
        credential_pairs = (
            ("FACEBOOK_APP_ID", "FACEBOOK_APP_SECRET"),
            ("GITHUB_CLIENT_ID", "GITHUB_CLIENT_SECRET"),
            ("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET"),
        )
        if self.ENV.lower() == "prod":
            half_configured = [
                f"{id_name}/{secret_name}"
                for id_name, secret_name in credential_pairs
                if bool(getattr(self, id_name)) != bool(getattr(self, secret_name))
            ]
            if half_configured:
                raise ValueError(
                    "Incomplete OAuth credentials in production: " + ", ".join(half_configured)
                )
        return self


class DevSettings(BaseAppSettings):
    ENV: str = "dev"


class TestSettings(BaseAppSettings):
    ENV: str = "test"
    BACKEND_URL: str = "http://testserver"


class ProdSettings(BaseAppSettings):
    ENV: str = "prod"
    LOG_FORMAT: str = "json"


_ENV_TO_SETTINGS: dict[str, type[BaseAppSettings]] = {
    "dev": DevSettings,
    "development": DevSettings,
    "test": TestSettings,
    "testing": TestSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
}


@lru_cache
def get_settings() -> BaseAppSettings:
    env_name = os.getenv("APP_ENV") or os.getenv("ENV") or "dev"
    env = env_name.lower()
    settings_cls = _ENV_TO_SETTINGS.get(env, DevSettings)
    return settings_cls()


settings = get_settings()
