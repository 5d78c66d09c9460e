from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from rental_dashboard.shared.time import DATE_MAX, DATE_MIN, MONTH_MAX, MONTH_MIN


class Settings(BaseSettings):
    # Ignore unrelated env keys so local/dev .env can include optional integrations.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Rental Dashboard"
    environment: str = "development"
    api_prefix: str = "/api/v1"
    cors_allow_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    currency_code: str = Field(default="EUR", alias="DASHBOARD_CURRENCY_CODE")

    data_source: str = Field(default="./data", alias="DASHBOARD_DATA_SOURCE")
    fetch_timeout_seconds: float = Field(default=30.0, alias="DASHBOARD_FETCH_TIMEOUT_SECONDS")

    date_min: str = Field(default=DATE_MIN, alias="DASHBOARD_DATE_MIN")
    date_max: str = Field(default=DATE_MAX, alias="DASHBOARD_DATE_MAX")
    month_min: str = Field(default=MONTH_MIN, alias="DASHBOARD_MONTH_MIN")
    month_max: str = Field(default=MONTH_MAX, alias="DASHBOARD_MONTH_MAX")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_cors_origins() -> list[str]:
    settings = get_settings()
    return [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]
