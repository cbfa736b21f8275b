from __future__ import annotations

import re

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_HHMM = re.compile(r"^\d{2}:\d{2}$")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # env: dev|stage|prod
    APP_ENV: str = "dev"
    API_V1_PREFIX: str = "/v1"

    # CORS
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # DB
    DATABASE_URL: str = "postgresql+asyncpg://autoscheduler:autoscheduler@db:5432/autoscheduler"
    DATABASE_ECHO: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Scheduling engine tuning
    SCHEDULER_MIN_SLOT_MINUTES: int = 15
    SCHEDULER_SUGGESTIONS_PER_TASK: int = 3
    SCHEDULER_DEFAULT_WINDOW_START: str = "09:00"
    SCHEDULER_DEFAULT_WINDOW_END: str = "17:00"
    SCHEDULER_DEFAULT_ENERGY_LEVEL: str = "medium"
    SCHEDULER_MAX_RANGE_DAYS: int = 62

    @field_validator("APP_ENV")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        allowed = {"dev", "stage", "prod"}
        if value not in allowed:
            raise ValueError(f"APP_ENV must be one of {allowed}, got '{value}'")
        return value

    @field_validator("SCHEDULER_DEFAULT_WINDOW_START", "SCHEDULER_DEFAULT_WINDOW_END")
    @classmethod
    def validate_window_bound(cls, value: str, info: ValidationInfo) -> str:
        if not _HHMM.match(value):
            raise ValueError(f"{info.field_name} must use HH:MM format, got '{value}'")
        return value

    @field_validator("SCHEDULER_DEFAULT_WINDOW_END")
    @classmethod
    def validate_window_order(cls, value: str, info: ValidationInfo) -> str:
        start = info.data.get("SCHEDULER_DEFAULT_WINDOW_START")
        if start and value <= start:
            raise ValueError("SCHEDULER_DEFAULT_WINDOW_END must be after SCHEDULER_DEFAULT_WINDOW_START")
        return value

    @field_validator("SCHEDULER_DEFAULT_ENERGY_LEVEL")
    @classmethod
    def validate_energy_level(cls, value: str) -> str:
        allowed = {"high", "medium", "low"}
        if value not in allowed:
            raise ValueError(f"SCHEDULER_DEFAULT_ENERGY_LEVEL must be one of {allowed}, got '{value}'")
        return value

    @field_validator("SCHEDULER_MIN_SLOT_MINUTES", "SCHEDULER_SUGGESTIONS_PER_TASK", "SCHEDULER_MAX_RANGE_DAYS")
    @classmethod
    def validate_positive(cls, value: int, info: ValidationInfo) -> int:
        if value <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return value


settings = Settings()
