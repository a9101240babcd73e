from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "local"
    api_v1_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Security
    secret_key: str = "dev-secret-change-me"  # override in .env
    access_token_expire_minutes: int = 60 * 12

    # Database
    database_url: str = "sqlite:///./scheduler.db"

    # Scheduler grid
    shop_timezone: str = "UTC"
    business_day_start: str = "08:00"
    business_day_end: str = "17:00"
    slot_duration_minutes: int = 30
    max_range_days: int = 31

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance so the .env is parsed once.
    """
    return Settings()
