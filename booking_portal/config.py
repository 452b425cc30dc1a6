# booking_portal/config.py
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ENV: str = "dev"
    APP_NAME: str = "Client Portal Scheduling"

    # DB URL – SQLite local by default
    DATABASE_URL: str = "sqlite:///./booking_portal.db"

    # Single zone used to decide what "today" means for the calendar
    TIMEZONE: str = "UTC"

    # Key under which the availability policy lives in the config store
    AVAILABILITY_POLICY_KEY: str = "availability_policy"
    DEFAULT_SLOT_DURATION_MINUTES: int = 30

    # Delay before refresh subscribers are notified after a confirmation,
    # lets a lagging store catch up before views re-query it
    CONFIRM_REFRESH_GRACE_SECONDS: float = 0.25

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

_settings: Optional[Settings] = None

def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
