from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=BASE_DIR / ".env", env_file_encoding="utf-8")

    # Lost-and-found API
    UPSTREAM_BASE_URL: str = "http://localhost:5000/api"
    UPSTREAM_TOKEN: str = ""
    UPSTREAM_TIMEOUT: float = 15.0
    UPSTREAM_MAX_RETRIES: int = 3

    # Snapshot refresh cadence (seconds)
    STATS_REFRESH_SECONDS: int = 30
    ACTIVITY_REFRESH_SECONDS: int = 30
    ATTENTION_REFRESH_SECONDS: int = 60
    ANALYTICS_REFRESH_SECONDS: int = 300

    # Dashboard defaults
    DEFAULT_TIME_RANGE_DAYS: int = 30
    ACTIVITY_FETCH_LIMIT: int = 15
    ACTIVITY_DISPLAY_LIMIT: int = 10
    CATEGORY_DISPLAY_LIMIT: int = 8

    # Startup behavior
    SCHEDULER_ENABLED: bool = True
    REFRESH_ON_STARTUP: bool = True  # fetch every snapshot once before the first tick


settings = Settings()

ALLOWED_TIME_RANGES = (7, 30, 90)
