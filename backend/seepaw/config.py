"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Business thresholds (notice periods, page sizes, fostering minimum) live here,
      handlers read them from the Settings instance they were built with

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from decimal import Decimal
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://seepaw:seepaw@db:5432/seepaw"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Shelter opening hours are wall-clock times in this zone
    shelter_timezone: str = "Europe/Lisbon"

    @field_validator("shelter_timezone")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {v}")
        return v

    @property
    def shelter_tz(self) -> ZoneInfo:
        return ZoneInfo(self.shelter_timezone)

    # Scheduling rules
    ownership_notice_hours: int = 24
    fostering_min_lead_hours: int = 1
    fostering_min_end_days: int = 1

    # Fostering
    min_monthly_value: Decimal = Decimal("10.00")

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 50

    # Ownership requests — rejected ones stay visible to the requester this long
    rejected_request_window_days: int = 30

    # Breed catalogue (TheDogAPI)
    breed_api_url: str = "https://api.thedogapi.com/v1/breeds"
    breed_api_key: str | None = None
    breed_api_timeout_seconds: float = 10.0
    breed_api_max_retries: int = 3
    breed_api_base_delay_ms: int = 500

    # Maintenance — 0 disables the background sweep
    activity_completion_interval_seconds: int = 300

    # Reminders go out this far ahead of an activity start or end, for activities
    # falling inside a window of reminder_window_minutes
    reminder_lead_hours: int = 24
    reminder_window_minutes: int = 60

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
