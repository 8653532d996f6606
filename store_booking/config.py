from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .time_utils import DEFAULT_STORE_TIMEZONE, get_zone


class Settings(BaseSettings):
    store_timezone: str = DEFAULT_STORE_TIMEZONE
    database_url: str = "sqlite:///./store_booking.db"
    slot_interval_minutes: int = 15
    date_list_days: int = 30

    model_config = SettingsConfigDict(
        env_prefix="STORE_BOOKING_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("store_timezone")
    @classmethod
    def check_store_timezone(cls, value: str) -> str:
        # Raises InvalidZoneError (a ValueError) at startup for unknown keys.
        get_zone(value)
        return value

    @field_validator("slot_interval_minutes", "date_list_days")
    @classmethod
    def check_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @property
    def store_tz(self) -> ZoneInfo:
        return get_zone(self.store_timezone)


@lru_cache
def get_settings() -> Settings:
    return Settings()
