"""Engine configuration with environment variable validation."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .enums import SpeedUnit

# Resolve .env relative to the project root (3 levels up from this file)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Calculation defaults
    speed_unit: SpeedUnit = Field(default=SpeedUnit.MPH, validation_alias="SPEED_UNIT")
    cadence_rpm: float = Field(default=90, gt=0, validation_alias="CADENCE_RPM")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("speed_unit", mode="before")
    @classmethod
    def normalize_speed_unit(cls, value: object) -> object:
        """Accept 'KMH', 'km/h', 'MPH' and friends."""
        if isinstance(value, str):
            parsed = SpeedUnit.from_string(value)
            if parsed is not None:
                return parsed
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached engine settings."""
    return Settings()


def resolve_speed_unit(speed_unit: SpeedUnit | str | None, settings: Settings | None = None) -> SpeedUnit:
    """Explicit unit if given and recognized, else the configured default."""
    if speed_unit is None:
        return (settings or get_settings()).speed_unit
    parsed = SpeedUnit.from_string(speed_unit)
    if parsed is None:
        raise ValueError(f"Unknown speed unit: {speed_unit!r}")
    return parsed
