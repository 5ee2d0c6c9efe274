"""
Centralized configuration with environment variable overrides.

Business hours, slot grid, pricing rules and backend settings are
configurable here. Nothing is hardcoded in planner or service logic.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _parse_clock(env_var: str, value: str) -> int:
    """Convert an ``HH:MM`` setting to minutes after midnight."""
    try:
        parsed = datetime.strptime(value.strip(), "%H:%M")
    except ValueError:
        raise ValueError(f"Invalid HH:MM time for {env_var}: {value!r}") from None
    return parsed.hour * 60 + parsed.minute


@dataclass(frozen=True)
class ScheduleConfig:
    """Business-hours grid and lead-time rules for slot generation."""

    business_day_start: str = os.getenv("BUSINESS_DAY_START", "09:00")
    business_day_end: str = os.getenv("BUSINESS_DAY_END", "21:00")
    slot_minutes: int = _safe_int("SLOT_MINUTES", "30")
    lead_time_minutes: int = _safe_int("LEAD_TIME_MINUTES", "30")
    default_hours_per_day: int = _safe_int("DEFAULT_HOURS_PER_DAY", "8")
    date_window_days: int = _safe_int("DATE_WINDOW_DAYS", "30")

    @property
    def day_start_minutes(self) -> int:
        return _parse_clock("BUSINESS_DAY_START", self.business_day_start)

    @property
    def day_end_minutes(self) -> int:
        return _parse_clock("BUSINESS_DAY_END", self.business_day_end)


@dataclass(frozen=True)
class PricingConfig:
    """Session fee defaults."""

    default_session_fee: int = _safe_int("DEFAULT_SESSION_FEE", "1000")
    long_session_multiplier: float = _safe_float("LONG_SESSION_MULTIPLIER", "1.8")
    currency: str = os.getenv("CURRENCY", "INR")


@dataclass(frozen=True)
class ApiConfig:
    """Backend REST endpoint and request timeouts."""

    base_url: str = os.getenv("API_BASE_URL", "http://localhost:8011/api/v1")
    request_timeout_sec: float = _safe_float("API_TIMEOUT", "30.0")
    booked_slots_timeout_sec: float = _safe_float("BOOKED_SLOTS_TIMEOUT", "10.0")
    directory_timeout_sec: float = _safe_float("DIRECTORY_TIMEOUT", "15.0")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "consult-booking")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    start = config.schedule.day_start_minutes
    end = config.schedule.day_end_minutes
    if start >= end:
        raise ValueError(
            "BUSINESS_DAY_START must be earlier than BUSINESS_DAY_END, "
            f"got {config.schedule.business_day_start} >= {config.schedule.business_day_end}"
        )
    if config.schedule.slot_minutes < 1:
        raise ValueError(
            f"SLOT_MINUTES must be >= 1, got {config.schedule.slot_minutes}"
        )
    if config.schedule.lead_time_minutes < 1:
        raise ValueError(
            f"LEAD_TIME_MINUTES must be >= 1, got {config.schedule.lead_time_minutes}"
        )
    if config.schedule.default_hours_per_day < 0:
        raise ValueError(
            "DEFAULT_HOURS_PER_DAY must be >= 0, "
            f"got {config.schedule.default_hours_per_day}"
        )
    if config.schedule.date_window_days < 1:
        raise ValueError(
            f"DATE_WINDOW_DAYS must be >= 1, got {config.schedule.date_window_days}"
        )
    if config.pricing.default_session_fee < 0:
        raise ValueError(
            f"DEFAULT_SESSION_FEE must be >= 0, got {config.pricing.default_session_fee}"
        )
    if config.pricing.long_session_multiplier <= 0:
        raise ValueError(
            "LONG_SESSION_MULTIPLIER must be > 0, "
            f"got {config.pricing.long_session_multiplier}"
        )

    for timeout_name, timeout_value in [
        ("API_TIMEOUT", config.api.request_timeout_sec),
        ("BOOKED_SLOTS_TIMEOUT", config.api.booked_slots_timeout_sec),
        ("DIRECTORY_TIMEOUT", config.api.directory_timeout_sec),
    ]:
        if timeout_value <= 0:
            raise ValueError(f"{timeout_name} must be > 0, got {timeout_value}")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.app_name)
    return config


# Singleton instance
settings = load_config()
