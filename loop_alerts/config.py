"""Configuration using Pydantic Settings."""

import sys

from pydantic_settings import BaseSettings, SettingsConfigDict

from loop_alerts.notifications.constants import (
    BOLUS_RETRY_WINDOW_MINUTES,
    LOOP_FAILURE_ESCALATION_MINUTES,
    LOOP_FAILURE_GRACE_PERIOD_SECONDS,
)


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Logging
    log_format: str = "json"  # 'json' or 'text'
    log_level: str = "INFO"
    service_name: str = "loop-alerts"

    # Bolus failure: retry is only offered while the failure is this fresh
    bolus_retry_window_minutes: float = BOLUS_RETRY_WINDOW_MINUTES

    # Loop not running escalation
    loop_failure_escalation_minutes: list[float] = list(LOOP_FAILURE_ESCALATION_MINUTES)
    loop_failure_grace_period_seconds: float = LOOP_FAILURE_GRACE_PERIOD_SECONDS

    # Testing
    testing: bool = False


settings = Settings()


def validate_settings() -> None:
    """Refuse alert timing settings that would silently break escalation.

    The escalation list must be non-empty and strictly increasing, every
    delay positive; the grace period may be zero but not negative.
    """
    problems: list[str] = []

    delays = settings.loop_failure_escalation_minutes
    if not delays:
        problems.append("LOOP_FAILURE_ESCALATION_MINUTES must not be empty")
    elif any(d <= 0 for d in delays):
        problems.append("LOOP_FAILURE_ESCALATION_MINUTES must all be positive")
    elif any(b <= a for a, b in zip(delays, delays[1:])):
        problems.append("LOOP_FAILURE_ESCALATION_MINUTES must be strictly increasing")

    if settings.loop_failure_grace_period_seconds < 0:
        problems.append("LOOP_FAILURE_GRACE_PERIOD_SECONDS must not be negative")

    if settings.bolus_retry_window_minutes <= 0:
        problems.append("BOLUS_RETRY_WINDOW_MINUTES must be positive")

    if problems:
        for problem in problems:
            print(f"FATAL: {problem} (currently invalid).", file=sys.stderr)
        sys.exit(1)
