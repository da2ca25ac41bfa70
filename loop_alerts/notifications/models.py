"""Alert Pydantic models.

Pure data models: no delivery, no scheduling. An Alert is built once
and handed to the delivery service, which owns it from then on.
"""

from datetime import datetime, timedelta
from typing import Any, Final, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from loop_alerts.notifications.enums import AlertAction, AlertCategory


class AlertTrigger(BaseModel):
    """When the delivery service should surface an alert.

    ``delay=None`` means immediately.
    """

    model_config = ConfigDict(frozen=True)

    delay: timedelta | None = None

    @field_validator("delay")
    @classmethod
    def check_positive(cls, value: timedelta | None) -> timedelta | None:
        if value is not None and value <= timedelta(0):
            msg = "trigger delay must be positive"
            raise ValueError(msg)
        return value

    @classmethod
    def immediate(cls) -> Self:
        return cls()

    @classmethod
    def after(cls, delay: timedelta) -> Self:
        return cls(delay=delay)

    @property
    def is_immediate(self) -> bool:
        return self.delay is None


class Alert(BaseModel):
    """A user-facing alert.

    ``identity`` controls replacement: the delivery service keeps at most
    one alert per identity, and a newer alert with the same identity
    replaces the pending or delivered one.
    """

    model_config = ConfigDict(frozen=True)

    identity: str = Field(min_length=1)
    title: str
    subtitle: str = ""
    body: str = ""
    # Platform default sound; no alert here is silent
    sound: bool = True
    category: AlertCategory | None = None
    thread_key: str | None = None
    trigger: AlertTrigger = Field(default_factory=AlertTrigger.immediate)
    payload: dict[str, Any] = Field(default_factory=dict)


class AlertActionSpec(BaseModel):
    """An action button registered for a category."""

    model_config = ConfigDict(frozen=True)

    action: AlertAction
    title: str = Field(min_length=1)


# Registered once at startup with the delivery service.
ALERT_CATEGORY_ACTIONS: Final[dict[AlertCategory, tuple[AlertActionSpec, ...]]] = {
    AlertCategory.bolus_failure: (
        AlertActionSpec(action=AlertAction.retry_bolus, title="Retry"),
    ),
}


class RetryBolusRequest(BaseModel):
    """A bolus the user asked to retry from a bolus-failure alert."""

    model_config = ConfigDict(frozen=True)

    units: float = Field(gt=0)
    start_date: datetime
