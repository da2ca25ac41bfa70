"""Alert manager: compose and submit.

The entry point for the rest of the controller. Every send_* call
composes an alert and hands it to the delivery service; delivery is
fire-and-forget, so nothing here reports whether the user saw it.
"""

from datetime import datetime, timedelta

from pydantic import ValidationError

from loop_alerts.logging_config import get_logger
from loop_alerts.notifications.composer import AlertComposer
from loop_alerts.notifications.enums import AlertAction, AlertCategory, PayloadKey
from loop_alerts.notifications.models import (
    ALERT_CATEGORY_ACTIONS,
    Alert,
    RetryBolusRequest,
)
from loop_alerts.services.alert_center import AlertDeliveryService

logger = get_logger(__name__)


class AlertManager:
    """Submits composed alerts to an explicit delivery service handle."""

    def __init__(
        self,
        center: AlertDeliveryService,
        composer: AlertComposer | None = None,
    ):
        self.center = center
        self.composer = composer or AlertComposer()

    def authorize(self) -> None:
        """Request permission and register the category/action table.

        Call once at process start.
        """
        self.center.request_authorization()
        self.center.register_categories(ALERT_CATEGORY_ACTIONS)

    def _submit(self, alert: Alert) -> Alert:
        self.center.enqueue(alert)
        return alert

    def send_bolus_failure(
        self,
        error: BaseException,
        units: float,
        start_date: datetime,
        *,
        now: datetime | None = None,
    ) -> Alert:
        logger.info(
            "Bolus failure alert",
            units=units,
            error_type=type(error).__name__,
        )
        return self._submit(
            self.composer.compose_bolus_failure(error, units, start_date, now=now)
        )

    def schedule_loop_not_running(self) -> list[Alert]:
        """Schedule the escalating loop failure alerts.

        Call cancel_all() once a loop cycle completes to retract the
        ones that have not fired yet.
        """
        alerts = self.composer.compose_loop_not_running()
        for alert in alerts:
            self._submit(alert)
        return alerts

    def send_pump_battery_low(self) -> Alert:
        return self._submit(self.composer.compose_pump_battery_low())

    def send_pump_reservoir_empty(self) -> Alert:
        return self._submit(self.composer.compose_pump_reservoir_empty())

    def send_pump_reservoir_low(
        self,
        units: float,
        time_remaining: timedelta | float | None = None,
    ) -> Alert:
        return self._submit(
            self.composer.compose_pump_reservoir_low(units, time_remaining)
        )

    def send_remote_temp_target(
        self,
        duration_minutes: int,
        low_target: float,
        high_target: float,
    ) -> Alert:
        logger.info(
            "Remote temporary target alert",
            duration_minutes=duration_minutes,
        )
        return self._submit(
            self.composer.compose_remote_temp_target(
                duration_minutes, low_target, high_target
            )
        )

    def cancel_all(self) -> None:
        """Retract every pending alert. Delivered alerts stay."""
        self.center.cancel_all_pending()

    def handle_action(self, action_id: str, alert: Alert) -> RetryBolusRequest | None:
        """Translate a user's response to an alert into a request.

        Returns the bolus to retry for the Retry action on a bolus failure
        alert; None for anything else or when the payload is unusable.
        """
        try:
            action = AlertAction(action_id)
        except ValueError:
            logger.warning("Unknown alert action", action_id=action_id)
            return None

        if action is AlertAction.retry_bolus:
            if alert.category != AlertCategory.bolus_failure:
                logger.warning(
                    "Retry action on alert without retry category",
                    identity=alert.identity,
                )
                return None
            try:
                return RetryBolusRequest(
                    units=alert.payload[PayloadKey.bolus_amount],
                    start_date=alert.payload[PayloadKey.bolus_start_date],
                )
            except (KeyError, ValidationError) as e:
                logger.warning(
                    "Unusable bolus retry payload",
                    identity=alert.identity,
                    error=str(e),
                )
                return None

        return None
