"""Alert composition.

Maps pump and loop events to Alert values. Every method here is pure:
nothing is enqueued, nothing raises on odd input. Submitting the result
is AlertManager's job.
"""

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from loop_alerts.notifications.constants import (
    BOLUS_RETRY_WINDOW_MINUTES,
    LOOP_FAILURE_ESCALATION_MINUTES,
    LOOP_FAILURE_GRACE_PERIOD_SECONDS,
)
from loop_alerts.notifications.enums import AlertCategory, PayloadKey
from loop_alerts.notifications.errors import describe_error
from loop_alerts.notifications.formatting import AlertFormatter
from loop_alerts.notifications.models import Alert, AlertTrigger


def _aware(value: datetime) -> datetime:
    # Naive timestamps from pump drivers are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def loop_not_running_identity(escalation: timedelta) -> str:
    """Identity of the loop-not-running alert for one escalation delay."""
    return f"{AlertCategory.loop_not_running}{escalation.total_seconds():.1f}"


class AlertComposer:
    """Builds alerts from domain events.

    Stateless apart from its configuration; safe to share.
    """

    def __init__(
        self,
        formatter: AlertFormatter | None = None,
        *,
        bolus_retry_window: timedelta = timedelta(minutes=BOLUS_RETRY_WINDOW_MINUTES),
        loop_failure_escalations: Sequence[timedelta] = tuple(
            timedelta(minutes=m) for m in LOOP_FAILURE_ESCALATION_MINUTES
        ),
        loop_failure_grace_period: timedelta = timedelta(
            seconds=LOOP_FAILURE_GRACE_PERIOD_SECONDS
        ),
    ):
        self.formatter = formatter or AlertFormatter()
        self.bolus_retry_window = bolus_retry_window
        self.loop_failure_escalations = tuple(loop_failure_escalations)
        self.loop_failure_grace_period = loop_failure_grace_period

    def compose_bolus_failure(
        self,
        error: BaseException,
        units: float,
        start_date: datetime,
        *,
        now: datetime | None = None,
    ) -> Alert:
        """Alert for a bolus command that failed or may have failed.

        The Retry action (via the category) is only offered while the
        failure is within the retry window. Only one bolus failure alert
        exists at a time: the identity is the category itself.
        """
        now = _aware(now or datetime.now(UTC))
        described = describe_error(error, units, self.formatter.number)

        category = None
        if now - _aware(start_date) <= self.bolus_retry_window:
            category = AlertCategory.bolus_failure

        return Alert(
            identity=AlertCategory.bolus_failure.value,
            title="Bolus",
            subtitle=described.subtitle,
            body=described.body,
            category=category,
            payload={
                PayloadKey.bolus_amount.value: units,
                PayloadKey.bolus_start_date.value: start_date,
            },
        )

    def compose_loop_not_running(self) -> list[Alert]:
        """One delayed alert per escalation delay.

        Each identity embeds its delay so the alerts coexist; the caller
        cancels all pending alerts once a loop cycle completes.
        """
        alerts = []
        for escalation in self.loop_failure_escalations:
            interval = self.formatter.duration(escalation)
            body = (
                f"Loop has not completed successfully in {interval.lower()}"
                if interval is not None
                else ""
            )
            alerts.append(
                Alert(
                    identity=loop_not_running_identity(escalation),
                    title="Loop Failure",
                    body=body,
                    category=AlertCategory.loop_not_running,
                    thread_key=AlertCategory.loop_not_running.value,
                    trigger=AlertTrigger.after(
                        escalation + self.loop_failure_grace_period
                    ),
                )
            )
        return alerts

    def compose_pump_battery_low(self) -> Alert:
        return Alert(
            identity=AlertCategory.pump_battery_low.value,
            title="Pump Battery Low",
            body="Change the pump battery immediately",
            category=AlertCategory.pump_battery_low,
        )

    def compose_pump_reservoir_empty(self) -> Alert:
        # Identity is the *low* category: empty replaces any low alert
        return Alert(
            identity=AlertCategory.pump_reservoir_low.value,
            title="Pump Reservoir Empty",
            body="Change the pump reservoir now",
            category=AlertCategory.pump_reservoir_empty,
        )

    def compose_pump_reservoir_low(
        self,
        units: float,
        time_remaining: timedelta | float | None = None,
    ) -> Alert:
        """Alert for a low reservoir.

        Args:
            units: Insulin units left in the reservoir.
            time_remaining: Estimated time until empty, as a timedelta or
                seconds. Omitted from the text when missing or unformattable.
        """
        units_string = self.formatter.number(units)

        time_string = None
        if time_remaining is not None:
            time_string = self.formatter.time_remaining(time_remaining)

        if time_string is not None:
            body = f"{units_string} U left: {time_string}"
        else:
            body = f"{units_string} U left"

        return Alert(
            identity=AlertCategory.pump_reservoir_low.value,
            title="Pump Reservoir Low",
            body=body,
            category=AlertCategory.pump_reservoir_low,
        )

    def compose_remote_temp_target(
        self,
        duration_minutes: int,
        low_target: float,
        high_target: float,
    ) -> Alert:
        """Alert for a temporary target set or cancelled remotely.

        A duration under one minute is a cancellation.
        """
        if duration_minutes < 1:
            title = "Remote Temporary Target Canceled"
            body = ""
        else:
            title = "Remote Temporary Target Set"
            body = (
                f"LowTarget: {self.formatter.number(low_target)} "
                f"HighTarget: {self.formatter.number(high_target)} "
                f"Duration: {int(duration_minutes)}"
            )

        return Alert(
            identity=AlertCategory.remote_temp_target.value,
            title=title,
            body=body,
            category=AlertCategory.remote_temp_target,
        )
