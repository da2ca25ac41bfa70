"""Process-start wiring for the alert manager."""

from datetime import timedelta

from loop_alerts.config import settings, validate_settings
from loop_alerts.logging_config import get_logger, setup_logging
from loop_alerts.notifications.composer import AlertComposer
from loop_alerts.notifications.formatting import AlertFormatter
from loop_alerts.services.alert_center import AlertDeliveryService, ScheduledAlertCenter
from loop_alerts.services.alert_manager import AlertManager

logger = get_logger(__name__)


def build_composer(formatter: AlertFormatter | None = None) -> AlertComposer:
    """Composer configured from settings."""
    return AlertComposer(
        formatter,
        bolus_retry_window=timedelta(minutes=settings.bolus_retry_window_minutes),
        loop_failure_escalations=[
            timedelta(minutes=m) for m in settings.loop_failure_escalation_minutes
        ],
        loop_failure_grace_period=timedelta(
            seconds=settings.loop_failure_grace_period_seconds
        ),
    )


def create_alert_manager(
    center: AlertDeliveryService | None = None,
    formatter: AlertFormatter | None = None,
) -> AlertManager:
    """Set up logging, validate settings, and return an authorized manager.

    Without an explicit center a ScheduledAlertCenter is created; its
    scheduler is started by the caller once an event loop is running.
    """
    if not settings.testing:
        setup_logging(
            log_format=settings.log_format,
            log_level=settings.log_level,
            service_name=settings.service_name,
        )
    validate_settings()

    manager = AlertManager(center or ScheduledAlertCenter(), build_composer(formatter))
    manager.authorize()

    logger.info(
        "Alert manager ready",
        escalation_minutes=settings.loop_failure_escalation_minutes,
        grace_period_seconds=settings.loop_failure_grace_period_seconds,
    )
    return manager
