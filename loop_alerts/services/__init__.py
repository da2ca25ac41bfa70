"""Alert delivery and submission services."""

from loop_alerts.services.alert_center import (
    AlertDeliveryService,
    ScheduledAlertCenter,
    log_sink,
)
from loop_alerts.services.alert_manager import AlertManager

__all__ = [
    "AlertDeliveryService",
    "AlertManager",
    "ScheduledAlertCenter",
    "log_sink",
]
