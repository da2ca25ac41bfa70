"""Local alerts for the insulin delivery loop.

Turns pump and loop events into Alert values with a stable identity.
Identity drives replacement in the delivery service:

1. Bolus failure: one at a time, Retry offered only while fresh
2. Loop not running: four escalating delayed alerts, cancelled together
3. Pump battery low
4. Pump reservoir empty: shares the reservoir-low identity on purpose
5. Pump reservoir low
6. Remote temporary target set or cancelled

IMPORTANT: alerts are best-effort. A missing or suppressed alert must
never be the only safeguard for a dosing decision.
"""

from loop_alerts.notifications.composer import AlertComposer, loop_not_running_identity
from loop_alerts.notifications.enums import AlertAction, AlertCategory, PayloadKey
from loop_alerts.notifications.errors import BolusCommandError, describe_error
from loop_alerts.notifications.formatting import AlertFormatter
from loop_alerts.notifications.models import (
    ALERT_CATEGORY_ACTIONS,
    Alert,
    AlertActionSpec,
    AlertTrigger,
    RetryBolusRequest,
)

__all__ = [
    "ALERT_CATEGORY_ACTIONS",
    "Alert",
    "AlertAction",
    "AlertActionSpec",
    "AlertCategory",
    "AlertComposer",
    "AlertFormatter",
    "AlertTrigger",
    "BolusCommandError",
    "PayloadKey",
    "RetryBolusRequest",
    "describe_error",
    "loop_not_running_identity",
]
