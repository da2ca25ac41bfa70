"""Alert enums.

String values are the identifiers registered with the delivery
platform, so they must not change between releases.
"""

from enum import StrEnum


class AlertCategory(StrEnum):
    """Kind of alert; also the base of every alert identity."""

    bolus_failure = "bolusFailure"
    loop_not_running = "loopNotRunning"
    pump_battery_low = "pumpBatteryLow"
    pump_reservoir_empty = "pumpReservoirEmpty"
    pump_reservoir_low = "pumpReservoirLow"
    remote_temp_target = "remoteTemp"


class AlertAction(StrEnum):
    """User-selectable response attached to a category."""

    retry_bolus = "retryBolus"


class PayloadKey(StrEnum):
    """Payload keys read back when the user responds to an alert."""

    bolus_amount = "bolusAmount"
    bolus_start_date = "bolusStartDate"
