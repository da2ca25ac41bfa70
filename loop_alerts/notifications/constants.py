"""Alert timing constants.

These are DEFAULTS; the matching fields in loop_alerts.config.Settings
override them per deployment.
"""

from typing import Final

# Retry window: a failed bolus only offers the Retry action while it is
# at most this old. Retrying a stale bolus risks double-dosing once the
# user has already eaten or corrected.
BOLUS_RETRY_WINDOW_MINUTES: Final[float] = 5

# Loop not running: minutes without a completed loop cycle after which
# an alert fires. One alert per entry, all scheduled up front.
LOOP_FAILURE_ESCALATION_MINUTES: Final[tuple[float, ...]] = (20, 40, 60, 120)

# Added to every escalation delay so a loop cycle in progress can finish.
LOOP_FAILURE_GRACE_PERIOD_SECONDS: Final[float] = 30

# Number formatting: at most this many fraction digits.
MAX_FRACTION_DIGITS: Final[int] = 3
