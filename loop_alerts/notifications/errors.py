"""Bolus failure errors and how they are described to the user."""

from collections.abc import Callable
from dataclasses import dataclass


class BolusCommandError(Exception):
    """A bolus command the pump did not confirm.

    ``certain`` is True when the pump definitely did not deliver; False
    when delivery may or may not have happened (e.g. the radio dropped
    after the command was sent).
    """

    def __init__(
        self,
        failure_reason: str | None = None,
        recovery_suggestion: str | None = None,
        *,
        certain: bool = True,
    ):
        super().__init__(failure_reason or "Bolus command failed")
        self.failure_reason = failure_reason
        self.recovery_suggestion = recovery_suggestion
        self.certain = certain

    def description_with_units(self, units_string: str) -> str:
        if self.certain:
            return f"{units_string} U bolus failed"
        return f"{units_string} U bolus may not have succeeded"


@dataclass(frozen=True)
class DescribedBolusFailure:
    """Subtitle/body pair for a bolus failure alert."""

    subtitle: str
    body: str


def describe_error(
    error: BaseException,
    units: float,
    format_number: Callable[[float], str],
) -> DescribedBolusFailure:
    """Describe a bolus failure, falling back to the most generic text.

    Order of preference:
    1. BolusCommandError: subtitle with units, body "reason suggestion"
    2. Any error with a non-empty ``error_description`` attribute
    3. str(error), or the exception class name when that is empty

    Never raises.
    """
    if isinstance(error, BolusCommandError):
        parts = [p for p in (error.failure_reason, error.recovery_suggestion) if p]
        body = " ".join(parts) if parts else _generic_message(error)
        return DescribedBolusFailure(
            subtitle=error.description_with_units(format_number(units)),
            body=body,
        )

    try:
        description = getattr(error, "error_description", None)
    except Exception:
        description = None
    if isinstance(description, str) and description:
        return DescribedBolusFailure(subtitle="", body=description)

    return DescribedBolusFailure(subtitle="", body=_generic_message(error))


def _generic_message(error: BaseException) -> str:
    try:
        message = str(error)
    except Exception:
        message = ""
    return message or type(error).__name__
