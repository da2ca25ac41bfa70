"""Pytest configuration and shared fixtures."""

import os
from datetime import UTC, datetime

import pytest

# Set testing mode BEFORE importing settings so logging is left alone
os.environ["TESTING"] = "true"

from loop_alerts.config import settings

settings.testing = True

from loop_alerts.notifications.composer import AlertComposer
from loop_alerts.notifications.models import Alert
from loop_alerts.services.alert_manager import AlertManager

FIXED_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


class RecordingAlertCenter:
    """Delivery service fake that records calls.

    ``pending`` follows the real replacement rule: one alert per identity,
    last write wins.
    """

    def __init__(self):
        self.authorization_requests = 0
        self.categories = None
        self.enqueued: list[Alert] = []
        self.pending: dict[str, Alert] = {}
        self.cancel_all_calls = 0
        self.cancelled: list[str] = []

    def request_authorization(self) -> None:
        self.authorization_requests += 1

    def register_categories(self, categories) -> None:
        self.categories = dict(categories)

    def enqueue(self, alert: Alert) -> None:
        self.enqueued.append(alert)
        self.pending[alert.identity] = alert

    def cancel_all_pending(self) -> None:
        self.cancel_all_calls += 1
        self.pending.clear()

    def cancel(self, *identities: str) -> None:
        for identity in identities:
            self.cancelled.append(identity)
            self.pending.pop(identity, None)


@pytest.fixture
def composer() -> AlertComposer:
    return AlertComposer()


@pytest.fixture
def center() -> RecordingAlertCenter:
    return RecordingAlertCenter()


@pytest.fixture
def manager(center: RecordingAlertCenter, composer: AlertComposer) -> AlertManager:
    return AlertManager(center, composer)
