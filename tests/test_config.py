"""Tests for settings validation and process-start wiring."""

from datetime import timedelta

import pytest

from loop_alerts.bootstrap import build_composer, create_alert_manager
from loop_alerts.config import Settings, settings, validate_settings
from loop_alerts.notifications.models import ALERT_CATEGORY_ACTIONS


class TestSettingsDefaults:
    def test_alert_timing_defaults(self):
        defaults = Settings(_env_file=None)
        assert defaults.bolus_retry_window_minutes == 5
        assert defaults.loop_failure_escalation_minutes == [20, 40, 60, 120]
        assert defaults.loop_failure_grace_period_seconds == 30

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("LOOP_FAILURE_ESCALATION_MINUTES", "[15, 30]")
        monkeypatch.setenv("LOG_FORMAT", "text")
        overridden = Settings(_env_file=None)
        assert overridden.loop_failure_escalation_minutes == [15, 30]
        assert overridden.log_format == "text"


class TestValidateSettings:
    def test_defaults_pass(self):
        validate_settings()

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("loop_failure_escalation_minutes", []),
            ("loop_failure_escalation_minutes", [20, 0]),
            ("loop_failure_escalation_minutes", [40, 20]),
            ("loop_failure_grace_period_seconds", -1),
            ("bolus_retry_window_minutes", 0),
        ],
    )
    def test_invalid_settings_exit(self, monkeypatch, capsys, field, value):
        monkeypatch.setattr(settings, field, value)
        with pytest.raises(SystemExit) as exc_info:
            validate_settings()
        assert exc_info.value.code == 1
        assert "FATAL" in capsys.readouterr().err


class TestBootstrap:
    def test_build_composer_uses_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "loop_failure_escalation_minutes", [10, 30])
        monkeypatch.setattr(settings, "loop_failure_grace_period_seconds", 0)
        monkeypatch.setattr(settings, "bolus_retry_window_minutes", 2)

        composer = build_composer()
        alerts = composer.compose_loop_not_running()

        assert [a.trigger.delay for a in alerts] == [
            timedelta(minutes=10),
            timedelta(minutes=30),
        ]
        assert composer.bolus_retry_window == timedelta(minutes=2)

    def test_create_alert_manager_authorizes(self, center):
        manager = create_alert_manager(center)
        assert manager.center is center
        assert center.authorization_requests == 1
        assert center.categories == dict(ALERT_CATEGORY_ACTIONS)

    def test_default_center_is_scheduled(self):
        from loop_alerts.services.alert_center import ScheduledAlertCenter

        manager = create_alert_manager()
        assert isinstance(manager.center, ScheduledAlertCenter)
        assert manager.center.authorized
