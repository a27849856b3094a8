from unittest.mock import MagicMock

import pytest

from battery_tray.monitor import Sample
from battery_tray.notifier import (
    ALERT_DURATION_MS,
    APP_NAME,
    BatteryNotifier,
    format_alert,
    format_status,
)
from battery_tray.thresholds import AlertEvent, AlertKind


@pytest.fixture
def notifier(config) -> BatteryNotifier:
    notifier = BatteryNotifier(config)
    notifier.app_icon = None
    notifier._notification_module = MagicMock()
    return notifier


def test_high_alert_text() -> None:
    title, body = format_alert(AlertEvent(AlertKind.HIGH_CROSSED, 84, True))
    assert title == "Battery Status"
    assert body == "Battery is above 80% (Currently: 84%)."


def test_low_alert_text() -> None:
    title, body = format_alert(AlertEvent(AlertKind.LOW_CROSSED, 29))
    assert title == "Battery Warning"
    assert body == "Battery is below 30% (Currently: 29%)."


def test_status_text() -> None:
    assert format_status(Sample(42, True)) == "Current battery: 42% (Charging)"


def test_send_passes_duration_in_seconds(notifier) -> None:
    assert notifier.send("Title", "Body", 4000) is True
    notifier._notification_module.notify.assert_called_once_with(
        title="Title",
        message="Body",
        app_name=APP_NAME,
        app_icon="",
        timeout=4,
    )


def test_send_truncates_long_text(notifier) -> None:
    notifier.send("T" * 100, "B" * 500)
    kwargs = notifier._notification_module.notify.call_args.kwargs
    assert len(kwargs["title"]) == 64
    assert len(kwargs["message"]) == 256


def test_notify_alert(notifier) -> None:
    assert notifier.notify_alert(AlertEvent(AlertKind.LOW_CROSSED, 30)) is True
    kwargs = notifier._notification_module.notify.call_args.kwargs
    assert kwargs["title"] == "Battery Warning"
    assert kwargs["timeout"] == ALERT_DURATION_MS // 1000


def test_notify_alert_respects_config(notifier, config) -> None:
    config.set("enable_notifications", False)
    assert notifier.notify_alert(AlertEvent(AlertKind.HIGH_CROSSED, 90)) is False
    notifier._notification_module.notify.assert_not_called()


def test_status_ignores_alert_setting(notifier, config) -> None:
    config.set("enable_notifications", False)
    assert notifier.notify_status(Sample(50, False)) is True


def test_send_without_backend(notifier) -> None:
    notifier._notification_module = None
    assert notifier.send("Title", "Body") is False


def test_backend_errors_are_contained(notifier) -> None:
    notifier._notification_module.notify.side_effect = NotImplementedError
    assert notifier.send("Title", "Body") is False

    notifier._notification_module.notify.side_effect = OSError("dbus unavailable")
    assert notifier.send("Title", "Body") is False


def test_explicit_app_icon(config, tmp_path) -> None:
    icon_path = tmp_path / "icon.png"
    notifier = BatteryNotifier(config, app_icon=icon_path)
    notifier._notification_module = MagicMock()
    notifier.send("Title", "Body")
    assert notifier._notification_module.notify.call_args.kwargs["app_icon"] == str(icon_path)
