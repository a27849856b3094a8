"""
Cross-platform notification sink for battery alerts.
"""

import logging
import platform
from pathlib import Path
from typing import Dict, Optional, Tuple

from battery_tray.monitor import Sample
from battery_tray.thresholds import HIGH_THRESHOLD, LOW_THRESHOLD, AlertEvent, AlertKind

logger = logging.getLogger("BatteryTray.Notifier")

APP_NAME = "Battery Tray"
ALERT_DURATION_MS = 4000
ASSETS_DIR = Path(__file__).parent / "assets"

ALERT_TEMPLATES: Dict[AlertKind, Tuple[str, str]] = {
    AlertKind.HIGH_CROSSED: (
        "Battery Status",
        "Battery is above " + str(HIGH_THRESHOLD) + "% (Currently: {percent}%).",
    ),
    AlertKind.LOW_CROSSED: (
        "Battery Warning",
        "Battery is below " + str(LOW_THRESHOLD) + "% (Currently: {percent}%).",
    ),
}


def format_alert(event: AlertEvent) -> Tuple[str, str]:
    """
    Build the notification title and body for an alert.

    Args:
        event: Threshold crossing to report

    Returns:
        Tuple of (title, body)
    """
    title, body = ALERT_TEMPLATES[event.kind]
    return title, body.format(percent=event.percent)


def format_status(sample: Sample) -> str:
    return f"Current battery: {sample.percent}% ({sample.state_text})"


class BatteryNotifier:
    """Sends desktop notifications through plyer."""

    def __init__(self, config, app_icon: Optional[Path] = None):
        """
        Initialize the notifier.

        Args:
            config: ConfigManager instance
            app_icon: Icon shown in the notification; defaults to the bundled
                asset for this platform if it exists
        """
        self.config = config
        self.app_icon = app_icon if app_icon is not None else self._default_icon()
        self._notification_module = None
        self._initialize_notification_system()

        logger.info("BatteryNotifier initialized")

    def _default_icon(self) -> Optional[Path]:
        extension = ".ico" if platform.system() == "Windows" else ".png"
        path = ASSETS_DIR / f"icon{extension}"
        return path if path.exists() else None

    def _initialize_notification_system(self):
        """Initialize plyer, importing the platform backend directly for frozen builds."""
        try:
            from plyer import notification
            self._notification_module = notification
            logger.debug("Initialized notification system using plyer")
        except (ImportError, NotImplementedError) as e:
            logger.warning(f"Failed to import plyer normally: {e}")

            try:
                system = platform.system().lower()
                if system == "windows":
                    from plyer.platforms.win import notification
                elif system == "darwin":
                    from plyer.platforms.macosx import notification
                elif system == "linux":
                    from plyer.platforms.linux import notification
                else:
                    logger.error(f"Unsupported platform: {system}")
                    return

                self._notification_module = notification
                logger.debug(f"Initialized notification system using direct platform import for {system}")
            except (ImportError, NotImplementedError) as e:
                logger.error(f"Failed to initialize notification system: {e}")

    def send(self, title: str, body: str, display_duration_ms: int = ALERT_DURATION_MS) -> bool:
        """
        Show a notification. Fire-and-forget.

        Args:
            title: Notification title (max 64 characters)
            body: Notification body (max 256 characters)
            display_duration_ms: How long the notification stays visible

        Returns:
            True if the notification was handed to the OS, False otherwise
        """
        if not self._notification_module:
            logger.warning("Notification system not initialized, cannot send notification")
            return False

        # Windows balloon tips truncate beyond these limits
        title = title[:64]
        body = body[:256]
        timeout = max(1, int(round(display_duration_ms / 1000.0)))

        try:
            self._notification_module.notify(
                title=title,
                message=body,
                app_name=APP_NAME,
                app_icon=str(self.app_icon) if self.app_icon else "",
                timeout=timeout,
            )
            logger.info(f"Sent notification: {title} - {body}")
            return True

        except NotImplementedError:
            logger.error(
                "Notifications not implemented for this platform. "
                "Please install required system dependencies."
            )
            return False
        except Exception as e:
            logger.error(f"Failed to send notification: {e}", exc_info=True)
            return False

    def notify_alert(self, event: AlertEvent) -> bool:
        """
        Send the notification for a threshold crossing.

        Args:
            event: AlertEvent from the threshold monitor

        Returns:
            True if sent, False if disabled in config or sending failed
        """
        if not self.config.get("enable_notifications", True):
            logger.debug(f"Notifications disabled, dropping {event.kind.value} alert")
            return False

        title, body = format_alert(event)
        return self.send(title, body, ALERT_DURATION_MS)

    def notify_status(self, sample: Sample) -> bool:
        """Send the current battery status on request."""
        return self.send(APP_NAME, format_status(sample), ALERT_DURATION_MS)
