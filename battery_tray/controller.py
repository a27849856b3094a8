"""
Per-tick orchestration of sampling, rendering, placement and alerts.

The controller owns no UI itself. Every collaborator is injected so a tick
can run against fakes in tests.
"""

import logging
from typing import Optional

from battery_tray.errors import RenderFailure, SampleUnavailable
from battery_tray.icon import IconComposer
from battery_tray.monitor import Sample
from battery_tray.placement import OverlayPlacement, place
from battery_tray.thresholds import AlertEvent, ThresholdMonitor


def format_tooltip(sample: Sample) -> str:
    return f"{sample.percent}% ({sample.state_text})"


def format_overlay_text(sample: Sample) -> str:
    return f"{sample.percent}%"


class TrayController:
    """Runs one observation per tick and pushes the result to every surface."""

    def __init__(
        self,
        source,
        tray,
        notifier,
        overlay=None,
        desktop=None,
        composer: Optional[IconComposer] = None,
        monitor: Optional[ThresholdMonitor] = None,
    ):
        """
        Initialize the controller.

        Args:
            source: PowerStatusSource providing read() -> Sample
            tray: TrayPresenter for the icon and tooltip
            notifier: BatteryNotifier receiving alert events
            overlay: OverlayWindow, or None when the overlay is disabled
            desktop: Geometry provider for overlay placement
            composer: IconComposer (default: Pillow-backed)
            monitor: ThresholdMonitor carrying the hysteresis flags
        """
        self.source = source
        self.tray = tray
        self.notifier = notifier
        self.overlay = overlay
        self.desktop = desktop
        self.composer = composer or IconComposer()
        self.monitor = monitor or ThresholdMonitor()
        self.last_sample: Optional[Sample] = None
        self.logger = logging.getLogger("BatteryTray.Controller")

    def tick(self) -> Optional[AlertEvent]:
        """
        Run one refresh cycle. Never raises.

        Returns:
            The AlertEvent dispatched this tick, if any
        """
        try:
            return self._run_tick()
        except SampleUnavailable as e:
            self.logger.warning(f"Skipping tick, battery status unavailable: {e}")
        except Exception as e:
            self.logger.error(f"Error in refresh tick: {e}", exc_info=True)
        return None

    def _run_tick(self) -> Optional[AlertEvent]:
        sample = self.source.read()
        self.last_sample = sample
        tooltip = format_tooltip(sample)

        try:
            image = self.composer.render(sample.percent, sample.charging)
        except RenderFailure as e:
            self.logger.warning(f"Keeping previous tray icon: {e}")
            self.tray.show_tooltip(tooltip)
        else:
            self.tray.show(image, tooltip)

        if self.overlay is not None and self.desktop is not None:
            self.overlay.apply(self.place_overlay(), format_overlay_text(sample))

        event = self.monitor.evaluate(sample.percent, sample.charging)
        if event is not None:
            self.logger.info(f"Threshold crossed: {event.kind.value} at {event.percent}%")
            self.notifier.notify_alert(event)

        return event

    def place_overlay(self) -> OverlayPlacement:
        """Compute the overlay position from the current desktop geometry."""
        try:
            taskbar = self.desktop.taskbar_rect()
        except Exception as e:
            self.logger.debug(f"Taskbar query failed, using work area: {e}")
            taskbar = None

        return place(taskbar, self.desktop.screen_bounds(), self.desktop.work_area())

    def show_status(self) -> bool:
        """
        Send a notification with the current battery status.

        Returns:
            True if a notification was sent
        """
        try:
            sample = self.source.read()
        except SampleUnavailable as e:
            self.logger.warning(f"Cannot show status: {e}")
            return False

        self.last_sample = sample
        return self.notifier.notify_status(sample)

    def release(self):
        """Release the last rendered icon."""
        self.tray.release()
