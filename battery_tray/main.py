"""
Entry point for Battery Tray.

Shows the battery glyph in the system tray, keeps a percentage overlay next
to the taskbar and raises a notification once per threshold crossing.
"""

import platform
import signal
import sys
import threading
import tkinter as tk
from typing import Optional

import pystray

from battery_tray.config import LOG_DIR, ConfigManager
from battery_tray.controller import TrayController, format_tooltip
from battery_tray.desktop import create_desktop, enable_dpi_awareness
from battery_tray.icon import IconComposer
from battery_tray.logger import cleanup_old_logs, setup_logging
from battery_tray.monitor import PowerStatusSource
from battery_tray.notifier import BatteryNotifier
from battery_tray.overlay import OverlayWindow
from battery_tray.startup import StartupRegistration
from battery_tray.tray import TrayPresenter

POLL_INTERVAL_MS = 30_000

# Call before creating any windows
enable_dpi_awareness()


class BatteryTrayApp:
    """Main application class with system tray icon."""

    def __init__(self):
        """Initialize the Battery Tray application."""
        self.config = ConfigManager()
        self.logger = setup_logging(self.config, LOG_DIR)
        cleanup_old_logs(LOG_DIR, self.config.get("log_retention_days", 30))

        self.system = platform.system()
        self.startup = StartupRegistration(self.system)
        self.startup_enabled = self.startup.is_enabled()

        # Threading control
        self.shutdown_event = threading.Event()
        self.shutdown_initiated = False
        self.tick_job = None
        self.tick_thread = None

        # pystray must own the main thread on macOS, which leaves no room for
        # a Tk mainloop, so the overlay is Windows/Linux only
        self.root: Optional[tk.Tk] = None
        overlay = None
        desktop = None
        if self.system != "Darwin":
            self.root = tk.Tk()
            self.root.withdraw()
            if self.config.get("show_overlay", True):
                overlay = OverlayWindow(self.root)
                desktop = create_desktop(self.root)

        self.composer = IconComposer()
        self.tray = TrayPresenter()
        self.notifier = BatteryNotifier(self.config)
        self.controller = TrayController(
            source=PowerStatusSource(),
            tray=self.tray,
            notifier=self.notifier,
            overlay=overlay,
            desktop=desktop,
            composer=self.composer,
        )
        self.icon = None

        self.logger.info("=" * 60)
        self.logger.info("Battery Tray Application Initialized")
        self.logger.info(f"Platform: {self.system}")
        self.logger.info(f"Overlay: {'on' if overlay is not None else 'off'}")
        self.logger.info("=" * 60)

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

    def _signal_handler(self, signum, frame):
        """Handle shutdown signals gracefully."""
        self.logger.info(f"Received signal {signum}, shutting down...")
        self.shutdown_event.set()
        self._call_soon(self.shutdown)

    def _call_soon(self, callback):
        """Run a callback on the thread that owns the ticks."""
        if self.root is not None:
            try:
                self.root.after(0, callback)
                return
            except (RuntimeError, tk.TclError):
                pass
        callback()

    def _check_shutdown_periodic(self):
        """Periodically check if shutdown was requested (makes Ctrl+C responsive)."""
        if self.shutdown_event.is_set():
            self.shutdown()
        else:
            self.root.after(100, self._check_shutdown_periodic)

    def _scheduled_tick(self):
        """Run a tick and re-arm the timer once it has completed."""
        self.tick_job = None
        if self.shutdown_event.is_set():
            return

        self.controller.tick()

        if not self.shutdown_event.is_set():
            self.tick_job = self.root.after(POLL_INTERVAL_MS, self._scheduled_tick)

    def _tick_loop(self):
        """Timer loop for platforms without a Tk mainloop."""
        while not self.shutdown_event.wait(timeout=POLL_INTERVAL_MS / 1000.0):
            self.controller.tick()

    def _on_show_status(self, icon, item):
        """Handle 'Show Current Status' menu click."""
        self.logger.debug("Show current status requested")
        self._call_soon(self.controller.show_status)

    def _on_toggle_startup(self, icon, item):
        """Handle 'Start with Login' menu click."""
        self.startup_enabled = self.startup.toggle()
        self.logger.info(f"Start with login: {'enabled' if self.startup_enabled else 'disabled'}")
        if self.icon:
            self.icon.update_menu()

    def _on_exit(self, icon, item):
        """Handle 'Exit' menu click."""
        self.logger.info("Exit requested from tray menu")
        self.shutdown_event.set()
        self._call_soon(self.shutdown)

    def _create_tray_menu(self):
        """
        Create system tray menu.

        Returns:
            pystray.Menu object
        """
        return pystray.Menu(
            pystray.MenuItem("Show Current Status", self._on_show_status, default=True),
            pystray.MenuItem(
                "Start with Login",
                self._on_toggle_startup,
                checked=lambda item: self.startup_enabled,
                enabled=self.startup.supported,
            ),
            pystray.Menu.SEPARATOR,
            pystray.MenuItem("Exit", self._on_exit),
        )

    def shutdown(self):
        """Perform graceful shutdown of the application."""
        if self.shutdown_initiated:
            self.logger.debug("Shutdown already in progress, skipping")
            return

        self.shutdown_initiated = True
        self.logger.info("Initiating shutdown...")
        self.shutdown_event.set()

        if self.root is not None and self.tick_job is not None:
            try:
                self.root.after_cancel(self.tick_job)
            except tk.TclError:
                pass
            self.tick_job = None

        if self.icon:
            self.icon.stop()

        self.controller.release()

        if self.root is not None:
            try:
                if self.controller.overlay is not None:
                    self.controller.overlay.destroy()
                if threading.current_thread() is threading.main_thread():
                    self.root.quit()
                else:
                    self.root.after(0, self.root.quit)
            except Exception as e:
                self.logger.error(f"Error quitting Tkinter: {e}")

        self.logger.info("Shutdown complete")

    def run(self):
        """Run the application with system tray icon."""
        try:
            # First sample before the icon exists so it starts with a real glyph
            self.controller.tick()
            icon_image = self.tray.current_image or self.composer.render(0, False)
            self.tray.current_image = icon_image

            self.icon = pystray.Icon(
                "Battery Tray", icon_image, "Battery Tray", menu=self._create_tray_menu()
            )
            self.tray.attach(self.icon)
            if self.controller.last_sample is not None:
                self.tray.show_tooltip(format_tooltip(self.controller.last_sample))

            self.logger.info("Starting system tray icon...")

            if self.root is not None:
                # pystray in background, Tkinter owns the main thread and the ticks
                icon_thread = threading.Thread(
                    target=self.icon.run, daemon=True, name="PystrayThread"
                )
                icon_thread.start()

                self.tick_job = self.root.after(POLL_INTERVAL_MS, self._scheduled_tick)
                self.root.after(100, self._check_shutdown_periodic)
                self.root.mainloop()

            else:
                self.logger.info("Running on macOS: pystray on main thread")
                self.tick_thread = threading.Thread(
                    target=self._tick_loop, daemon=True, name="TickThread"
                )
                self.tick_thread.start()
                self.icon.run()

        except Exception as e:
            self.logger.error(f"Error running application: {e}", exc_info=True)
            raise

        finally:
            if not self.shutdown_initiated:
                self.shutdown()


def main():
    """Entry point for the application."""
    try:
        app = BatteryTrayApp()
        app.run()

    except KeyboardInterrupt:
        print("\nShutdown requested by user")

    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
