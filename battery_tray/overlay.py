"""
Floating percentage overlay next to the taskbar.

A borderless, always-on-top tkinter window whose background is keyed out so
only the percentage text is visible. On Windows the window is also made
click-through.
"""

import logging
import platform
import tkinter as tk

from battery_tray.placement import OverlayPlacement

GWL_EXSTYLE = -20
WS_EX_LAYERED = 0x00080000
WS_EX_TRANSPARENT = 0x00000020
WS_EX_TOOLWINDOW = 0x00000080

KEY_COLOR = "#000001"
TEXT_COLOR = "white"


class OverlayWindow(tk.Toplevel):
    """Borderless percentage label anchored by OverlayPlacement."""

    def __init__(self, parent):
        """
        Initialize the overlay window.

        Args:
            parent: Parent tkinter window
        """
        super().__init__(parent)

        self.logger = logging.getLogger("BatteryTray.Overlay")

        self.overrideredirect(True)
        self.attributes("-topmost", True)
        self.configure(bg=KEY_COLOR)

        if platform.system() == "Windows":
            self.attributes("-transparentcolor", KEY_COLOR)

        self.label = tk.Label(
            self,
            text="",
            font=("Segoe UI", 20, "bold"),
            fg=TEXT_COLOR,
            bg=KEY_COLOR,
        )
        self.label.place(x=0, y=0)

        self.update_idletasks()
        self._enable_click_through()

    def _enable_click_through(self):
        """Let mouse input fall through to the windows underneath."""
        if platform.system() != "Windows":
            return

        try:
            import ctypes

            user32 = ctypes.windll.user32
            hwnd = user32.GetParent(self.winfo_id()) or self.winfo_id()
            style = user32.GetWindowLongW(hwnd, GWL_EXSTYLE)
            style |= WS_EX_LAYERED | WS_EX_TRANSPARENT | WS_EX_TOOLWINDOW
            user32.SetWindowLongW(hwnd, GWL_EXSTYLE, style)
        except Exception as e:
            self.logger.warning(f"Could not make overlay click-through: {e}")

    def apply(self, placement: OverlayPlacement, text: str):
        """
        Move/resize the window and set its label.

        Args:
            placement: Target position and size
            text: Short label, e.g. "57%"
        """
        self.label.configure(text=text)
        self.geometry(f"{placement.width}x{placement.height}+{placement.x}+{placement.y}")
        self.lift()
