"""
Desktop geometry queries for the primary display.

Provides the taskbar rectangle, the full screen bounds and the work area
used to place the overlay. Only Windows exposes a taskbar window; other
platforms report it as unavailable and the overlay falls back to the work
area corner.
"""

import logging
import platform
from typing import Callable, Optional, Tuple

from battery_tray.placement import Rect

logger = logging.getLogger("BatteryTray.Desktop")

SM_CXSCREEN = 0
SM_CYSCREEN = 1
SPI_GETWORKAREA = 0x0030
TASKBAR_CLASS = "Shell_TrayWnd"


def enable_dpi_awareness():
    """Enable DPI awareness so window rectangles and Tk geometry share pixels."""
    try:
        if platform.system() == "Windows":
            import ctypes

            try:
                # Per-monitor DPI awareness v2 (Windows 10)
                ctypes.windll.shcore.SetProcessDpiAwareness(2)
            except Exception:
                try:
                    # Per-monitor v1 (Windows 8.1)
                    ctypes.windll.shcore.SetProcessDpiAwareness(1)
                except Exception:
                    try:
                        ctypes.windll.user32.SetProcessDPIAware()
                    except Exception:
                        logger.debug("DPI awareness not available")
    except Exception as e:
        logger.debug(f"Could not enable DPI awareness: {e}")


class WindowsDesktop:
    """Geometry of the primary display via user32."""

    def __init__(self):
        import ctypes
        from ctypes import wintypes

        self._ctypes = ctypes
        self._wintypes = wintypes
        self.user32 = ctypes.windll.user32
        self.user32.FindWindowW.argtypes = [ctypes.c_wchar_p, ctypes.c_wchar_p]
        self.user32.FindWindowW.restype = wintypes.HWND
        self.user32.GetWindowRect.argtypes = [wintypes.HWND, ctypes.POINTER(wintypes.RECT)]
        self.user32.GetWindowRect.restype = wintypes.BOOL

    def taskbar_rect(self) -> Optional[Rect]:
        """
        Get the taskbar window rectangle.

        Returns:
            Rect of the taskbar, or None if the window cannot be found
        """
        hwnd = self.user32.FindWindowW(TASKBAR_CLASS, None)
        if not hwnd:
            logger.debug("Taskbar window not found")
            return None

        rect = self._wintypes.RECT()
        if not self.user32.GetWindowRect(hwnd, self._ctypes.byref(rect)):
            logger.debug("GetWindowRect failed for taskbar")
            return None

        return Rect(rect.left, rect.top, rect.right, rect.bottom)

    def screen_bounds(self) -> Rect:
        width = self.user32.GetSystemMetrics(SM_CXSCREEN)
        height = self.user32.GetSystemMetrics(SM_CYSCREEN)
        return Rect(0, 0, width, height)

    def work_area(self) -> Rect:
        rect = self._wintypes.RECT()
        ok = self.user32.SystemParametersInfoW(SPI_GETWORKAREA, 0, self._ctypes.byref(rect), 0)
        if not ok:
            return self.screen_bounds()
        return Rect(rect.left, rect.top, rect.right, rect.bottom)


class TkDesktop:
    """
    Geometry from Tk screen metrics, without taskbar information.

    Args:
        screen_size: Callable returning (width, height) of the primary screen
    """

    def __init__(self, screen_size: Callable[[], Tuple[int, int]]):
        self.screen_size = screen_size

    def taskbar_rect(self) -> Optional[Rect]:
        return None

    def screen_bounds(self) -> Rect:
        width, height = self.screen_size()
        return Rect(0, 0, width, height)

    def work_area(self) -> Rect:
        return self.screen_bounds()


def create_desktop(root):
    """
    Create the geometry provider for the current platform.

    Args:
        root: Tk root window, used for screen size off Windows

    Returns:
        WindowsDesktop or TkDesktop instance
    """
    if platform.system() == "Windows":
        try:
            return WindowsDesktop()
        except Exception as e:
            logger.warning(f"Falling back to Tk screen metrics: {e}")

    return TkDesktop(lambda: (root.winfo_screenwidth(), root.winfo_screenheight()))
