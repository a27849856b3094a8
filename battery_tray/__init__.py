"""
Battery Tray - Battery Level Tray Indicator

A system tray application that shows the battery charge as a color-coded
glyph, keeps a percentage overlay next to the taskbar, and notifies once
each time the charge crosses the high or low threshold.
"""

__version__ = "1.0.0"
__author__ = "Battery Tray Team"
