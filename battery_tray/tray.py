"""
System tray presentation for the battery glyph.
"""

import logging
from typing import Optional

from PIL import Image


class TrayPresenter:
    """
    Shows composed battery images on a pystray icon.

    Owns the image currently on display and closes it once a newer one has
    replaced it.
    """

    def __init__(self, icon=None):
        """
        Args:
            icon: pystray.Icon instance; may be attached later
        """
        self.icon = icon
        self.current_image: Optional[Image.Image] = None
        self.logger = logging.getLogger("BatteryTray.Tray")

    def attach(self, icon):
        self.icon = icon

    def show_tooltip(self, tooltip: str):
        if self.icon is not None:
            self.icon.title = tooltip

    def show(self, image: Image.Image, tooltip: str):
        """
        Swap the tray image and tooltip, releasing the previous image.

        Args:
            image: Newly composed battery glyph
            tooltip: Hover text for the tray icon
        """
        old_image = self.current_image
        self.current_image = image

        if self.icon is not None:
            self.icon.icon = image
            self.icon.title = tooltip

        if old_image is not None and old_image is not image:
            old_image.close()

        self.logger.debug(f"Tray icon updated: {tooltip}")

    def release(self):
        """Close the image currently on display."""
        if self.current_image is not None:
            self.current_image.close()
            self.current_image = None
