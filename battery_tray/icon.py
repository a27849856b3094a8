"""
Battery glyph composition for the system tray.

Draws a small color-coded battery with a proportional fill, an optional
charging bolt and the percentage as outlined text. The layout math lives in
IconComposer; the actual pixel work is delegated to a Canvas so the
composition can be checked without a rendering backend.
"""

import logging
from functools import lru_cache
from typing import Callable, Optional, Protocol, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from battery_tray.errors import RenderFailure

logger = logging.getLogger("BatteryTray.Icon")

Color = Tuple[int, int, int, int]
Box = Tuple[int, int, int, int]  # x, y, width, height
Point = Tuple[int, int]

ICON_SIZE = 32

# Battery geometry on the 32x32 canvas
BODY_BOX: Box = (3, 8, 24, 16)
BODY_RADIUS = 3
BODY_OUTLINE_WIDTH = 2
NUB_BOX: Box = (27, 12, 4, 8)
FILL_INSET = 2
MIN_FILL_WIDTH = 2
FILL_MAX_WIDTH = BODY_BOX[2] - 2 * FILL_INSET

BOLT_POINTS: Tuple[Point, ...] = (
    (14, 10), (12, 17), (16, 17),
    (14, 22), (20, 14), (16, 14),
)

TEXT_SIZE = 14
TEXT_OFFSET_Y = 6
TEXT_STROKE_WIDTH = 2

TRANSPARENT: Color = (0, 0, 0, 0)
OUTLINE: Color = (0, 0, 0, 255)
TEXT_FILL: Color = (255, 255, 255, 255)
BOLT_FILL: Color = (255, 255, 0, 255)
RED: Color = (255, 0, 0, 255)
ORANGE: Color = (255, 165, 0, 255)
GREEN: Color = (0, 128, 0, 255)
DEEP_GREEN: Color = (34, 139, 34, 255)

FONT_CANDIDATES = (
    "segoeuib.ttf",
    "arialbd.ttf",
    "Arial Bold.ttf",
    "DejaVuSans-Bold.ttf",
    "LiberationSans-Bold.ttf",
)


class Canvas(Protocol):
    """Minimal drawing surface used by IconComposer."""

    def outline_rounded_rectangle(self, box: Box, radius: int, color: Color, width: int) -> None:
        ...

    def outline_rectangle(self, box: Box, color: Color, width: int) -> None:
        ...

    def fill_rectangle(self, box: Box, color: Color) -> None:
        ...

    def fill_polygon(self, points: Sequence[Point], fill: Color, outline: Color) -> None:
        ...

    def draw_outlined_text(
        self, text: str, center: Point, size: int, fill: Color, outline: Color, stroke_width: int
    ) -> None:
        ...

    def finish(self) -> Image.Image:
        ...


@lru_cache(maxsize=None)
def load_font(size: int):
    """
    Load a bold TrueType font, falling back to Pillow's bundled font.

    Args:
        size: Font size in pixels

    Returns:
        Pillow font object
    """
    for name in FONT_CANDIDATES:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue

    logger.debug("No bold system font found, using Pillow default font")
    return ImageFont.load_default(size=size)


class PillowCanvas:
    """Canvas backed by a transparent RGBA Pillow image."""

    def __init__(self, size: int = ICON_SIZE):
        self.size = size
        self.image = Image.new("RGBA", (size, size), TRANSPARENT)
        self.draw = ImageDraw.Draw(self.image)

    def outline_rounded_rectangle(self, box: Box, radius: int, color: Color, width: int) -> None:
        x, y, w, h = box
        self.draw.rounded_rectangle([x, y, x + w, y + h], radius=radius, outline=color, width=width)

    def outline_rectangle(self, box: Box, color: Color, width: int) -> None:
        x, y, w, h = box
        self.draw.rectangle([x, y, x + w, y + h], outline=color, width=width)

    def fill_rectangle(self, box: Box, color: Color) -> None:
        x, y, w, h = box
        # Pillow boxes are inclusive on both ends
        self.draw.rectangle([x, y, x + w - 1, y + h - 1], fill=color)

    def fill_polygon(self, points: Sequence[Point], fill: Color, outline: Color) -> None:
        self.draw.polygon(list(points), fill=fill, outline=outline)

    def draw_outlined_text(
        self, text: str, center: Point, size: int, fill: Color, outline: Color, stroke_width: int
    ) -> None:
        font = load_font(size)
        left, top, right, bottom = self.draw.textbbox(
            (0, 0), text, font=font, stroke_width=stroke_width
        )
        x = center[0] - (right - left) / 2 - left
        y = center[1] - (bottom - top) / 2 - top

        # Pillow paints the stroke first and the fill on top of it
        self.draw.text(
            (x, y),
            text,
            fill=fill,
            font=font,
            stroke_width=stroke_width,
            stroke_fill=outline,
        )

    def finish(self) -> Image.Image:
        return self.image


def fill_width(percent: int) -> int:
    """
    Width in pixels of the charge bar for a percentage.

    Scales linearly across the body interior and never drops below
    MIN_FILL_WIDTH so an empty battery still shows a sliver.
    """
    clamped = max(0, min(100, percent))
    return max(MIN_FILL_WIDTH, int(round(FILL_MAX_WIDTH * clamped / 100.0)))


def fill_color(percent: int) -> Color:
    """Charge bar color: red up to 20, orange to 40, green to 80, deep green above."""
    if percent <= 20:
        return RED
    if percent <= 40:
        return ORANGE
    if percent <= 80:
        return GREEN
    return DEEP_GREEN


class IconComposer:
    """
    Composes the tray battery glyph.

    Draw order is fixed: outline, nub, charge bar, bolt, text. The bolt comes
    after the bar and the text comes last so both stay visible on any fill.
    """

    def __init__(self, canvas_factory: Optional[Callable[[int], Canvas]] = None, size: int = ICON_SIZE):
        self.canvas_factory = canvas_factory or PillowCanvas
        self.size = size

    def render(self, percent: int, charging: bool) -> Image.Image:
        """
        Render the battery glyph.

        Args:
            percent: Battery percentage (0..100)
            charging: True to overlay the charging bolt

        Returns:
            Newly composed image, owned by the caller

        Raises:
            RenderFailure: If the drawing backend fails
        """
        try:
            canvas = self.canvas_factory(self.size)
            self.compose(canvas, percent, charging)
            return canvas.finish()
        except (OSError, ValueError, TypeError) as e:
            raise RenderFailure(f"Could not render icon for {percent}%: {e}") from e

    def compose(self, canvas: Canvas, percent: int, charging: bool) -> None:
        canvas.outline_rounded_rectangle(BODY_BOX, BODY_RADIUS, OUTLINE, BODY_OUTLINE_WIDTH)
        canvas.outline_rectangle(NUB_BOX, OUTLINE, 1)

        body_x, body_y, _, body_h = BODY_BOX
        bar = (body_x + FILL_INSET, body_y + FILL_INSET, fill_width(percent), body_h - 2 * FILL_INSET)
        canvas.fill_rectangle(bar, fill_color(percent))

        if charging:
            canvas.fill_polygon(BOLT_POINTS, BOLT_FILL, OUTLINE)

        center = (self.size // 2, self.size // 2 + TEXT_OFFSET_Y)
        canvas.draw_outlined_text(
            str(percent), center, TEXT_SIZE, TEXT_FILL, OUTLINE, TEXT_STROKE_WIDTH
        )
