"""
Overlay placement relative to the system taskbar.

Works out which screen edge holds the taskbar by comparing its rectangle to
the full screen bounds, then parks the overlay just inside the screen next
to the taskbar's trailing end.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

OVERLAY_WIDTH = 80
OVERLAY_HEIGHT = 40
OVERLAY_MARGIN = 8


class TaskbarEdge(Enum):
    """Screen edge the taskbar is docked to."""
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in screen coordinates (right/bottom exclusive)."""
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top


@dataclass(frozen=True)
class OverlayPlacement:
    x: int
    y: int
    width: int = OVERLAY_WIDTH
    height: int = OVERLAY_HEIGHT


def detect_taskbar_edge(taskbar: Rect, screen: Rect) -> TaskbarEdge:
    """
    Determine which edge the taskbar is docked to.

    The checks are not mutually exclusive for degenerate rectangles, so the
    first match wins: bottom, top, right, then left.

    Args:
        taskbar: Taskbar window rectangle
        screen: Full bounds of the primary screen

    Returns:
        Detected TaskbarEdge
    """
    if taskbar.top > screen.top:
        return TaskbarEdge.BOTTOM
    if taskbar.bottom < screen.bottom:
        return TaskbarEdge.TOP
    if taskbar.left > screen.left:
        return TaskbarEdge.RIGHT
    return TaskbarEdge.LEFT


def place(
    taskbar: Optional[Rect],
    screen: Rect,
    work_area: Rect,
    margin: int = OVERLAY_MARGIN,
) -> OverlayPlacement:
    """
    Compute where the overlay window goes.

    Args:
        taskbar: Taskbar rectangle, or None if it could not be queried
        screen: Full bounds of the primary screen
        work_area: Screen area not covered by the taskbar
        margin: Gap between the overlay and the taskbar

    Returns:
        OverlayPlacement with the fixed 80x40 footprint
    """
    w, h = OVERLAY_WIDTH, OVERLAY_HEIGHT

    if taskbar is None:
        # No gap from the work area corner when the taskbar is unknown
        return OverlayPlacement(work_area.right - w, work_area.bottom - h)

    edge = detect_taskbar_edge(taskbar, screen)

    if edge is TaskbarEdge.BOTTOM:
        return OverlayPlacement(taskbar.right - w - margin, taskbar.top - h - margin)
    if edge is TaskbarEdge.TOP:
        return OverlayPlacement(taskbar.right - w - margin, taskbar.bottom + margin)
    if edge is TaskbarEdge.RIGHT:
        return OverlayPlacement(taskbar.left - w - margin, taskbar.bottom - h - margin)
    return OverlayPlacement(taskbar.right + margin, taskbar.bottom - h - margin)
