from typing import List, Optional

import pytest

from battery_tray.config import ConfigManager
from battery_tray.errors import SampleUnavailable
from battery_tray.monitor import Sample
from battery_tray.placement import Rect

SCREEN = Rect(0, 0, 1920, 1080)
BOTTOM_TASKBAR = Rect(0, 1040, 1920, 1080)


class FakeSource:
    """Yields queued samples; an exception in the queue is raised instead."""

    def __init__(self, *items):
        self.items = list(items)

    def read(self) -> Sample:
        item = self.items.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class FakeTray:
    def __init__(self):
        self.shown: List[tuple] = []
        self.tooltips: List[str] = []
        self.released = False

    def show(self, image, tooltip):
        self.shown.append((image, tooltip))
        self.tooltips.append(tooltip)

    def show_tooltip(self, tooltip):
        self.tooltips.append(tooltip)

    def release(self):
        self.released = True


class FakeOverlay:
    def __init__(self):
        self.applied: List[tuple] = []

    def apply(self, placement, text):
        self.applied.append((placement, text))


class FakeDesktop:
    def __init__(self, taskbar: Optional[Rect] = BOTTOM_TASKBAR, screen=SCREEN, work_area=None):
        self.taskbar = taskbar
        self.screen = screen
        self.work = work_area or Rect(0, 0, 1920, 1040)

    def taskbar_rect(self):
        if isinstance(self.taskbar, Exception):
            raise self.taskbar
        return self.taskbar

    def screen_bounds(self):
        return self.screen

    def work_area(self):
        return self.work


class FakeNotifier:
    def __init__(self):
        self.alerts = []
        self.statuses = []

    def notify_alert(self, event):
        self.alerts.append(event)
        return True

    def notify_status(self, sample):
        self.statuses.append(sample)
        return True


class RecordingCanvas:
    """Canvas that records draw calls instead of painting."""

    def __init__(self, size=32):
        self.size = size
        self.calls = []

    def outline_rounded_rectangle(self, box, radius, color, width):
        self.calls.append(("outline_rounded_rectangle", box, color))

    def outline_rectangle(self, box, color, width):
        self.calls.append(("outline_rectangle", box, color))

    def fill_rectangle(self, box, color):
        self.calls.append(("fill_rectangle", box, color))

    def fill_polygon(self, points, fill, outline):
        self.calls.append(("fill_polygon", tuple(points), fill))

    def draw_outlined_text(self, text, center, size, fill, outline, stroke_width):
        self.calls.append(("draw_outlined_text", text, center))

    def finish(self):
        return self.calls

    @property
    def names(self):
        return [call[0] for call in self.calls]


def samples(*percents, charging=False):
    return [Sample(p, charging) for p in percents]


@pytest.fixture
def config(tmp_path) -> ConfigManager:
    return ConfigManager(tmp_path / "config.json")


@pytest.fixture
def unavailable() -> SampleUnavailable:
    return SampleUnavailable("No battery installed")
