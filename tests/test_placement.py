import pytest

from battery_tray.placement import (
    OVERLAY_HEIGHT,
    OVERLAY_WIDTH,
    OverlayPlacement,
    Rect,
    TaskbarEdge,
    detect_taskbar_edge,
    place,
)

SCREEN = Rect(0, 0, 1920, 1080)


def test_bottom_docked_taskbar() -> None:
    placement = place(Rect(0, 1040, 1920, 1080), SCREEN, Rect(0, 0, 1920, 1040))
    assert placement == OverlayPlacement(1832, 992, 80, 40)


def test_top_docked_taskbar() -> None:
    placement = place(Rect(0, 0, 1920, 40), SCREEN, Rect(0, 40, 1920, 1080))
    assert (placement.x, placement.y) == (1832, 48)


def test_right_docked_taskbar() -> None:
    placement = place(Rect(1860, 0, 1920, 1080), SCREEN, Rect(0, 0, 1860, 1080))
    assert (placement.x, placement.y) == (1860 - 80 - 8, 1080 - 40 - 8)


def test_left_docked_taskbar() -> None:
    placement = place(Rect(0, 0, 60, 1080), SCREEN, Rect(60, 0, 1920, 1080))
    assert (placement.x, placement.y) == (68, 1032)


def test_missing_taskbar_uses_work_area_corner() -> None:
    work_area = Rect(0, 0, 1600, 860)
    placement = place(None, SCREEN, work_area)
    assert placement == OverlayPlacement(1600 - 80, 860 - 40)


def test_footprint_is_fixed() -> None:
    for taskbar in (Rect(0, 1040, 1920, 1080), Rect(0, 0, 60, 1080), None):
        placement = place(taskbar, SCREEN, SCREEN)
        assert (placement.width, placement.height) == (OVERLAY_WIDTH, OVERLAY_HEIGHT)


@pytest.mark.parametrize(
    "taskbar, edge",
    [
        (Rect(0, 1040, 1920, 1080), TaskbarEdge.BOTTOM),
        (Rect(0, 0, 1920, 40), TaskbarEdge.TOP),
        (Rect(1860, 0, 1920, 1080), TaskbarEdge.RIGHT),
        (Rect(0, 0, 60, 1080), TaskbarEdge.LEFT),
        # Degenerate rectangles resolve by check order
        (Rect(0, 0, 0, 0), TaskbarEdge.TOP),
        (Rect(900, 500, 900, 500), TaskbarEdge.BOTTOM),
        (Rect(1920, 0, 1920, 1080), TaskbarEdge.RIGHT),
        (Rect(0, 0, 1920, 1080), TaskbarEdge.LEFT),
    ],
)
def test_detect_taskbar_edge(taskbar, edge) -> None:
    assert detect_taskbar_edge(taskbar, SCREEN) is edge


def test_zero_area_rect_uses_first_matching_rule() -> None:
    placement = place(Rect(0, 0, 0, 0), SCREEN, SCREEN)
    assert (placement.x, placement.y) == (0 - 80 - 8, 0 + 8)


def test_offset_screen_origin() -> None:
    screen = Rect(-1920, 0, 0, 1080)
    placement = place(Rect(-1920, 1040, 0, 1080), screen, Rect(-1920, 0, 0, 1040))
    assert (placement.x, placement.y) == (-88, 992)


def test_place_is_idempotent() -> None:
    taskbar = Rect(0, 1040, 1920, 1080)
    assert place(taskbar, SCREEN, SCREEN) == place(taskbar, SCREEN, SCREEN)


def test_rect_dimensions() -> None:
    rect = Rect(10, 20, 110, 60)
    assert (rect.width, rect.height) == (100, 40)
