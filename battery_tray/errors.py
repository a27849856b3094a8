"""
Exceptions raised by Battery Tray components.

Every failure here is contained within a single refresh tick; none of them
is allowed to reach the scheduler.
"""


class BatteryTrayError(Exception):
    """Base class for Battery Tray errors."""


class SampleUnavailable(BatteryTrayError):
    """The power-status query failed or the host reports no battery."""


class RenderFailure(BatteryTrayError):
    """The tray icon could not be composed."""
