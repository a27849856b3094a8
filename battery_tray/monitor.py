"""
Power status sampling using psutil.

Reads the host battery charge and AC state on demand and converts it into
the integer-percent samples consumed by the tray controller.
"""

import logging
from dataclasses import dataclass

import psutil

from battery_tray.errors import SampleUnavailable


@dataclass(frozen=True)
class PowerStatus:
    """
    Raw power status as reported by the OS.

    Attributes:
        percentage: Charge level as a fraction (0.0..1.0)
        on_ac_power: True when the host is plugged in
    """
    percentage: float
    on_ac_power: bool


@dataclass(frozen=True)
class Sample:
    """One observation per tick: integer percent (0..100) and charging flag."""
    percent: int
    charging: bool

    @property
    def state_text(self) -> str:
        return "Charging" if self.charging else "On battery"


def to_sample(status: PowerStatus) -> Sample:
    """
    Convert a raw power status to a sample.

    Rounds to the nearest whole percent and clamps to 0..100.

    Args:
        status: PowerStatus from the OS

    Returns:
        Sample for the tray controller
    """
    percent = int(round(status.percentage * 100))
    percent = max(0, min(100, percent))
    return Sample(percent=percent, charging=bool(status.on_ac_power))


class PowerStatusSource:
    """Polls psutil for the current battery state."""

    def __init__(self):
        self.logger = logging.getLogger("BatteryTray.Monitor")

    def read_status(self) -> PowerStatus:
        """
        Query the battery.

        Returns:
            Current PowerStatus

        Raises:
            SampleUnavailable: If psutil has no battery support, no battery is
                installed, or the query fails
        """
        if not hasattr(psutil, "sensors_battery"):
            raise SampleUnavailable("psutil has no battery support on this platform")

        try:
            battery = psutil.sensors_battery()
        except Exception as e:
            raise SampleUnavailable(f"Battery query failed: {e}") from e

        if battery is None:
            raise SampleUnavailable("No battery installed")

        return PowerStatus(
            percentage=battery.percent / 100.0,
            on_ac_power=bool(battery.power_plugged),
        )

    def read(self) -> Sample:
        """Query the battery and convert the result to a Sample."""
        sample = to_sample(self.read_status())
        self.logger.debug(f"Sampled battery: {sample.percent}% ({sample.state_text})")
        return sample
