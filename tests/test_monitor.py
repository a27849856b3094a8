from collections import namedtuple
from unittest.mock import patch

import pytest

from battery_tray.errors import SampleUnavailable
from battery_tray.monitor import PowerStatus, PowerStatusSource, Sample, to_sample

Battery = namedtuple("Battery", ["percent", "secsleft", "power_plugged"])


@pytest.mark.parametrize(
    "fraction, percent",
    [(0.0, 0), (0.574, 57), (0.576, 58), (1.0, 100), (1.2, 100), (-0.1, 0)],
)
def test_to_sample_rounds_and_clamps(fraction, percent) -> None:
    assert to_sample(PowerStatus(fraction, False)).percent == percent


def test_to_sample_charging_flag() -> None:
    assert to_sample(PowerStatus(0.5, True)) == Sample(50, True)


def test_sample_state_text() -> None:
    assert Sample(10, True).state_text == "Charging"
    assert Sample(10, False).state_text == "On battery"


def test_read_converts_psutil_battery() -> None:
    with patch("battery_tray.monitor.psutil.sensors_battery", create=True,
               return_value=Battery(73.4, 3600, True)):
        sample = PowerStatusSource().read()

    assert sample == Sample(73, True)


def test_read_treats_unknown_plug_state_as_battery() -> None:
    with patch("battery_tray.monitor.psutil.sensors_battery", create=True,
               return_value=Battery(40.0, 3600, None)):
        status = PowerStatusSource().read_status()

    assert status == PowerStatus(0.4, False)


def test_no_battery_raises_sample_unavailable() -> None:
    with patch("battery_tray.monitor.psutil.sensors_battery", create=True, return_value=None):
        with pytest.raises(SampleUnavailable):
            PowerStatusSource().read()


def test_query_error_raises_sample_unavailable() -> None:
    with patch("battery_tray.monitor.psutil.sensors_battery", create=True,
               side_effect=RuntimeError("sysfs unreadable")):
        with pytest.raises(SampleUnavailable):
            PowerStatusSource().read()
