"""
Threshold-crossing detection with hysteresis.

Decides when a battery alert should fire: exactly once per crossing of the
high or low threshold, and not again until the percentage has moved back
past the threshold by at least the hysteresis margin.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

HIGH_THRESHOLD = 80
LOW_THRESHOLD = 30
HYSTERESIS_MARGIN = 2


class AlertKind(Enum):
    """Kinds of threshold crossings."""
    HIGH_CROSSED = "high_crossed"
    LOW_CROSSED = "low_crossed"


@dataclass(frozen=True)
class AlertEvent:
    """A single threshold crossing, consumed immediately by the notifier."""
    kind: AlertKind
    percent: int
    charging: bool = False


@dataclass(frozen=True)
class ThresholdState:
    """
    Latched notification flags for both bands.

    Attributes:
        notified_high: True while a high alert has fired and the percentage
            has not yet dropped to HIGH_THRESHOLD - HYSTERESIS_MARGIN.
        notified_low: True while a low alert has fired and the percentage
            has not yet risen to LOW_THRESHOLD + HYSTERESIS_MARGIN.
    """
    notified_high: bool = False
    notified_low: bool = False


def evaluate(
    state: ThresholdState,
    percent: int,
    charging: bool = False,
    high: int = HIGH_THRESHOLD,
    low: int = LOW_THRESHOLD,
    margin: int = HYSTERESIS_MARGIN,
) -> Tuple[ThresholdState, Optional[AlertEvent]]:
    """
    Feed one sample through the hysteresis state machine.

    Samples must be fed in chronological order. Out-of-range percentages are
    the caller's problem; nothing is clamped here.

    Args:
        state: Flags carried over from the previous sample
        percent: Current battery percentage (0..100)
        charging: Whether the host is on AC power, copied into the event
        high: High threshold
        low: Low threshold
        margin: Distance past a threshold required to re-arm it

    Returns:
        Tuple of (new state, alert event or None). At most one event is
        produced per call; when both bands would fire, the high crossing
        wins and the low band stays armed so it fires on the next sample.
    """
    notified_high = state.notified_high
    notified_low = state.notified_low
    event = None

    if percent >= high and not notified_high:
        notified_high = True
        event = AlertEvent(AlertKind.HIGH_CROSSED, percent, charging)
    elif percent <= high - margin:
        notified_high = False

    if percent <= low and not notified_low:
        if event is None:
            notified_low = True
            event = AlertEvent(AlertKind.LOW_CROSSED, percent, charging)
    elif percent >= low + margin:
        notified_low = False

    return ThresholdState(notified_high, notified_low), event


class ThresholdMonitor:
    """
    Stateful wrapper around evaluate() for the tray controller.

    Both flags start cleared at process start and are only changed by
    feeding samples.
    """

    def __init__(self, state: Optional[ThresholdState] = None):
        self.state = state or ThresholdState()

    def evaluate(self, percent: int, charging: bool = False) -> Optional[AlertEvent]:
        self.state, event = evaluate(self.state, percent, charging)
        return event
