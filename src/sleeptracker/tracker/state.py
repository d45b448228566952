"""
Immutable view state and one-shot events published by the tracker.
"""

from dataclasses import dataclass
from typing import Optional, Union

from sleeptracker.models import SleepNight


@dataclass(frozen=True)
class NavigateToSleepQuality:
    """Ask the UI to open the rating screen for a night that just ended."""

    night: SleepNight


@dataclass(frozen=True)
class ShowSnackbar:
    """Ask the UI to show a short confirmation message."""

    message: str


TrackerEvent = Union[NavigateToSleepQuality, ShowSnackbar]


@dataclass(frozen=True)
class SleepTrackerState:
    """
    Snapshot of everything the tracker screen renders.

    Rebuilt from ``tonight`` and ``nights`` after every change; never mutated.
    ``pending_event`` is the oldest unacknowledged one-shot event.
    """

    tonight: Optional[SleepNight] = None
    nights: tuple[SleepNight, ...] = ()
    nights_text: str = ""
    pending_event: Optional[TrackerEvent] = None

    @property
    def start_visible(self) -> bool:
        return self.tonight is None

    @property
    def stop_visible(self) -> bool:
        return self.tonight is not None

    @property
    def clear_visible(self) -> bool:
        return len(self.nights) > 0
