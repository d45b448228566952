"""
Sleep tracker screen logic.

- state: immutable view state and one-shot events
- manager: start/stop/clear actions over a night store
"""

from sleeptracker.tracker.manager import SleepTrackerManager
from sleeptracker.tracker.state import (
    NavigateToSleepQuality,
    ShowSnackbar,
    SleepTrackerState,
    TrackerEvent,
)

__all__ = [
    "SleepTrackerManager",
    "SleepTrackerState",
    "NavigateToSleepQuality",
    "ShowSnackbar",
    "TrackerEvent",
]
