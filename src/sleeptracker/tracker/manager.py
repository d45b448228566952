"""
Session lifecycle for the sleep tracker screen.

``SleepTrackerManager`` owns the notion of "tonight" (the night currently
being tracked, if any) and the list of recorded nights. UI actions call
``on_start_tracking`` / ``on_stop_tracking`` / ``on_clear`` (or their awaitable
counterparts); each action runs as a task owned by the manager, does its store
work in a worker thread and then publishes a fresh ``SleepTrackerState``.
"""

import asyncio
from collections import deque
from typing import Awaitable, Callable, Optional

from sleeptracker.config import CONFIG
from sleeptracker.formatting import Resources, format_nights
from sleeptracker.logger import get_logger
from sleeptracker.models import SleepNight, current_time_millis
from sleeptracker.store import SleepNightStore, StorageError
from sleeptracker.tracker.state import (
    NavigateToSleepQuality,
    ShowSnackbar,
    SleepTrackerState,
    TrackerEvent,
)

logger = get_logger(__name__)

StateCallback = Callable[[SleepTrackerState], None]


class SleepTrackerManager:
    """
    View-state holder for the tracker screen.

    Actions are serialized: each one finishes its store calls before its
    state update is applied, and only one runs at a time. ``close()`` cancels
    everything still pending; a cancelled action applies nothing.
    """

    def __init__(
        self,
        database: SleepNightStore,
        resources: Optional[Resources] = None,
        clock: Callable[[], int] = current_time_millis,
        reset_tonight_on_stop: Optional[bool] = None,
    ):
        self.database = database
        self.resources = resources or Resources.load(CONFIG.locale)
        self.reset_tonight_on_stop = (
            CONFIG.reset_tonight_on_stop
            if reset_tonight_on_stop is None
            else reset_tonight_on_stop
        )
        self._clock = clock

        self._tonight: Optional[SleepNight] = None
        self._nights: tuple[SleepNight, ...] = ()
        self._events: deque[TrackerEvent] = deque()
        self._subscribers: list[StateCallback] = []
        self._state = self._build_state()

        self._lock = asyncio.Lock()
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    # --- Observable state ---

    @property
    def state(self) -> SleepTrackerState:
        return self._state

    @property
    def tonight(self) -> Optional[SleepNight]:
        return self._tonight

    @property
    def nights(self) -> tuple[SleepNight, ...]:
        return self._nights

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, callback: StateCallback) -> Callable[[], None]:
        """
        Register an observer and deliver the current state to it right away.

        Returns:
            A function that removes the observer again.
        """
        self._subscribers.append(callback)
        self._deliver(callback, self._state)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # --- One-shot events ---

    def acknowledge(self, event: TrackerEvent) -> bool:
        """
        Mark a pending event as handled so it is never delivered again.

        Returns:
            True if the event was pending, False otherwise.
        """
        for index, pending in enumerate(self._events):
            if pending is event:
                del self._events[index]
                self._publish()
                return True
        return False

    def done_navigating(self) -> None:
        self._acknowledge_first(NavigateToSleepQuality)

    def done_showing_snackbar(self) -> None:
        self._acknowledge_first(ShowSnackbar)

    def _acknowledge_first(self, event_type: type) -> None:
        for pending in self._events:
            if isinstance(pending, event_type):
                self.acknowledge(pending)
                return

    # --- Actions ---

    async def initialize(self) -> None:
        """Load tonight and the recorded nights from the store."""
        await self._launch(self._initialize)

    def on_start_tracking(self) -> asyncio.Task:
        return self._launch(self._start_tracking)

    def on_stop_tracking(self) -> asyncio.Task:
        return self._launch(self._stop_tracking)

    def on_clear(self) -> asyncio.Task:
        return self._launch(self._clear)

    async def start_tracking(self) -> None:
        await self.on_start_tracking()

    async def stop_tracking(self) -> None:
        await self.on_stop_tracking()

    async def clear_all(self) -> None:
        await self.on_clear()

    async def close(self) -> None:
        """Cancel every pending action and drop all observers."""
        if self._closed:
            return
        self._closed = True

        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

        self._subscribers.clear()
        logger.debug(f"SleepTrackerManager closed ({len(tasks)} pending actions cancelled)")

    def _launch(self, action: Callable[[], Awaitable[None]]) -> asyncio.Task:
        if self._closed:
            raise RuntimeError("SleepTrackerManager is closed")
        task = asyncio.create_task(self._run(action))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, action: Callable[[], Awaitable[None]]) -> None:
        async with self._lock:
            try:
                await action()
            except StorageError as e:
                logger.error(f"Sleep tracker action {action.__name__} failed: {e}")
                raise

    async def _initialize(self) -> None:
        tonight = await self._get_tonight_from_database()
        nights = await asyncio.to_thread(self.database.get_all_nights)
        self._apply(tonight, nights)
        logger.info(
            f"Tracker initialized: {len(nights)} nights, "
            f"tonight={'night ' + str(tonight.night_id) if tonight else 'none'}"
        )

    async def _start_tracking(self) -> None:
        new_night = SleepNight.begin(self._clock())
        await asyncio.to_thread(self.database.insert, new_night)

        tonight = await self._get_tonight_from_database()
        nights = await asyncio.to_thread(self.database.get_all_nights)
        self._apply(tonight, nights)
        logger.info(f"Started tracking night {new_night.night_id}")

    async def _stop_tracking(self) -> None:
        old_night = self._tonight
        if old_night is None:
            return

        # A stopped night must never look in progress, even within the same ms.
        end = max(self._clock(), old_night.start_time_milli + 1)
        closed_night = old_night.closed_at(end)
        await asyncio.to_thread(self.database.update, closed_night)
        nights = await asyncio.to_thread(self.database.get_all_nights)

        self._events.append(NavigateToSleepQuality(night=closed_night.closed_at(end)))
        self._apply(None if self.reset_tonight_on_stop else closed_night, nights)
        logger.info(
            f"Stopped tracking night {closed_night.night_id} "
            f"after {closed_night.duration_milli // 1000}s"
        )

    async def _clear(self) -> None:
        await asyncio.to_thread(self.database.clear)

        self._events.append(ShowSnackbar(message=self.resources.get("cleared_message")))
        self._apply(None, [])
        logger.info("Cleared all recorded nights")

    async def _get_tonight_from_database(self) -> Optional[SleepNight]:
        night = await asyncio.to_thread(self.database.get_tonight)
        if night is not None and not night.in_progress:
            night = None
        return night

    # --- State publication ---

    def _apply(self, tonight: Optional[SleepNight], nights) -> None:
        self._tonight = tonight
        self._nights = tuple(nights)
        self._publish()

    def _build_state(self) -> SleepTrackerState:
        return SleepTrackerState(
            tonight=self._tonight,
            nights=self._nights,
            nights_text=format_nights(self._nights, self.resources),
            pending_event=self._events[0] if self._events else None,
        )

    def _publish(self) -> None:
        self._state = self._build_state()
        for callback in list(self._subscribers):
            self._deliver(callback, self._state)

    def _deliver(self, callback: StateCallback, state: SleepTrackerState) -> None:
        try:
            callback(state)
        except Exception as e:
            logger.warning(f"Sleep tracker observer {callback!r} failed: {e}")
