"""
Abstract record store for sleep nights.

The tracker only talks to this interface; ``sleeptracker.database`` provides
the SQLite implementation.
"""

from abc import ABC, abstractmethod
from typing import Optional

from sleeptracker.models import SleepNight


class StorageError(Exception):
    """Raised when the underlying store fails to read or write a night."""

    pass


class SleepNightStore(ABC):
    """
    CRUD contract over the table of nights.

    Every method is atomic on its own and may be called from any thread.
    There are no transactions spanning several calls.
    """

    @abstractmethod
    def insert(self, night: SleepNight) -> None:
        """Persist a new night, assigning ``night_id`` if it is unset."""
        pass

    @abstractmethod
    def update(self, night: SleepNight) -> None:
        """Overwrite the stored night that has the same ``night_id``."""
        pass

    @abstractmethod
    def get(self, night_id: int) -> Optional[SleepNight]:
        pass

    @abstractmethod
    def get_tonight(self) -> Optional[SleepNight]:
        """Return the night with the highest id, or None for an empty table."""
        pass

    @abstractmethod
    def get_all_nights(self) -> list[SleepNight]:
        """Return a fresh list of every night, newest first."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Delete every night."""
        pass
