"""
SQLModel table for a single tracked night.
"""

import time
from typing import Optional

from sqlmodel import Field, SQLModel

NO_QUALITY = -1


def current_time_millis() -> int:
    return time.time_ns() // 1_000_000


class SleepNight(SQLModel, table=True):
    """
    One sleep session.

    ``end_time_milli == start_time_milli`` marks a night that is still being
    tracked.
    """

    __tablename__ = "daily_sleep_quality"

    night_id: Optional[int] = Field(default=None, primary_key=True)
    start_time_milli: int = Field(default_factory=current_time_millis)
    end_time_milli: Optional[int] = Field(default=None, nullable=False)
    sleep_quality: int = Field(default=NO_QUALITY)

    def __init__(self, **data):
        # Table models skip validation; a new night ends when it starts.
        if data.get("start_time_milli") is None:
            data["start_time_milli"] = current_time_millis()
        if data.get("end_time_milli") is None:
            data["end_time_milli"] = data["start_time_milli"]
        super().__init__(**data)

    @classmethod
    def begin(cls, start_time_milli: Optional[int] = None) -> "SleepNight":
        """Create an unsaved night that starts (and, for now, ends) at ``start_time_milli``."""
        start = current_time_millis() if start_time_milli is None else start_time_milli
        return cls(start_time_milli=start)

    @property
    def in_progress(self) -> bool:
        return self.end_time_milli == self.start_time_milli

    @property
    def duration_milli(self) -> int:
        return self.end_time_milli - self.start_time_milli

    def closed_at(self, end_time_milli: int) -> "SleepNight":
        """Return a detached copy of this night ending at ``end_time_milli``."""
        return SleepNight(
            night_id=self.night_id,
            start_time_milli=self.start_time_milli,
            end_time_milli=end_time_milli,
            sleep_quality=self.sleep_quality,
        )

    def __repr__(self) -> str:
        return (
            f"<SleepNight(id={self.night_id}, start={self.start_time_milli}, "
            f"end={self.end_time_milli}, quality={self.sleep_quality})>"
        )
