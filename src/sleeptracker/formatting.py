"""
Display formatting for recorded nights.

Strings come from JSON language packs in ``sleeptracker/locales``, shaped as
``{"meta": {...}, "strings": {...}}``.
"""

import json
import re
from datetime import datetime, tzinfo
from importlib import resources as importlib_resources
from typing import Iterable, Optional

from sleeptracker.models import SleepNight

_LOCALE_RE = re.compile(r"^[A-Za-z0-9-]{2,32}$")

QUALITY_KEYS = {
    0: "quality_0",
    1: "quality_1",
    2: "quality_2",
    3: "quality_3",
    4: "quality_4",
    5: "quality_5",
}


class Resources:
    """String table for one locale."""

    def __init__(self, strings: dict[str, str], locale: str = "en"):
        self.strings = dict(strings)
        self.locale = locale

    @classmethod
    def load(cls, locale: str = "en") -> "Resources":
        """
        Load the bundled language pack for ``locale``.

        Raises:
            ValueError: If the locale name is malformed.
            FileNotFoundError: If no pack exists for the locale.
        """
        if not isinstance(locale, str) or not _LOCALE_RE.match(locale):
            raise ValueError(f"Invalid locale: {locale!r}")

        pack = importlib_resources.files("sleeptracker") / "locales" / f"{locale}.json"
        if not pack.is_file():
            raise FileNotFoundError(f"No language pack for locale '{locale}'")

        data = json.loads(pack.read_text(encoding="utf-8"))
        return cls(data.get("strings", {}), locale=locale)

    def get(self, key: str) -> str:
        return self.strings.get(key, key)


def convert_numeric_quality_to_string(quality: int, resources: Resources) -> str:
    key = QUALITY_KEYS.get(quality)
    return resources.get(key) if key else "--"


def convert_millis_to_date_string(
    millis: int, resources: Resources, tz: Optional[tzinfo] = None
) -> str:
    moment = datetime.fromtimestamp(millis / 1000, tz=tz)
    return moment.strftime(resources.get("date_format"))


def format_duration(duration_milli: int) -> str:
    """Render a duration as ``H:MM:SS``."""
    total_seconds = max(duration_milli, 0) // 1000
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{seconds:02d}"


def format_nights(
    nights: Iterable[SleepNight],
    resources: Resources,
    tz: Optional[tzinfo] = None,
) -> str:
    """
    Build the text shown under the tracker buttons.

    Nights still in progress only show their start time.
    """
    lines = [resources.get("title")]
    for night in nights:
        lines.append("")
        lines.append(
            f"{resources.get('start_time')}\t"
            f"{convert_millis_to_date_string(night.start_time_milli, resources, tz)}"
        )
        if not night.in_progress:
            lines.append(
                f"{resources.get('end_time')}\t"
                f"{convert_millis_to_date_string(night.end_time_milli, resources, tz)}"
            )
            lines.append(
                f"{resources.get('quality')}\t"
                f"{convert_numeric_quality_to_string(night.sleep_quality, resources)}"
            )
            lines.append(
                f"{resources.get('hours_slept')}\t{format_duration(night.duration_milli)}"
            )
    return "\n".join(lines)
