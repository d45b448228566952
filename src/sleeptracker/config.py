"""
Configuration for SleepTracker.

Values are read from environment variables (optionally via a ``.env`` file
in the working directory) into a validated ``TrackerConfig``.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()

DATA_DIR = Path(
    os.getenv("SLEEPTRACKER_DATA_DIR") or Path.home() / ".sleeptracker"
).expanduser()

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class TrackerConfig(BaseModel):
    """Runtime settings for the tracker and its store."""

    data_dir: Path = DATA_DIR
    database_path: Optional[Path] = None
    log_level: str = "INFO"
    locale: str = "en"
    # Keep the closed night as "tonight" after stopping (matches the app's
    # observed behaviour); set to clear it immediately instead.
    reset_tonight_on_stop: bool = False

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return value

    @property
    def db_path(self) -> Path:
        return self.database_path or self.data_dir / "sleep.db"


def load_config(environ: Optional[dict] = None) -> TrackerConfig:
    """Build a ``TrackerConfig`` from ``SLEEPTRACKER_*`` environment variables."""
    env = os.environ if environ is None else environ
    values = {}

    if env.get("SLEEPTRACKER_DATA_DIR"):
        values["data_dir"] = Path(env["SLEEPTRACKER_DATA_DIR"]).expanduser()
    if env.get("SLEEPTRACKER_DB_PATH"):
        values["database_path"] = Path(env["SLEEPTRACKER_DB_PATH"]).expanduser()
    if env.get("SLEEPTRACKER_LOG_LEVEL"):
        values["log_level"] = env["SLEEPTRACKER_LOG_LEVEL"]
    if env.get("SLEEPTRACKER_LOCALE"):
        values["locale"] = env["SLEEPTRACKER_LOCALE"]
    if env.get("SLEEPTRACKER_RESET_TONIGHT_ON_STOP"):
        values["reset_tonight_on_stop"] = env["SLEEPTRACKER_RESET_TONIGHT_ON_STOP"]

    return TrackerConfig(**values)


CONFIG = load_config()
