"""
SQLite-backed night store built on SQLModel.

Each public method opens its own short-lived session, so the store is safe to
call from worker threads (``asyncio.to_thread``).
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine, select

from sleeptracker.config import CONFIG
from sleeptracker.logger import get_logger
from sleeptracker.models import SleepNight
from sleeptracker.store import SleepNightStore, StorageError

logger = get_logger(__name__)


class SleepDatabase(SleepNightStore):
    """Night store persisted to a single SQLite file."""

    def __init__(self, db_path: Optional[str] = None):
        path = Path(db_path) if db_path else CONFIG.db_path
        path.parent.mkdir(parents=True, exist_ok=True)
        self.db_path = path
        self.engine = create_engine(
            f"sqlite:///{path.as_posix()}",
            echo=False,
            connect_args={"check_same_thread": False},
        )
        try:
            SQLModel.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to initialize database at {path}: {e}") from e
        logger.debug(f"Sleep database ready at {path}")

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Yield a session, translating database failures to StorageError."""
        try:
            with Session(self.engine, expire_on_commit=False) as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(f"Sleep database error: {e}")
            raise StorageError(str(e)) from e

    def insert(self, night: SleepNight) -> None:
        with self._session() as session:
            session.add(night)
            session.commit()
            session.refresh(night)
        logger.debug(f"Inserted night {night.night_id}")

    def update(self, night: SleepNight) -> None:
        with self._session() as session:
            session.merge(night)
            session.commit()
        logger.debug(f"Updated night {night.night_id}")

    def get(self, night_id: int) -> Optional[SleepNight]:
        with self._session() as session:
            return session.get(SleepNight, night_id)

    def get_tonight(self) -> Optional[SleepNight]:
        with self._session() as session:
            stmt = select(SleepNight).order_by(SleepNight.night_id.desc()).limit(1)
            return session.exec(stmt).first()

    def get_all_nights(self) -> list[SleepNight]:
        with self._session() as session:
            stmt = select(SleepNight).order_by(SleepNight.night_id.desc())
            return list(session.exec(stmt).all())

    def clear(self) -> None:
        with self._session() as session:
            result = session.exec(delete(SleepNight))
            session.commit()
        logger.debug(f"Cleared {result.rowcount} nights")

    def close(self) -> None:
        """Release pooled connections (needed before deleting the file on Windows)."""
        self.engine.dispose()


_database: Optional[SleepDatabase] = None


def get_database() -> SleepDatabase:
    """Return the process-wide database for the configured path."""
    global _database
    if _database is None:
        _database = SleepDatabase()
    return _database
