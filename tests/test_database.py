"""
Unit tests for the SQLite night store.
"""

import pytest
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from sleeptracker.models import NO_QUALITY, SleepNight
from sleeptracker.store import StorageError


def test_database_initialization(temp_db):
    """Test that the database creates the nights table."""
    with temp_db.engine.connect() as conn:
        rows = conn.exec_driver_sql(
            "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
        ).fetchall()

    tables = [row[0] for row in rows]
    assert "daily_sleep_quality" in tables


def test_insert_assigns_id(temp_db):
    night = SleepNight.begin(100)
    assert night.night_id is None

    temp_db.insert(night)

    assert night.night_id is not None
    stored = temp_db.get(night.night_id)
    assert stored.start_time_milli == 100
    assert stored.end_time_milli == 100
    assert stored.sleep_quality == NO_QUALITY


def test_update_overwrites_matching_night(temp_db):
    night = SleepNight.begin(100)
    temp_db.insert(night)

    temp_db.update(night.closed_at(5000))

    stored = temp_db.get(night.night_id)
    assert stored.end_time_milli == 5000
    assert not stored.in_progress


def test_get_missing_returns_none(temp_db):
    assert temp_db.get(12345) is None


def test_get_tonight_empty(temp_db):
    assert temp_db.get_tonight() is None


def test_get_tonight_returns_highest_id(temp_db):
    for start in (100, 200, 300):
        temp_db.insert(SleepNight.begin(start))

    tonight = temp_db.get_tonight()

    assert tonight.start_time_milli == 300


def test_get_all_nights_newest_first(temp_db):
    for start in (100, 200, 300):
        temp_db.insert(SleepNight.begin(start))

    nights = temp_db.get_all_nights()

    assert [n.start_time_milli for n in nights] == [300, 200, 100]
    ids = [n.night_id for n in nights]
    assert ids == sorted(ids, reverse=True)


def test_get_all_nights_returns_fresh_list(temp_db):
    temp_db.insert(SleepNight.begin(100))

    first = temp_db.get_all_nights()
    first.clear()

    assert len(temp_db.get_all_nights()) == 1


def test_clear_removes_everything(temp_db):
    for start in (100, 200):
        temp_db.insert(SleepNight.begin(start))

    temp_db.clear()

    assert temp_db.get_all_nights() == []
    assert temp_db.get_tonight() is None


def test_ids_keep_increasing(temp_db):
    first = SleepNight.begin(100)
    temp_db.insert(first)
    second = SleepNight.begin(200)
    temp_db.insert(second)

    assert second.night_id > first.night_id


def test_database_errors_become_storage_errors(temp_db):
    with patch(
        "sleeptracker.database.Session.exec",
        side_effect=OperationalError("SELECT", {}, Exception("disk I/O error")),
    ):
        with pytest.raises(StorageError) as exc_info:
            temp_db.get_all_nights()

    assert isinstance(exc_info.value.__cause__, OperationalError)


def test_constructed_night_round_trips_in_progress(temp_db):
    night = SleepNight(start_time_milli=100)
    temp_db.insert(night)

    stored = temp_db.get_tonight()

    assert stored.end_time_milli == 100
    assert stored.in_progress
