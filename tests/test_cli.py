"""
Unit tests for the sleeptracker CLI commands.
"""

import pytest
from typer.testing import CliRunner

from sleeptracker.cli import app

runner = CliRunner()


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "cli.db")


class TestCLIRoot:
    def test_help_shows_all_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("start", "stop", "clear", "nights", "status"):
            assert command in result.output


class TestTrackingCommands:
    def test_status_on_empty_database(self, db_path):
        result = runner.invoke(app, ["status", "--db", db_path])
        assert result.exit_code == 0
        assert "Not tracking" in result.output
        assert "Recorded nights: 0" in result.output
        assert "Available: start" in result.output

    def test_start_then_status(self, db_path):
        result = runner.invoke(app, ["start", "--db", db_path])
        assert result.exit_code == 0
        assert "Tracking night 1" in result.output
        assert "Available: stop, clear" in result.output

        result = runner.invoke(app, ["status", "--db", db_path])
        assert "Tracking night 1" in result.output

    def test_start_twice_warns(self, db_path):
        runner.invoke(app, ["start", "--db", db_path])
        result = runner.invoke(app, ["start", "--db", db_path])
        assert result.exit_code == 0
        assert "already being tracked" in result.output

    def test_stop_announces_rating(self, db_path):
        runner.invoke(app, ["start", "--db", db_path])

        result = runner.invoke(app, ["stop", "--db", db_path])

        assert result.exit_code == 0
        assert "Night 1 finished" in result.output

        result = runner.invoke(app, ["status", "--db", db_path])
        assert "Not tracking" in result.output
        assert "Recorded nights: 1" in result.output

    def test_stop_without_night(self, db_path):
        result = runner.invoke(app, ["stop", "--db", db_path])
        assert result.exit_code == 0
        assert "No night is being tracked" in result.output

    def test_nights_lists_history(self, db_path):
        runner.invoke(app, ["start", "--db", db_path])
        runner.invoke(app, ["stop", "--db", db_path])

        result = runner.invoke(app, ["nights", "--db", db_path])

        assert result.exit_code == 0
        assert "Here is your sleep data" in result.output
        assert "Quality:\t--" in result.output

    def test_clear_with_yes(self, db_path):
        runner.invoke(app, ["start", "--db", db_path])

        result = runner.invoke(app, ["clear", "--db", db_path, "--yes"])

        assert result.exit_code == 0
        assert "All your data is GONE forever." in result.output
        assert "Available: start" in result.output

    def test_clear_aborted(self, db_path):
        runner.invoke(app, ["start", "--db", db_path])

        result = runner.invoke(app, ["clear", "--db", db_path], input="n\n")

        assert result.exit_code != 0
        status = runner.invoke(app, ["status", "--db", db_path])
        assert "Recorded nights: 1" in status.output
