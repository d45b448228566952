"""
Tracker commands: start, stop, clear, nights, status.

Every command opens the configured database, initializes a tracker, runs one
action, prints whatever the tracker asked the UI to show and closes it again.
"""

import asyncio
from typing import Awaitable, Callable, Optional

import typer

from sleeptracker.tracker import (
    NavigateToSleepQuality,
    ShowSnackbar,
    SleepTrackerManager,
)

DbOption = typer.Option(None, "--db", help="Path to the SQLite database file")


def configure_logging(verbose: bool = False):
    """Configure logging for the CLI."""
    from sleeptracker.logger import setup_logging

    setup_logging(level="DEBUG" if verbose else "WARNING")


def _open_database(db_path: Optional[str]):
    from sleeptracker.database import SleepDatabase, get_database
    from sleeptracker.store import StorageError

    try:
        return SleepDatabase(db_path) if db_path else get_database()
    except StorageError as e:
        typer.echo(f"❌ Could not open database: {e}")
        raise typer.Exit(code=1)


def _render_events(manager: SleepTrackerManager) -> None:
    """Print and acknowledge every pending one-shot event."""
    while (event := manager.state.pending_event) is not None:
        if isinstance(event, NavigateToSleepQuality):
            typer.echo(f"🌙 Night {event.night.night_id} finished. How did you sleep?")
        elif isinstance(event, ShowSnackbar):
            typer.echo(f"🗑️  {event.message}")
        manager.acknowledge(event)


def _render_buttons(manager: SleepTrackerManager) -> None:
    state = manager.state
    buttons = [
        name
        for name, visible in (
            ("start", state.start_visible),
            ("stop", state.stop_visible),
            ("clear", state.clear_visible),
        )
        if visible
    ]
    typer.echo(f"Available: {', '.join(buttons)}")


def _run_action(
    db_path: Optional[str],
    action: Optional[Callable[[SleepTrackerManager], Awaitable[None]]] = None,
) -> SleepTrackerManager:
    from sleeptracker.store import StorageError

    database = _open_database(db_path)

    async def _go() -> SleepTrackerManager:
        manager = SleepTrackerManager(database)
        try:
            await manager.initialize()
            if action is not None:
                await action(manager)
            _render_events(manager)
        finally:
            await manager.close()
        return manager

    try:
        return asyncio.run(_go())
    except StorageError as e:
        typer.echo(f"❌ Storage error: {e}")
        raise typer.Exit(code=1)


def register_commands(app: typer.Typer):
    """Register the tracker commands on the root app."""

    @app.command()
    def start(db: Optional[str] = DbOption):
        """Start tracking a new night."""

        async def _start(manager: SleepTrackerManager):
            if manager.tonight is not None:
                typer.echo(
                    f"⚠️  Night {manager.tonight.night_id} is already being tracked"
                )
                return
            await manager.start_tracking()
            typer.echo(f"✅ Tracking night {manager.tonight.night_id}")

        manager = _run_action(db, _start)
        _render_buttons(manager)

    @app.command()
    def stop(db: Optional[str] = DbOption):
        """Stop tracking the current night."""

        async def _stop(manager: SleepTrackerManager):
            if manager.tonight is None:
                typer.echo("No night is being tracked")
                return
            await manager.stop_tracking()

        manager = _run_action(db, _stop)
        _render_buttons(manager)

    @app.command()
    def clear(
        db: Optional[str] = DbOption,
        yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    ):
        """Delete every recorded night."""
        if not yes:
            typer.confirm("Delete all recorded nights?", abort=True)

        async def _clear(manager: SleepTrackerManager):
            await manager.clear_all()

        manager = _run_action(db, _clear)
        _render_buttons(manager)

    @app.command()
    def nights(db: Optional[str] = DbOption):
        """Show every recorded night, newest first."""
        manager = _run_action(db)
        typer.echo(manager.state.nights_text)

    @app.command()
    def status(db: Optional[str] = DbOption):
        """Show whether a night is being tracked."""
        manager = _run_action(db)
        tonight = manager.tonight
        if tonight is None:
            typer.echo("💤 Not tracking")
        else:
            typer.echo(f"🌙 Tracking night {tonight.night_id}")
        typer.echo(f"Recorded nights: {len(manager.nights)}")
        _render_buttons(manager)
