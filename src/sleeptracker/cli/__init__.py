"""
SleepTracker CLI.

- main: start, stop, clear, nights, status
"""

import typer

from sleeptracker.cli.main import configure_logging, register_commands

app = typer.Typer(help="SleepTracker CLI - track how you sleep")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging (DEBUG level)"
    ),
):
    """
    SleepTracker CLI - track how you sleep.
    """
    configure_logging(verbose)


register_commands(app)
