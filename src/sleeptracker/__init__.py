"""
SleepTracker: record sleep sessions and drive the tracker screen.

- models: the SleepNight table
- store / database: abstract night store and its SQLite implementation
- tracker: view state, one-shot events and the session lifecycle manager
- formatting: display text for recorded nights
"""

__version__ = "0.1.0"
