"""Stopwatch module for VoiceLap.

Provides elapsed-time tracking with laps and time formatting.
"""

from voicelap.stopwatch.formatting import (
    format_confirmation,
    format_display,
    format_interval_announcement,
)
from voicelap.stopwatch.models import LapRecord, TimerPhase, TimerState
from voicelap.stopwatch.tracker import Clock, ElapsedTimeTracker

__all__ = [
    # Tracker
    "Clock",
    "ElapsedTimeTracker",
    # Models
    "LapRecord",
    "TimerPhase",
    "TimerState",
    # Formatting
    "format_confirmation",
    "format_display",
    "format_interval_announcement",
]
