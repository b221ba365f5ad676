"""Data models for the stopwatch.

Defines TimerState, LapRecord and the derived TimerPhase.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum


class TimerPhase(Enum):
    """Derived state of the stopwatch session."""

    IDLE = "idle"
    STOPPED = "stopped"
    RUNNING = "running"


@dataclass(frozen=True)
class LapRecord:
    """A completed lap.

    Attributes:
        lap_number: 1-based lap index.
        lap_time: Wall-clock time since the previous lap boundary.
        overall_time: Total elapsed time at the lap boundary.
    """

    lap_number: int
    lap_time: timedelta
    overall_time: timedelta


@dataclass
class TimerState:
    """Mutable stopwatch state, one per session.

    Attributes:
        is_active: Whether the clock is running.
        accumulated: Active time before the current run segment.
        run_started_at: Start of the current run segment (None when stopped).
        lap_started_at: Start of the current lap segment.
        stopped_at: When the clock was last stopped (None while running).
        laps: Completed laps, newest first.
    """

    is_active: bool = False
    accumulated: timedelta = field(default_factory=timedelta)
    run_started_at: datetime | None = None
    lap_started_at: datetime | None = None
    stopped_at: datetime | None = None
    laps: list[LapRecord] = field(default_factory=list)

    @property
    def phase(self) -> TimerPhase:
        """Session phase derived from the activity flag and accumulated time."""
        if self.is_active:
            return TimerPhase.RUNNING
        if self.accumulated > timedelta(0):
            return TimerPhase.STOPPED
        return TimerPhase.IDLE


__all__ = ["LapRecord", "TimerPhase", "TimerState"]
