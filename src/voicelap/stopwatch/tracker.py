"""Elapsed-time tracking for the stopwatch.

Keeps accumulated active time across start/stop cycles by sampling a wall
clock rather than counting ticks.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from .models import LapRecord, TimerPhase, TimerState

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ElapsedTimeTracker:
    """Stopwatch with start, stop, lap and reset transitions.

    Transitions that do not apply in the current state are silent no-ops
    and are reported through the return value, never by raising.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        """Initialize the tracker.

        Args:
            clock: Callable returning the current aware datetime.
                   Defaults to datetime.now(UTC).
        """
        self._clock = clock or _utc_now
        self._state = TimerState()

    def start(self) -> bool:
        """Start or resume the clock.

        Returns:
            True if the clock was started, False if it was already running.
        """
        if self._state.is_active:
            return False

        now = self._clock()
        state = self._state
        if state.lap_started_at is None:
            state.lap_started_at = now

        state.run_started_at = now
        state.stopped_at = None
        state.is_active = True
        logger.debug(f"Clock started (accumulated={state.accumulated})")
        return True

    def stop(self) -> timedelta | None:
        """Stop the clock.

        Returns:
            Total accumulated time, or None if the clock was not running.
        """
        state = self._state
        if not state.is_active or state.run_started_at is None:
            return None

        now = self._clock()
        state.accumulated += now - state.run_started_at
        state.run_started_at = None
        state.stopped_at = now
        state.is_active = False
        logger.debug(f"Clock stopped at {state.accumulated}")
        return state.accumulated

    def lap(self) -> LapRecord | None:
        """Close the current lap and begin the next one.

        The lap is measured from the wall-clock moment it began, so a lap
        that spans a stop includes the stopped time.

        Returns:
            The new LapRecord, or None if the clock was not running.
        """
        state = self._state
        if not state.is_active or state.run_started_at is None:
            return None

        now = self._clock()
        lap_start = state.lap_started_at or state.run_started_at
        record = LapRecord(
            lap_number=len(state.laps) + 1,
            lap_time=now - lap_start,
            overall_time=state.accumulated + (now - state.run_started_at),
        )
        state.laps.insert(0, record)
        state.lap_started_at = now
        logger.debug(f"Lap {record.lap_number}: {record.lap_time}")
        return record

    def reset(self) -> None:
        """Return to the all-zero state and clear laps."""
        self._state = TimerState()

    def elapsed(self) -> timedelta:
        """Total active time, including the running segment."""
        state = self._state
        if state.is_active and state.run_started_at is not None:
            return state.accumulated + (self._clock() - state.run_started_at)
        return state.accumulated

    def current_lap_elapsed(self) -> timedelta:
        """Time since the current lap began, frozen while stopped."""
        state = self._state
        if state.lap_started_at is None:
            return timedelta(0)
        if state.is_active:
            return self._clock() - state.lap_started_at
        if state.stopped_at is not None:
            return state.stopped_at - state.lap_started_at
        return timedelta(0)

    @property
    def laps(self) -> tuple[LapRecord, ...]:
        """Completed laps, newest first."""
        return tuple(self._state.laps)

    @property
    def is_active(self) -> bool:
        """Whether the clock is running."""
        return self._state.is_active

    @property
    def accumulated(self) -> timedelta:
        """Active time before the current run segment."""
        return self._state.accumulated

    @property
    def phase(self) -> TimerPhase:
        """Current session phase."""
        return self._state.phase


__all__ = ["Clock", "ElapsedTimeTracker"]
