"""Periodic elapsed-time announcements.

Driven by an external tick; speaks the elapsed time whenever it crosses a
multiple of the configured interval.
"""

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from ..stopwatch.formatting import format_interval_announcement

if TYPE_CHECKING:
    from ..stopwatch.tracker import ElapsedTimeTracker
    from ..tts.feedback import SpokenFeedback

logger = logging.getLogger(__name__)


class IntervalAnnouncer:
    """Announces elapsed time every `interval_seconds` while running."""

    def __init__(
        self,
        tracker: "ElapsedTimeTracker",
        feedback: "SpokenFeedback | None" = None,
        interval_seconds: int = 30,
    ) -> None:
        """Initialize the announcer.

        Args:
            tracker: Stopwatch to read elapsed time from
            feedback: Spoken output (silent if None)
            interval_seconds: Seconds between announcements; 0 disables
        """
        self._tracker = tracker
        self._feedback = feedback
        self._interval_seconds = 0
        self.interval_seconds = interval_seconds
        self._last_announced = 0

    def check(self) -> str | None:
        """Announce the latest interval boundary passed since the last announcement.

        The boundary itself is spoken, so a late check still says "30 seconds"
        rather than the second it happened to sample.

        Returns:
            The announcement text, or None if nothing was announced.
        """
        if not self._tracker.is_active or self._interval_seconds <= 0:
            return None

        elapsed = self._tracker.elapsed()
        total_seconds = int(elapsed.total_seconds())

        # Elapsed time only moves backwards across a reset.
        if total_seconds < self._last_announced:
            self._last_announced = 0

        # Fires on the first check past a boundary, even after a stalled tick.
        boundary = total_seconds // self._interval_seconds
        if boundary < 1 or boundary <= self._last_announced // self._interval_seconds:
            return None

        self._last_announced = boundary * self._interval_seconds
        announcement = format_interval_announcement(timedelta(seconds=self._last_announced))
        logger.info(f"Announced time: {announcement}")
        if self._feedback is not None:
            self._feedback.say(announcement)
        return announcement

    def clear(self) -> None:
        """Forget the last announced second, e.g. after a reset."""
        self._last_announced = 0

    @property
    def interval_seconds(self) -> int:
        """Seconds between announcements (0 = disabled)."""
        return self._interval_seconds

    @interval_seconds.setter
    def interval_seconds(self, value: int) -> None:
        self._interval_seconds = max(0, int(value))

    @property
    def last_announced(self) -> int:
        """Elapsed second of the most recent announcement (0 if none)."""
        return self._last_announced


__all__ = ["IntervalAnnouncer"]
