"""Spoken and displayed time formats."""

from datetime import timedelta


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit}{'s' if value != 1 else ''}"


def _split(duration: timedelta) -> tuple[int, int]:
    total_seconds = max(0, int(duration.total_seconds()))
    return divmod(total_seconds, 60)


def format_interval_announcement(duration: timedelta) -> str:
    """Format elapsed time for a periodic announcement.

    Whole minutes are spoken without a seconds part.

    Examples:
        >>> format_interval_announcement(timedelta(seconds=60))
        '1 minute'
        >>> format_interval_announcement(timedelta(seconds=90))
        '1 minute and 30 seconds'
        >>> format_interval_announcement(timedelta(seconds=30))
        '30 seconds'
    """
    minutes, seconds = _split(duration)
    if minutes > 0 and seconds == 0:
        return _plural(minutes, "minute")
    if minutes > 0:
        return f"{_plural(minutes, 'minute')} and {_plural(seconds, 'second')}"
    return _plural(seconds, "second")


def format_confirmation(duration: timedelta) -> str:
    """Format a duration for a stop, reset or lap confirmation.

    Examples:
        >>> format_confirmation(timedelta(seconds=65))
        '1 minute and 5 seconds'
        >>> format_confirmation(timedelta(seconds=120))
        '2 minutes and 0 seconds'
        >>> format_confirmation(timedelta(seconds=1))
        '1 second'
    """
    minutes, seconds = _split(duration)
    if minutes > 0:
        return f"{_plural(minutes, 'minute')} and {_plural(seconds, 'second')}"
    return _plural(seconds, "second")


def format_display(duration: timedelta) -> str:
    """Format a duration as the MM:SS:CS clock face."""
    total_ms = max(0, duration // timedelta(milliseconds=1))
    minutes, remainder_ms = divmod(total_ms, 60_000)
    seconds, millis = divmod(remainder_ms, 1000)
    return f"{minutes:02d}:{seconds:02d}:{millis // 10:02d}"


__all__ = ["format_confirmation", "format_display", "format_interval_announcement"]
