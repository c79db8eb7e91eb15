"""Relative time phrases: "5 minutes ago", "in 2 days".

The unit is chosen from fixed thresholds, with a month counted as 30
days and a year as 365 days.  The phrase is not calendar-aware and has
no special wording for very small distances: zero seconds renders as
``"0 seconds ago"``.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Final, Union

from chronomaster.instant import ZonedInstant, epoch_micros_of

PointInTime = Union[ZonedInstant, datetime, int]

_MINUTE: Final[int] = 60
_HOUR: Final[int] = 60 * _MINUTE
_DAY: Final[int] = 24 * _HOUR
_WEEK: Final[int] = 7 * _DAY
_MONTH: Final[int] = 30 * _DAY
_YEAR: Final[int] = 365 * _DAY

# (exclusive upper bound in seconds, divisor, unit), ascending
_UNITS: Final[tuple[tuple[int | None, int, str], ...]] = (
    (_MINUTE, 1, "second"),
    (_HOUR, _MINUTE, "minute"),
    (_DAY, _HOUR, "hour"),
    (_WEEK, _DAY, "day"),
    (_MONTH, _WEEK, "week"),
    (_YEAR, _MONTH, "month"),
    (None, _YEAR, "year"),
)


def _epoch_micros(value: PointInTime) -> int:
    """Microseconds since the epoch; naive datetimes are read as UTC."""
    if isinstance(value, ZonedInstant):
        return value.epoch_micros
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return epoch_micros_of(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return value * 1000
    raise TypeError(
        f"Expected ZonedInstant, datetime or epoch milliseconds, got {type(value).__name__}"
    )


def describe(magnitude_seconds: int) -> str:
    """Return ``"<n> <unit>"`` for a non-negative distance in seconds."""
    for bound, divisor, unit in _UNITS:
        if bound is None or magnitude_seconds < bound:
            count = magnitude_seconds // divisor
            return f"{count} {unit}" if count == 1 else f"{count} {unit}s"
    raise AssertionError("unreachable")


def to_relative(target: PointInTime, now: PointInTime | None = None) -> str:
    """Describe ``target`` relative to ``now``.

    Parameters
    ----------
    target:
        The point in time being described.
    now:
        The reference point; the current system time when omitted.

    Returns
    -------
    str
        ``"in <n> <unit>"`` when ``target`` lies after ``now``,
        otherwise ``"<n> <unit> ago"``.

    Example
    -------
    ::

        to_relative(now - timedelta(seconds=300), now)   # '5 minutes ago'
    """
    reference = _epoch_micros(now if now is not None else datetime.now(timezone.utc))
    delta = reference - _epoch_micros(target)
    phrase = describe(abs(delta) // 1_000_000)
    return f"in {phrase}" if delta < 0 else f"{phrase} ago"
