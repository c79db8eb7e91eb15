"""chronomaster: interpret date strings of unknown format and render them anywhere.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import chronomaster

    # Parse epoch numbers, ISO-8601 or any registered pattern
    value = chronomaster.parse("31/10/2025 18:45:00", zone="Asia/Kolkata").unwrap()

    # Render in another zone and locale
    chronomaster.format(value, "EEEE d MMMM yyyy, HH:mm", zone="Europe/Paris", locale="fr_FR")

    # Relative phrasing
    chronomaster.to_relative(value)

    # Shared defaults and custom patterns
    chrono = chronomaster.ChronoMaster()
    chrono.initialize("UTC", "America/New_York", ["dd.MM.yyyy"])

    chronomaster.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from chronomaster.errors import (
    ChronoError,
    ConfigurationError,
    DateFormatError,
    DateParseError,
    NetworkTimeError,
)
from chronomaster.facade import ChronoMaster
from chronomaster.instant import ZonedInstant
from chronomaster.result import Failure, Result, Success

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from chronomaster.relative import PointInTime


def parse(text: str, zone: str = "UTC") -> Result[ZonedInstant]:
    """Parse a date string with the built-in patterns.

    Parameters
    ----------
    text:
        Epoch seconds/milliseconds, ISO-8601 or any built-in pattern.
    zone:
        Zone assumed when ``text`` carries no zone or offset.

    Returns
    -------
    Result[ZonedInstant]
        ``Success`` with the parsed value, ``Failure(DateParseError)`` if
        nothing matched, or ``Failure(ConfigurationError)`` if ``zone`` is
        not a valid zone id.
    """
    from chronomaster.parser import DateParser
    from chronomaster.registry import FormatRegistry
    from chronomaster.zones import resolve_zone

    resolved = resolve_zone(zone)
    if isinstance(resolved, Failure):
        return resolved
    return DateParser(FormatRegistry()).parse(text, resolved.value)


def format(  # noqa: A001
    value: ZonedInstant, pattern: str, zone: str = "UTC", locale: str = "en_US"
) -> Result[str]:
    """Render ``value`` with ``pattern`` in ``zone``.

    Parameters
    ----------
    value:
        The instant to render.
    pattern:
        Date/time pattern such as ``"dd MMM, yyyy 'at' hh:mm a"``.
    zone:
        Target zone id.
    locale:
        Locale for month, weekday and AM/PM text.

    Returns
    -------
    Result[str]
        The rendered string, or a ``Failure`` explaining why not.
    """
    from chronomaster.formatter import DateFormatter
    from chronomaster.zones import resolve_zone

    resolved = resolve_zone(zone)
    if isinstance(resolved, Failure):
        return resolved
    return DateFormatter(locale).format_pattern(value, pattern, resolved.value)


def to_relative(target: "PointInTime", now: "PointInTime | None" = None) -> str:
    """Describe ``target`` relative to ``now``, e.g. ``"5 minutes ago"``.

    ``now`` defaults to the current system time.
    """
    from chronomaster.relative import to_relative as _to_relative

    return _to_relative(target, now)


__all__ = [
    "__version__",
    "ChronoError",
    "ChronoMaster",
    "ConfigurationError",
    "DateFormatError",
    "DateParseError",
    "Failure",
    "NetworkTimeError",
    "Result",
    "Success",
    "ZonedInstant",
    "format",
    "parse",
    "to_relative",
]
