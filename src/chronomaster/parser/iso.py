"""Strict ISO-8601 zoned/offset/instant grammar.

Accepted shape::

    YYYY-MM-DDTHH:MM[:SS[.fraction]](Z|+HH:MM[:SS]|-HH:MM[:SS])[ '[' Zone/Id ']' ]

The offset (or ``Z``) is mandatory; it fixes the instant.  A trailing
bracketed zone id only decides the display zone.
"""
from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Final

from chronomaster.errors import ConfigurationError
from chronomaster.instant import ZonedInstant
from chronomaster.zones import UTC, lookup_zone, offset_zone

_ISO_ZONED: Final[re.Pattern[str]] = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})"
    r"(?::(?P<second>[0-9]{2})(?:\.(?P<fraction>[0-9]{1,9}))?)?"
    r"(?P<offset>Z|[+-][0-9]{2}:[0-9]{2}(?::[0-9]{2})?)"
    r"(?:\[(?P<zone>[^\]]+)\])?"
)


def parse_iso_zoned(text: str) -> ZonedInstant | None:
    """Parse ``text`` as a strict ISO-8601 date-time with offset.

    Returns ``None`` when ``text`` does not follow the grammar or holds
    out-of-range values, so the caller can fall through to the next
    strategy.
    """
    match = _ISO_ZONED.fullmatch(text)
    if match is None:
        return None
    offset = _offset_seconds(match["offset"])
    if offset is None:
        return None
    display = UTC if match["offset"] == "Z" else offset_zone(offset)
    if match["zone"] is not None:
        try:
            display = lookup_zone(match["zone"])
        except ConfigurationError:
            return None
    fraction = (match["fraction"] or "").ljust(6, "0")[:6]
    try:
        local = datetime(
            int(match["year"]),
            int(match["month"]),
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"] or 0),
            int(fraction),
            tzinfo=offset_zone(offset),
        )
        return ZonedInstant.of(local, display)
    except (ValueError, OverflowError):
        return None


def _offset_seconds(text: str) -> int | None:
    if text == "Z":
        return 0
    sign = -1 if text[0] == "-" else 1
    parts = [int(part) for part in text[1:].split(":")]
    hours, minutes = parts[0], parts[1]
    seconds = parts[2] if len(parts) > 2 else 0
    if hours > 18 or minutes > 59 or seconds > 59:
        return None
    total = timedelta(hours=hours, minutes=minutes, seconds=seconds)
    return sign * int(total.total_seconds())
