"""Zone identifier resolution.

Zone rules come from the host's IANA database through ``zoneinfo``.
Besides region keys (``"Asia/Kolkata"``) the resolver accepts ``UTC``,
``GMT``, ``Z`` and fixed numeric offsets (``"+05:30"``, ``"UTC-03:00"``).
Zone text inside date strings may also be an abbreviation such as
``IST`` or ``CEST``; those are read back from the names tzdata prints.
"""
from __future__ import annotations

import logging
import os
import re
from collections import Counter
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

import tzlocal
from babel.core import get_global

from chronomaster.errors import ConfigurationError
from chronomaster.result import Failure, Result, Success

logger = logging.getLogger(__name__)

UTC: Final[tzinfo] = timezone.utc

_UTC_ALIASES: Final[frozenset[str]] = frozenset({"UTC", "GMT", "UT", "Z", "Etc/UTC"})

_OFFSET_ID: Final[re.Pattern[str]] = re.compile(
    r"(?:UTC|GMT|UT)?(?P<sign>[+-])(?P<hours>[0-9]{1,2})(?::?(?P<minutes>[0-9]{2})(?::?(?P<seconds>[0-9]{2}))?)?"
)

# RFC 822 / RFC 2822 obsolete zone abbreviations.
_RFC822_ZONES: Final[dict[str, int]] = {
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
}


def offset_zone(total_seconds: int) -> tzinfo:
    """Return a fixed-offset zone, using ``UTC`` for a zero offset."""
    if total_seconds == 0:
        return UTC
    return timezone(timedelta(seconds=total_seconds))


def _parse_offset_id(zone_id: str) -> tzinfo | None:
    match = _OFFSET_ID.fullmatch(zone_id)
    if match is None:
        return None
    hours = int(match["hours"])
    minutes = int(match["minutes"] or 0)
    seconds = int(match["seconds"] or 0)
    if hours > 18 or minutes > 59 or seconds > 59:
        return None
    total = hours * 3600 + minutes * 60 + seconds
    return offset_zone(-total if match["sign"] == "-" else total)


def lookup_zone(zone_id: str) -> tzinfo:
    """Resolve ``zone_id`` to a ``tzinfo``.

    Raises
    ------
    ConfigurationError
        If ``zone_id`` is neither a known IANA key, a UTC alias, nor a
        fixed offset.
    """
    if zone_id in _UTC_ALIASES:
        return UTC
    fixed = _parse_offset_id(zone_id)
    if fixed is not None:
        return fixed
    if not zone_id or zone_id.startswith(("/", ".")) or ".." in zone_id:
        raise ConfigurationError.invalid_zone(zone_id)
    try:
        return ZoneInfo(zone_id)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError.invalid_zone(zone_id, cause=exc) from None


def resolve_zone(zone_id: str) -> Result[tzinfo]:
    """Resolve ``zone_id`` into a ``Result`` instead of raising."""
    try:
        return Success(lookup_zone(zone_id))
    except ConfigurationError as exc:
        return Failure(exc)


def lookup_zone_text(text: str) -> tzinfo | None:
    """Resolve zone text found inside a date string.

    Accepts everything ``lookup_zone`` accepts plus the North American
    abbreviations of RFC 822.  Returns ``None`` when nothing matches.
    """
    upper = text.upper()
    if upper in _RFC822_ZONES:
        return offset_zone(_RFC822_ZONES[upper] * 3600)
    try:
        return lookup_zone(text)
    except ConfigurationError:
        return None


# ---------------------------------------------------------------------------
# Abbreviations
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def _abbreviation_table() -> dict[str, tuple[tuple[str, int], ...]]:
    """Map upper-cased tzdata abbreviations to ``(zone key, offset)`` pairs.

    Every zone is sampled in January and July of the current year so both
    its standard and its daylight abbreviation are seen.  Numeric names
    such as ``+05`` are left to the offset parser.
    """
    year = datetime.now(UTC).year
    samples = (datetime(year, 1, 15, 12, tzinfo=UTC), datetime(year, 7, 15, 12, tzinfo=UTC))
    table: dict[str, set[tuple[str, int]]] = {}
    for key in sorted(available_timezones()):
        try:
            zone = ZoneInfo(key)
        except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
            logger.debug("Skipping zone %s: %s", key, exc)
            continue
        for sample in samples:
            local = sample.astimezone(zone)
            name = local.tzname() or ""
            offset = local.utcoffset()
            if name[:1].isalpha() and offset is not None:
                table.setdefault(name.upper(), set()).add((key, int(offset.total_seconds())))
    return {name: tuple(sorted(entries)) for name, entries in table.items()}


def _offset_in_zone(text: str, zone: tzinfo) -> int | None:
    """The offset ``zone`` has when it prints ``text``, if it ever does."""
    key = getattr(zone, "key", None)
    for candidate, offset in _abbreviation_table().get(text.upper(), ()):
        if candidate == key:
            return offset
    return None


def lookup_zone_abbreviation(
    text: str,
    preferred: tzinfo | None = None,
    territory: str | None = None,
) -> tuple[tzinfo, int] | None:
    """Resolve a zone abbreviation such as ``IST``, ``CEST`` or ``JST``.

    Several regions can share one abbreviation (``IST`` is printed for
    India, Ireland and Israel).  Candidates are narrowed in this order:

    1. ``preferred``, when that zone prints the abbreviation itself
    2. zones CLDR assigns to ``territory`` (for example ``"IN"``)
    3. the offset most zones agree on, the lowest offset on a tie

    Returns
    -------
    tuple[tzinfo, int] | None
        The display zone and the UTC offset in seconds the abbreviation
        stands for, or ``None`` when no zone prints ``text``.  The display
        zone is ``preferred`` when it matched, else a fixed-offset zone.
    """
    candidates = _abbreviation_table().get(text.upper())
    if not candidates:
        return None

    if preferred is not None:
        own = _offset_in_zone(text, preferred)
        if own is not None:
            return preferred, own

    if territory:
        aliases = get_global("zone_aliases")
        territories = get_global("zone_territories")
        local = tuple(
            (key, offset)
            for key, offset in candidates
            if territories.get(aliases.get(key, key)) == territory
        )
        candidates = local or candidates

    counts = Counter(offset for _, offset in candidates)
    best = min(counts, key=lambda offset: (-counts[offset], offset))
    return offset_zone(best), best


def resolve_zone_text(
    text: str,
    preferred: tzinfo | None = None,
    territory: str | None = None,
) -> tuple[tzinfo, int | None] | None:
    """Resolve zone text from a date string into a display zone and offset.

    The offset is ``None`` when the zone's own rules decide it (region
    keys, aliases, fixed offsets); abbreviations pin the offset they
    stand for.  An abbreviation printed by ``preferred`` wins over every
    other reading, so text formatted in a zone parses back in that zone.

    Returns ``None`` when ``text`` names no zone at all.
    """
    if preferred is not None:
        own = _offset_in_zone(text, preferred)
        if own is not None:
            return preferred, own
    named = lookup_zone_text(text)
    if named is not None:
        return named, None
    return lookup_zone_abbreviation(text, None, territory)


# ---------------------------------------------------------------------------
# Host zone
# ---------------------------------------------------------------------------


def system_zone() -> tzinfo:
    """Return the host's local zone.

    ``$TZ`` wins when it names a resolvable zone.  Otherwise the host's
    IANA key is looked up through ``tzlocal`` so daylight saving rules are
    kept.  A fixed zone with the current local offset is the last resort.
    """
    env_zone = os.environ.get("TZ", "").lstrip(":")
    if env_zone:
        resolved = resolve_zone(env_zone)
        if isinstance(resolved, Success):
            return resolved.value

    try:
        host_key = tzlocal.get_localzone_name()
    except (LookupError, ValueError, OSError) as exc:
        logger.warning("Cannot determine the host time zone: %s", exc)
        host_key = None
    if host_key:
        resolved = resolve_zone(host_key)
        if isinstance(resolved, Success):
            return resolved.value
        logger.warning("%s Using the current local offset.", resolved.message)

    local = datetime.now().astimezone().tzinfo
    return local if local is not None else UTC


def zone_id(zone: tzinfo) -> str:
    """Return a stable identifier for ``zone``.

    IANA zones report their key, UTC reports ``"UTC"`` and fixed offsets
    report ``"+HH:MM"``.
    """
    key = getattr(zone, "key", None)
    if key:
        return key
    offset = zone.utcoffset(None)
    if offset is None:
        return str(zone)
    total = int(offset.total_seconds())
    if total == 0:
        return "UTC"
    return format_offset(total, colon=True)


def format_offset(total_seconds: int, *, colon: bool, seconds: bool = False) -> str:
    """Render an offset as ``+HH:MM`` (or ``+HHMM`` without ``colon``).

    Seconds are appended only when ``seconds`` is set and non-zero.
    """
    sign = "-" if total_seconds < 0 else "+"
    total = abs(total_seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    sep = ":" if colon else ""
    text = f"{sign}{hours:02d}{sep}{minutes:02d}"
    if seconds and secs:
        text += f"{sep}{secs:02d}"
    return text
