"""Compiled date/time patterns.

A ``DatePattern`` is the two-way form of a pattern string:

- ``parse_fields`` matches a whole input string and extracts raw field
  values into ``DateFields``; ``parse`` additionally resolves those
  fields into a ``ZonedInstant``
- ``format`` renders a zone-aware ``datetime`` back to text

Parsing is driven by a regular expression built once from the pattern
tokens.  A pattern only matches when it consumes the entire input;
partial (prefix) matches never count.

Usage
-----
::

    from chronomaster.pattern import compile_pattern
    from chronomaster.zones import UTC

    pattern = compile_pattern("dd/MM/yyyy")
    value = pattern.parse("31/10/2025", UTC)
    pattern.format(value.local)   # '31/10/2025'
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from functools import lru_cache

from babel import dates as babel_dates

from chronomaster.instant import ZonedInstant
from chronomaster.pattern import names
from chronomaster.pattern.lexer import tokenize_pattern
from chronomaster.pattern.tokens import FieldKind, PatternToken
from chronomaster.zones import (
    format_offset,
    lookup_zone_text,
    offset_zone,
    resolve_zone_text,
    zone_id,
)


class PatternMismatch(ValueError):
    """Raised when an input string does not fit a pattern."""


# ---------------------------------------------------------------------------
# Parsed fields
# ---------------------------------------------------------------------------


@dataclass
class DateFields:
    """Raw field values extracted from one input string.

    Only fields present in the pattern are set.  ``values`` is keyed by
    ``FieldKind``; the zone-related fields are kept separately because
    their values are not integers.
    """

    values: dict[FieldKind, int] = field(default_factory=dict)
    offset_seconds: int | None = None
    zone: tzinfo | None = None
    zone_text: str | None = None

    def put(self, kind: FieldKind, value: int) -> None:
        """Record ``value``; a repeated field must repeat the same value."""
        previous = self.values.get(kind)
        if previous is not None and previous != value:
            raise PatternMismatch(f"conflicting values for {kind.name}: {previous} and {value}")
        self.values[kind] = value

    def get(self, kind: FieldKind) -> int | None:
        return self.values.get(kind)

    def resolve(self, assumed_zone: tzinfo, territory: str | None = None) -> ZonedInstant:
        """Combine the fields into a ``ZonedInstant``.

        Missing date fields default to 1970-01-01 and missing time fields
        to midnight.  An embedded offset fixes the instant; otherwise the
        local time is resolved in the embedded zone, or in
        ``assumed_zone`` when the input names none.  Zone abbreviations
        shared by several regions prefer ``assumed_zone``, then zones of
        ``territory``.

        Raises
        ------
        PatternMismatch
            If any field is out of range or the fields contradict each
            other (for example a weekday that does not fit the date).
        """
        local_date = self._resolve_date()
        weekday = self.get(FieldKind.WEEKDAY)
        if weekday is not None and local_date.weekday() != weekday:
            raise PatternMismatch(f"weekday does not match date {local_date.isoformat()}")

        hour = self._resolve_hour()
        minute = _checked(self.get(FieldKind.MINUTE), 0, 59, "minute", default=0)
        second = _checked(self.get(FieldKind.SECOND), 0, 59, "second", default=0)
        micro = self.get(FieldKind.FRACTION) or 0
        naive = datetime(
            local_date.year, local_date.month, local_date.day, hour, minute, second, micro
        )

        zone, offset_seconds = self._resolve_zone(assumed_zone, territory)
        try:
            if offset_seconds is not None:
                fixed = offset_zone(offset_seconds)
                return ZonedInstant.of(naive.replace(tzinfo=fixed), zone or fixed)
            return ZonedInstant.of(naive, zone or assumed_zone)
        except OverflowError as exc:
            raise PatternMismatch(f"{naive.isoformat()} is outside the supported range") from exc

    def _resolve_zone(
        self, assumed_zone: tzinfo, territory: str | None
    ) -> tuple[tzinfo | None, int | None]:
        if self.zone_text is None:
            return self.zone, self.offset_seconds
        resolved = resolve_zone_text(self.zone_text, assumed_zone, territory)
        if resolved is None:
            raise PatternMismatch(f"unknown zone {self.zone_text!r}")
        zone, offset = resolved
        if offset is None:
            return self.zone or zone, self.offset_seconds
        if self.offset_seconds is not None and self.offset_seconds != offset:
            raise PatternMismatch("zone abbreviation contradicts the offset")
        return self.zone or zone, offset

    def _resolve_date(self) -> date:
        year = self.get(FieldKind.YEAR)
        year = 1970 if year is None else year
        month = self.get(FieldKind.MONTH)
        day = self.get(FieldKind.DAY_OF_MONTH)
        day_of_year = self.get(FieldKind.DAY_OF_YEAR)
        try:
            start = date(year, 1, 1)
            if day_of_year is None:
                return date(year, month or 1, day or 1)
        except ValueError as exc:
            raise PatternMismatch(str(exc)) from exc

        if not 1 <= day_of_year <= date(year, 12, 31).timetuple().tm_yday:
            raise PatternMismatch(f"day of year {day_of_year} out of range for {year}")
        resolved = start + timedelta(days=day_of_year - 1)
        if (month is not None and month != resolved.month) or (
            day is not None and day != resolved.day
        ):
            raise PatternMismatch("day of year does not match month/day")
        return resolved

    def _resolve_hour(self) -> int:
        am_pm = self.get(FieldKind.AM_PM)
        pm_offset = 12 if am_pm == 1 else 0
        candidates: list[int] = []

        hour_of_day = self.get(FieldKind.HOUR_OF_DAY)
        if hour_of_day is not None:
            _checked(hour_of_day, 0, 23, "hour")
            if am_pm is not None and hour_of_day // 12 != am_pm:
                raise PatternMismatch("hour does not match AM/PM marker")
            candidates.append(hour_of_day)
        clock_day = self.get(FieldKind.CLOCK_HOUR_OF_DAY)
        if clock_day is not None:
            candidates.append(_checked(clock_day, 1, 24, "hour") % 24)
        clock_ampm = self.get(FieldKind.CLOCK_HOUR_OF_AM_PM)
        if clock_ampm is not None:
            candidates.append(_checked(clock_ampm, 1, 12, "hour") % 12 + pm_offset)
        hour_ampm = self.get(FieldKind.HOUR_OF_AM_PM)
        if hour_ampm is not None:
            candidates.append(_checked(hour_ampm, 0, 11, "hour") + pm_offset)

        if not candidates:
            return pm_offset
        if len(set(candidates)) > 1:
            raise PatternMismatch("conflicting hour fields")
        return candidates[0]


def _checked(value: int | None, low: int, high: int, label: str, default: int = 0) -> int:
    if value is None:
        return default
    if not low <= value <= high:
        raise PatternMismatch(f"{label} {value} out of range {low}..{high}")
    return value


# ---------------------------------------------------------------------------
# Offsets
# ---------------------------------------------------------------------------

_OFFSET_TEXT = re.compile(r"(?P<sign>[+-])(?P<hh>[0-9]{2}):?(?P<mm>[0-9]{2})?(?::?(?P<ss>[0-9]{2}))?")


def parse_offset_text(text: str) -> int:
    """Convert ``Z``, ``GMT``, ``+05``, ``+0530``, ``+05:30:15`` to seconds."""
    if text == "Z":
        return 0
    if text.upper().startswith("GMT"):
        text = text[3:]
        if not text:
            return 0
    match = _OFFSET_TEXT.fullmatch(text)
    if match is None:
        raise PatternMismatch(f"invalid offset {text!r}")
    hours = int(match["hh"])
    minutes = int(match["mm"] or 0)
    seconds = int(match["ss"] or 0)
    if hours > 18 or minutes > 59 or seconds > 59:
        raise PatternMismatch(f"offset {text!r} out of range")
    total = hours * 3600 + minutes * 60 + seconds
    return -total if match["sign"] == "-" else total


def _format_iso_offset(total: int, width: int, zulu: bool) -> str:
    """Render an ``X``/``x`` offset of the given width."""
    if total == 0 and zulu:
        return "Z"
    if width == 1:
        text = format_offset(total, colon=False)
        return text if total % 3600 else text[:3]
    if width == 2:
        return format_offset(total, colon=False)
    if width == 3:
        return format_offset(total, colon=True)
    if width == 4:
        return format_offset(total, colon=False, seconds=True)
    return format_offset(total, colon=True, seconds=True)


def _format_rfc_offset(total: int, width: int) -> str:
    """Render a ``Z`` offset of the given width."""
    if width <= 3:
        return format_offset(total, colon=False)
    if width == 4:
        return "GMT" if total == 0 else "GMT" + format_offset(total, colon=True, seconds=True)
    return "Z" if total == 0 else format_offset(total, colon=True, seconds=True)


# ---------------------------------------------------------------------------
# Regex construction
# ---------------------------------------------------------------------------

_ZONE_TEXT = r"[A-Za-z][A-Za-z0-9_/+\-]*"

_NUMERIC_KINDS = frozenset(
    {
        FieldKind.DAY_OF_MONTH,
        FieldKind.HOUR_OF_DAY,
        FieldKind.CLOCK_HOUR_OF_DAY,
        FieldKind.CLOCK_HOUR_OF_AM_PM,
        FieldKind.HOUR_OF_AM_PM,
        FieldKind.MINUTE,
        FieldKind.SECOND,
    }
)


def _alternation(options: dict[str, object]) -> str:
    ordered = sorted(options, key=len, reverse=True)
    return "(?i:" + "|".join(re.escape(option) for option in ordered) + ")"


def _year_regex(width: int) -> str:
    if width == 1:
        return r"[0-9]{1,4}"
    if width == 3:
        return r"[0-9]{3,4}"
    return rf"[0-9]{{{width}}}"


def _offset_regex(token: PatternToken) -> str:
    width = token.width
    if token.kind is FieldKind.OFFSET_Z:
        if width <= 3:
            return r"[+-][0-9]{4}"
        if width == 4:
            return r"GMT(?:[+-][0-9]{2}:[0-9]{2}(?::[0-9]{2})?)?"
        return r"Z|[+-][0-9]{2}:[0-9]{2}(?::[0-9]{2})?"
    body = {
        1: r"[+-][0-9]{2}(?:[0-9]{2})?",
        2: r"[+-][0-9]{4}",
        3: r"[+-][0-9]{2}:[0-9]{2}",
        4: r"[+-][0-9]{4}(?:[0-9]{2})?",
        5: r"[+-][0-9]{2}:[0-9]{2}(?::[0-9]{2})?",
    }[width]
    return f"Z|{body}" if token.kind is FieldKind.OFFSET_X else body


# ---------------------------------------------------------------------------
# DatePattern
# ---------------------------------------------------------------------------


class DatePattern:
    """A compiled, immutable date/time pattern.

    Parameters
    ----------
    spec:
        The pattern string, e.g. ``"yyyy-MM-dd HH:mm:ss"``.
    locale:
        Locale whose month/weekday/AM-PM text is accepted when parsing.

    Raises
    ------
    chronomaster.pattern.PatternSyntaxError
        If ``spec`` is not a valid pattern.
    """

    __slots__ = ("_spec", "_locale", "_tokens", "_regex", "_groups")

    def __init__(self, spec: str, locale: str = names.DEFAULT_LOCALE) -> None:
        self._spec = spec
        self._locale = locale
        self._tokens: tuple[PatternToken, ...] = tuple(tokenize_pattern(spec))
        self._groups: list[tuple[str, PatternToken]] = []
        self._regex = re.compile(self._build_regex())

    @property
    def spec(self) -> str:
        return self._spec

    @property
    def tokens(self) -> tuple[PatternToken, ...]:
        return self._tokens

    def __repr__(self) -> str:
        return f"DatePattern({self._spec!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DatePattern):
            return NotImplemented
        return self._spec == other._spec and self._locale == other._locale

    def __hash__(self) -> int:
        return hash((self._spec, self._locale))

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def _build_regex(self) -> str:
        parts: list[str] = []
        for index, token in enumerate(self._tokens):
            if token.is_literal:
                parts.append(re.escape(token.text))
                continue
            name = f"f{index}"
            self._groups.append((name, token))
            parts.append(f"(?P<{name}>{self._field_regex(token)})")
        return "".join(parts)

    def _field_regex(self, token: PatternToken) -> str:
        kind, width = token.kind, token.width
        if kind is FieldKind.YEAR:
            return _year_regex(width)
        if kind is FieldKind.MONTH:
            if width <= 2:
                return r"[0-9]{1,2}" if width == 1 else r"[0-9]{2}"
            return _alternation(names.month_lookup(self._locale, width == 5))
        if kind is FieldKind.WEEKDAY:
            return _alternation(names.day_lookup(self._locale, width == 5))
        if kind is FieldKind.AM_PM:
            return _alternation(names.period_lookup(self._locale))
        if kind in _NUMERIC_KINDS:
            return r"[0-9]{1,2}" if width == 1 else r"[0-9]{2}"
        if kind is FieldKind.DAY_OF_YEAR:
            return {1: r"[0-9]{1,3}", 2: r"[0-9]{2,3}", 3: r"[0-9]{3}"}[width]
        if kind is FieldKind.FRACTION:
            return rf"[0-9]{{{width}}}"
        if kind in (FieldKind.OFFSET_X, FieldKind.OFFSET_LOWER_X, FieldKind.OFFSET_Z):
            return _offset_regex(token)
        return _ZONE_TEXT

    def parse_fields(self, text: str) -> DateFields:
        """Match the whole of ``text`` and extract its raw field values.

        Raises
        ------
        PatternMismatch
            If ``text`` does not fit the pattern from start to end.
        """
        match = self._regex.fullmatch(text)
        if match is None:
            raise PatternMismatch(f"{text!r} does not match {self._spec!r}")
        fields = DateFields()
        for name, token in self._groups:
            self._extract(fields, token, match[name])
        return fields

    def _extract(self, fields: DateFields, token: PatternToken, raw: str) -> None:
        kind, width = token.kind, token.width
        if kind is FieldKind.YEAR:
            value = int(raw)
            fields.put(kind, 2000 + value if width == 2 else value)
        elif kind is FieldKind.MONTH and width >= 3:
            fields.put(kind, names.month_lookup(self._locale, width == 5)[raw.casefold()])
        elif kind is FieldKind.WEEKDAY:
            fields.put(kind, names.day_lookup(self._locale, width == 5)[raw.casefold()])
        elif kind is FieldKind.AM_PM:
            fields.put(kind, 1 if names.period_lookup(self._locale)[raw.casefold()] == "pm" else 0)
        elif kind is FieldKind.FRACTION:
            fields.put(kind, int(raw.ljust(6, "0")[:6]))
        elif kind in (FieldKind.OFFSET_X, FieldKind.OFFSET_LOWER_X, FieldKind.OFFSET_Z):
            offset = parse_offset_text(raw)
            if fields.offset_seconds is not None and fields.offset_seconds != offset:
                raise PatternMismatch("conflicting offsets")
            fields.offset_seconds = offset
        elif kind is FieldKind.ZONE_NAME:
            if resolve_zone_text(raw) is None:
                raise PatternMismatch(f"unknown zone {raw!r}")
            fields.zone_text = raw
        elif kind is FieldKind.ZONE_ID:
            zone = lookup_zone_text(raw)
            if zone is None:
                raise PatternMismatch(f"unknown zone {raw!r}")
            fields.zone = zone
        else:
            fields.put(kind, int(raw))

    def parse(self, text: str, assumed_zone: tzinfo) -> ZonedInstant:
        """Parse ``text`` into a ``ZonedInstant``.

        Missing zone/offset information is taken from ``assumed_zone``.

        Raises
        ------
        PatternMismatch
            If ``text`` does not fit the pattern or holds invalid values.
        """
        territory = names.babel_locale(self._locale).territory
        return self.parse_fields(text).resolve(assumed_zone, territory)

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format(self, value: datetime, locale: str = names.DEFAULT_LOCALE) -> str:
        """Render the local fields of ``value`` according to the pattern.

        Parameters
        ----------
        value:
            A timezone-aware ``datetime``, already in the target zone.
        locale:
            Locale used for month, weekday and AM/PM text.

        Raises
        ------
        babel.UnknownLocaleError
            If ``locale`` has no CLDR data.
        """
        return "".join(self._format_token(token, value, locale) for token in self._tokens)

    def _format_token(self, token: PatternToken, value: datetime, locale: str) -> str:
        kind, width = token.kind, token.width
        if kind is FieldKind.LITERAL:
            return token.text
        if kind is FieldKind.YEAR:
            if width == 2:
                return f"{value.year % 100:02d}"
            return f"{value.year:0{width}d}"
        if kind is FieldKind.MONTH:
            if width <= 2:
                return f"{value.month:0{width}d}"
            context = "stand-alone" if token.text[0] == "L" else "format"
            return names.month_names(locale, names.TEXT_WIDTHS[width], context)[value.month]
        if kind is FieldKind.DAY_OF_MONTH:
            return f"{value.day:0{width}d}"
        if kind is FieldKind.DAY_OF_YEAR:
            return f"{value.timetuple().tm_yday:0{width}d}"
        if kind is FieldKind.WEEKDAY:
            return names.day_names(locale, names.TEXT_WIDTHS[width])[value.weekday()]
        if kind is FieldKind.AM_PM:
            return names.period_names(locale)["am" if value.hour < 12 else "pm"]
        if kind is FieldKind.HOUR_OF_DAY:
            return f"{value.hour:0{width}d}"
        if kind is FieldKind.CLOCK_HOUR_OF_DAY:
            return f"{value.hour or 24:0{width}d}"
        if kind is FieldKind.CLOCK_HOUR_OF_AM_PM:
            return f"{value.hour % 12 or 12:0{width}d}"
        if kind is FieldKind.HOUR_OF_AM_PM:
            return f"{value.hour % 12:0{width}d}"
        if kind is FieldKind.MINUTE:
            return f"{value.minute:0{width}d}"
        if kind is FieldKind.SECOND:
            return f"{value.second:0{width}d}"
        if kind is FieldKind.FRACTION:
            return f"{value.microsecond:06d}".ljust(width, "0")[:width]

        offset = value.utcoffset()
        total = int(offset.total_seconds()) if offset is not None else 0
        if kind is FieldKind.OFFSET_X:
            return _format_iso_offset(total, width, zulu=True)
        if kind is FieldKind.OFFSET_LOWER_X:
            return _format_iso_offset(total, width, zulu=False)
        if kind is FieldKind.OFFSET_Z:
            return _format_rfc_offset(total, width)
        if kind is FieldKind.ZONE_NAME:
            if width == 4:
                return babel_dates.get_timezone_name(
                    value, width="long", locale=names.babel_locale(locale)
                )
            return value.tzname() or zone_id(value.tzinfo)  # type: ignore[arg-type]
        return zone_id(value.tzinfo)  # type: ignore[arg-type]


@lru_cache(maxsize=256)
def compile_pattern(spec: str, locale: str = names.DEFAULT_LOCALE) -> DatePattern:
    """Compile ``spec`` once and reuse the result.

    Raises
    ------
    chronomaster.pattern.PatternSyntaxError
        If ``spec`` is not a valid pattern.
    """
    return DatePattern(spec, locale)
