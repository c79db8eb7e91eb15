"""Locale text for pattern fields, taken from CLDR through Babel.

Month names, weekday names and AM/PM markers are never spelled out by
hand; every lookup goes to ``babel.dates``.  Results are cached per
locale because registry patterns ask for the same tables repeatedly.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Final

from babel import Locale
from babel import dates as babel_dates

DEFAULT_LOCALE: Final[str] = "en_US"

# Pattern width -> CLDR width for text fields.
TEXT_WIDTHS: Final[dict[int, str]] = {
    1: "abbreviated",
    2: "abbreviated",
    3: "abbreviated",
    4: "wide",
    5: "narrow",
}


@lru_cache(maxsize=64)
def babel_locale(locale_id: str) -> Locale:
    """Parse ``locale_id`` (``en_US`` or ``en-US``) into a Babel ``Locale``.

    Raises
    ------
    babel.UnknownLocaleError
        If CLDR has no data for the locale.
    ValueError
        If ``locale_id`` is not a well-formed identifier.
    """
    return Locale.parse(locale_id.replace("-", "_"))


@lru_cache(maxsize=256)
def month_names(locale_id: str, width: str, context: str = "format") -> dict[int, str]:
    """Return ``{1: 'Jan', ...}`` style month names."""
    return dict(
        babel_dates.get_month_names(width, context=context, locale=babel_locale(locale_id))
    )


@lru_cache(maxsize=256)
def day_names(locale_id: str, width: str, context: str = "format") -> dict[int, str]:
    """Return weekday names keyed Monday == 0, as ``datetime.weekday()`` is."""
    return dict(
        babel_dates.get_day_names(width, context=context, locale=babel_locale(locale_id))
    )


@lru_cache(maxsize=64)
def period_names(locale_id: str, width: str = "abbreviated") -> dict[str, str]:
    """Return ``{'am': ..., 'pm': ...}`` for the locale."""
    names = babel_dates.get_period_names(
        width, context="format", locale=babel_locale(locale_id)
    )
    return {"am": names["am"], "pm": names["pm"]}


def _reverse(tables: list[dict[int, str]] | list[dict[str, str]]) -> dict[str, object]:
    lookup: dict[str, object] = {}
    for table in tables:
        for key, name in table.items():
            lookup.setdefault(name.casefold(), key)
    return lookup


@lru_cache(maxsize=64)
def month_lookup(locale_id: str, include_narrow: bool = False) -> dict[str, int]:
    """Map case-folded month text (short and full, both contexts) to 1..12."""
    widths = ["wide", "abbreviated"] + (["narrow"] if include_narrow else [])
    tables = [
        month_names(locale_id, width, context)
        for width in widths
        for context in ("format", "stand-alone")
    ]
    return _reverse(tables)  # type: ignore[return-value]


@lru_cache(maxsize=64)
def day_lookup(locale_id: str, include_narrow: bool = False) -> dict[str, int]:
    """Map case-folded weekday text to 0..6 (Monday == 0)."""
    widths = ["wide", "abbreviated"] + (["narrow"] if include_narrow else [])
    tables = [
        day_names(locale_id, width, context)
        for width in widths
        for context in ("format", "stand-alone")
    ]
    return _reverse(tables)  # type: ignore[return-value]


@lru_cache(maxsize=64)
def period_lookup(locale_id: str) -> dict[str, str]:
    """Map case-folded AM/PM text to ``'am'`` or ``'pm'``."""
    tables = [period_names(locale_id, width) for width in ("wide", "abbreviated", "narrow")]
    return _reverse(tables)  # type: ignore[return-value]
