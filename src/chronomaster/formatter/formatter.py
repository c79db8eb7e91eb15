"""Date formatter: renders a ``ZonedInstant`` in a target zone.

Two rendering modes are offered:

- ``format_pattern`` renders an explicit pattern string such as
  ``"dd MMM, yyyy 'at' hh:mm a"``
- ``format_style`` renders one of the CLDR predefined styles
  (``short``, ``medium``, ``long``, ``full``) through Babel

Either way the value is first moved to the target zone.  The instant
itself never changes, only the wall-clock fields used for display.

Usage
-----
::

    from zoneinfo import ZoneInfo
    from chronomaster.formatter import DateFormatter

    formatter = DateFormatter()
    result = formatter.format_pattern(value, "yyyy-MM-dd HH:mm", ZoneInfo("Asia/Tokyo"))
"""
from __future__ import annotations

import enum
from datetime import tzinfo

from babel import UnknownLocaleError
from babel import dates as babel_dates

from chronomaster.errors import DateFormatError
from chronomaster.instant import ZonedInstant
from chronomaster.pattern import PatternSyntaxError, compile_pattern
from chronomaster.pattern.names import DEFAULT_LOCALE, babel_locale
from chronomaster.result import Failure, Result, Success


class FormatStyle(enum.Enum):
    """Predefined CLDR date-time styles."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    FULL = "full"

    @classmethod
    def coerce(cls, style: "FormatStyle | str") -> "FormatStyle":
        """Accept a member or its case-insensitive name.

        Raises
        ------
        ValueError
            If ``style`` names no known style.
        """
        if isinstance(style, FormatStyle):
            return style
        return cls(str(style).lower())


class DateFormatter:
    """Renders ``ZonedInstant`` values as text.

    Parameters
    ----------
    default_locale:
        Locale used when a call does not pass one.
    """

    def __init__(self, default_locale: str = DEFAULT_LOCALE) -> None:
        self._default_locale = default_locale

    def format_pattern(
        self,
        value: ZonedInstant,
        pattern: str,
        target_zone: tzinfo,
        locale: str | None = None,
    ) -> Result[str]:
        """Render ``value`` in ``target_zone`` using ``pattern``.

        Parameters
        ----------
        value:
            The instant to render.
        pattern:
            A date/time pattern string.
        target_zone:
            Zone whose wall-clock fields are rendered.
        locale:
            Locale for month, weekday and AM/PM text.

        Returns
        -------
        Result[str]
            The rendered text, or ``Failure(DateFormatError)`` naming the
            pattern when it is invalid, the locale is unknown or the
            instant lies outside the years ``datetime`` can hold.
        """
        locale = locale or self._default_locale
        try:
            compiled = compile_pattern(pattern)
        except PatternSyntaxError as exc:
            return Failure(
                DateFormatError(
                    message=f"Invalid format pattern {pattern!r}: {exc.pattern_message}.",
                    cause=exc,
                    pattern=pattern,
                )
            )
        try:
            local = value.with_zone(target_zone).local
        except OverflowError as exc:
            return Failure(_outside_calendar(value, pattern, exc))
        try:
            return Success(compiled.format(local, locale))
        except (UnknownLocaleError, ValueError) as exc:
            return Failure(
                DateFormatError(
                    message=f"Cannot render pattern {pattern!r} for locale {locale!r}: {exc}",
                    cause=exc,
                    pattern=pattern,
                )
            )

    def format_style(
        self,
        value: ZonedInstant,
        style: FormatStyle | str,
        locale: str | None = None,
        target_zone: tzinfo | None = None,
    ) -> Result[str]:
        """Render ``value`` using a predefined CLDR style.

        ``target_zone`` defaults to the zone carried by ``value``.
        """
        locale = locale or self._default_locale
        try:
            resolved = FormatStyle.coerce(style)
        except ValueError as exc:
            return Failure(
                DateFormatError(
                    message=(
                        f"Unknown format style {style!r}; "
                        "expected one of short, medium, long, full."
                    ),
                    cause=exc,
                    pattern=str(style),
                )
            )
        zone = target_zone if target_zone is not None else value.zone
        try:
            moment = value.with_zone(zone).local
        except OverflowError as exc:
            return Failure(_outside_calendar(value, resolved.value, exc))
        try:
            text = babel_dates.format_datetime(
                moment,
                format=resolved.value,
                tzinfo=zone,
                locale=babel_locale(locale),
            )
        except (UnknownLocaleError, ValueError, OverflowError) as exc:
            return Failure(
                DateFormatError(
                    message=f"Cannot render style {resolved.value!r} for locale {locale!r}: {exc}",
                    cause=exc,
                    pattern=resolved.value,
                )
            )
        return Success(text)


def _outside_calendar(value: ZonedInstant, pattern: str, cause: OverflowError) -> DateFormatError:
    return DateFormatError(
        message=(
            f"Cannot render epoch millisecond {value.epoch_millis} with {pattern!r}: "
            "it lies outside the years 1 to 9999."
        ),
        cause=cause,
        pattern=pattern,
    )
