"""``ChronoMaster``: the single entry point UI and CLI callers use.

The facade owns one immutable ``ChronoConfig`` and wires the parser,
the formatter and the relative-time formatter to it.  Every fallible
call returns a ``Result``; nothing here raises for bad user input.

Example
-------
::

    from chronomaster import ChronoMaster

    chrono = ChronoMaster()
    chrono.initialize("UTC", "Asia/Kolkata", ["dd.MM.yyyy"])
    chrono.format_date("2025-10-31T12:30:00Z", "dd MMM yyyy, hh:mm a")
    # Success(value='31 Oct 2025, 06:00 PM')
"""
from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Iterable
from datetime import tzinfo

from chronomaster.config import ChronoConfig
from chronomaster.formatter import DateFormatter, FormatStyle
from chronomaster.instant import ZonedInstant
from chronomaster.ntp import NtpTimeSource, TrustedTimeSource
from chronomaster.parser import DateParser
from chronomaster.relative import PointInTime, to_relative
from chronomaster.result import Failure, Result, Success
from chronomaster.zones import resolve_zone, zone_id

logger = logging.getLogger(__name__)


class ChronoMaster:
    """Parse, convert and render date strings with shared defaults.

    Parameters
    ----------
    config:
        Initial configuration.  Defaults to UTC input, the host zone for
        output, ``en_US`` and the built-in patterns.
    time_source:
        Trusted-time collaborator used by ``get_true_time``.  Defaults
        to ``NtpTimeSource()``.
    """

    def __init__(
        self,
        config: ChronoConfig | None = None,
        time_source: TrustedTimeSource | None = None,
    ) -> None:
        self._config = config if config is not None else ChronoConfig()
        self._time_source = time_source
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        config = self._config
        return (
            f"ChronoMaster(input_zone={zone_id(config.input_zone)!r}, "
            f"output_zone={zone_id(config.output_zone)!r}, locale={config.locale!r})"
        )

    @property
    def config(self) -> ChronoConfig:
        """The current configuration snapshot."""
        return self._config

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def initialize(
        self,
        input_zone_id: str,
        output_zone_id: str,
        custom_parsers: Iterable[str] | str = (),
    ) -> None:
        """Set the default zones and register extra parse patterns.

        Each zone is validated on its own.  An invalid zone is logged as a
        warning and the previous value is kept; the other zone and the
        custom patterns are still applied.  Invalid patterns are skipped
        by the registry with a warning.
        """
        with self._lock:
            current = self._config
            input_zone = self._validated_zone(input_zone_id, current.input_zone)
            output_zone = self._validated_zone(output_zone_id, current.output_zone)
            self._config = dataclasses.replace(
                current, input_zone=input_zone, output_zone=output_zone
            )
            added = current.registry.register(custom_parsers)
        logger.debug(
            "Initialized: input=%s output=%s, %d custom pattern(s) added",
            zone_id(input_zone),
            zone_id(output_zone),
            added,
        )

    @staticmethod
    def _validated_zone(zone_id_text: str, previous: tzinfo) -> tzinfo:
        resolved = resolve_zone(zone_id_text)
        if isinstance(resolved, Failure):
            logger.warning("%s Keeping %s.", resolved.message, zone_id(previous))
            return previous
        return resolved.value

    def _zone_override(self, zone_id_text: str | None, default: tzinfo) -> Result[tzinfo]:
        if zone_id_text is None:
            return Success(default)
        return resolve_zone(zone_id_text)

    # ------------------------------------------------------------------
    # Parsing and formatting
    # ------------------------------------------------------------------

    def parse_date(self, text: str, input_zone_id: str | None = None) -> Result[ZonedInstant]:
        """Parse ``text`` into a ``ZonedInstant``.

        ``input_zone_id`` overrides the default input zone for this call;
        an invalid override is a ``Failure(ConfigurationError)``.
        """
        config = self._config
        zone = self._zone_override(input_zone_id, config.input_zone)
        if isinstance(zone, Failure):
            return zone
        return DateParser(config.registry).parse(text, zone.value)

    def format_date(
        self,
        text: str,
        pattern: str,
        input_zone_id: str | None = None,
        output_zone_id: str | None = None,
        locale: str | None = None,
    ) -> Result[str]:
        """Parse ``text`` and render it with ``pattern`` in the output zone.

        Parameters
        ----------
        text:
            Date string in any supported format.
        pattern:
            Output pattern, e.g. ``"dd MMM, yyyy 'at' hh:mm a"``.
        input_zone_id:
            Overrides the default input zone for this call.
        output_zone_id:
            Overrides the default output zone for this call.
        locale:
            Overrides the configured locale for month, weekday and AM/PM text.

        Returns
        -------
        Result[str]
            The rendered text, or the first failure met: an invalid zone
            override, an unparseable input or an invalid pattern.
        """
        config = self._config
        output_zone = self._zone_override(output_zone_id, config.output_zone)
        if isinstance(output_zone, Failure):
            return output_zone
        parsed = self.parse_date(text, input_zone_id)
        if isinstance(parsed, Failure):
            return parsed
        return DateFormatter(config.locale).format_pattern(
            parsed.value, pattern, output_zone.value, locale
        )

    def format_date_style(
        self,
        text: str,
        style: FormatStyle | str,
        locale: str | None = None,
        output_zone_id: str | None = None,
        input_zone_id: str | None = None,
    ) -> Result[str]:
        """Parse ``text`` and render it in a predefined locale style."""
        config = self._config
        output_zone = self._zone_override(output_zone_id, config.output_zone)
        if isinstance(output_zone, Failure):
            return output_zone
        parsed = self.parse_date(text, input_zone_id)
        if isinstance(parsed, Failure):
            return parsed
        return DateFormatter(config.locale).format_style(
            parsed.value, style, locale, output_zone.value
        )

    def format_instant(
        self,
        value: ZonedInstant,
        pattern: str,
        output_zone_id: str | None = None,
    ) -> Result[str]:
        """Render an already parsed value, e.g. after date arithmetic."""
        config = self._config
        output_zone = self._zone_override(output_zone_id, config.output_zone)
        if isinstance(output_zone, Failure):
            return output_zone
        return DateFormatter(config.locale).format_pattern(value, pattern, output_zone.value)

    # ------------------------------------------------------------------
    # Relative time and arithmetic
    # ------------------------------------------------------------------

    def to_relative_time(self, target: PointInTime, now: PointInTime | None = None) -> str:
        """Describe ``target`` relative to ``now`` ("5 minutes ago")."""
        return to_relative(target, now)

    @staticmethod
    def plus_days(value: ZonedInstant, days: int) -> ZonedInstant:
        """Shift by whole local days; see ``ZonedInstant.plus_days``."""
        return value.plus_days(days)

    @staticmethod
    def minus_days(value: ZonedInstant, days: int) -> ZonedInstant:
        return value.minus_days(days)

    # ------------------------------------------------------------------
    # Trusted time
    # ------------------------------------------------------------------

    async def get_true_time(
        self, source: TrustedTimeSource | None = None
    ) -> Result[ZonedInstant]:
        """Fetch the trusted current time, shown in the default output zone.

        Uses ``source`` when given, else the instance's time source.  The
        request is made once; failures are returned, never retried.
        """
        if source is None:
            if self._time_source is None:
                self._time_source = NtpTimeSource()
            source = self._time_source
        fetched = await source.fetch()
        if isinstance(fetched, Failure):
            return fetched
        return Success(ZonedInstant.of(fetched.value, self._config.output_zone))
