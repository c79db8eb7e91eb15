"""Date parser: interprets a timestamp string of unknown format.

Strategies are tried in strict order and the first success wins:

1. **Epoch**: the whole input is a base-10 integer (optional sign,
   ASCII digits).  Values below ``1_000_000_000_000`` are epoch seconds,
   everything else epoch milliseconds.  This step never falls through
   and accepts any magnitude; instants past the calendar range only
   fail once they are decomposed or rendered.
2. **Strict ISO-8601** with a mandatory ``Z``/offset and an optional
   ``[Zone/Id]`` suffix.  The embedded offset is authoritative.
3. **Registry scan**: every ``FormatRegistry`` pattern in priority
   order; only whole-input matches count, missing zone information is
   taken from the assumed zone.

The input is used verbatim: no trimming, no digit normalisation.

Usage
-----
::

    from chronomaster.parser import DateParser
    from chronomaster.registry import FormatRegistry
    from chronomaster.zones import UTC

    parser = DateParser(FormatRegistry())
    result = parser.parse("31/10/2025", UTC)
"""
from __future__ import annotations

import logging
import re
from datetime import tzinfo
from typing import Final

from chronomaster.errors import DateParseError
from chronomaster.instant import ZonedInstant
from chronomaster.parser.iso import parse_iso_zoned
from chronomaster.pattern import PatternMismatch
from chronomaster.registry import FormatRegistry
from chronomaster.result import Failure, Result, Success

logger = logging.getLogger(__name__)

EPOCH_MILLIS_THRESHOLD: Final[int] = 1_000_000_000_000

_INTEGER: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")


class DateParser:
    """Parses strings into ``ZonedInstant`` values.

    Parameters
    ----------
    registry:
        The ordered catalog of candidate patterns for step 3.
    """

    def __init__(self, registry: FormatRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> FormatRegistry:
        return self._registry

    def parse(self, text: str, assumed_zone: tzinfo) -> Result[ZonedInstant]:
        """Parse ``text``, attaching ``assumed_zone`` where the input has none.

        Parameters
        ----------
        text:
            The raw date string or epoch number.
        assumed_zone:
            Zone for epoch values (display only) and for registry patterns
            without offset/zone fields.

        Returns
        -------
        Result[ZonedInstant]
            ``Success`` with the parsed value, or ``Failure`` carrying a
            ``DateParseError`` that names ``text``.
        """
        if _INTEGER.fullmatch(text):
            return self._parse_epoch(text, assumed_zone)

        iso = parse_iso_zoned(text)
        if iso is not None:
            return Success(iso)

        for pattern in self._registry:
            try:
                value = pattern.parse(text, assumed_zone)
            except PatternMismatch as exc:
                logger.debug("Pattern %r rejected %r: %s", pattern.spec, text, exc)
                continue
            logger.debug("Parsed %r with pattern %r", text, pattern.spec)
            return Success(value)

        return Failure(DateParseError.no_match(text))

    @staticmethod
    def _parse_epoch(text: str, assumed_zone: tzinfo) -> Result[ZonedInstant]:
        try:
            epoch = int(text)
        except ValueError as exc:
            # Digit strings beyond the interpreter's int conversion limit.
            return Failure(DateParseError.out_of_range(text, exc))
        if epoch < EPOCH_MILLIS_THRESHOLD:
            return Success(ZonedInstant.from_epoch_seconds(epoch, assumed_zone))
        return Success(ZonedInstant.from_epoch_millis(epoch, assumed_zone))
