"""Format registry for chronomaster.

An ordered, append-only catalog of ``DatePattern`` candidates.  The
order of insertion is the match priority used by the date parser: the
built-in patterns come first, custom patterns follow in the order they
were registered.

Registration never fails.  A pattern string that does not compile is
logged at WARNING level and skipped; everything already registered is
left untouched.

Example
-------
::

    from chronomaster.registry import FormatRegistry

    registry = FormatRegistry()
    registry.register(["dd.MM.yyyy", "yyyyMMdd'T'HHmm", "not a [pattern"])
    len(registry)   # built-ins + 2; the invalid spec was skipped

Concurrency
-----------
Appends are serialised by a lock.  Readers iterate an immutable tuple
snapshot, so a parse running concurrently with ``register`` sees either
the old or the new catalog, never a partial one.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator
from typing import Final

from babel import UnknownLocaleError

from chronomaster.pattern import DatePattern, PatternSyntaxError, compile_pattern
from chronomaster.pattern.names import DEFAULT_LOCALE

logger = logging.getLogger(__name__)

BUILTIN_PATTERNS: Final[tuple[str, ...]] = (
    # ISO 8601 variations the strict ISO step does not cover
    "yyyy-MM-dd'T'HH:mm:ss.SSSXXX",
    "yyyy-MM-dd'T'HH:mm:ssXXX",
    "yyyy-MM-dd'T'HH:mm:ss.SSS",
    "yyyy-MM-dd'T'HH:mm:ss",
    "yyyy-MM-dd'T'HH:mm",
    # Common server formats
    "yyyy-MM-dd HH:mm:ss",
    "yyyy-MM-dd",
    # Day-first before month-first; "10/31/2025" fails the first and falls through
    "dd/MM/yyyy HH:mm:ss",
    "dd/MM/yyyy",
    "MM/dd/yyyy HH:mm:ss",
    "MM/dd/yyyy",
    # Textual formats
    "EEE, dd MMM yyyy HH:mm:ss z",
    "MMM dd, yyyy",
)


class FormatRegistry:
    """Ordered registry of candidate parse patterns.

    Parameters
    ----------
    locale:
        Locale whose month/weekday names registered patterns accept.
    builtins:
        Pattern strings seeded at construction, in priority order.
    """

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        builtins: Iterable[str] = BUILTIN_PATTERNS,
    ) -> None:
        self._locale = locale
        self._lock = threading.Lock()
        self._patterns: tuple[DatePattern, ...] = ()
        self.register(builtins)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, specs: Iterable[str] | str) -> int:
        """Compile and append each pattern string in ``specs``.

        Invalid strings are skipped with a warning; a spec that is already
        registered is skipped silently.  This call never raises for bad
        pattern input.

        Parameters
        ----------
        specs:
            Pattern strings, in the priority order they should be tried.
            A single string is one pattern, not a sequence of characters.

        Returns
        -------
        int
            How many patterns were appended.
        """
        if isinstance(specs, str):
            specs = [specs]
        compiled: list[DatePattern] = []
        for spec in specs:
            if not isinstance(spec, str):
                logger.warning("Ignoring non-string date pattern %r", spec)
                continue
            try:
                compiled.append(compile_pattern(spec, self._locale))
            except PatternSyntaxError as exc:
                logger.warning("Skipping invalid date pattern %r: %s", spec, exc.pattern_message)
            except (UnknownLocaleError, ValueError) as exc:
                logger.warning("Skipping date pattern %r: %s", spec, exc)

        with self._lock:
            known = {pattern.spec for pattern in self._patterns}
            added: list[DatePattern] = []
            for pattern in compiled:
                if pattern.spec in known:
                    logger.debug("Date pattern %r already registered; skipping.", pattern.spec)
                    continue
                known.add(pattern.spec)
                added.append(pattern)
            self._patterns = self._patterns + tuple(added)

        for pattern in added:
            logger.debug("Registered date pattern %r", pattern.spec)
        return len(added)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def locale(self) -> str:
        return self._locale

    def patterns(self) -> tuple[DatePattern, ...]:
        """Return a snapshot of the registered patterns in priority order."""
        return self._patterns

    def specs(self) -> list[str]:
        """Return the registered pattern strings in priority order."""
        return [pattern.spec for pattern in self._patterns]

    def __iter__(self) -> Iterator[DatePattern]:
        return iter(self._patterns)

    def __contains__(self, spec: object) -> bool:
        """Support ``"dd/MM/yyyy" in registry`` membership test."""
        if isinstance(spec, DatePattern):
            spec = spec.spec
        return any(pattern.spec == spec for pattern in self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"FormatRegistry(locale={self._locale!r}, patterns={len(self._patterns)})"
