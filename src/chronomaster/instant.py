"""``ZonedInstant``: an absolute point in time paired with a display zone.

The instant is stored as a whole number of microseconds since the Unix
epoch and never depends on the zone.  Any integer is a valid instant,
including ones far outside the years ``datetime`` can represent.  The
zone only decides how the instant decomposes into local fields (year,
month, day, hour, ...) and how it is displayed; those views raise
``OverflowError`` when the instant has no ``datetime`` equivalent.

Example
-------
::

    from zoneinfo import ZoneInfo
    from chronomaster.instant import ZonedInstant

    value = ZonedInstant.from_epoch_seconds(1730389800, ZoneInfo("Asia/Kolkata"))
    value.local        # datetime(2024, 10, 31, 21, 20, tzinfo=ZoneInfo('Asia/Kolkata'))
    value.with_zone(ZoneInfo("UTC")).hour   # 15
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo

from chronomaster.zones import UTC, zone_id

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _resolve_local(naive: datetime, zone: tzinfo) -> datetime:
    """Attach ``zone`` to a naive local time and normalise to UTC.

    ``fold=0`` picks the earlier offset in an overlap; in a gap it uses
    the offset in force before the transition, which moves the wall time
    forward by the length of the gap.
    """
    return naive.replace(tzinfo=zone, fold=0).astimezone(UTC)


def epoch_micros_of(value: datetime) -> int:
    """Microseconds between the epoch and the aware ``value``."""
    delta = value - EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds


@dataclass(frozen=True)
class ZonedInstant:
    """An absolute instant with an associated zone.

    Parameters
    ----------
    epoch_micros:
        Microseconds since 1970-01-01T00:00:00Z.
    zone:
        The zone used to decompose and display the instant.
    """

    epoch_micros: int
    zone: tzinfo

    def __post_init__(self) -> None:
        if not isinstance(self.epoch_micros, int) or isinstance(self.epoch_micros, bool):
            raise TypeError(
                f"epoch_micros must be an int, got {type(self.epoch_micros).__name__}"
            )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, value: datetime, zone: tzinfo) -> "ZonedInstant":
        """Build from a ``datetime``; naive values are local times in ``zone``."""
        if value.tzinfo is None:
            value = _resolve_local(value, zone)
        elif value.utcoffset() is None:
            raise ValueError("ZonedInstant requires a timezone-aware datetime")
        return cls(epoch_micros_of(value), zone)

    @classmethod
    def from_epoch_seconds(cls, seconds: int, zone: tzinfo = UTC) -> "ZonedInstant":
        return cls(seconds * 1_000_000, zone)

    @classmethod
    def from_epoch_millis(cls, millis: int, zone: tzinfo = UTC) -> "ZonedInstant":
        return cls(millis * 1000, zone)

    @classmethod
    def now(cls, zone: tzinfo = UTC) -> "ZonedInstant":
        return cls.of(datetime.now(UTC), zone)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def instant(self) -> datetime:
        """The instant as an aware UTC ``datetime``.

        Raises
        ------
        OverflowError
            If the instant lies outside the years 1 to 9999.
        """
        return EPOCH + timedelta(microseconds=self.epoch_micros)

    @property
    def local(self) -> datetime:
        """The instant expressed as a wall-clock time in ``zone``.

        Raises
        ------
        OverflowError
            If the local time lies outside the years 1 to 9999.
        """
        return self.instant.astimezone(self.zone)

    @property
    def zone_id(self) -> str:
        return zone_id(self.zone)

    @property
    def year(self) -> int:
        return self.local.year

    @property
    def month(self) -> int:
        return self.local.month

    @property
    def day(self) -> int:
        return self.local.day

    @property
    def hour(self) -> int:
        return self.local.hour

    @property
    def minute(self) -> int:
        return self.local.minute

    @property
    def second(self) -> int:
        return self.local.second

    @property
    def microsecond(self) -> int:
        return self.local.microsecond

    @property
    def weekday(self) -> int:
        """Day of week, Monday == 0."""
        return self.local.weekday()

    @property
    def epoch_seconds(self) -> int:
        """Whole seconds since the epoch, floored."""
        return self.epoch_micros // 1_000_000

    @property
    def epoch_millis(self) -> int:
        """Whole milliseconds since the epoch, floored."""
        return self.epoch_micros // 1000

    @property
    def in_calendar_range(self) -> bool:
        """Whether ``local`` and the other field views can be computed."""
        try:
            self.local
        except OverflowError:
            return False
        return True

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def with_zone(self, zone: tzinfo) -> "ZonedInstant":
        """Return the same instant displayed in ``zone``."""
        return ZonedInstant(self.epoch_micros, zone)

    def plus_days(self, days: int) -> "ZonedInstant":
        """Shift the local date by ``days`` whole days, keeping wall time.

        Raises
        ------
        OverflowError
            If the start or the result lies outside the years 1 to 9999.
        """
        naive = self.local.replace(tzinfo=None) + timedelta(days=days)
        return ZonedInstant.of(naive, self.zone)

    def minus_days(self, days: int) -> "ZonedInstant":
        return self.plus_days(-days)

    def isoformat(self) -> str:
        """ISO-8601 local time with offset, followed by ``[zone-id]``."""
        return f"{self.local.isoformat()}[{self.zone_id}]"

    def __str__(self) -> str:
        return self.isoformat()
