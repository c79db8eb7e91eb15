"""Error taxonomy for chronomaster.

Errors are values: public operations return them inside a
``chronomaster.result.Failure`` instead of raising.  They are still
``Exception`` subclasses so that ``Failure.unwrap()`` and the CLI can
raise them when a caller prefers exceptions.

Every message names the offending input and says briefly why it failed,
so it can be shown to a user as-is.
"""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ChronoError(Exception):
    """Base class of every chronomaster error.

    Parameters
    ----------
    message:
        Human-readable description of the failure.
    cause:
        The lower-level exception that triggered this error, if any.
    """

    message: str
    cause: BaseException | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.message

    # dataclass(frozen=True) doesn't call Exception.__init__ automatically
    def __post_init__(self) -> None:
        object.__setattr__(self, "args", (self.message,))


@dataclass(frozen=True)
class DateParseError(ChronoError):
    """No candidate format matched the input string."""

    text: str = ""

    @classmethod
    def no_match(cls, text: str) -> "DateParseError":
        return cls(
            message=(
                f"Failed to parse date string: {text!r}. "
                "None of the supported formats matched."
            ),
            text=text,
        )

    @classmethod
    def out_of_range(cls, text: str, cause: BaseException) -> "DateParseError":
        return cls(
            message=f"Epoch value {text!r} has too many digits to interpret.",
            cause=cause,
            text=text,
        )


@dataclass(frozen=True)
class DateFormatError(ChronoError):
    """An output pattern or a style/locale combination could not be rendered."""

    pattern: str = ""


@dataclass(frozen=True)
class ConfigurationError(ChronoError):
    """A zone identifier (or locale) given as configuration is invalid."""

    zone_id: str = ""

    @classmethod
    def invalid_zone(
        cls, zone_id: str, cause: BaseException | None = None
    ) -> "ConfigurationError":
        return cls(
            message=f"Invalid timezone ID {zone_id!r}: not a known zone or offset.",
            cause=cause,
            zone_id=zone_id,
        )


@dataclass(frozen=True)
class NetworkTimeError(ChronoError):
    """The trusted network time could not be retrieved."""

    host: str = ""
