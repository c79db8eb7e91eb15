"""Token definitions for date/time pattern strings.

A pattern such as ``"dd MMM, yyyy 'at' hh:mm a"`` is scanned into a flat
list of ``PatternToken`` values.  Each token is either a field (a run of
one pattern letter, e.g. ``MMM``) or a literal piece of text.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final


class FieldKind(Enum):
    """Every date/time field a pattern letter can stand for."""

    YEAR = auto()
    MONTH = auto()
    DAY_OF_MONTH = auto()
    DAY_OF_YEAR = auto()
    WEEKDAY = auto()
    AM_PM = auto()
    HOUR_OF_DAY = auto()  # H: 0-23
    CLOCK_HOUR_OF_DAY = auto()  # k: 1-24
    CLOCK_HOUR_OF_AM_PM = auto()  # h: 1-12
    HOUR_OF_AM_PM = auto()  # K: 0-11
    MINUTE = auto()
    SECOND = auto()
    FRACTION = auto()
    OFFSET_X = auto()
    OFFSET_LOWER_X = auto()
    OFFSET_Z = auto()
    ZONE_NAME = auto()
    ZONE_ID = auto()
    LITERAL = auto()


@dataclass(frozen=True)
class LetterRule:
    """What a pattern letter means and which run lengths are legal."""

    kind: FieldKind
    min_width: int
    max_width: int | None


LETTERS: Final[dict[str, LetterRule]] = {
    "y": LetterRule(FieldKind.YEAR, 1, None),
    "u": LetterRule(FieldKind.YEAR, 1, None),
    "M": LetterRule(FieldKind.MONTH, 1, 5),
    "L": LetterRule(FieldKind.MONTH, 1, 5),
    "d": LetterRule(FieldKind.DAY_OF_MONTH, 1, 2),
    "D": LetterRule(FieldKind.DAY_OF_YEAR, 1, 3),
    "E": LetterRule(FieldKind.WEEKDAY, 1, 5),
    "a": LetterRule(FieldKind.AM_PM, 1, 1),
    "H": LetterRule(FieldKind.HOUR_OF_DAY, 1, 2),
    "k": LetterRule(FieldKind.CLOCK_HOUR_OF_DAY, 1, 2),
    "h": LetterRule(FieldKind.CLOCK_HOUR_OF_AM_PM, 1, 2),
    "K": LetterRule(FieldKind.HOUR_OF_AM_PM, 1, 2),
    "m": LetterRule(FieldKind.MINUTE, 1, 2),
    "s": LetterRule(FieldKind.SECOND, 1, 2),
    "S": LetterRule(FieldKind.FRACTION, 1, 9),
    "X": LetterRule(FieldKind.OFFSET_X, 1, 5),
    "x": LetterRule(FieldKind.OFFSET_LOWER_X, 1, 5),
    "Z": LetterRule(FieldKind.OFFSET_Z, 1, 5),
    "z": LetterRule(FieldKind.ZONE_NAME, 1, 4),
    "V": LetterRule(FieldKind.ZONE_ID, 2, 2),
}

# Characters reserved for pattern features that are not supported.
RESERVED: Final[frozenset[str]] = frozenset("[]{}#")


@dataclass(frozen=True)
class PatternToken:
    """One scanned pattern element.

    Parameters
    ----------
    kind:
        The field this token stands for, or ``FieldKind.LITERAL``.
    width:
        Run length of the pattern letter (``0`` for literals).
    text:
        The raw pattern text for fields, or the literal text to match
        and print for literals.
    offset:
        0-based position of the token in the pattern string.
    """

    kind: FieldKind
    width: int
    text: str
    offset: int

    @property
    def is_literal(self) -> bool:
        return self.kind is FieldKind.LITERAL

    def __str__(self) -> str:
        if self.is_literal:
            return f"LITERAL({self.text!r})"
        return f"{self.kind.name}({self.text})"
