"""Date parser module.

Exports the ``DateParser`` class and the strict ISO-8601 helper.
"""
from __future__ import annotations

from chronomaster.parser.iso import parse_iso_zoned
from chronomaster.parser.parser import EPOCH_MILLIS_THRESHOLD, DateParser

__all__ = ["DateParser", "EPOCH_MILLIS_THRESHOLD", "parse_iso_zoned"]
