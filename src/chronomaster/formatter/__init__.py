"""Date formatter module.

Exports the ``DateFormatter`` class and the ``FormatStyle`` enum.
"""
from __future__ import annotations

from chronomaster.formatter.formatter import DateFormatter, FormatStyle

__all__ = ["DateFormatter", "FormatStyle"]
