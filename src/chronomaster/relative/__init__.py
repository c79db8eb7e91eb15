"""Relative time module.

Exports ``to_relative`` and the ``PointInTime`` alias.
"""
from __future__ import annotations

from chronomaster.relative.relative import PointInTime, describe, to_relative

__all__ = ["PointInTime", "describe", "to_relative"]
