#!/usr/bin/env python3
"""Example: ChronoMaster facade with custom patterns and locale styles

Configures default zones once, registers extra parse patterns, then
formats by pattern, by locale style and after date arithmetic.

Usage:
    python examples/02_facade_and_config.py
"""
from __future__ import annotations

import logging

from chronomaster import ChronoMaster, Success

logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")


def main() -> None:
    chrono = ChronoMaster()

    # The invalid pattern and the unknown zone are logged and skipped
    chrono.initialize("Asia/Kolkata", "Not/AZone", ["dd.MM.yyyy HH:mm", "not a [pattern"])
    chrono.initialize("Asia/Kolkata", "Europe/Berlin")
    print(chrono)

    print(chrono.format_date("31.10.2025 18:00", "dd MMM, yyyy 'at' hh:mm a"))

    for style in ("short", "medium", "long", "full"):
        result = chrono.format_date_style("2025-10-31T12:30:00Z", style, locale="de_DE")
        print(f"  {style:6} {result.unwrap()}")

    parsed = chrono.parse_date("2024-02-28 09:00:00")
    if isinstance(parsed, Success):
        leap_day = chrono.plus_days(parsed.value, 1)
        print(chrono.format_instant(leap_day, "EEEE d MMMM yyyy HH:mm VV").unwrap())


if __name__ == "__main__":
    main()
