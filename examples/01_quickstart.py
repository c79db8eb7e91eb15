#!/usr/bin/env python3
"""Example: Quickstart for chronomaster

Parse timestamps of unknown format, render them in another zone and
locale, and describe them relative to now.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install chronomaster
"""
from __future__ import annotations

import chronomaster

INPUTS = [
    "1730389800",
    "1730389800123",
    "2025-10-31T12:30:00Z",
    "2025-10-31T18:00:00+05:30[Asia/Kolkata]",
    "31/10/2025 18:45:00",
    "10/31/2025",
    "Fri, 31 Oct 2025 12:30:00 GMT",
    "Oct 31, 2025",
    "not a date",
]


def main() -> None:
    print(f"chronomaster version: {chronomaster.__version__}")

    for text in INPUTS:
        result = chronomaster.parse(text, zone="Europe/London")
        if isinstance(result, chronomaster.Failure):
            print(f"  {text!r:45} -> error: {result.message}")
            continue
        value = result.value
        rendered = chronomaster.format(value, "EEE dd MMM yyyy, HH:mm z", zone="America/New_York")
        print(f"  {text!r:45} -> {rendered.unwrap():32} ({chronomaster.to_relative(value)})")


if __name__ == "__main__":
    main()
