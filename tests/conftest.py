"""Shared test fixtures for chronomaster.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from chronomaster.config import ChronoConfig
from chronomaster.facade import ChronoMaster
from chronomaster.instant import ZonedInstant
from chronomaster.registry import FormatRegistry
from chronomaster.zones import UTC


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "chronomaster"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def kolkata() -> ZoneInfo:
    return ZoneInfo("Asia/Kolkata")


@pytest.fixture()
def new_york() -> ZoneInfo:
    return ZoneInfo("America/New_York")


@pytest.fixture()
def registry() -> FormatRegistry:
    """A fresh registry holding only the built-in patterns."""
    return FormatRegistry()


@pytest.fixture()
def halloween_noon() -> ZonedInstant:
    """2025-10-31T12:30:00Z shown in UTC."""
    return ZonedInstant.of(datetime(2025, 10, 31, 12, 30, tzinfo=timezone.utc), UTC)


@pytest.fixture()
def chrono() -> ChronoMaster:
    """A facade with UTC in and out, independent of the host zone."""
    return ChronoMaster(ChronoConfig(input_zone=UTC, output_zone=UTC))
