"""Unit tests for chronomaster.facade.ChronoMaster."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from chronomaster.errors import ConfigurationError, DateFormatError, DateParseError, NetworkTimeError
from chronomaster.facade import ChronoMaster
from chronomaster.instant import ZonedInstant
from chronomaster.result import Failure, Result, Success
from chronomaster.zones import UTC


class FixedTimeSource:
    """Trusted-time stub returning a preset result."""

    def __init__(self, result: Result[datetime]) -> None:
        self.result = result
        self.calls = 0

    async def fetch(self) -> Result[datetime]:
        self.calls += 1
        return self.result


# ===========================================================================
# initialize()
# ===========================================================================


class TestInitialize:
    def test_sets_both_zones(self, chrono: ChronoMaster, kolkata: ZoneInfo, new_york: ZoneInfo) -> None:
        chrono.initialize("Asia/Kolkata", "America/New_York")
        assert chrono.config.input_zone == kolkata
        assert chrono.config.output_zone == new_york

    def test_invalid_input_zone_keeps_previous(
        self, chrono: ChronoMaster, new_york: ZoneInfo, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="chronomaster.facade"):
            chrono.initialize("Mars/Olympus", "America/New_York")
        assert chrono.config.input_zone is UTC
        assert chrono.config.output_zone == new_york
        assert "Mars/Olympus" in caplog.text

    def test_invalid_output_zone_keeps_previous(self, chrono: ChronoMaster, kolkata: ZoneInfo) -> None:
        chrono.initialize("Asia/Kolkata", "Not/AZone")
        assert chrono.config.input_zone == kolkata
        assert chrono.config.output_zone is UTC

    def test_does_not_raise_for_bad_input(self, chrono: ChronoMaster) -> None:
        chrono.initialize("", "", ["bad [", ""])
        assert chrono.config.input_zone is UTC

    def test_custom_parsers_are_forwarded(self, chrono: ChronoMaster) -> None:
        chrono.initialize("UTC", "UTC", ["dd.MM.yyyy", "not a [pattern"])
        assert "dd.MM.yyyy" in chrono.config.registry
        assert chrono.parse_date("31.10.2025").unwrap().day == 31

    def test_single_custom_parser_string(self, chrono: ChronoMaster) -> None:
        before = len(chrono.config.registry)
        chrono.initialize("UTC", "UTC", "dd.MM.yyyy")
        assert len(chrono.config.registry) == before + 1
        assert isinstance(chrono.parse_date("."), Failure)

    def test_config_object_is_replaced_not_mutated(self, chrono: ChronoMaster) -> None:
        before = chrono.config
        chrono.initialize("Asia/Kolkata", "UTC")
        assert before.input_zone is UTC
        assert chrono.config is not before


# ===========================================================================
# parse_date / format_date
# ===========================================================================


class TestParseAndFormat:
    def test_parse_uses_default_input_zone(self, chrono: ChronoMaster) -> None:
        chrono.initialize("Asia/Kolkata", "UTC")
        value = chrono.parse_date("2025-10-31 18:00:00").unwrap()
        assert value.instant == datetime(2025, 10, 31, 12, 30, tzinfo=timezone.utc)

    def test_parse_override_zone(self, chrono: ChronoMaster) -> None:
        value = chrono.parse_date("2025-10-31 18:00:00", "Asia/Kolkata").unwrap()
        assert value.hour == 18
        assert value.zone_id == "Asia/Kolkata"

    def test_parse_invalid_override_zone(self, chrono: ChronoMaster) -> None:
        result = chrono.parse_date("2025-10-31", "Mars/Olympus")
        assert isinstance(result, Failure)
        assert isinstance(result.error, ConfigurationError)

    def test_format_scenario(self, chrono: ChronoMaster) -> None:
        result = chrono.format_date("2025-10-31T12:30:00Z", "dd MMM, yyyy 'at' hh:mm a")
        assert result == Success("31 Oct, 2025 at 12:30 PM")

    def test_format_with_override_zones(self, chrono: ChronoMaster) -> None:
        result = chrono.format_date(
            "31/10/2025 18:00:00", "HH:mm VV", "Asia/Kolkata", "America/New_York"
        )
        assert result.unwrap() == "08:30 America/New_York"

    def test_format_invalid_override_does_not_touch_defaults(self, chrono: ChronoMaster) -> None:
        result = chrono.format_date("2025-10-31", "yyyy", output_zone_id="Bad/Zone")
        assert isinstance(result.error, ConfigurationError)
        assert chrono.config.output_zone is UTC

    def test_format_parse_failure(self, chrono: ChronoMaster) -> None:
        result = chrono.format_date("not a date", "yyyy")
        assert isinstance(result.error, DateParseError)

    def test_format_epoch_past_calendar_range(self, chrono: ChronoMaster) -> None:
        parsed = chrono.parse_date("999999999999")
        assert parsed.unwrap().epoch_seconds == 999_999_999_999
        result = chrono.format_date("999999999999", "yyyy")
        assert isinstance(result, Failure)
        assert isinstance(result.error, DateFormatError)

    def test_format_bad_pattern(self, chrono: ChronoMaster) -> None:
        result = chrono.format_date("2025-10-31", "yyyy-qq")
        assert isinstance(result.error, DateFormatError)

    def test_format_locale_override(self, chrono: ChronoMaster) -> None:
        result = chrono.format_date("2025-10-31", "MMMM", locale="it_IT")
        assert result.unwrap() == "ottobre"

    def test_format_style(self, chrono: ChronoMaster) -> None:
        result = chrono.format_date_style("2025-10-31T12:30:00Z", "long", "de_DE")
        assert "Oktober" in result.unwrap()

    def test_format_style_uses_config_locale(self, chrono: ChronoMaster) -> None:
        result = chrono.format_date_style("2025-10-31T12:30:00Z", "full")
        assert "Friday" in result.unwrap()

    def test_format_style_invalid_zone(self, chrono: ChronoMaster) -> None:
        result = chrono.format_date_style("2025-10-31", "full", output_zone_id="Bad/Zone")
        assert isinstance(result.error, ConfigurationError)

    def test_format_instant(self, chrono: ChronoMaster, halloween_noon: ZonedInstant) -> None:
        result = chrono.format_instant(halloween_noon, "yyyy-MM-dd HH:mm", "Asia/Tokyo")
        assert result.unwrap() == "2025-10-31 21:30"


# ===========================================================================
# Arithmetic and relative time
# ===========================================================================


class TestArithmeticAndRelative:
    def test_plus_and_minus_days(self, chrono: ChronoMaster) -> None:
        value = chrono.parse_date("2025-10-31").unwrap()
        later = chrono.plus_days(value, 1)
        assert (later.month, later.day) == (11, 1)
        assert chrono.minus_days(later, 1) == value

    def test_parse_shift_format(self, chrono: ChronoMaster) -> None:
        value = chrono.parse_date("28/02/2024").unwrap()
        shifted = chrono.plus_days(value, 1)
        assert chrono.format_instant(shifted, "dd/MM/yyyy").unwrap() == "29/02/2024"

    def test_to_relative_time(self, chrono: ChronoMaster, halloween_noon: ZonedInstant) -> None:
        now = halloween_noon.instant + timedelta(seconds=300)
        assert chrono.to_relative_time(halloween_noon, now) == "5 minutes ago"


# ===========================================================================
# get_true_time()
# ===========================================================================


class TestTrueTime:
    def test_success_shown_in_output_zone(self, chrono: ChronoMaster, kolkata: ZoneInfo) -> None:
        chrono.initialize("UTC", "Asia/Kolkata")
        moment = datetime(2025, 10, 31, 12, 30, tzinfo=timezone.utc)
        result = asyncio.run(chrono.get_true_time(FixedTimeSource(Success(moment))))
        assert result.unwrap().instant == moment
        assert result.unwrap().zone == kolkata

    def test_failure_passes_through_without_retry(self, chrono: ChronoMaster) -> None:
        source = FixedTimeSource(Failure(NetworkTimeError("offline", host="ntp.test")))
        result = asyncio.run(chrono.get_true_time(source))
        assert isinstance(result.error, NetworkTimeError)
        assert source.calls == 1

    def test_constructor_time_source(self) -> None:
        moment = datetime(2025, 1, 1, tzinfo=timezone.utc)
        chrono = ChronoMaster(time_source=FixedTimeSource(Success(moment)))
        assert asyncio.run(chrono.get_true_time()).unwrap().instant == moment
