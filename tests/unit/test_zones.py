"""Unit tests for chronomaster.zones: zone id resolution and rendering."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from chronomaster import zones
from chronomaster.errors import ConfigurationError
from chronomaster.result import Failure, Success
from chronomaster.zones import (
    UTC,
    format_offset,
    lookup_zone,
    lookup_zone_abbreviation,
    lookup_zone_text,
    offset_zone,
    resolve_zone,
    resolve_zone_text,
    system_zone,
    zone_id,
)


# ===========================================================================
# lookup_zone / resolve_zone
# ===========================================================================


class TestLookupZone:
    @pytest.mark.parametrize("alias", ["UTC", "GMT", "Z", "UT", "Etc/UTC"])
    def test_utc_aliases(self, alias: str) -> None:
        assert lookup_zone(alias) is UTC

    def test_region_key(self) -> None:
        assert lookup_zone("Asia/Kolkata") == ZoneInfo("Asia/Kolkata")

    @pytest.mark.parametrize(
        "zone_text, seconds",
        [
            ("+05:30", 19800),
            ("-03:00", -10800),
            ("UTC+01:00", 3600),
            ("GMT-0800", -28800),
            ("+5", 18000),
        ],
    )
    def test_fixed_offsets(self, zone_text: str, seconds: int) -> None:
        zone = lookup_zone(zone_text)
        assert zone.utcoffset(None) == timedelta(seconds=seconds)

    @pytest.mark.parametrize("bad", ["Mars/Olympus", "", "+25:00", "../etc/passwd", "/abs"])
    def test_invalid_raises_configuration_error(self, bad: str) -> None:
        with pytest.raises(ConfigurationError) as info:
            lookup_zone(bad)
        assert info.value.zone_id == bad

    def test_resolve_success(self) -> None:
        result = resolve_zone("Europe/Paris")
        assert isinstance(result, Success)
        assert result.value == ZoneInfo("Europe/Paris")

    def test_resolve_failure(self) -> None:
        result = resolve_zone("Not/AZone")
        assert isinstance(result, Failure)
        assert isinstance(result.error, ConfigurationError)
        assert "Not/AZone" in result.message


# ===========================================================================
# lookup_zone_text
# ===========================================================================


class TestLookupZoneText:
    @pytest.mark.parametrize("abbr, hours", [("EST", -5), ("PDT", -7), ("cst", -6)])
    def test_rfc822_abbreviations(self, abbr: str, hours: int) -> None:
        zone = lookup_zone_text(abbr)
        assert zone is not None
        assert zone.utcoffset(None) == timedelta(hours=hours)

    def test_gmt(self) -> None:
        assert lookup_zone_text("GMT") is UTC

    def test_unknown_is_none(self) -> None:
        assert lookup_zone_text("XYZ") is None


# ===========================================================================
# Zone abbreviations
# ===========================================================================


class TestZoneAbbreviations:
    @pytest.mark.parametrize(
        "abbr, seconds", [("CEST", 7200), ("cet", 3600), ("JST", 32400), ("BST", 3600)]
    )
    def test_unambiguous_abbreviations(self, abbr: str, seconds: int) -> None:
        resolved = lookup_zone_abbreviation(abbr)
        assert resolved is not None
        zone, offset = resolved
        assert offset == seconds
        assert zone.utcoffset(None) == timedelta(seconds=seconds)

    def test_preferred_zone_decides_shared_abbreviation(self, kolkata: ZoneInfo) -> None:
        assert lookup_zone_abbreviation("IST", kolkata) == (kolkata, 19800)
        dublin = ZoneInfo("Europe/Dublin")
        assert lookup_zone_abbreviation("IST", dublin) == (dublin, 3600)

    def test_territory_decides_shared_abbreviation(self) -> None:
        resolved = lookup_zone_abbreviation("IST", territory="IN")
        assert resolved is not None
        assert resolved[1] == 19800

    def test_unknown_abbreviation(self) -> None:
        assert lookup_zone_abbreviation("XYZT") is None

    def test_resolve_zone_text_region_key_keeps_rules(self) -> None:
        assert resolve_zone_text("Europe/Paris") == (ZoneInfo("Europe/Paris"), None)

    def test_resolve_zone_text_preferred_beats_rfc_822(self) -> None:
        shanghai = ZoneInfo("Asia/Shanghai")
        assert resolve_zone_text("CST", shanghai) == (shanghai, 28800)
        zone, offset = resolve_zone_text("CST")  # type: ignore[misc]
        assert offset is None
        assert zone.utcoffset(None) == timedelta(hours=-6)

    def test_resolve_zone_text_unknown(self) -> None:
        assert resolve_zone_text("XYZT") is None


# ===========================================================================
# Rendering helpers
# ===========================================================================


class TestZoneHelpers:
    def test_offset_zone_zero_is_utc(self) -> None:
        assert offset_zone(0) is UTC

    def test_zone_id_region(self) -> None:
        assert zone_id(ZoneInfo("Asia/Tokyo")) == "Asia/Tokyo"

    def test_zone_id_utc(self) -> None:
        assert zone_id(timezone.utc) == "UTC"

    def test_zone_id_fixed(self) -> None:
        assert zone_id(offset_zone(-9000)) == "-02:30"

    @pytest.mark.parametrize(
        "total, colon, seconds, expected",
        [
            (19800, True, False, "+05:30"),
            (19800, False, False, "+0530"),
            (-3600, True, False, "-01:00"),
            (3725, True, True, "+01:02:05"),
            (3720, True, True, "+01:02"),
        ],
    )
    def test_format_offset(self, total: int, colon: bool, seconds: bool, expected: str) -> None:
        assert format_offset(total, colon=colon, seconds=seconds) == expected

    def test_system_zone_honours_tz_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TZ", "Asia/Kolkata")
        assert system_zone() == ZoneInfo("Asia/Kolkata")

    def test_system_zone_uses_host_region_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TZ", raising=False)
        monkeypatch.setattr(zones.tzlocal, "get_localzone_name", lambda: "Europe/Berlin")
        zone = system_zone()
        assert zone == ZoneInfo("Europe/Berlin")
        winter = datetime(2025, 1, 15, 12, tzinfo=timezone.utc).astimezone(zone)
        summer = datetime(2025, 7, 15, 12, tzinfo=timezone.utc).astimezone(zone)
        assert winter.utcoffset() == timedelta(hours=1)
        assert summer.utcoffset() == timedelta(hours=2)

    def test_system_zone_falls_back_to_fixed_offset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def undetectable() -> str:
            raise ZoneInfoNotFoundError("no zone configured")

        monkeypatch.setenv("TZ", "Nowhere/Special")
        monkeypatch.setattr(zones.tzlocal, "get_localzone_name", undetectable)
        assert system_zone().utcoffset(None) is not None
