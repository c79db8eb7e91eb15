"""Unit tests for chronomaster.cli.main using click's CliRunner."""
from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import ntplib
import pytest
from click.testing import CliRunner

from chronomaster.cli.main import cli


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


# ===========================================================================
# parse
# ===========================================================================


class TestParseCommand:
    def test_epoch(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "1730389800"])
        assert result.exit_code == 0
        assert "2024-10-31T15:50:00+00:00" in result.output
        assert "1730389800000" in result.output

    def test_epoch_past_calendar_range(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "999999999999"])
        assert result.exit_code == 0
        assert "999999999999000" in result.output
        assert "outside the years 1 to 9999" in result.output

    def test_zone_option(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "31/10/2025 18:00:00", "--zone", "Asia/Kolkata"])
        assert result.exit_code == 0
        assert "2025-10-31T12:30:00+00:00" in result.output

    def test_failure_exits_1(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "not a date"])
        assert result.exit_code == 1
        assert "not a date" in result.output


# ===========================================================================
# format
# ===========================================================================


class TestFormatCommand:
    def test_pattern(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            ["format", "2025-10-31T12:30:00Z", "-p", "dd MMM, yyyy 'at' hh:mm a", "--output-zone", "UTC"],
        )
        assert result.exit_code == 0
        assert "31 Oct, 2025 at 12:30 PM" in result.output

    def test_pattern_with_locale(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            ["format", "2025-10-31", "-p", "d MMMM yyyy", "--locale", "fr_FR", "--output-zone", "UTC"],
        )
        assert result.exit_code == 0
        assert "31 octobre 2025" in result.output

    def test_style(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            ["format", "2025-10-31T12:30:00Z", "--style", "long", "-l", "de_DE", "--output-zone", "UTC"],
        )
        assert result.exit_code == 0
        assert "Oktober" in result.output

    def test_input_zone(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            [
                "format", "2025-10-31 18:00:00", "-p", "HH:mm",
                "--input-zone", "Asia/Kolkata", "--output-zone", "UTC",
            ],
        )
        assert result.exit_code == 0
        assert "12:30" in result.output

    def test_requires_exactly_one_of_pattern_or_style(self, runner: CliRunner) -> None:
        neither = runner.invoke(cli, ["format", "2025-10-31"])
        both = runner.invoke(cli, ["format", "2025-10-31", "-p", "yyyy", "-s", "short"])
        assert neither.exit_code == 1
        assert both.exit_code == 1

    def test_invalid_pattern(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["format", "2025-10-31", "-p", "yyyy-qq"])
        assert result.exit_code == 1
        assert "yyyy-qq" in result.output

    def test_invalid_output_zone(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["format", "2025-10-31", "-p", "yyyy", "--output-zone", "Mars/Olympus"])
        assert result.exit_code == 1
        assert "Mars/Olympus" in result.output


# ===========================================================================
# relative / patterns / version
# ===========================================================================


class TestOtherCommands:
    def test_relative_with_now(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["relative", "1730389800", "--now", "2024-10-31T16:00:00Z"])
        assert result.exit_code == 0
        assert "10 minutes ago" in result.output

    def test_relative_future(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["relative", "2024-11-02T16:00:00Z", "--now", "2024-10-31T16:00:00Z"])
        assert "in 2 days" in result.output

    def test_patterns_lists_builtins(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["patterns"])
        assert result.exit_code == 0
        assert "dd/MM/yyyy" in result.output
        assert "MMM dd, yyyy" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "chronomaster" in result.output
        assert "0.1.0" in result.output


# ===========================================================================
# now
# ===========================================================================


class TestNowCommand:
    def test_success(self, runner: CliRunner) -> None:
        with patch.object(ntplib.NTPClient, "request", return_value=MagicMock(offset=0.0)) as request:
            result = runner.invoke(cli, ["now", "--host", "time.example", "--timeout", "1"])
        assert result.exit_code == 0
        assert "T" in result.output
        assert request.call_args.args[0] == "time.example"

    def test_failure(self, runner: CliRunner) -> None:
        with patch.object(ntplib.NTPClient, "request", side_effect=ntplib.NTPException("timeout")):
            result = runner.invoke(cli, ["now", "--host", "time.example"])
        assert result.exit_code == 1
        assert "time.example" in result.output


# ===========================================================================
# --config
# ===========================================================================


class TestConfigOption:
    def test_custom_parsers_from_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "chrono.yaml"
        path.write_text("input_zone: UTC\ncustom_parsers:\n  - dd.MM.yyyy\n", encoding="utf-8")
        listed = runner.invoke(cli, ["--config", str(path), "patterns"])
        parsed = runner.invoke(cli, ["--config", str(path), "parse", "31.10.2025"])
        assert "dd.MM.yyyy" in listed.output
        assert parsed.exit_code == 0
        assert "2025-10-31T00:00:00+00:00" in parsed.output

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["--config", str(tmp_path / "nope.yaml"), "patterns"])
        assert result.exit_code == 1
        assert "Cannot read" in result.output

    def test_malformed_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        result = runner.invoke(cli, ["--config", str(path), "patterns"])
        assert result.exit_code == 1
        assert "Config error" in result.output
