"""Tests for the console commands."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from cli import cli

runner = CliRunner()


def _log(db_url: str, *args: str):
    return runner.invoke(cli, ["--db", db_url, "log", *args])


def test_log_prints_shift_breakdown(db_url) -> None:
    result = _log(db_url, "--role", "SERVER", "--date", "2026-01-04", "--tips", "80", "--hours", "5")

    assert result.exit_code == 0, result.output
    assert "Shift Saved" in result.stdout
    assert "Wage Rate: $3.00/hour" in result.stdout
    assert "Total Earnings: $95.00" in result.stdout
    assert "Earnings Per Hour: $19.00" in result.stdout


def test_log_prompts_for_missing_values(db_url) -> None:
    result = runner.invoke(cli, ["--db", db_url, "log", "--date", "2026-01-10"], input="HOST\n20\n4\n")

    assert result.exit_code == 0, result.output
    assert "Wage Rate: $11.50/hour" in result.stdout
    assert "Total Earnings: $66.00" in result.stdout


def test_log_rejects_zero_hours(db_url) -> None:
    result = _log(db_url, "--role", "HOST", "--tips", "10", "--hours", "0")

    assert result.exit_code != 0


@pytest.mark.parametrize("hours, tips", [("nan", "10"), ("inf", "10"), ("4", "nan"), ("4", "inf")])
def test_log_rejects_non_finite_numbers(db_url, hours, tips) -> None:
    result = _log(db_url, "--role", "HOST", "--date", "2026-01-04", "--tips", tips, "--hours", hours)
    summary = runner.invoke(cli, ["--db", db_url, "summary", "2026-01"])

    assert result.exit_code == 2
    assert "Shifts Logged: 0" in summary.stdout


def test_summary_and_list(db_url) -> None:
    _log(db_url, "--role", "SERVER", "--date", "2026-01-04", "--tips", "80", "--hours", "5")
    _log(db_url, "--role", "HOST", "--date", "2026-01-10", "--tips", "20", "--hours", "4")

    summary = runner.invoke(cli, ["--db", db_url, "summary", "2026-01"])
    listing = runner.invoke(cli, ["--db", db_url, "list", "2026-01"])

    assert summary.exit_code == 0, summary.output
    assert "Shifts Logged: 2" in summary.stdout
    assert "Total Hours: 9.00" in summary.stdout
    assert "Total Wage Earnings: $61.00" in summary.stdout
    assert "Total Earnings: $161.00" in summary.stdout
    assert "Average Earnings Per Hour: $17.89" in summary.stdout

    assert listing.exit_code == 0, listing.output
    lines = [line for line in listing.stdout.splitlines() if line.startswith("[")]
    assert lines[0].startswith("[2026-01-04] SERVER")
    assert lines[1].startswith("[2026-01-10] HOST")
    assert "$/hr: $16.50" in lines[1]


def test_summary_of_empty_month(db_url) -> None:
    result = runner.invoke(cli, ["--db", db_url, "summary", "2026-02"])

    assert result.exit_code == 0, result.output
    assert "Shifts Logged: 0" in result.stdout
    assert "Average Earnings Per Hour: N/A" in result.stdout


def test_list_of_empty_month(db_url) -> None:
    result = runner.invoke(cli, ["--db", db_url, "list", "2026-02"])

    assert result.exit_code == 0, result.output
    assert "No shifts logged for this month." in result.stdout


@pytest.mark.parametrize("command", ["summary", "list"])
@pytest.mark.parametrize("month", ["2026-13", "0000-01", "10000-01", "2026"])
def test_invalid_month_is_rejected(db_url, command, month) -> None:
    result = runner.invoke(cli, ["--db", db_url, command, month])

    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)


def test_unreachable_database_exits_with_error(tmp_path) -> None:
    url = f"sqlite:///{(tmp_path / 'missing' / 'tips.db').as_posix()}"

    result = runner.invoke(cli, ["--db", url, "summary", "2026-01"])

    assert result.exit_code == 1
