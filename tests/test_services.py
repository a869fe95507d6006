"""Tests for the monthly summary and per-shift listing."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import text

from domain import Role, ShiftRecordInput, StorageError, YearMonth


def test_summarize_month_worked_example(aggregator, january_shifts) -> None:
    ms = aggregator.summarize_month(YearMonth(2026, 1))

    assert ms.shift_count == 2
    assert ms.total_hours == pytest.approx(9.0)
    assert ms.total_tips == pytest.approx(100.0)
    assert ms.total_wage_earnings == pytest.approx(61.0)
    assert ms.total_earnings == pytest.approx(161.0)
    assert ms.average_earnings_per_hour == pytest.approx(161 / 9)
    assert round(ms.average_earnings_per_hour, 2) == 17.89


def test_summarize_empty_month(aggregator, january_shifts) -> None:
    ms = aggregator.summarize_month(YearMonth(2026, 2))

    assert ms.shift_count == 0
    assert ms.total_hours == 0
    assert ms.total_tips == 0
    assert ms.total_wage_earnings == 0
    assert ms.total_earnings == 0
    assert ms.average_earnings_per_hour is None


def test_list_month_rows(aggregator, january_shifts) -> None:
    rows = list(aggregator.list_month(YearMonth(2026, 1)))

    assert [r.id for r in rows] == january_shifts
    server, host = rows
    assert server.total_earnings == pytest.approx(95.0)
    assert server.earnings_per_hour == pytest.approx(19.0)
    assert host.wage_earnings == pytest.approx(46.0)
    assert host.total_earnings == pytest.approx(66.0)
    assert host.earnings_per_hour == pytest.approx(16.5)


def test_list_month_is_lazy_and_ordered(repo, aggregator) -> None:
    repo.insert(ShiftRecordInput(date(2024, 2, 29), Role.SERVER, 6.0, 90.0, 3.00))
    repo.insert(ShiftRecordInput(date(2024, 2, 1), Role.HOST, 4.0, 0.0, 11.50))
    repo.insert(ShiftRecordInput(date(2024, 2, 1), Role.SERVER, 2.0, 30.0, 3.00))
    repo.insert(ShiftRecordInput(date(2024, 3, 1), Role.SERVER, 2.0, 30.0, 3.00))

    rows = aggregator.list_month(YearMonth(2024, 2))
    assert not isinstance(rows, list)

    rows = list(rows)
    assert [r.date for r in rows] == [date(2024, 2, 1), date(2024, 2, 1), date(2024, 2, 29)]
    assert [r.role for r in rows[:2]] == [Role.HOST, Role.SERVER]


def test_list_empty_month(aggregator) -> None:
    assert list(aggregator.list_month(YearMonth(2026, 3))) == []


def test_stored_wage_rate_is_used_not_current_rate(repo, aggregator) -> None:
    repo.insert(ShiftRecordInput(date(2026, 1, 4), Role.SERVER, 5.0, 80.0, 2.13))

    (row,) = aggregator.list_month(YearMonth(2026, 1))

    assert row.wage_rate == pytest.approx(2.13)
    assert row.total_earnings == pytest.approx(2.13 * 5 + 80)


def test_storage_failure_reaches_the_caller(repo, aggregator, january_shifts) -> None:
    with repo.engine.begin() as conn:
        conn.execute(text("DROP TABLE shift"))

    with pytest.raises(StorageError):
        aggregator.summarize_month(YearMonth(2026, 1))
    with pytest.raises(StorageError):
        list(aggregator.list_month(YearMonth(2026, 1)))
