# services.py
from __future__ import annotations
from typing import Iterator

from domain import DisplayRow, MonthlySummary, ShiftRecord, YearMonth
from logging_utils import get_logger
from repository import ShiftLedgerRepository

LOGGER = get_logger(__name__)


class EarningsAggregator:
    """Monthly earnings derived from the ledger at read time.

    Wage and total earnings are recomputed on every read from the stored
    hours, tips and wage rate, so nothing derived is ever persisted.
    """
    def __init__(self, repo: ShiftLedgerRepository):
        self.repo = repo

    def describe_shift(self, record: ShiftRecord) -> DisplayRow:
        """Per-shift breakdown (wage earnings, total, $/hour)."""
        return DisplayRow(
            id=record.id,
            date=record.date,
            role=record.role,
            hours_worked=record.hours_worked,
            tips=record.tips,
            wage_rate=record.wage_rate,
            wage_earnings=record.wage_earnings,
            total_earnings=record.total_earnings,
            earnings_per_hour=record.earnings_per_hour,
        )

    def summarize_month(self, ym: YearMonth) -> MonthlySummary:
        """Totals for the month. An empty month yields zeros, never None."""
        d1, d2 = ym.range()
        summary = MonthlySummary(year_month=ym)
        for r in self.repo.query_by_date_range(d1, d2):
            summary.shift_count += 1
            summary.total_hours += r.hours_worked
            summary.total_tips += r.tips
            summary.total_wage_earnings += r.wage_earnings
            summary.total_earnings += r.total_earnings
        LOGGER.debug("Summary %s: %s shifts, %.2f h", ym, summary.shift_count, summary.total_hours)
        return summary

    def list_month(self, ym: YearMonth) -> Iterator[DisplayRow]:
        """Yields one row per shift, ordered by date then insertion."""
        d1, d2 = ym.range()
        for r in self.repo.query_by_date_range(d1, d2):
            yield self.describe_shift(r)
