# domain.py
from __future__ import annotations
import calendar
import math
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date
from enum import Enum
from typing import Dict, Optional, Tuple


class LedgerError(Exception):
    """Base exception for the shift ledger."""


class StorageError(LedgerError):
    """The backing database could not be opened, read or written."""


class InvalidRange(LedgerError):
    """A date range or month selector that cannot be resolved."""


class Role(str, Enum):
    SERVER = "SERVER"
    HOST = "HOST"


def month_range(year: int, month: int) -> Tuple[date, date]:
    """First and last calendar day of the month (leap years included)."""
    if not 1 <= month <= 12:
        raise InvalidRange(f"Month must be between 1 and 12, got {month}")
    if not MINYEAR <= year <= MAXYEAR:
        raise InvalidRange(f"Year must be between {MINYEAR} and {MAXYEAR}, got {year}")
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


@dataclass(frozen=True)
class YearMonth:
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise InvalidRange(f"Month must be between 1 and 12, got {self.month}")

    @classmethod
    def parse(cls, yyyy_mm: str) -> "YearMonth":
        """Parses "YYYY-MM". Raises ValueError on malformed text."""
        try:
            y, m = yyyy_mm.strip().split("-")
            return cls(int(y), int(m))
        except (ValueError, AttributeError) as e:
            raise ValueError(f"Invalid month '{yyyy_mm}', expected YYYY-MM") from e

    @classmethod
    def of(cls, d: date) -> "YearMonth":
        return cls(d.year, d.month)

    @property
    def last_day(self) -> date:
        return month_range(self.year, self.month)[1]

    def range(self) -> Tuple[date, date]:
        return month_range(self.year, self.month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class ShiftRecordInput:
    """A shift ready to be logged. The wage rate is captured at logging time."""
    date: date
    role: Role
    hours_worked: float
    tips: float
    wage_rate: float

    def __post_init__(self):
        if not math.isfinite(self.hours_worked) or not math.isfinite(self.tips):
            raise ValueError(f"hours_worked and tips must be finite, got {self.hours_worked}, {self.tips}")
        if not self.hours_worked > 0:
            raise ValueError(f"hours_worked must be > 0, got {self.hours_worked}")
        if self.tips < 0:
            raise ValueError(f"tips must be >= 0, got {self.tips}")

    @classmethod
    def for_role(
        cls,
        shift_date: date,
        role: Role,
        hours_worked: float,
        tips: float,
        rates: Dict[Role, float],
    ) -> "ShiftRecordInput":
        """Builds the input using the wage rate ``rates`` gives for ``role``."""
        return cls(
            date=shift_date,
            role=role,
            hours_worked=float(hours_worked),
            tips=float(tips),
            wage_rate=float(rates[role]),
        )

    def to_record(self, record_id: int) -> "ShiftRecord":
        """The stored form of this input once the store assigned its id."""
        return ShiftRecord(
            id=record_id,
            date=self.date,
            role=self.role,
            hours_worked=self.hours_worked,
            tips=self.tips,
            wage_rate=self.wage_rate,
        )


@dataclass(frozen=True)
class ShiftRecord:
    """A persisted shift. Earnings are always derived, never stored."""
    id: int
    date: date
    role: Role
    hours_worked: float
    tips: float
    wage_rate: float

    @property
    def wage_earnings(self) -> float:
        return self.wage_rate * self.hours_worked

    @property
    def total_earnings(self) -> float:
        return self.wage_earnings + self.tips

    @property
    def earnings_per_hour(self) -> float:
        # hours_worked > 0 is guaranteed by ShiftRecordInput
        return self.total_earnings / self.hours_worked


@dataclass(frozen=True)
class DisplayRow:
    id: int
    date: date
    role: Role
    hours_worked: float
    tips: float
    wage_rate: float
    wage_earnings: float
    total_earnings: float
    earnings_per_hour: float


@dataclass
class MonthlySummary:
    year_month: YearMonth
    shift_count: int = 0
    total_hours: float = 0.0
    total_tips: float = 0.0
    total_wage_earnings: float = 0.0
    total_earnings: float = 0.0

    @property
    def average_earnings_per_hour(self) -> Optional[float]:
        """None when no hours were logged (not applicable)."""
        if self.total_hours == 0:
            return None
        return self.total_earnings / self.total_hours
