# utils.py
from typing import Iterable, Optional

import pandas as pd

from domain import DisplayRow, MonthlySummary

SHIFT_COLUMNS = ["Date", "Role", "Hours", "Tips", "Wage Rate", "Wage Earnings", "Total", "$/hr"]


def usd(x: float) -> str:
    if x < 0:
        return f"-${-x:,.2f}"
    return f"${x:,.2f}"


def round2(x: float) -> str:
    return f"{x:.2f}"


def format_average(avg: Optional[float]) -> str:
    return "N/A (no hours logged)" if avg is None else usd(avg)


def display_rows_to_dataframe(rows: Iterable[DisplayRow]) -> pd.DataFrame:
    """Numeric table of shifts, keeping the order the rows come in."""
    data = []
    for r in rows:
        data.append({
            "Date": r.date.isoformat(),
            "Role": r.role.value,
            "Hours": round(r.hours_worked, 2),
            "Tips": round(r.tips, 2),
            "Wage Rate": round(r.wage_rate, 2),
            "Wage Earnings": round(r.wage_earnings, 2),
            "Total": round(r.total_earnings, 2),
            "$/hr": round(r.earnings_per_hour, 2),
        })
    return pd.DataFrame(data, columns=SHIFT_COLUMNS)


def summary_lines(ms: MonthlySummary) -> list[tuple[str, str]]:
    """(label, value) pairs shared by the console, web page and PDF."""
    return [
        ("Month", str(ms.year_month)),
        ("Shifts Logged", str(ms.shift_count)),
        ("Total Hours", round2(ms.total_hours)),
        ("Total Tips", usd(ms.total_tips)),
        ("Total Wage Earnings", usd(ms.total_wage_earnings)),
        ("Total Earnings", usd(ms.total_earnings)),
        ("Average Earnings Per Hour", format_average(ms.average_earnings_per_hour)),
    ]
