# cli.py
# -----------------------------------------------
# Console front end:
#   python cli.py log      (prompts for anything not given)
#   python cli.py summary 2026-01
#   python cli.py list 2026-01
# -----------------------------------------------
from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional

import typer

from config import WAGE_RATES, database_url, log_level
from domain import LedgerError, Role, ShiftRecordInput, YearMonth
from logging_utils import configure_root_logger
from repository import ShiftLedgerRepository
from services import EarningsAggregator
from utils import round2, summary_lines, usd

cli = typer.Typer(help="Log tipped shifts and report monthly earnings per hour.")


def _parse_month(value: str) -> YearMonth:
    try:
        ym = YearMonth.parse(value)
        ym.range()
    except (ValueError, LedgerError) as e:
        raise typer.BadParameter("Use YYYY-MM (example: 2026-01).") from e
    return ym


def _finite(value: float) -> float:
    if value is not None and not math.isfinite(value):
        raise typer.BadParameter("Enter a finite number.")
    return value


def _fail(message: str) -> typer.Exit:
    typer.secho(message, fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


@cli.callback()
def main(
    ctx: typer.Context,
    db: Optional[str] = typer.Option(None, "--db", help="SQLAlchemy URL of the ledger database."),
) -> None:
    configure_root_logger(log_level())
    ctx.obj = db or database_url()


@cli.command("log")
def log_shift(
    ctx: typer.Context,
    role: Role = typer.Option(..., prompt="Are you a server or host?", case_sensitive=False),
    shift_date: Optional[datetime] = typer.Option(
        None, "--date", formats=["%Y-%m-%d"], help="Shift date (YYYY-MM-DD), today if omitted."
    ),
    tips: float = typer.Option(..., min=0.0, prompt="Tips made tonight ($)", callback=_finite),
    hours: float = typer.Option(..., min=0.01, prompt="Hours worked tonight", callback=_finite),
) -> None:
    """Save a shift to the ledger."""
    d = shift_date.date() if shift_date else date.today()
    entry = ShiftRecordInput.for_role(d, role, hours, tips, rates=WAGE_RATES)
    try:
        with ShiftLedgerRepository(ctx.obj) as repo:
            new_id = repo.insert(entry)
    except LedgerError as e:
        raise _fail(f"Failed to save shift: {e}") from e

    row = EarningsAggregator(repo).describe_shift(entry.to_record(new_id))
    typer.echo("\n=================== Shift Saved ===================")
    typer.echo(f"Date: {row.date}")
    typer.echo(f"Role: {row.role.value}")
    typer.echo(f"Wage Rate: {usd(row.wage_rate)}/hour")
    typer.echo(f"Tips: {usd(row.tips)}")
    typer.echo(f"Hours Worked: {row.hours_worked}")
    typer.echo(f"Wage Earnings: {usd(row.wage_earnings)}")
    typer.echo(f"Total Earnings: {usd(row.total_earnings)}")
    typer.echo(f"Earnings Per Hour: {usd(row.earnings_per_hour)}")


@cli.command()
def summary(ctx: typer.Context, month: str = typer.Argument(..., help="Month as YYYY-MM.")) -> None:
    """Monthly totals and average earnings per hour."""
    ym = _parse_month(month)
    try:
        with ShiftLedgerRepository(ctx.obj) as repo:
            ms = EarningsAggregator(repo).summarize_month(ym)
    except LedgerError as e:
        raise _fail(f"Failed to fetch monthly summary: {e}") from e

    typer.echo("\n=================== Monthly Summary ===================")
    for label, value in summary_lines(ms):
        typer.echo(f"{label}: {value}")


@cli.command("list")
def list_shifts(ctx: typer.Context, month: str = typer.Argument(..., help="Month as YYYY-MM.")) -> None:
    """Every shift of the month, oldest first."""
    ym = _parse_month(month)
    try:
        with ShiftLedgerRepository(ctx.obj) as repo:
            rows = list(EarningsAggregator(repo).list_month(ym))
    except LedgerError as e:
        raise _fail(f"Failed to list shifts: {e}") from e

    typer.echo(f"\n=================== Shifts for {ym} ===================")
    if not rows:
        typer.echo("No shifts logged for this month.")
    for r in rows:
        typer.echo(
            f"[{r.date}] {r.role.value}"
            f" | Hours: {round2(r.hours_worked)}"
            f" | Tips: {usd(r.tips)}"
            f" | Wage: {usd(r.wage_rate)}/hr"
            f" | Total: {usd(r.total_earnings)}"
            f" | $/hr: {usd(r.earnings_per_hour)}"
        )


if __name__ == "__main__":
    cli()
