# repository.py
from __future__ import annotations

from typing import List
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel, Field, Session, create_engine, select

from domain import InvalidRange, Role, ShiftRecord, ShiftRecordInput, StorageError, YearMonth
from logging_utils import get_logger

LOGGER = get_logger(__name__)


class ShiftDB(SQLModel, table=True):
    __tablename__ = "shift"

    id: int | None = Field(default=None, primary_key=True)
    shift_date: date = Field(index=True)
    role: str
    hours_worked: float
    tips: float
    wage_rate: float


def build_engine(db_url: str, echo: bool = False):
    is_sqlite = db_url.startswith("sqlite")
    kwargs = {
        "echo": echo,
        "pool_pre_ping": True,
        "connect_args": {},
    }
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        # Hosted PG: no local pool, bounded connect
        kwargs["poolclass"] = NullPool
        kwargs["connect_args"] = {"connect_timeout": 10}
    return create_engine(db_url, **kwargs)


def _to_record(r: ShiftDB) -> ShiftRecord:
    return ShiftRecord(
        id=r.id,
        date=r.shift_date,
        role=Role(r.role),
        hours_worked=r.hours_worked,
        tips=r.tips,
        wage_rate=r.wage_rate,
    )


class ShiftLedgerRepository:
    """Append-only store of shifts. There is no update or delete."""
    def __init__(self, url: str = "sqlite:///tips.db", echo: bool = False):
        self.url = url
        self.engine = build_engine(url, echo=echo)

    def __enter__(self) -> "ShiftLedgerRepository":
        self.initialize()
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def initialize(self) -> None:
        """Creates the table if missing. Existing rows are left untouched."""
        try:
            SQLModel.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            LOGGER.error("Failed to initialize database at %s", self.engine.url, exc_info=True)
            raise StorageError(f"Failed to initialize database: {e}") from e

    def close(self) -> None:
        self.engine.dispose()

    def insert(self, s: ShiftRecordInput) -> int:
        row = ShiftDB(
            shift_date=s.date,
            role=s.role.value,
            hours_worked=s.hours_worked,
            tips=s.tips,
            wage_rate=s.wage_rate,
        )
        try:
            with Session(self.engine) as session:
                session.add(row)
                session.commit()
                session.refresh(row)
                new_id = row.id
        except SQLAlchemyError as e:
            LOGGER.error("Failed to save shift for %s", s.date, exc_info=True)
            raise StorageError(f"Failed to save shift: {e}") from e
        LOGGER.info("Saved shift %s: %s %s h, tips %.2f", new_id, s.date, s.hours_worked, s.tips)
        return new_id

    def query_by_date_range(self, start: date, end: date) -> List[ShiftRecord]:
        """Shifts with start <= date <= end, ordered by date then id."""
        if start > end:
            raise InvalidRange(f"Range start {start} is after end {end}")
        try:
            with Session(self.engine) as session:
                rows = session.exec(
                    select(ShiftDB)
                    .where(ShiftDB.shift_date >= start, ShiftDB.shift_date <= end)
                    .order_by(ShiftDB.shift_date.asc(), ShiftDB.id.asc())
                ).all()
                records = [_to_record(r) for r in rows]
        except SQLAlchemyError as e:
            LOGGER.error("Failed to query shifts %s..%s", start, end, exc_info=True)
            raise StorageError(f"Failed to fetch shifts: {e}") from e
        LOGGER.debug("Fetched %s shifts for %s..%s", len(records), start, end)
        return records

    def months_with_shifts(self) -> List[YearMonth]:
        """Months holding at least one shift, most recent first."""
        try:
            with Session(self.engine) as session:
                dates = session.exec(select(ShiftDB.shift_date).distinct()).all()
        except SQLAlchemyError as e:
            LOGGER.error("Failed to list months", exc_info=True)
            raise StorageError(f"Failed to list months: {e}") from e
        months = {YearMonth.of(d) for d in dates}
        return sorted(months, key=lambda ym: (ym.year, ym.month), reverse=True)


__all__ = ["ShiftDB", "ShiftLedgerRepository", "build_engine"]
