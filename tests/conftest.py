"""Shared fixtures: a fresh SQLite ledger per test."""

from __future__ import annotations

from datetime import date

import pytest

from domain import Role, ShiftRecordInput
from repository import ShiftLedgerRepository
from services import EarningsAggregator


@pytest.fixture()
def db_url(tmp_path) -> str:
    return f"sqlite:///{(tmp_path / 'tips.db').as_posix()}"


@pytest.fixture()
def repo(db_url):
    with ShiftLedgerRepository(db_url) as r:
        yield r


@pytest.fixture()
def aggregator(repo) -> EarningsAggregator:
    return EarningsAggregator(repo)


@pytest.fixture()
def january_shifts(repo) -> list[int]:
    """The two January 2026 shifts used throughout the examples."""

    return [
        repo.insert(ShiftRecordInput(date(2026, 1, 4), Role.SERVER, 5.0, 80.0, 3.00)),
        repo.insert(ShiftRecordInput(date(2026, 1, 10), Role.HOST, 4.0, 20.0, 11.50)),
    ]
