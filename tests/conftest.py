"""Shared fixtures and helpers for the ledgergen test suite."""

import random
from datetime import date
from decimal import Decimal

import duckdb
import pytest

from ledgergen.models import TransactionRecord
from ledgergen.narration import Narration
from ledgergen.store import init_store


@pytest.fixture
def conn():
    """In-memory DuckDB connection for each test."""
    c = duckdb.connect(":memory:")
    init_store(c)
    yield c
    c.close()


@pytest.fixture
def rng():
    return random.Random(1234)


class FakeNarrator:
    """Deterministic narrator that records every call."""

    def __init__(self):
        self.calls: list[tuple[str, str]] = []

    def synthesize(self, category, direction):
        self.calls.append((category, direction))
        n = len(self.calls)
        return Narration(description=f"{direction}:{category}:{n}", reference=f"REF{n:04d}")


@pytest.fixture
def narrator():
    return FakeNarrator()


def _txn(day: int, debit=None, credit=None, month: int = 1, **kwargs) -> TransactionRecord:
    """Helper to create an unbalanced record in 2024."""
    d = date(2024, month, day)
    defaults = {
        "transaction_date": d,
        "value_date": d,
        "description": f"TXN {d.isoformat()}",
        "reference": "REF",
        "debit": Decimal(str(debit)) if debit is not None else None,
        "credit": Decimal(str(credit)) if credit is not None else None,
        "category": "upi",
    }
    defaults.update(kwargs)
    return TransactionRecord(**defaults)
