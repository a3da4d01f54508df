"""Tests for ledgergen/store.py — DuckDB persistence."""

import json
from datetime import date
from decimal import Decimal

import duckdb
import pytest

from ledgergen.generator import generate_ledger, verify
from ledgergen.models import DateRange, GenerationConfig
from ledgergen.store import (
    LedgerStoreError,
    read_ledger,
    read_ledger_meta,
    write_ledger,
)

RANGE = DateRange(date(2024, 1, 1), date(2024, 2, 29))


@pytest.fixture
def config():
    return GenerationConfig(
        opening_balance=Decimal("15000"),
        salary_amount=Decimal("40000"),
        salary_day=5,
        company_name="Acme Ltd",
        debit_count=6,
        credit_count=3,
        target_closing_balance=Decimal("60000.50"),
    )


class TestWriteLedger:
    def test_write_then_read(self, conn, config):
        result = generate_ledger(RANGE, config, seed=11)
        write_ledger(conn, result, RANGE, config, seed=11)

        loaded = read_ledger(conn)
        assert loaded.transactions == result.transactions
        assert loaded.final_balance == result.final_balance
        assert loaded.opening_balance == Decimal("15000")
        assert loaded.adjustment == result.adjustment
        assert verify(loaded, minimum_balance=config.minimum_balance, target=config.target_closing_balance) == []

    def test_table_schema(self, conn, config):
        result = generate_ledger(RANGE, config, seed=2)
        write_ledger(conn, result, RANGE, config)
        cols = {row[0]: row[1] for row in conn.execute("DESCRIBE transactions").fetchall()}
        assert cols["_row_id"] == "INTEGER"
        assert cols["transaction_date"] == "DATE"
        assert cols["debit"] == "DECIMAL(18,2)"
        count = conn.execute("SELECT COUNT(*) FROM transactions").fetchone()[0]
        assert count == len(result.transactions)

    def test_metadata(self, conn, config):
        result = generate_ledger(RANGE, config, seed=3)
        write_ledger(conn, result, RANGE, config, seed=3)
        meta = read_ledger_meta(conn)
        assert meta["date_from"] == "2024-01-01"
        assert meta["date_to"] == "2024-02-29"
        assert meta["seed"] == "3"
        assert Decimal(meta["final_balance"]) == result.final_balance
        assert meta["target_closing_balance"] == "60000.50"
        assert json.loads(meta["config"])["company_name"] == "Acme Ltd"

    def test_overwrite(self, conn, config):
        first = generate_ledger(RANGE, config, seed=1)
        write_ledger(conn, first, RANGE, config, seed=1)
        small = GenerationConfig(opening_balance=Decimal("1000"), debit_count=0, credit_count=1)
        second = generate_ledger(RANGE, small, seed=2)
        write_ledger(conn, second, RANGE, small, seed=2)
        loaded = read_ledger(conn)
        assert len(loaded.transactions) == 2
        assert "target_closing_balance" not in read_ledger_meta(conn)

    def test_empty_ledger(self, conn):
        cfg = GenerationConfig(opening_balance=Decimal("700"), debit_count=0, credit_count=0)
        result = generate_ledger(RANGE, cfg, seed=1)
        write_ledger(conn, result, RANGE, cfg)
        loaded = read_ledger(conn)
        assert loaded.transactions == []
        assert loaded.final_balance == Decimal("700")


class TestReadLedger:
    def test_missing_table_raises(self, conn):
        with pytest.raises(LedgerStoreError, match="not a ledger database"):
            read_ledger(conn)

    def test_meta_missing_table(self):
        c = duckdb.connect(":memory:")
        try:
            assert read_ledger_meta(c) == {}
        finally:
            c.close()
