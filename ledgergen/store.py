"""DuckDB ledger store.

A ledger database holds:
- ``transactions`` — one row per statement line, ordered by ``_row_id``
- ``_ledger_meta`` — key/value generation metadata (range, balances, config)
"""

from __future__ import annotations

import importlib.metadata
import json
import platform
import sys
import time
from decimal import Decimal

import duckdb

from .export import to_dataframe
from .models import DateRange, GenerationConfig, LedgerResult, TransactionRecord

TRANSACTIONS_TABLE = "transactions"
META_TABLE = "_ledger_meta"


class LedgerStoreError(RuntimeError):
    """Raised when a database does not contain a generated ledger."""


def init_store(conn: duckdb.DuckDBPyConnection) -> None:
    """Ensure the metadata table exists."""
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS {META_TABLE} (
            key VARCHAR PRIMARY KEY,
            value VARCHAR
        )
        """
    )


def _write_transactions(conn: duckdb.DuckDBPyConnection, result: LedgerResult) -> None:
    df = to_dataframe(result).with_row_index("_row_id", offset=1)
    conn.execute(f'DROP TABLE IF EXISTS "{TRANSACTIONS_TABLE}"')
    conn.register("_df", df)
    try:
        conn.execute(
            f"""
            CREATE TABLE "{TRANSACTIONS_TABLE}" AS
            SELECT
                CAST(_row_id AS INTEGER) AS _row_id,
                transaction_date,
                value_date,
                description,
                reference,
                CAST(debit AS DECIMAL(18, 2)) AS debit,
                CAST(credit AS DECIMAL(18, 2)) AS credit,
                CAST(balance AS DECIMAL(18, 2)) AS balance,
                category,
                origin
            FROM _df
            """
        )
    finally:
        conn.unregister("_df")


def write_ledger(
    conn: duckdb.DuckDBPyConnection,
    result: LedgerResult,
    date_range: DateRange,
    config: GenerationConfig,
    *,
    seed: int | None = None,
) -> None:
    """Persist *result* and its generation metadata (overwrites)."""
    init_store(conn)
    _write_transactions(conn, result)

    try:
        version = importlib.metadata.version("ledgergen")
    except importlib.metadata.PackageNotFoundError:
        version = "unknown"

    rows: list[tuple[str, str]] = [
        ("meta_version", "1"),
        ("created_at_utc", time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())),
        ("ledgergen_version", version),
        ("python_version", sys.version.split()[0]),
        ("platform", platform.platform()),
        ("date_from", date_range.start.isoformat()),
        ("date_to", date_range.end.isoformat()),
        ("opening_balance", str(result.opening_balance)),
        ("final_balance", str(result.final_balance)),
        ("minimum_balance", str(config.minimum_balance)),
        ("dropped", str(result.dropped)),
        ("clamped", str(result.clamped)),
        ("config", json.dumps(config.as_dict(), sort_keys=True)),
    ]
    if config.target_closing_balance is not None:
        rows.append(("target_closing_balance", str(config.target_closing_balance)))
    if seed is not None:
        rows.append(("seed", str(seed)))

    conn.execute(f"DELETE FROM {META_TABLE}")
    conn.executemany(f"INSERT INTO {META_TABLE} (key, value) VALUES (?, ?)", rows)


def read_ledger_meta(conn: duckdb.DuckDBPyConnection) -> dict[str, str]:
    """Read ledger metadata. Returns empty dict if the table doesn't exist."""
    try:
        return dict(conn.execute(f"SELECT key, value FROM {META_TABLE}").fetchall())
    except duckdb.Error:
        return {}


def read_ledger(conn: duckdb.DuckDBPyConnection) -> LedgerResult:
    """Load a stored ledger back into a LedgerResult."""
    try:
        rows = conn.execute(
            f"""
            SELECT transaction_date, value_date, description, reference,
                   debit, credit, balance, category, origin
            FROM "{TRANSACTIONS_TABLE}"
            ORDER BY _row_id
            """
        ).fetchall()
    except duckdb.CatalogException as e:
        raise LedgerStoreError(
            f"No {TRANSACTIONS_TABLE} table found — not a ledger database"
        ) from e

    transactions = [
        TransactionRecord(
            transaction_date=r[0],
            value_date=r[1],
            description=r[2],
            reference=r[3],
            debit=r[4],
            credit=r[5],
            balance=r[6],
            category=r[7],
            origin=r[8],
        )
        for r in rows
    ]
    adjustment = next((t for t in transactions if t.origin == "adjustment"), None)

    meta = read_ledger_meta(conn)
    opening = Decimal(meta.get("opening_balance", "0"))
    if "final_balance" in meta:
        final = Decimal(meta["final_balance"])
    elif transactions and transactions[-1].balance is not None:
        final = transactions[-1].balance
    else:
        final = opening

    return LedgerResult(
        transactions=transactions,
        final_balance=final,
        opening_balance=opening,
        dropped=int(meta.get("dropped", 0)),
        clamped=int(meta.get("clamped", 0)),
        adjustment=adjustment,
    )
