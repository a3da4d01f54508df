"""Tabular exports of a generated ledger (DataFrame, CSV, XLSX)."""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Callable

import polars as pl

from .models import CENT, LedgerResult, to_money

log = logging.getLogger(__name__)

STATEMENT_DATE_FORMAT = "%d %b %Y"

STATEMENT_COLUMNS = [
    "Date",
    "Narration",
    "Chq/Ref No",
    "Value Date",
    "Withdrawal (Dr)",
    "Deposit (Cr)",
    "Balance",
]

LEDGER_SCHEMA = {
    "transaction_date": pl.Date,
    "value_date": pl.Date,
    "description": pl.Utf8,
    "reference": pl.Utf8,
    "debit": pl.Float64,
    "credit": pl.Float64,
    "balance": pl.Float64,
    "category": pl.Utf8,
    "origin": pl.Utf8,
}


def format_amount(value: Decimal | int | float | None) -> str:
    """Format with Indian digit grouping, e.g. ``12,34,567.89``.

    ``None`` formats as an empty string (the blank side of a statement row).
    """
    if value is None:
        return ""
    amount = to_money(value)
    sign = "-" if amount < 0 else ""
    whole, _, frac = f"{abs(amount):.2f}".partition(".")
    head, tail = whole[:-3], whole[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    grouped = ",".join(groups + [tail])
    return f"{sign}{grouped}.{frac}"


def _as_float(value: Decimal | None) -> float | None:
    return None if value is None else float(value)


def to_dataframe(result: LedgerResult) -> pl.DataFrame:
    """One row per transaction, amounts as floats."""
    rows = [
        {
            "transaction_date": t.transaction_date,
            "value_date": t.value_date,
            "description": t.description,
            "reference": t.reference,
            "debit": _as_float(t.debit),
            "credit": _as_float(t.credit),
            "balance": _as_float(t.balance),
            "category": t.category,
            "origin": t.origin,
        }
        for t in result.transactions
    ]
    return pl.DataFrame(rows, schema=LEDGER_SCHEMA)


def statement_rows(result: LedgerResult) -> list[dict[str, str]]:
    """Rows formatted the way they are printed on a statement."""
    return [
        {
            "Date": t.transaction_date.strftime(STATEMENT_DATE_FORMAT),
            "Narration": t.description,
            "Chq/Ref No": t.reference,
            "Value Date": t.value_date.strftime(STATEMENT_DATE_FORMAT),
            "Withdrawal (Dr)": format_amount(t.debit),
            "Deposit (Cr)": format_amount(t.credit),
            "Balance": format_amount(t.balance),
        }
        for t in result.transactions
    ]


def write_csv(result: LedgerResult, path: Path) -> None:
    """Write the formatted statement as CSV."""
    rows = statement_rows(result)
    df = pl.DataFrame(rows, schema={c: pl.Utf8 for c in STATEMENT_COLUMNS})
    df.write_csv(str(path))


def write_xlsx(result: LedgerResult, path: Path) -> None:
    """Write a two-sheet workbook: Statement and Summary."""
    from openpyxl import Workbook

    wb = Workbook()
    ws = wb.active
    ws.title = "Statement"
    ws.append(STATEMENT_COLUMNS)
    for t in result.transactions:
        ws.append(
            [
                t.transaction_date,
                t.description,
                t.reference,
                t.value_date,
                _as_float(t.debit),
                _as_float(t.credit),
                _as_float(t.balance),
            ]
        )
    for row in ws.iter_rows(min_row=2):
        row[0].number_format = "DD MMM YYYY"
        row[3].number_format = "DD MMM YYYY"
        for cell in row[4:]:
            cell.number_format = "#,##0.00"

    summary = wb.create_sheet("Summary")
    summary.append(["Field", "Value"])
    summary.append(["Opening balance", float(result.opening_balance)])
    summary.append(["Total debits", float(result.total_debits)])
    summary.append(["Total credits", float(result.total_credits)])
    summary.append(["Closing balance", float(result.final_balance.quantize(CENT))])
    summary.append(["Transactions", len(result.transactions)])

    wb.save(str(path))


EXPORTERS: dict[str, Callable[[LedgerResult, Path], None]] = {
    ".csv": write_csv,
    ".xlsx": write_xlsx,
}


def export_ledger(result: LedgerResult, path: Path) -> Path:
    """Write *result* to *path*, choosing the format from the file suffix."""
    path = Path(path)
    writer = EXPORTERS.get(path.suffix.lower())
    if writer is None:
        supported = ", ".join(sorted(EXPORTERS))
        raise ValueError(
            f"Unsupported export format: {path.suffix or '(none)'} "
            f"(supported: {supported})"
        )
    path.parent.mkdir(parents=True, exist_ok=True)
    writer(result, path)
    log.info("  %s: OK", path)
    return path
