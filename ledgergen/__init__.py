"""Ledgergen — synthetic bank statement ledger generator."""

from .allocator import DayAllocator, allocate_day
from .builder import build_ledger
from .export import export_ledger, format_amount, to_dataframe
from .generator import generate_ledger, verify
from .models import (
    DateRange,
    GenerationConfig,
    LedgerConfigError,
    LedgerResult,
    MonthWindow,
    TransactionRecord,
)
from .months import partition_months
from .narration import Narration, Narrator, StatementNarrator
from .reconcile import enforce_floor, reconcile
from .sampling import CREDIT_CATEGORIES, DEBIT_CATEGORIES, draw_amount, sample_category
from .store import LedgerStoreError, read_ledger, read_ledger_meta, write_ledger

__all__ = [
    # Model
    "DateRange",
    "GenerationConfig",
    "LedgerConfigError",
    "LedgerResult",
    "MonthWindow",
    "TransactionRecord",
    # Generation
    "generate_ledger",
    "verify",
    "build_ledger",
    "partition_months",
    "sample_category",
    "draw_amount",
    "DEBIT_CATEGORIES",
    "CREDIT_CATEGORIES",
    "DayAllocator",
    "allocate_day",
    "enforce_floor",
    "reconcile",
    # Narration
    "Narration",
    "Narrator",
    "StatementNarrator",
    # Output
    "to_dataframe",
    "format_amount",
    "export_ledger",
    "write_ledger",
    "read_ledger",
    "read_ledger_meta",
    "LedgerStoreError",
]
