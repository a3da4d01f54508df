"""Assemble the raw (unbalanced) ledger for a date range.

Generation order, which the final stable sort preserves for same-day ties:

1. Salary credits, one per month whose salary date falls inside the range.
2. For each month window in order: all debits, then all credits. Each draws
   a category, an amount, a capacity-limited date, and a narration.

Running balances are left as ``None``; see :mod:`ledgergen.reconcile`.
"""

from __future__ import annotations

import logging
import random

from .allocator import DayAllocator
from .models import (
    DateRange,
    Direction,
    GenerationConfig,
    MonthWindow,
    TransactionRecord,
)
from .months import month_starts, partition_months, salary_date
from .narration import Narrator
from .sampling import CREDIT_CATEGORIES, DEBIT_CATEGORIES, draw_amount, sample_category

log = logging.getLogger(__name__)


def _salary_records(
    date_range: DateRange, config: GenerationConfig, narrator: Narrator
) -> list[TransactionRecord]:
    records: list[TransactionRecord] = []
    for first in month_starts(date_range):
        paid_on = salary_date(first, config.salary_day)
        if paid_on not in date_range:
            continue
        narration = narrator.synthesize("salary", "credit")
        records.append(
            TransactionRecord(
                transaction_date=paid_on,
                value_date=paid_on,
                description=narration.description,
                reference=narration.reference,
                credit=config.salary_amount,
                category="salary",
                origin="salary",
            )
        )
    return records


def _activity_record(
    direction: Direction,
    allocator: DayAllocator,
    rng: random.Random,
    narrator: Narrator,
) -> TransactionRecord:
    table = DEBIT_CATEGORIES if direction == "debit" else CREDIT_CATEGORIES
    category = sample_category(table, rng)
    amount = draw_amount(category, rng)
    on = allocator.allocate()
    narration = narrator.synthesize(category, direction)
    return TransactionRecord(
        transaction_date=on,
        value_date=on,
        description=narration.description,
        reference=narration.reference,
        debit=amount if direction == "debit" else None,
        credit=amount if direction == "credit" else None,
        category=category,
        origin="activity",
    )


def _month_records(
    window: MonthWindow,
    config: GenerationConfig,
    rng: random.Random,
    narrator: Narrator,
) -> list[TransactionRecord]:
    allocator = DayAllocator(window, rng, cap=config.daily_cap)
    records = [
        _activity_record("debit", allocator, rng, narrator)
        for _ in range(config.debit_count)
    ]
    records.extend(
        _activity_record("credit", allocator, rng, narrator)
        for _ in range(config.credit_count)
    )
    return records


def build_ledger(
    date_range: DateRange,
    config: GenerationConfig,
    rng: random.Random,
    narrator: Narrator,
) -> list[TransactionRecord]:
    """Generate salary and activity records sorted by transaction date."""
    windows = partition_months(date_range)

    records: list[TransactionRecord] = []
    if config.salary_active:
        records.extend(_salary_records(date_range, config, narrator))

    for window in windows:
        records.extend(_month_records(window, config, rng, narrator))

    log.debug(
        "Built %d record(s) across %d month(s)", len(records), len(windows)
    )
    # list.sort is stable: same-day records keep generation order
    records.sort(key=lambda r: r.transaction_date)
    return records
