"""Synthetic statement ledger generator.

Usage:
    from ledgergen import DateRange, GenerationConfig, generate_ledger, verify

    result = generate_ledger(
        DateRange(date(2024, 1, 1), date(2024, 3, 31)),
        GenerationConfig(opening_balance=Decimal("10000"), debit_count=8),
        seed=42,
    )
    errors = verify(result, minimum_balance=Decimal("500"))  # [] if consistent
"""

from __future__ import annotations

import logging
import random
from decimal import Decimal

from .builder import build_ledger
from .models import CENT, DateRange, GenerationConfig, LedgerResult
from .narration import Narrator, StatementNarrator
from .reconcile import reconcile

log = logging.getLogger(__name__)


def generate_ledger(
    date_range: DateRange,
    config: GenerationConfig,
    rng: random.Random | None = None,
    *,
    seed: int | None = None,
    narrator: Narrator | None = None,
) -> LedgerResult:
    """Generate a balanced, date-ordered ledger for *date_range*.

    Args:
        date_range: Inclusive period covered by the statement.
        config:     Balances, salary, and per-month activity counts.
        rng:        Random source. Defaults to ``random.Random(seed)``.
        seed:       Seed used when *rng* is not given.
        narrator:   Narration synthesizer. Defaults to a
                    :class:`StatementNarrator` sharing *rng* and dated
                    at the end of *date_range*.

    Raises:
        LedgerConfigError: if *config* fails validation.
    """
    config.validate()
    if rng is None:
        rng = random.Random(seed)
    if narrator is None:
        narrator = StatementNarrator(
            rng, company_name=config.company_name, today=date_range.end
        )

    raw = build_ledger(date_range, config, rng, narrator)
    records, final_balance, outcome, adjustment = reconcile(
        raw,
        config.opening_balance,
        config.minimum_balance,
        config.target_closing_balance,
        closing_date=date_range.end,
        narrator=narrator,
    )

    log.info(
        "Generated %d transaction(s) for %s..%s (%d dropped, %d clamped); "
        "closing balance %s",
        len(records),
        date_range.start,
        date_range.end,
        outcome.dropped,
        outcome.clamped,
        final_balance,
    )
    return LedgerResult(
        transactions=records,
        final_balance=final_balance,
        opening_balance=config.opening_balance,
        dropped=outcome.dropped,
        clamped=outcome.clamped,
        adjustment=adjustment,
    )


def verify(
    result: LedgerResult,
    *,
    minimum_balance: Decimal | None = None,
    target: Decimal | None = None,
) -> list[str]:
    """Check ledger consistency.  Returns list of error strings (empty = OK).

    The floor binds debits only, and only up to the first adjustment record,
    since the closing-balance re-fold is allowed to cross it.
    """
    errors: list[str] = []
    txns = result.transactions

    for i in range(1, len(txns)):
        if txns[i].transaction_date < txns[i - 1].transaction_date:
            errors.append(
                f"Row {i}: {txns[i].transaction_date} is before "
                f"{txns[i - 1].transaction_date}"
            )

    balance = result.opening_balance
    adjusted = False
    for i, t in enumerate(txns):
        if (t.debit is None) == (t.credit is None):
            errors.append(f"Row {i}: expected exactly one of debit/credit")
        if t.transaction_date != t.value_date:
            errors.append(f"Row {i}: value date {t.value_date} != {t.transaction_date}")
        balance = balance + t.net
        if t.balance is None:
            errors.append(f"Row {i}: missing running balance")
        elif abs(t.balance - balance) > CENT / 2:
            errors.append(f"Row {i}: balance {t.balance} != expected {balance}")
        if t.origin == "adjustment":
            adjusted = True
        if (
            minimum_balance is not None
            and not adjusted
            and t.debit is not None
            and t.balance is not None
            and t.balance < minimum_balance - CENT
        ):
            errors.append(
                f"Row {i}: balance {t.balance} is below floor {minimum_balance}"
            )

    if abs(result.final_balance - balance) > CENT / 2:
        errors.append(f"Final balance {result.final_balance} != folded {balance}")

    if target is not None and abs(result.final_balance - target) > CENT:
        errors.append(f"Final balance {result.final_balance} != target {target}")

    return errors
