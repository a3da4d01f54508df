"""Running-balance reconciliation.

Two passes over a date-sorted ledger:

- **Floor pass** — fold balances from the opening balance. A debit that would
  take the balance below the floor is clamped to ``balance - floor`` when that
  leaves more than 100 to debit, and dropped otherwise. Credits pass through.
- **Closing pass** — when a target closing balance is given and the floor
  pass missed it by more than 0.01, one adjustment record dated at the range
  end absorbs the difference, then every balance is re-folded. The re-fold
  does not re-apply the floor: the target takes precedence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Iterable

from .models import CENT, TransactionRecord, to_money
from .narration import Narrator

log = logging.getLogger(__name__)

MIN_CLAMPED_DEBIT = Decimal("100")
CLOSING_TOLERANCE = CENT


@dataclass
class FloorOutcome:
    records: list[TransactionRecord]
    balance: Decimal
    dropped: int = 0
    clamped: int = 0


def enforce_floor(
    records: Iterable[TransactionRecord],
    opening_balance: Decimal,
    floor: Decimal,
) -> FloorOutcome:
    """Fold balances, clamping or dropping debits that breach *floor*."""
    outcome = FloorOutcome(records=[], balance=opening_balance)
    balance = opening_balance

    for record in records:
        tentative = balance - record.debit_value + record.credit_value

        if tentative < floor and record.debit is not None:
            max_debit = balance - floor
            if max_debit > MIN_CLAMPED_DEBIT:
                log.debug(
                    "Clamped debit on %s from %s to %s",
                    record.transaction_date,
                    record.debit,
                    max_debit,
                )
                record = replace(record, debit=to_money(max_debit))
                tentative = floor
                outcome.clamped += 1
            else:
                log.debug(
                    "Dropped debit of %s on %s (balance %s)",
                    record.debit,
                    record.transaction_date,
                    balance,
                )
                outcome.dropped += 1
                continue

        balance = tentative
        outcome.records.append(replace(record, balance=balance))

    outcome.balance = balance
    return outcome


def restamp_balances(
    records: Iterable[TransactionRecord], opening_balance: Decimal
) -> tuple[list[TransactionRecord], Decimal]:
    """Re-fold running balances without any floor checks."""
    balance = opening_balance
    out: list[TransactionRecord] = []
    for record in records:
        balance = balance + record.net
        out.append(replace(record, balance=balance))
    return out, balance


def adjustment_record(
    difference: Decimal, on: date, narrator: Narrator
) -> TransactionRecord:
    """Single record moving the balance by *difference*."""
    direction = "credit" if difference > 0 else "debit"
    narration = narrator.synthesize("upi", direction)
    amount = to_money(abs(difference))
    return TransactionRecord(
        transaction_date=on,
        value_date=on,
        description=narration.description,
        reference=narration.reference,
        debit=amount if direction == "debit" else None,
        credit=amount if direction == "credit" else None,
        category="upi",
        origin="adjustment",
    )


def reconcile(
    records: Iterable[TransactionRecord],
    opening_balance: Decimal,
    floor: Decimal,
    target: Decimal | None = None,
    *,
    closing_date: date,
    narrator: Narrator,
) -> tuple[list[TransactionRecord], Decimal, FloorOutcome, TransactionRecord | None]:
    """Run both passes.

    Returns ``(records, final_balance, floor_outcome, adjustment)`` where
    *adjustment* is the injected record, or ``None`` if none was needed.
    """
    outcome = enforce_floor(records, opening_balance, floor)
    if target is None:
        return outcome.records, outcome.balance, outcome, None

    difference = target - outcome.balance
    if abs(difference) <= CLOSING_TOLERANCE:
        return outcome.records, outcome.balance, outcome, None

    adjustment = adjustment_record(difference, closing_date, narrator)
    log.info(
        "Closing balance %s differs from target %s; adding %s adjustment of %s",
        outcome.balance,
        target,
        adjustment.direction,
        adjustment.debit or adjustment.credit,
    )
    augmented = outcome.records + [adjustment]
    augmented.sort(key=lambda r: r.transaction_date)
    stamped, balance = restamp_balances(augmented, opening_balance)
    adjustment = next(r for r in stamped if r.origin == "adjustment")
    return stamped, balance, outcome, adjustment
