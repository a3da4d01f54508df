"""Ledger data model — ranges, month windows, config, and transaction records.

Money is carried as :class:`decimal.Decimal` quantized to paise (two places).
Records are frozen: the reconciler derives new records with
:func:`dataclasses.replace` instead of mutating them, so a built ledger can be
compared against its reconciled form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

CENT = Decimal("0.01")

MIN_BALANCE_FLOOR = Decimal("500")
DAILY_CAP = 6

# Defaults used by the statement form this generator was built for.
DEFAULT_DEBIT_COUNT = 8
DEFAULT_CREDIT_COUNT = 10
DEFAULT_SALARY_DAY = 1

Direction = Literal["debit", "credit"]
Origin = Literal["salary", "activity", "adjustment"]


class LedgerConfigError(ValueError):
    """Raised for invalid generation input (bad range, negative counts, ...)."""


def to_money(value: Decimal | int | float | str) -> Decimal:
    """Coerce *value* to a Decimal rounded to two places."""
    if isinstance(value, float):
        value = repr(value)
    amount = Decimal(value)
    if not amount.is_finite():
        raise LedgerConfigError(f"Amount must be a finite number, got {value}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise LedgerConfigError(
                f"Invalid date range: {self.start.isoformat()} is after "
                f"{self.end.isoformat()}"
            )

    def __contains__(self, d: date) -> bool:
        return self.start <= d <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class MonthWindow:
    """Slice of a DateRange that lies inside a single calendar month."""

    start: date
    end: date
    index: int

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


@dataclass
class GenerationConfig:
    """Inputs for one ledger generation.

    Salary credits are produced only when ``salary_amount`` is positive and a
    company name is present (see :attr:`salary_active`).
    """

    opening_balance: Decimal = Decimal("0")
    salary_amount: Decimal | None = None
    salary_day: int = DEFAULT_SALARY_DAY
    company_name: str | None = None
    debit_count: int = DEFAULT_DEBIT_COUNT
    credit_count: int = DEFAULT_CREDIT_COUNT
    target_closing_balance: Decimal | None = None
    minimum_balance: Decimal = MIN_BALANCE_FLOOR
    daily_cap: int = DAILY_CAP

    def __post_init__(self) -> None:
        self.opening_balance = to_money(self.opening_balance)
        self.minimum_balance = to_money(self.minimum_balance)
        if self.salary_amount is not None:
            self.salary_amount = to_money(self.salary_amount)
        if self.target_closing_balance is not None:
            self.target_closing_balance = to_money(self.target_closing_balance)
        if self.company_name is not None:
            self.company_name = self.company_name.strip() or None

    @property
    def company_present(self) -> bool:
        return bool(self.company_name)

    @property
    def salary_active(self) -> bool:
        return (
            self.salary_amount is not None
            and self.salary_amount > 0
            and self.company_present
        )

    def validate(self) -> None:
        """Raise LedgerConfigError if any field is out of range."""
        if not 1 <= self.salary_day <= 31:
            raise LedgerConfigError(
                f"salary_day must be between 1 and 31, got {self.salary_day}"
            )
        if self.debit_count < 0:
            raise LedgerConfigError(f"debit_count must be >= 0, got {self.debit_count}")
        if self.credit_count < 0:
            raise LedgerConfigError(
                f"credit_count must be >= 0, got {self.credit_count}"
            )
        if self.daily_cap < 1:
            raise LedgerConfigError(f"daily_cap must be >= 1, got {self.daily_cap}")
        for name in ("opening_balance", "salary_amount", "target_closing_balance"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise LedgerConfigError(f"{name} must not be negative, got {value}")

    def as_dict(self) -> dict[str, object]:
        """JSON-friendly view (Decimals as strings)."""
        out: dict[str, object] = {}
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            out[name] = str(value) if isinstance(value, Decimal) else value
        return out


@dataclass(frozen=True)
class TransactionRecord:
    """One statement line. Exactly one of ``debit`` / ``credit`` is set."""

    transaction_date: date
    value_date: date
    description: str
    reference: str
    debit: Decimal | None = None
    credit: Decimal | None = None
    balance: Decimal | None = None
    category: str = ""
    origin: Origin = "activity"

    @property
    def direction(self) -> Direction:
        return "debit" if self.debit is not None else "credit"

    @property
    def debit_value(self) -> Decimal:
        return self.debit if self.debit is not None else Decimal("0")

    @property
    def credit_value(self) -> Decimal:
        return self.credit if self.credit is not None else Decimal("0")

    @property
    def net(self) -> Decimal:
        """Signed effect on the balance."""
        return self.credit_value - self.debit_value


@dataclass
class LedgerResult:
    """Output of :func:`ledgergen.generator.generate_ledger`."""

    transactions: list[TransactionRecord]
    final_balance: Decimal
    opening_balance: Decimal = Decimal("0")
    dropped: int = 0
    clamped: int = 0
    adjustment: TransactionRecord | None = field(default=None, repr=False)

    @property
    def total_debits(self) -> Decimal:
        return sum((t.debit_value for t in self.transactions), Decimal("0"))

    @property
    def total_credits(self) -> Decimal:
        return sum((t.credit_value for t in self.transactions), Decimal("0"))
