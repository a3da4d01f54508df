"""Statement narration synthesis.

The ledger core only needs something with a ``synthesize(category,
direction)`` method. :class:`StatementNarrator` is the default: it produces
narrations in the formats printed on Indian retail-bank statements::

    UPI/PATEL HARSH/564657580745/UPI
    UPI/BAJ AJ FINANCE L/101643310321/UPI Mandate
    UPI/BAJ AJ FINANCE L/101643319892/Mandate Refund
    UPI/MYJ IO/528295663953/Pay
    ATL/8820/622018/GANGA COMPLEX SHITAL C071025/07:37
    POS/AMAZON/123456789012/CARD
    NEFT/ACME LTD/412345678901/SALARY
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from .models import Direction

PERSON_NAMES = [
    "PATIL DHANRAJ",
    "SIDDHARTH LAKHO",
    "BAJ AJ FINANCE L",
    "PATEL HARSH",
    "GUJARAT STATE R",
    "BP Surat",
    "MR VIJAY PRATAP",
    "J AYESH PATIDAR",
    "Indian Railways",
    "DHANNAJ AYSINH R",
    "MYJ IO",
    "PATIL HARSH",
    "MEHUL PATEL",
    "RAJESH SHAH",
    "KIRAN DESAI",
    "AMIT PANDYA",
    "PRIYA MEHTA",
    "ROHIT KAPOOR",
    "NISHA AGARWAL",
    "VIKAS SINGH",
]

CARD_MERCHANTS = [
    "AMAZON",
    "FLIPKART",
    "SWIGGY",
    "ZOMATO",
    "RELIANCE DIGITAL",
    "BIG BAZAAR",
    "DMART",
    "STARBUCKS",
    "MCDONALDS",
    "DOMINOS",
    "BOOKMYSHOW",
    "MAKEMYTRIP",
    "OYO",
    "UBER",
    "OLA",
    "PETROL PUMP",
    "BPCL",
    "HP PETROL",
    "INDIAN OIL",
    "SHOPPERS STOP",
    "WEST SIDE",
    "PANTALOONS",
    "CENTRAL",
    "CROMA",
    "V2 RETAIL",
    "SPENCERS",
    "MORE",
    "HYPERSHOP",
]

# (terminal id, acquirer id, location)
ATM_TERMINALS = [
    ("8820", "622018", "GANGA COMPLEX SHITAL"),
    ("8506", "612018", "MAIN BRANCH SURAT"),
    ("8123", "634567", "VARACHHA ROAD SURAT"),
    ("9234", "645678", "KATARGAM SURAT"),
    ("8345", "656789", "ADJAR ROAD SURAT"),
]

# UPI suffix per (direction, category). Missing pairs fall back to plain UPI.
_UPI_SUFFIXES = {
    ("credit", "upi"): "UPI",
    ("credit", "mandate"): "UPI Mandate",
    ("credit", "refund"): "Mandate Refund",
    ("debit", "upi"): "UPI",
    ("debit", "pay"): "Pay",
}


@dataclass(frozen=True)
class Narration:
    description: str
    reference: str


class Narrator(Protocol):
    def synthesize(self, category: str, direction: Direction) -> Narration: ...


class StatementNarrator:
    """Default narrator drawing names, ids, and terminals from *rng*."""

    def __init__(
        self,
        rng: random.Random,
        company_name: str | None = None,
        today: date | None = None,
    ):
        self.rng = rng
        self.company_name = company_name
        self.today = today or date.today()

    def _txn_id(self) -> str:
        return str(self.rng.randrange(100_000_000_000, 1_000_000_000_000))

    def synthesize(self, category: str, direction: Direction) -> Narration:
        if category == "salary":
            return self._salary()
        if direction == "debit" and category == "atm":
            return self._atm()
        if direction == "debit" and category == "card":
            return self._card()
        suffix = _UPI_SUFFIXES.get((direction, category), "UPI")
        return self._upi(suffix)

    def _upi(self, suffix: str) -> Narration:
        name = self.rng.choice(PERSON_NAMES)
        return Narration(
            description=f"UPI/{name}/{self._txn_id()}/{suffix}",
            reference=f"UPI-{self._txn_id()}",
        )

    def _atm(self) -> Narration:
        terminal, acquirer, location = self.rng.choice(ATM_TERMINALS)
        code = "C" + self.today.strftime("%m%d%y")
        clock = f"{self.rng.randrange(24):02d}:{self.rng.randrange(60):02d}"
        return Narration(
            description=f"ATL/{terminal}/{acquirer}/{location} {code}/{clock}",
            reference=self._txn_id(),
        )

    def _card(self) -> Narration:
        merchant = self.rng.choice(CARD_MERCHANTS)
        txn_id = self._txn_id()
        if self.rng.random() > 0.5:
            prefix, suffix = "POS", "CARD"
        else:
            prefix, suffix = "CARD", "POS"
        return Narration(
            description=f"{prefix}/{merchant}/{txn_id}/{suffix}",
            reference=f"{prefix}-{self._txn_id()}",
        )

    def _salary(self) -> Narration:
        employer = (self.company_name or "EMPLOYER").upper()[:20].rstrip()
        return Narration(
            description=f"NEFT/{employer}/{self._txn_id()}/SALARY",
            reference=f"NEFT-{self._txn_id()}",
        )
