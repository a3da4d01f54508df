"""Weighted category sampling and per-category amount policy."""

from __future__ import annotations

import random
from decimal import Decimal
from typing import Sequence

# (category, weight); the sampler walks each table in order.
DEBIT_CATEGORIES: tuple[tuple[str, int], ...] = (
    ("upi", 45),
    ("atm", 20),
    ("card", 25),
    ("pay", 10),
)

CREDIT_CATEGORIES: tuple[tuple[str, int], ...] = (
    ("upi", 70),
    ("mandate", 15),
    ("refund", 15),
)

ATM_DENOMINATIONS = (500, 1000, 2000, 5000)

# Half-open integer ranges [lo, hi)
CARD_RANGE = (100, 5000)
DEFAULT_RANGE = (50, 10050)


def sample_category(
    table: Sequence[tuple[str, float]], rng: random.Random
) -> str:
    """Pick a category from a ``(category, weight)`` table.

    Draws ``u`` uniformly from ``[0, total)`` and returns the first category
    whose cumulative weight reaches ``u``.
    """
    if not table:
        raise ValueError("Category table is empty")
    total = sum(w for _, w in table)
    if total <= 0:
        raise ValueError(f"Category weights must sum to a positive total, got {total}")

    draw = rng.random() * total
    cumulative = 0.0
    for category, weight in table:
        cumulative += weight
        if cumulative >= draw:
            return category
    return table[-1][0]


def draw_amount(category: str, rng: random.Random) -> Decimal:
    """Whole-rupee amount for a sampled category."""
    if category == "atm":
        return Decimal(rng.choice(ATM_DENOMINATIONS))
    lo, hi = CARD_RANGE if category == "card" else DEFAULT_RANGE
    return Decimal(rng.randrange(lo, hi))
