"""Tests for ledgergen/sampling.py — weighted categories and amount policy."""

import random
from collections import Counter
from decimal import Decimal

import pytest

from ledgergen.sampling import (
    ATM_DENOMINATIONS,
    CREDIT_CATEGORIES,
    DEBIT_CATEGORIES,
    draw_amount,
    sample_category,
)


class _FixedRandom:
    """Stand-in random source returning preset values from random()."""

    def __init__(self, values):
        self._values = iter(values)

    def random(self):
        return next(self._values)


class TestSampleCategory:
    def test_walks_cumulative_weights(self):
        rng = _FixedRandom([0.0, 0.449, 0.451, 0.66, 0.899, 0.91, 0.999])
        picks = [sample_category(DEBIT_CATEGORIES, rng) for _ in range(7)]
        assert picks == ["upi", "upi", "atm", "card", "card", "pay", "pay"]

    def test_boundary_goes_to_earlier_category(self):
        """A draw equal to a cumulative weight selects that category."""
        rng = _FixedRandom([0.5])
        assert sample_category([("a", 1), ("b", 1)], rng) == "a"

    def test_any_positive_total(self):
        rng = _FixedRandom([0.1, 0.9])
        table = [("x", 3), ("y", 7)]
        assert sample_category(table, rng) == "x"
        assert sample_category(table, rng) == "y"

    def test_empty_table_raises(self):
        with pytest.raises(ValueError, match="empty"):
            sample_category([], random.Random(0))

    def test_zero_total_raises(self):
        with pytest.raises(ValueError, match="positive"):
            sample_category([("a", 0)], random.Random(0))

    def test_seeded_reproducible(self):
        r1, r2 = random.Random(7), random.Random(7)
        seq1 = [sample_category(CREDIT_CATEGORIES, r1) for _ in range(200)]
        seq2 = [sample_category(CREDIT_CATEGORIES, r2) for _ in range(200)]
        assert seq1 == seq2
        assert set(seq1) <= {c for c, _ in CREDIT_CATEGORIES}

    @pytest.mark.parametrize("table", [DEBIT_CATEGORIES, CREDIT_CATEGORIES])
    def test_frequencies_converge(self, table):
        rng = random.Random(0)
        n = 20_000
        counts = Counter(sample_category(table, rng) for _ in range(n))
        total = sum(w for _, w in table)
        for category, weight in table:
            assert abs(counts[category] / n - weight / total) < 0.02


class TestDrawAmount:
    def test_atm_denominations(self):
        rng = random.Random(1)
        seen = {draw_amount("atm", rng) for _ in range(200)}
        assert seen == {Decimal(v) for v in ATM_DENOMINATIONS}

    def test_card_range(self):
        rng = random.Random(2)
        amounts = [draw_amount("card", rng) for _ in range(500)]
        assert all(Decimal(100) <= a < Decimal(5000) for a in amounts)

    @pytest.mark.parametrize("category", ["upi", "pay", "mandate", "refund"])
    def test_default_range(self, category):
        rng = random.Random(3)
        amounts = [draw_amount(category, rng) for _ in range(500)]
        assert all(Decimal(50) <= a < Decimal(10050) for a in amounts)

    def test_whole_rupees(self):
        rng = random.Random(4)
        assert all(draw_amount("upi", rng) % 1 == 0 for _ in range(50))
