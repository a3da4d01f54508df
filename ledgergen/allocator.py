"""Per-day capacity-limited date allocation within a month window."""

from __future__ import annotations

import logging
import random
from collections import Counter
from datetime import date, timedelta

from .models import DAILY_CAP, MonthWindow

log = logging.getLogger(__name__)

MAX_ATTEMPTS = 100


def allocate_day(
    window: MonthWindow,
    load: Counter,
    rng: random.Random,
    cap: int = DAILY_CAP,
    max_attempts: int = MAX_ATTEMPTS,
) -> date:
    """Pick a date in *window* and count it in *load*.

    Random draws are accepted only while the date is under *cap*. Once
    *max_attempts* draws fail, the least-loaded date (earliest on ties) is
    taken even if that exceeds the cap, so allocation always succeeds.
    """
    span = window.days
    for _ in range(max_attempts):
        candidate = window.start + timedelta(days=rng.randrange(span))
        if load[candidate] < cap:
            load[candidate] += 1
            return candidate

    best = window.start
    best_count = load[best]
    for offset in range(1, span):
        d = window.start + timedelta(days=offset)
        if load[d] < best_count:
            best, best_count = d, load[d]
    load[best] += 1
    log.debug(
        "Window %s..%s saturated; fallback to %s (load %d)",
        window.start,
        window.end,
        best,
        load[best],
    )
    return best


class DayAllocator:
    """Allocates dates for one month window with its own daily load."""

    def __init__(self, window: MonthWindow, rng: random.Random, cap: int = DAILY_CAP):
        self.window = window
        self.rng = rng
        self.cap = cap
        self.load: Counter = Counter()

    def allocate(self) -> date:
        return allocate_day(self.window, self.load, self.rng, cap=self.cap)
