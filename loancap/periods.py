"""Editing helpers for multi-rate schedules.

The form keeps the schedule as a list of plain dicts in session state.  Each
helper returns a new list and leaves its argument untouched.
"""
from __future__ import annotations

from typing import Dict, List

from loancap.calculators import nz, sum_period_years
from loancap.models import RatePeriod
from loancap.presets import DEFAULT_RATE


def add_period(periods: List[Dict], duration_years, rate: float = DEFAULT_RATE) -> List[Dict]:
    """Append a period covering the years not yet allocated (at least 1)."""

    remaining = max(int(nz(duration_years) - sum_period_years(periods)), 0)
    new = RatePeriod(years=remaining or 1, rate=rate).model_dump()
    return [dict(p) for p in periods] + [new]


def remove_period(periods: List[Dict], index: int) -> List[Dict]:
    return [dict(p) for i, p in enumerate(periods) if i != index]


def autofill_last_period(periods: List[Dict], duration_years) -> List[Dict]:
    """Give the last period whatever years remain of the loan duration.

    The last period's years are not editable in the form; they always absorb
    the remainder so the schedule sums to the duration when possible.  When
    the earlier periods already use up the duration the last one gets ``0``
    years, which leaves the schedule invalid.
    """

    out = [dict(p) for p in periods]
    duration = int(nz(duration_years))
    if not out or duration <= 0:
        return out
    used = sum_period_years(out[:-1])
    out[-1]["years"] = max(int(duration - used), 0)
    return out
