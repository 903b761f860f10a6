"""CSV download of the amortization schedule."""
from __future__ import annotations
from typing import Iterable

from core.i18n import t
from loancap.calculators import amortization_frame
from loancap.models import AmortizationRow
from loancap.presets import DEFAULT_LANGUAGE


def schedule_csv(rows: Iterable[AmortizationRow], lang: str = DEFAULT_LANGUAGE) -> bytes:
    """Return the schedule as UTF-8 CSV with translated headers.

    Amounts are written unrounded; spreadsheet formatting is left to the
    reader.
    """

    df = amortization_frame(rows)
    df = df.rename(columns={c: t(f"col.{c}", lang) for c in df.columns})
    return df.to_csv(index=False).encode("utf-8")
