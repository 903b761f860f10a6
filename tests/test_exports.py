import csv
import io

import pytest

from export.csv_export import schedule_csv
from export.pdf_export import build_schedule_pdf
from loancap.calculators import compute_capacity
from loancap.models import CapacityResult, LoanInputs, RatePeriod


def _result(mode="single", **kw):
    inputs = LoanInputs(monthly_income=2600, annual_rate=3.8, duration_years=5, **kw)
    return compute_capacity(inputs, mode), inputs


def test_pdf_export_returns_pdf_bytes():
    result, inputs = _result()
    data = build_schedule_pdf(result, inputs)
    assert data.startswith(b"%PDF")


def test_pdf_export_multi_mode():
    result, inputs = _result(
        "multi", rate_periods=[RatePeriod(years=2, rate=1.5), RatePeriod(years=3, rate=4)]
    )
    assert result.effective_mode == "multi"
    assert build_schedule_pdf(result, inputs, "en").startswith(b"%PDF")


def test_pdf_export_requires_rows():
    inputs = LoanInputs(monthly_income=2600)
    with pytest.raises(ValueError):
        build_schedule_pdf(CapacityResult(), inputs)


def test_csv_export_headers_and_rows():
    result, _ = _result()
    reader = csv.reader(io.StringIO(schedule_csv(result.amortization_table).decode("utf-8")))
    rows = list(reader)
    assert rows[0] == [
        "Mois",
        "Capital initial",
        "Intérêts",
        "Amortissement",
        "Mensualité",
        "Capital restant dû",
    ]
    assert len(rows) == 1 + len(result.amortization_table)
    assert rows[1][0] == "1"


def test_csv_export_english_headers():
    result, _ = _result()
    header = schedule_csv(result.amortization_table, "en").decode("utf-8").splitlines()[0]
    assert header.startswith("Month,Opening balance")
