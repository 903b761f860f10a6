from __future__ import annotations
import logging
import math
from typing import Iterable, List, Sequence

import pandas as pd

from loancap.models import AmortizationRow, CapacityResult, LoanInputs, RateMode
from loancap.presets import DEBT_TO_INCOME_DENOMINATOR

logger = logging.getLogger(__name__)

SCHEDULE_COLUMNS = [
    "Month",
    "CapitalBefore",
    "Interest",
    "Amortization",
    "Installment",
    "CapitalAfter",
]


def nz(x, default=0.0):
    """Return a float for ``x`` or a fallback value.

    Form widgets and session state hand back ``None``, empty strings or
    ``NaN`` while the user is typing.  Treating those as ``0`` keeps every
    calculation below defined for any input.
    """

    try:
        if x is None or (isinstance(x, float) and math.isnan(x)):
            return default
        return float(x)
    except (TypeError, ValueError):
        return default


def _field(period, name):
    if isinstance(period, dict):
        return period.get(name)
    return getattr(period, name, None)


def period_months(period) -> int:
    """Number of months covered by a rate period (``years * 12``)."""

    return int(nz(_field(period, "years")) * 12)


def to_monthly_rate(annual_rate_pct):
    """Monthly-equivalent rate of a nominal annual percentage.

    The annual rate is divided by 12, not compounded.  Non-positive rates map
    to ``0``.
    """

    rate = nz(annual_rate_pct)
    return rate / 100 / 12 if rate > 0 else 0.0


def sum_period_years(periods) -> float:
    return sum(nz(_field(p, "years")) for p in periods or [])


def max_monthly_installment(monthly_income):
    """Largest installment allowed by the one-third debt-to-income cap."""

    income = nz(monthly_income)
    return income / DEBT_TO_INCOME_DENOMINATOR if income > 0 else 0.0


def principal_single_rate(max_installment, annual_rate_pct, total_months):
    """Reverse amortization to find the loan amount for a given payment.

    ``max_installment`` is paid every month for ``total_months`` months at
    the monthly equivalent of ``annual_rate_pct``.  The return value is the
    principal that this level annuity repays exactly.
    """

    payment = nz(max_installment)
    n = int(nz(total_months))
    if n <= 0 or payment <= 0:
        return 0.0
    r = to_monthly_rate(annual_rate_pct)
    if r == 0:
        return payment * n
    return payment / (r / (1 - (1 + r) ** (-n)))


def principal_multi_rate(max_installment, periods, total_months):
    """Present value of ``total_months`` installments under a piecewise schedule.

    Periods apply chronologically from the first month.  The discount factor
    compounds month over month and carries across period boundaries, so a
    rate change only alters the factor applied from that month on.  Months
    past ``total_months`` are never reached.
    """

    payment = nz(max_installment)
    n = int(nz(total_months))
    if n <= 0 or payment <= 0 or not periods:
        return 0.0

    pv_factor_sum = 0.0
    discount = 1.0
    months_count = 0
    for period in periods:
        r = to_monthly_rate(_field(period, "rate"))
        for _ in range(period_months(period)):
            if months_count >= n:
                break
            discount = discount / (1 + r)
            pv_factor_sum += discount
            months_count += 1
        if months_count >= n:
            break
    return payment * pv_factor_sum


def monthly_payment(principal, annual_rate_pct, total_months):
    """Level monthly payment that fully amortizes ``principal``."""

    L = nz(principal)
    n = int(nz(total_months))
    if n <= 0:
        return 0.0
    r = to_monthly_rate(annual_rate_pct)
    if r == 0:
        return L / n
    return (r * L) / (1 - (1 + r) ** (-n))


def monthly_rates(mode: RateMode, periods, single_rate_pct, total_months) -> List[float]:
    """Expand the active rate regime into one monthly rate per month.

    In ``"multi"`` mode the periods are walked with the same cut-off at
    ``total_months`` as :func:`principal_multi_rate`; the list is shorter
    than ``total_months`` when the periods cover fewer years.
    """

    n = max(int(nz(total_months)), 0)
    if mode == "multi":
        rates: List[float] = []
        for period in periods or []:
            r = to_monthly_rate(_field(period, "rate"))
            for _ in range(period_months(period)):
                if len(rates) >= n:
                    break
                rates.append(r)
            if len(rates) >= n:
                break
        return rates
    return [to_monthly_rate(single_rate_pct)] * n


def amortization_table(
    principal, installment, rates: Sequence[float], total_months
) -> List[AmortizationRow]:
    """Build the month-by-month ledger of a level-installment loan.

    A month without an entry in ``rates`` accrues no interest.  Amortization
    is not clamped, so months where interest exceeds the installment show a
    negative value.  The closing balance is floored at ``0`` and the table
    stops at the first month it reaches ``0``.
    """

    capital = nz(principal)
    payment = nz(installment)
    n = int(nz(total_months))
    if capital <= 0 or n <= 0:
        return []

    rows: List[AmortizationRow] = []
    for month in range(1, n + 1):
        rate = nz(rates[month - 1]) if month - 1 < len(rates) else 0.0
        interest = capital * rate
        amortization = payment - interest
        capital_after = max(capital - amortization, 0.0)
        rows.append(
            AmortizationRow(
                month=month,
                capital_before=capital,
                interest=interest,
                amortization=amortization,
                installment=payment,
                capital_after=capital_after,
            )
        )
        capital = capital_after
        if capital <= 0:
            break
    return rows


def periods_mismatch(mode: RateMode, periods, duration_years) -> bool:
    """True when a multi-rate schedule is requested but does not fit the duration."""

    if mode != "multi" or not periods:
        return False
    return sum_period_years(periods) != nz(duration_years)


def effective_rate_mode(mode: RateMode, periods, duration_years) -> RateMode:
    """Rate regime actually used for both capacity and amortization.

    Multi-rate is honoured only with a non-empty schedule whose years sum to
    the loan duration; anything else falls back to the single rate.
    """

    if mode == "multi" and periods and not periods_mismatch(mode, periods, duration_years):
        return "multi"
    return "single"


def compute_capacity(inputs: LoanInputs, mode: RateMode = "single") -> CapacityResult:
    """Run the full pipeline for one snapshot of the form values."""

    total_months = inputs.total_months
    periods = inputs.rate_periods
    effective = effective_rate_mode(mode, periods, inputs.duration_years)
    mismatch = periods_mismatch(mode, periods, inputs.duration_years)
    if mismatch:
        logger.debug(
            "rate periods cover %s years for a %s-year loan, using single rate %s",
            sum_period_years(periods),
            inputs.duration_years,
            inputs.annual_rate,
        )

    installment = max_monthly_installment(inputs.monthly_income)
    if installment <= 0:
        principal = 0.0
    elif effective == "multi":
        principal = principal_multi_rate(installment, periods, total_months)
    else:
        principal = principal_single_rate(installment, inputs.annual_rate, total_months)

    rates = monthly_rates(effective, periods, inputs.annual_rate, total_months)
    table = amortization_table(principal, installment, rates, total_months)
    logger.debug(
        "capacity computed: mode=%s installment=%.2f principal=%.2f rows=%d",
        effective,
        installment,
        principal,
        len(table),
    )
    return CapacityResult(
        max_monthly_installment=installment,
        max_loan_principal=principal,
        monthly_rates=rates,
        amortization_table=table,
        effective_mode=effective,
        periods_mismatch=mismatch,
    )


def amortization_frame(rows: Iterable[AmortizationRow]) -> pd.DataFrame:
    """Tabulate amortization rows for display and export."""

    records = [
        {
            "Month": r.month,
            "CapitalBefore": r.capital_before,
            "Interest": r.interest,
            "Amortization": r.amortization,
            "Installment": r.installment,
            "CapitalAfter": r.capital_after,
        }
        for r in rows
    ]
    if not records:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)
    return pd.DataFrame.from_records(records, columns=SCHEDULE_COLUMNS)


def yearly_summary(rows: Iterable[AmortizationRow]) -> pd.DataFrame:
    """Aggregate the monthly ledger into loan years.

    Interest, amortization and installments are summed per year; the
    closing balance is the last month's ``CapitalAfter``.
    """

    df = amortization_frame(rows)
    if df.empty:
        return pd.DataFrame(
            columns=["Year", "Interest", "Amortization", "Installment", "CapitalAfter"]
        )
    df["Year"] = (df["Month"] - 1) // 12 + 1
    return (
        df.groupby("Year")
        .agg(
            Interest=("Interest", "sum"),
            Amortization=("Amortization", "sum"),
            Installment=("Installment", "sum"),
            CapitalAfter=("CapitalAfter", "last"),
        )
        .reset_index()
    )


def total_interest(rows: Iterable[AmortizationRow]) -> float:
    return float(sum(r.interest for r in rows))
