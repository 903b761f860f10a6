from core.rules import evaluate_rules, has_blocking
from loancap.calculators import amortization_table, compute_capacity
from loancap.models import CapacityResult, LoanInputs, RatePeriod


def _codes(result, inputs):
    return {r.code for r in evaluate_rules(result, inputs)}


def test_clean_single_rate_has_no_rules():
    inputs = LoanInputs(monthly_income=2600, annual_rate=3.8, duration_years=20)
    res = compute_capacity(inputs, "single")
    assert _codes(res, inputs) == set()


def test_periods_mismatch_warns_with_context():
    inputs = LoanInputs(
        monthly_income=2600,
        duration_years=5,
        rate_periods=[RatePeriod(years=2, rate=1), RatePeriod(years=2, rate=2)],
    )
    res = compute_capacity(inputs, "multi")
    rules = evaluate_rules(res, inputs)
    mismatch = next(r for r in rules if r.code == "PERIODS_MISMATCH")
    assert mismatch.severity == "warn"
    assert mismatch.context == {"periods_years": 4, "duration_years": 5}
    assert not has_blocking(rules)


def test_zero_rate_info():
    inputs = LoanInputs(monthly_income=2600, annual_rate=0, duration_years=10)
    res = compute_capacity(inputs)
    assert "ZERO_RATE" in _codes(res, inputs)


def test_no_income_is_blocking():
    inputs = LoanInputs(monthly_income=1, duration_years=10)
    res = CapacityResult()
    rules = evaluate_rules(res, inputs)
    assert "NO_INCOME" in {r.code for r in rules}
    assert has_blocking(rules)


def test_negative_amortization_and_early_payoff():
    inputs = LoanInputs(monthly_income=30, duration_years=1)
    growing = CapacityResult(
        max_monthly_installment=10,
        max_loan_principal=100_000,
        amortization_table=amortization_table(100_000, 10, [0.004] * 12, 12),
    )
    rules = evaluate_rules(growing, inputs)
    negative = next(r for r in rules if r.code == "NEGATIVE_AMORTIZATION")
    assert negative.context == {"first_month": 1}

    short = CapacityResult(
        max_monthly_installment=600,
        max_loan_principal=1000,
        amortization_table=amortization_table(1000, 600, [0.0] * 12, 12),
    )
    early = next(r for r in evaluate_rules(short, inputs) if r.code == "EARLY_PAYOFF")
    assert early.severity == "info"
    assert early.context == {"months": 2, "nominal_months": 12}
