from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

from loancap.presets import (
    DEFAULT_DURATION_YEARS,
    DEFAULT_INCOME,
    DEFAULT_RATE,
    MAX_LOAN_DURATION_YEARS,
)

RateMode = Literal["single", "multi"]


class RatePeriod(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    years: int = Field(default=1, gt=0)
    rate: float = Field(default=DEFAULT_RATE, ge=0)


class LoanInputs(BaseModel):
    """Validated form values handed to the engine."""

    model_config = ConfigDict(allow_inf_nan=False)

    monthly_income: float = Field(default=DEFAULT_INCOME, gt=0)
    annual_rate: float = Field(default=DEFAULT_RATE, ge=0)
    duration_years: int = Field(
        default=DEFAULT_DURATION_YEARS, ge=1, le=MAX_LOAN_DURATION_YEARS
    )
    rate_periods: List[RatePeriod] = Field(default_factory=list)

    @property
    def total_months(self) -> int:
        return self.duration_years * 12


class AmortizationRow(BaseModel):
    month: int
    capital_before: float
    interest: float
    amortization: float
    installment: float
    capital_after: float


class CapacityResult(BaseModel):
    max_monthly_installment: float = 0.0
    max_loan_principal: float = 0.0
    monthly_rates: List[float] = Field(default_factory=list)
    amortization_table: List[AmortizationRow] = Field(default_factory=list)
    effective_mode: RateMode = "single"
    periods_mismatch: bool = False
