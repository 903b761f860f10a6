from __future__ import annotations
from typing import Literal, List, Dict, Any
from pydantic import BaseModel, Field

from loancap.calculators import sum_period_years
from loancap.models import CapacityResult, LoanInputs


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


def evaluate_rules(result: CapacityResult, inputs: LoanInputs) -> List[RuleResult]:
    res: List[RuleResult] = []

    if result.max_monthly_installment <= 0:
        res.append(
            RuleResult(
                code="NO_INCOME",
                severity="critical",
                message="Aucun revenu saisi : la capacité d'emprunt est nulle.",
            )
        )

    if result.periods_mismatch:
        res.append(
            RuleResult(
                code="PERIODS_MISMATCH",
                severity="warn",
                message="Les périodes ne couvrent pas la durée du prêt : le taux unique est utilisé.",
                context={
                    "periods_years": sum_period_years(inputs.rate_periods),
                    "duration_years": inputs.duration_years,
                },
            )
        )

    negative = next((r for r in result.amortization_table if r.amortization < 0), None)
    if negative is not None:
        res.append(
            RuleResult(
                code="NEGATIVE_AMORTIZATION",
                severity="warn",
                message="La mensualité ne couvre pas les intérêts : le capital restant dû augmente.",
                context={"first_month": negative.month},
            )
        )

    table = result.amortization_table
    if table and len(table) < inputs.total_months:
        res.append(
            RuleResult(
                code="EARLY_PAYOFF",
                severity="info",
                message="Le prêt est remboursé avant le terme prévu.",
                context={"months": len(table), "nominal_months": inputs.total_months},
            )
        )

    if result.monthly_rates and all(r == 0 for r in result.monthly_rates):
        res.append(
            RuleResult(
                code="ZERO_RATE",
                severity="info",
                message="Taux nul : le capital est remboursé linéairement, sans intérêts.",
            )
        )

    return res


def has_blocking(res: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in res)
