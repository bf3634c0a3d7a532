from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class DealMetrics:
    # financing
    purchase_price: float
    down_payment: float
    loan_amount: float
    cash_invested: float           # down payment + closing costs
    monthly_debt_service: float    # mortgage P&I

    # income
    effective_monthly_rent: float  # rent used in calculations, before vacancy
    gross_monthly_income: float    # rent + other income
    effective_monthly_income: float  # after vacancy

    # costs
    fixed_costs_excluding_debt: float
    variable_costs: float          # repairs / capex / management
    total_monthly_expenses: float  # fixed + variable + debt service

    # results
    net_operating_income: float    # monthly, excludes debt service
    net_monthly_cash_flow: float
    cap_rate: float                # NaN when purchase price is 0
    cash_on_cash_return: float     # NaN when nothing was invested
    dscr: float                    # +inf with no debt and positive NOI, else NaN
    break_even_rent: float         # +inf when no finite solution exists


@dataclass(frozen=True)
class DecisionSignals:
    """The subset of metrics the screening decision looks at."""
    net_monthly_cash_flow: float
    dscr: float
    cash_on_cash_return: float
    break_even_rent: float
    effective_monthly_income: float
    gross_monthly_income: float
    monthly_debt_service: float

    @classmethod
    def from_metrics(cls, m: DealMetrics) -> "DecisionSignals":
        return cls(
            net_monthly_cash_flow=m.net_monthly_cash_flow,
            dscr=m.dscr,
            cash_on_cash_return=m.cash_on_cash_return,
            break_even_rent=m.break_even_rent,
            effective_monthly_income=m.effective_monthly_income,
            gross_monthly_income=m.gross_monthly_income,
            monthly_debt_service=m.monthly_debt_service,
        )


@dataclass(frozen=True)
class Verdict:
    is_go: bool
    blocking_reasons: Tuple[str, ...]
    warnings: Tuple[str, ...]
    primary_signals: Tuple[Tuple[str, str], ...]  # (label, formatted value)
    next_step_message: str
    dscr_threshold: float
    cash_on_cash_threshold: float

    @property
    def label(self) -> str:
        return "GO" if self.is_go else "NO-GO"
