import math
from typing import Dict

from quickcheck.domain.deal import DealInputs
from quickcheck.domain.finance import break_even_rent, monthly_mortgage_payment
from quickcheck.domain.underwriting import DealMetrics


def _effective_rent(inputs: DealInputs) -> float:
    """
    Rent used in calculations (before vacancy).
    - Section 8: tenant portion + HAP.
    - Standard: market rent.
    """
    if inputs.is_subsidized:
        return inputs.tenant_portion_monthly + inputs.hap_monthly
    return inputs.monthly_rent


def _operating_costs_monthly(inputs: DealInputs, rent: float) -> Dict[str, float]:
    """
    Operating costs do NOT include the mortgage.
    - Fixed: taxes, insurance, HOA, owner-paid utilities, plus the
      inspection/turnover reserve in Section 8 mode.
    - Variable: repairs, capex, management as a percent of rent
      (rent before vacancy).
    """
    reserve = inputs.inspection_reserve_monthly if inputs.is_subsidized else 0.0
    fixed = (
        inputs.taxes_monthly
        + inputs.insurance_monthly
        + inputs.hoa_monthly
        + inputs.utilities_monthly
        + reserve
    )
    variable_frac = inputs.repairs_frac + inputs.capex_frac + inputs.management_frac
    return {
        "fixed_costs_excluding_debt": fixed,
        "variable_frac": variable_frac,
        "variable_costs": rent * variable_frac,
    }


def compute_metrics(inputs: DealInputs) -> DealMetrics:
    """
    Screening math for one deal. Pure and total: ratios with a zero
    denominator come back as NaN or +inf instead of raising.
    """

    # --- financing basics ---
    price = inputs.purchase_price
    down_payment = price * inputs.down_payment_frac
    loan_amount = max(0.0, price - down_payment)

    debt_service = monthly_mortgage_payment(
        principal=loan_amount,
        annual_rate_pct=inputs.interest_rate_pct,
        years=inputs.loan_term_years,
    )

    # --- income side ---
    rent = _effective_rent(inputs)
    other = inputs.other_monthly_income
    gross_income = rent + other
    effective_income = rent * (1.0 - inputs.vacancy_frac) + other

    # --- operating costs ---
    opx = _operating_costs_monthly(inputs, rent)
    fixed = opx["fixed_costs_excluding_debt"]
    variable = opx["variable_costs"]

    # --- NOI / cash flow ---
    noi = effective_income - (fixed + variable)
    cash_flow = noi - debt_service

    cap_rate = (noi * 12.0) / price if price > 0 else math.nan

    cash_invested = down_payment + inputs.closing_costs
    cash_on_cash = (cash_flow * 12.0) / cash_invested if cash_invested > 0 else math.nan

    if debt_service > 0:
        dscr = noi / debt_service
    else:
        dscr = math.inf if noi > 0 else math.nan

    be_rent = break_even_rent(
        fixed_costs=fixed,
        debt_service=debt_service,
        other_income=other,
        vacancy_frac=inputs.vacancy_frac,
        variable_frac=opx["variable_frac"],
    )

    return DealMetrics(
        purchase_price=price,
        down_payment=down_payment,
        loan_amount=loan_amount,
        cash_invested=cash_invested,
        monthly_debt_service=debt_service,
        effective_monthly_rent=rent,
        gross_monthly_income=gross_income,
        effective_monthly_income=effective_income,
        fixed_costs_excluding_debt=fixed,
        variable_costs=variable,
        total_monthly_expenses=fixed + variable + debt_service,
        net_operating_income=noi,
        net_monthly_cash_flow=cash_flow,
        cap_rate=cap_rate,
        cash_on_cash_return=cash_on_cash,
        dscr=dscr,
        break_even_rent=be_rent,
    )
