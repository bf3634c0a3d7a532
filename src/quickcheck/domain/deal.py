from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class IncomeMode(str, Enum):
    """
    How rent is composed.

    The values double as the share-link tokens for the mode key.
    """
    STANDARD = "std"
    SUBSIDIZED = "s8"  # Section 8: tenant portion + housing assistance payment


class DealInputs(BaseModel):
    """
    Fully parsed, clamped screening inputs.

    Percent-of-rent assumptions and the down payment are stored as
    fractions (0.05 means 5%). Build these through
    services.validation.prepare_inputs so clamping always happens first.
    """
    model_config = ConfigDict(frozen=True)

    mode: IncomeMode = IncomeMode.STANDARD

    # --- financing ---
    purchase_price: float = Field(0.0, ge=0.0)
    down_payment_frac: float = Field(0.0, ge=0.0, le=1.0)
    interest_rate_pct: float = Field(0.0, ge=0.0, le=100.0, description="Annual rate, 6.75 means 6.75%")
    loan_term_years: int = Field(1, ge=1)
    closing_costs: float = Field(0.0, ge=0.0)

    # --- income (monthly) ---
    monthly_rent: float = Field(0.0, ge=0.0)
    tenant_portion_monthly: float = Field(0.0, ge=0.0)
    hap_monthly: float = Field(0.0, ge=0.0)
    other_monthly_income: float = Field(0.0, ge=0.0)
    inspection_reserve_monthly: float = Field(0.0, ge=0.0)

    # --- fixed costs (monthly) ---
    taxes_monthly: float = Field(0.0, ge=0.0)
    insurance_monthly: float = Field(0.0, ge=0.0)
    hoa_monthly: float = Field(0.0, ge=0.0)
    utilities_monthly: float = Field(0.0, ge=0.0)

    # --- assumptions (fractions of rent) ---
    vacancy_frac: float = Field(0.0, ge=0.0, le=0.80)
    repairs_frac: float = Field(0.0, ge=0.0, le=0.80)
    capex_frac: float = Field(0.0, ge=0.0, le=0.80)
    management_frac: float = Field(0.0, ge=0.0, le=0.30)

    @property
    def is_subsidized(self) -> bool:
        return self.mode is IncomeMode.SUBSIDIZED
