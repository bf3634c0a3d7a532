# src/quickcheck/api/schemas.py
from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel
from pydantic import ConfigDict

# Raw form values: strings from a form, or plain numbers from scripts
RawValue = Union[str, float, int, None]


class DealRequest(BaseModel):
    """
    Raw screening inputs.

    Everything is optional and loosely typed; parsing and clamping happen
    in services.validation, never here, so garbage degrades to 0 instead
    of a 422.
    """
    model_config = ConfigDict(extra="ignore")

    mode: str | None = None

    purchase_price: RawValue = None
    down_payment_pct: RawValue = None
    interest_rate_pct: RawValue = None
    loan_term_years: RawValue = None
    closing_costs: RawValue = None

    monthly_rent: RawValue = None
    tenant_portion_monthly: RawValue = None
    hap_monthly: RawValue = None
    other_monthly_income: RawValue = None

    taxes_monthly: RawValue = None
    insurance_monthly: RawValue = None
    hoa_monthly: RawValue = None
    utilities_monthly: RawValue = None

    vacancy_pct: RawValue = None
    repairs_pct: RawValue = None
    capex_pct: RawValue = None
    management_pct: RawValue = None

    inspection_reserve_monthly: RawValue = None

    def raw_fields(self) -> dict[str, Any]:
        # only what the caller actually sent; defaults fill the rest
        return self.model_dump(exclude_none=True)


class PrimarySignal(BaseModel):
    label: str
    value: str


class Decision(BaseModel):
    is_go: bool
    label: Literal["GO", "NO-GO"]
    blocking_reasons: list[str]
    warnings: list[str]
    primary_signals: list[PrimarySignal]
    next_step: str
    dscr_threshold: float
    cash_on_cash_threshold: float


class AnalyzeResponse(BaseModel):
    """
    Undefined ratios (cap rate with no price, DSCR with no debt, ...)
    come back as null in `metrics` and as an em-dash in `display`.
    """
    model_config = ConfigDict(extra="allow")

    mode: Literal["std", "s8"]
    inputs: dict[str, Any]
    metrics: dict[str, float | None]
    decision: Decision
    display: dict[str, str]
    share_params: dict[str, str]


class ShareResponse(BaseModel):
    params: dict[str, str]
    url: str


class ExportResponse(BaseModel):
    lines: list[str]
    pages: list[list[tuple[int, str]]]
