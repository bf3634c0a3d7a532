# src/quickcheck/services/validation.py

import math
import numbers
import re
from typing import Any, Mapping

from quickcheck.domain.deal import DealInputs, IncomeMode
from quickcheck.domain.finance import round_half_up

# Raw field names, in form order. "mode" is handled separately.
NUMERIC_FIELDS = [
    "purchase_price",
    "down_payment_pct",
    "interest_rate_pct",
    "loan_term_years",
    "closing_costs",
    "monthly_rent",
    "tenant_portion_monthly",
    "hap_monthly",
    "other_monthly_income",
    "taxes_monthly",
    "insurance_monthly",
    "hoa_monthly",
    "utilities_monthly",
    "vacancy_pct",
    "repairs_pct",
    "capex_pct",
    "management_pct",
    "inspection_reserve_monthly",
]

# Upper bounds (percent units) for the percent fields
PCT_CAPS = {
    "down_payment_pct": 100.0,
    "interest_rate_pct": 100.0,
    "vacancy_pct": 80.0,
    "repairs_pct": 80.0,
    "capex_pct": 80.0,
    "management_pct": 30.0,
}

_SUBSIDIZED_TOKENS = {"s8", "section8", "section_8", "section 8", "subsidized"}

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def parse_number(val: Any) -> float:
    """
    Permissive numeric parse. Never raises.

    Coercion rules:
      - None, bool and unknown types -> 0.0
      - real numbers (int, float, numpy scalars) pass through; NaN / inf -> 0.0
      - str: every character except digits, "." and "-" is stripped, so
        "$1,250" -> 1250.0, "6.5%" -> 6.5, "abc" -> 0.0
      - whatever is left must parse as a float ("1.2.3", "5-3", "-" and ""
        all -> 0.0)
    """
    if val is None or isinstance(val, bool):
        return 0.0
    if isinstance(val, numbers.Real):
        f = float(val)
        return f if math.isfinite(f) else 0.0
    if isinstance(val, str):
        s = _NON_NUMERIC.sub("", val)
        if not s:
            return 0.0
        try:
            f = float(s)
        except ValueError:
            return 0.0
        return f if math.isfinite(f) else 0.0
    return 0.0


def clamp(n: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, n))


def parse_mode(val: Any) -> IncomeMode:
    """
    "s8" (and a few spelled-out variants) selects Section 8 mode; anything
    else, including missing, is Standard.
    """
    if isinstance(val, IncomeMode):
        return val
    if isinstance(val, str) and val.strip().lower() in _SUBSIDIZED_TOKENS:
        return IncomeMode.SUBSIDIZED
    return IncomeMode.STANDARD


def prepare_inputs(raw: Mapping[str, Any]) -> DealInputs:
    """
    Turn raw form values into DealInputs.

    Responsibilities:
      - Parse every numeric field with parse_number (missing -> 0).
      - Clamp percents to their caps BEFORE converting to fractions.
      - Floor money amounts at 0.
      - Round the loan term to whole years (halves up), at least 1.
    """
    num = {f: parse_number(raw.get(f)) for f in NUMERIC_FIELDS}

    pcts = {f: clamp(num[f], 0.0, cap) for f, cap in PCT_CAPS.items()}

    def money(field: str) -> float:
        return max(0.0, num[field])

    return DealInputs(
        mode=parse_mode(raw.get("mode")),
        purchase_price=money("purchase_price"),
        down_payment_frac=pcts["down_payment_pct"] / 100.0,
        interest_rate_pct=pcts["interest_rate_pct"],
        loan_term_years=max(1, round_half_up(num["loan_term_years"])),
        closing_costs=money("closing_costs"),
        monthly_rent=money("monthly_rent"),
        tenant_portion_monthly=money("tenant_portion_monthly"),
        hap_monthly=money("hap_monthly"),
        other_monthly_income=money("other_monthly_income"),
        inspection_reserve_monthly=money("inspection_reserve_monthly"),
        taxes_monthly=money("taxes_monthly"),
        insurance_monthly=money("insurance_monthly"),
        hoa_monthly=money("hoa_monthly"),
        utilities_monthly=money("utilities_monthly"),
        vacancy_frac=pcts["vacancy_pct"] / 100.0,
        repairs_frac=pcts["repairs_pct"] / 100.0,
        capex_frac=pcts["capex_pct"] / 100.0,
        management_frac=pcts["management_pct"] / 100.0,
    )
