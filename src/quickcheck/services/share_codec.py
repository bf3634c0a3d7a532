# src/quickcheck/services/share_codec.py
"""
Flat key/value codec for share links.

State is the raw form state: field name -> string, plus "mode". Keys on
the wire are short and stable so old links keep working.
"""
from __future__ import annotations

from typing import Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from quickcheck.domain.deal import IncomeMode
from quickcheck.services.validation import parse_mode

MODE_KEY = "m"

# field name -> share key
SHARE_KEYS = {
    "purchase_price": "p",
    "down_payment_pct": "dp",
    "interest_rate_pct": "r",
    "loan_term_years": "t",
    "closing_costs": "cc",
    "monthly_rent": "rent",
    "tenant_portion_monthly": "tenant",
    "hap_monthly": "hap",
    "other_monthly_income": "other",
    "taxes_monthly": "tax",
    "insurance_monthly": "ins",
    "hoa_monthly": "hoa",
    "utilities_monthly": "util",
    "vacancy_pct": "vac",
    "repairs_pct": "rep",
    "capex_pct": "capex",
    "management_pct": "mgmt",
    "inspection_reserve_monthly": "s8res",
}

_MODE_TOKENS = {IncomeMode.STANDARD.value, IncomeMode.SUBSIDIZED.value}


def encode_share_params(state: Mapping[str, object]) -> dict[str, str]:
    params = {MODE_KEY: parse_mode(state.get("mode")).value}
    for field, key in SHARE_KEYS.items():
        value = state.get(field)
        params[key] = "" if value is None else str(value)
    return params


def decode_share_params(
    params: Mapping[str, str],
    current: Mapping[str, str],
) -> dict[str, str]:
    """
    Apply share params on top of the current state.

    Absent keys keep their current value and an unknown mode token keeps
    the current mode, so partial links are fine and decoding the same
    params twice changes nothing.
    """
    state = dict(current)
    if not params:
        return state

    mode = params.get(MODE_KEY)
    if mode in _MODE_TOKENS:
        state["mode"] = mode

    for field, key in SHARE_KEYS.items():
        if key in params:
            state[field] = params[key]
    return state


def build_share_url(base_url: str, state: Mapping[str, object]) -> str:
    parts = urlsplit(base_url)
    query = dict(parse_qsl(parts.query, keep_blank_values=True))
    query.update(encode_share_params(state))
    return urlunsplit(parts._replace(query=urlencode(query)))


def parse_share_url(url: str, current: Mapping[str, str]) -> dict[str, str]:
    params = dict(parse_qsl(urlsplit(url).query, keep_blank_values=True))
    return decode_share_params(params, current)
