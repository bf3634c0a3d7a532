# src/quickcheck/analysis/finance_batch.py

from __future__ import annotations

from typing import Any, Mapping, Optional

import pandas as pd

from quickcheck.adapters.config import config
from quickcheck.analysis.finance import compute_metrics
from quickcheck.domain.rules import evaluate_decision
from quickcheck.domain.underwriting import DecisionSignals
from quickcheck.services.validation import NUMERIC_FIELDS, prepare_inputs

OUTPUT_COLUMNS = [
    "is_go",
    "net_monthly_cash_flow",
    "dscr",
    "cap_rate",
    "cash_on_cash_return",
    "break_even_rent",
    "net_operating_income",
    "monthly_debt_service",
    "blocking_reasons",
    "warnings",
]


def _row_to_raw(row: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict[str, Any]:
    raw = dict(defaults)
    for key in [*NUMERIC_FIELDS, "mode"]:
        if key not in row:
            continue
        val = row[key]
        if val is None or (isinstance(val, float) and pd.isna(val)):
            # empty CSV cell -> keep the default
            continue
        raw[key] = val
    return raw


def screen_dataframe(
    df: pd.DataFrame,
    defaults: Optional[Mapping[str, Any]] = None,
) -> pd.DataFrame:
    """
    Screen every row on its own.

    Expected columns are the raw field names (purchase_price, monthly_rent,
    vacancy_pct, mode, ...). Missing columns and empty cells fall back to
    `defaults` (the configured example deal when not given). Rows never
    influence each other; the result is indexed like `df`.
    """
    defaults = config.default_fields() if defaults is None else defaults

    records = []
    for row in df.to_dict(orient="records"):
        inputs = prepare_inputs(_row_to_raw(row, defaults))
        m = compute_metrics(inputs)
        v = evaluate_decision(DecisionSignals.from_metrics(m))
        records.append(
            {
                "is_go": v.is_go,
                "net_monthly_cash_flow": m.net_monthly_cash_flow,
                "dscr": m.dscr,
                "cap_rate": m.cap_rate,
                "cash_on_cash_return": m.cash_on_cash_return,
                "break_even_rent": m.break_even_rent,
                "net_operating_income": m.net_operating_income,
                "monthly_debt_service": m.monthly_debt_service,
                "blocking_reasons": " | ".join(v.blocking_reasons),
                "warnings": " | ".join(v.warnings),
            }
        )

    return pd.DataFrame(records, columns=OUTPUT_COLUMNS, index=df.index)
