from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Mapping

from quickcheck.adapters.config import config
from quickcheck.adapters.logging_utils import get_logger, with_context
from quickcheck.analysis.finance import compute_metrics
from quickcheck.domain.deal import DealInputs
from quickcheck.domain.rules import evaluate_decision
from quickcheck.domain.underwriting import DealMetrics, DecisionSignals, Verdict
from quickcheck.services.formatting import money, money2, pct, ratio
from quickcheck.services.share_codec import encode_share_params
from quickcheck.services.validation import NUMERIC_FIELDS, parse_mode, prepare_inputs

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScreenResult:
    state: dict[str, str]   # raw form state the result was computed from
    inputs: DealInputs
    metrics: DealMetrics
    verdict: Verdict


def _json_float(x: float) -> float | None:
    # JSON has no NaN/inf; undefined ratios go out as null
    return x if math.isfinite(x) else None


def _raw_state(raw: Mapping[str, Any]) -> dict[str, str]:
    state = {f: "" if raw.get(f) is None else str(raw.get(f)) for f in NUMERIC_FIELDS}
    state["mode"] = parse_mode(raw.get("mode")).value
    return state


def with_defaults(raw: Mapping[str, Any]) -> dict[str, Any]:
    """
    Fill fields that are missing (or None) from the configured defaults.
    Fields that are present but blank stay blank, and parse to 0.
    """
    merged: dict[str, Any] = config.default_fields()
    merged.update({k: v for k, v in raw.items() if v is not None})
    return merged


def screen(raw: Mapping[str, Any]) -> ScreenResult:
    """
    Parse -> metrics -> decision for one set of raw field values.
    Missing fields count as 0; use screen_with_defaults for form-like
    behavior.
    """
    inputs = prepare_inputs(raw)
    metrics = compute_metrics(inputs)
    verdict = evaluate_decision(DecisionSignals.from_metrics(metrics))

    logger.info(
        "deal screened",
        extra=with_context(
            mode=inputs.mode.value,
            is_go=verdict.is_go,
            net_monthly_cash_flow=round(metrics.net_monthly_cash_flow, 2),
            dscr=metrics.dscr,
            n_blocking=len(verdict.blocking_reasons),
            n_warnings=len(verdict.warnings),
        ),
    )
    return ScreenResult(state=_raw_state(raw), inputs=inputs, metrics=metrics, verdict=verdict)


def screen_with_defaults(raw: Mapping[str, Any]) -> ScreenResult:
    return screen(with_defaults(raw))


def display_values(metrics: DealMetrics) -> dict[str, str]:
    return {
        "purchase_price": money(metrics.purchase_price),
        "loan_amount": money(metrics.loan_amount),
        "rent_used": money(metrics.effective_monthly_rent),
        "net_monthly_cash_flow": money2(metrics.net_monthly_cash_flow),
        "dscr": ratio(metrics.dscr),
        "net_operating_income": money2(metrics.net_operating_income),
        "monthly_debt_service": money2(metrics.monthly_debt_service),
        "cap_rate": pct(metrics.cap_rate),
        "cash_on_cash_return": pct(metrics.cash_on_cash_return),
        "break_even_rent": money2(metrics.break_even_rent),
        "cash_invested": money2(metrics.cash_invested),
        "gross_monthly_income": money2(metrics.gross_monthly_income),
        "effective_monthly_income": money2(metrics.effective_monthly_income),
        "fixed_costs_excluding_debt": money2(metrics.fixed_costs_excluding_debt),
        "variable_costs": money2(metrics.variable_costs),
        "total_monthly_expenses": money2(metrics.total_monthly_expenses),
    }


def result_to_dict(result: ScreenResult) -> dict[str, Any]:
    v = result.verdict
    return {
        "mode": result.inputs.mode.value,
        "inputs": result.inputs.model_dump(mode="json"),
        "metrics": {k: _json_float(x) for k, x in asdict(result.metrics).items()},
        "decision": {
            "is_go": v.is_go,
            "label": v.label,
            "blocking_reasons": list(v.blocking_reasons),
            "warnings": list(v.warnings),
            "primary_signals": [{"label": k, "value": val} for k, val in v.primary_signals],
            "next_step": v.next_step_message,
            "dscr_threshold": v.dscr_threshold,
            "cash_on_cash_threshold": v.cash_on_cash_threshold,
        },
        "display": display_values(result.metrics),
        "share_params": encode_share_params(result.state),
    }


def analyze_deal(raw_payload: Mapping[str, Any]) -> dict[str, Any]:
    return result_to_dict(screen(raw_payload))


def analyze_deal_with_defaults(raw_payload: Mapping[str, Any]) -> dict[str, Any]:
    """
    Same as analyze_deal, but omitted fields take the configured defaults
    (the worked example deal).
    """
    return result_to_dict(screen_with_defaults(raw_payload))
