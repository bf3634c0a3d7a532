import math

import pytest

from quickcheck.domain.rules import COC_MIN, DSCR_MIN, NEXT_STEP_GO, NEXT_STEP_NO_GO, evaluate_decision
from quickcheck.domain.underwriting import DecisionSignals


def _signals(**overrides) -> DecisionSignals:
    base = dict(
        net_monthly_cash_flow=500.0,
        dscr=1.50,
        cash_on_cash_return=0.12,
        break_even_rent=1_500.0,
        effective_monthly_income=2_300.0,
        gross_monthly_income=2_400.0,
        monthly_debt_service=1_000.0,
    )
    base.update(overrides)
    return DecisionSignals(**base)


def test_healthy_deal_is_go_without_reasons():
    v = evaluate_decision(_signals())
    assert v.is_go
    assert v.label == "GO"
    assert v.blocking_reasons == ()
    assert v.warnings == ()
    assert v.next_step_message == NEXT_STEP_GO
    assert v.dscr_threshold == DSCR_MIN == 1.20
    assert v.cash_on_cash_threshold == COC_MIN == 0.08


def test_boundary_is_go():
    # exactly at both thresholds
    v = evaluate_decision(_signals(net_monthly_cash_flow=0.0, dscr=1.20))
    assert v.is_go
    assert v.blocking_reasons == ()


def test_negative_cash_flow_blocks():
    v = evaluate_decision(_signals(net_monthly_cash_flow=-12.24))
    assert not v.is_go
    assert v.blocking_reasons == ("Cash flow is negative (-$12.24/mo).",)
    assert v.next_step_message == NEXT_STEP_NO_GO


def test_low_dscr_blocks():
    v = evaluate_decision(_signals(dscr=1.19))
    assert not v.is_go
    assert v.blocking_reasons == ("DSCR is below 1.20 (currently 1.19).",)


def test_both_blocking_reasons_keep_order():
    v = evaluate_decision(_signals(net_monthly_cash_flow=-50.0, dscr=0.9))
    assert len(v.blocking_reasons) == 2
    assert v.blocking_reasons[0].startswith("Cash flow is negative")
    assert v.blocking_reasons[1].startswith("DSCR is below")


def test_undefined_dscr_does_not_block():
    # NaN compares False against the threshold; the gap is kept on purpose
    v = evaluate_decision(_signals(dscr=math.nan, monthly_debt_service=0.0))
    assert v.is_go
    assert v.blocking_reasons == ()
    assert dict(v.primary_signals)["DSCR"] == "—"


def test_undefined_dscr_with_negative_cash_flow_is_no_go():
    v = evaluate_decision(_signals(dscr=math.nan, net_monthly_cash_flow=-1.0))
    assert not v.is_go
    assert v.blocking_reasons == ("Cash flow is negative (-$1.00/mo).",)


def test_infinite_dscr_passes_and_renders_as_marker():
    v = evaluate_decision(_signals(dscr=math.inf, monthly_debt_service=0.0))
    assert v.is_go
    assert v.primary_signals[1] == ("DSCR", "—")


def test_low_cash_on_cash_warns_without_blocking():
    v = evaluate_decision(_signals(cash_on_cash_return=0.031))
    assert v.is_go
    assert v.warnings == ("Cash-on-cash is under 8% (3.10%).",)


def test_undefined_cash_on_cash_does_not_warn():
    v = evaluate_decision(_signals(cash_on_cash_return=math.nan))
    assert v.warnings == ()


def test_break_even_above_gross_warns():
    v = evaluate_decision(_signals(break_even_rent=2_500.0))
    assert v.is_go
    assert v.warnings == ("Break-even rent is above your gross rent input.",)


def test_infinite_break_even_warns():
    v = evaluate_decision(_signals(break_even_rent=math.inf))
    assert "Break-even rent is above your gross rent input." in v.warnings


def test_primary_signals_shape():
    v = evaluate_decision(_signals(net_monthly_cash_flow=596.69, dscr=1.5901))
    assert v.primary_signals == (
        ("Cash flow (monthly)", "$596.69"),
        ("DSCR", "1.59"),
    )


@pytest.mark.parametrize(
    "cash_flow,dscr,coc,be",
    [
        (-10.0, 0.5, 0.01, 9_999.0),
        (10.0, 0.5, 0.20, 100.0),
        (-10.0, 2.0, 0.01, 100.0),
        (0.0, 1.2, 0.0, 2_401.0),
        (100.0, math.nan, math.nan, math.inf),
    ],
)
def test_reasons_and_warnings_are_disjoint_and_consistent(cash_flow, dscr, coc, be):
    v = evaluate_decision(
        _signals(net_monthly_cash_flow=cash_flow, dscr=dscr, cash_on_cash_return=coc, break_even_rent=be)
    )
    assert set(v.blocking_reasons).isdisjoint(v.warnings)
    assert v.is_go == (len(v.blocking_reasons) == 0)
    assert v.is_go == (cash_flow >= 0 and not dscr < DSCR_MIN)


def test_evaluate_decision_is_idempotent():
    s = _signals(net_monthly_cash_flow=-3.0, dscr=1.1, cash_on_cash_return=0.02)
    assert evaluate_decision(s) == evaluate_decision(s)
