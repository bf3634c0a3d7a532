import math

import pytest

from quickcheck.analysis.finance import compute_metrics
from quickcheck.domain.finance import break_even_rent, monthly_mortgage_payment, round_half_up
from quickcheck.services.validation import prepare_inputs

from tests.fixtures.deals import all_cash_deal, section8_example, standard_example


def test_payment_zero_principal_is_zero():
    assert monthly_mortgage_payment(0.0, 6.75, 30) == 0.0
    assert monthly_mortgage_payment(0.0, 0.0, 1) == 0.0
    assert monthly_mortgage_payment(-5_000.0, 5.0, 15) == 0.0


def test_payment_zero_rate_is_straight_line():
    assert monthly_mortgage_payment(120_000.0, 0.0, 30) == pytest.approx(120_000.0 / 360)
    # 2.5 years -> 30 months exactly; 1.04 years -> round(12.48) = 12 months
    assert monthly_mortgage_payment(3_000.0, 0.0, 2.5) == pytest.approx(100.0)
    assert monthly_mortgage_payment(1_200.0, 0.0, 1.04) == pytest.approx(100.0)


def test_payment_negative_rate_does_not_blow_up():
    p = monthly_mortgage_payment(36_000.0, -3.0, 3)
    assert p == pytest.approx(1_000.0)


def test_payment_term_floor_is_one_period():
    assert monthly_mortgage_payment(500.0, 0.0, 0.0) == pytest.approx(500.0)


def test_payment_worked_example():
    # 500k with 25% down at 6.75% over 30 years
    p = monthly_mortgage_payment(375_000.0, 6.75, 30)
    assert p == pytest.approx(2432.24, abs=0.01)


def test_payment_very_long_term_stays_finite():
    p = monthly_mortgage_payment(100_000.0, 12.0, 10_000)
    assert math.isfinite(p)
    assert p == pytest.approx(1_000.0, rel=1e-6)  # interest only


def test_payment_tiny_rate_is_straight_line():
    p = monthly_mortgage_payment(375_000.0, 1e-13, 30)
    assert p == pytest.approx(375_000.0 / 360)
    p = monthly_mortgage_payment(375_000.0, 1.547e-251, 30)
    assert p == pytest.approx(375_000.0 / 360)


def test_tiny_rate_deal_metrics_are_finite():
    raw = dict(standard_example(), interest_rate_pct="0.0000000000001")
    m = compute_metrics(prepare_inputs(raw))
    assert m.monthly_debt_service == pytest.approx(375_000.0 / 360)
    assert math.isfinite(m.break_even_rent)


def test_payment_astronomical_term_is_interest_only():
    # float(years) * 12 overflows; the loan never amortizes
    assert monthly_mortgage_payment(120_000.0, 12.0, 10**400) == pytest.approx(1_200.0)
    assert monthly_mortgage_payment(120_000.0, 12.0, 10**308) == pytest.approx(1_200.0)
    assert monthly_mortgage_payment(120_000.0, 0.0, 10**308) == 0.0


def test_huge_term_input_screens_without_error():
    raw = dict(standard_example(), loan_term_years="1" + "0" * 308)
    m = compute_metrics(prepare_inputs(raw))
    assert m.monthly_debt_service == pytest.approx(375_000.0 * 0.0675 / 12)
    assert math.isfinite(m.net_monthly_cash_flow)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(29.5) == 30
    assert round_half_up(29.49) == 29
    assert round_half_up(-2.5) == -2


def test_break_even_zero_coefficient_is_infinite():
    # 50% vacancy + 50% variable costs: rent cannot move cash flow
    assert break_even_rent(500.0, 1_000.0, 0.0, vacancy_frac=0.5, variable_frac=0.5) == math.inf


def test_standard_example_metrics():
    m = compute_metrics(prepare_inputs(standard_example()))

    assert m.loan_amount == pytest.approx(375_000.0)
    assert m.down_payment == pytest.approx(125_000.0)
    assert m.monthly_debt_service == pytest.approx(2432.24, abs=0.01)
    assert m.effective_monthly_rent == pytest.approx(4_000.0)
    assert m.gross_monthly_income == pytest.approx(4_000.0)
    assert m.effective_monthly_income == pytest.approx(3_800.0)
    assert m.fixed_costs_excluding_debt == pytest.approx(660.0)
    # variable costs run on rent before vacancy: 4000 * 18%
    assert m.variable_costs == pytest.approx(720.0)
    assert m.net_operating_income == pytest.approx(2_420.0)
    assert m.net_monthly_cash_flow == pytest.approx(-12.24, abs=0.01)
    assert m.total_monthly_expenses == pytest.approx(660.0 + 720.0 + m.monthly_debt_service)
    assert m.cap_rate == pytest.approx(2_420.0 * 12 / 500_000.0)
    assert m.cash_invested == pytest.approx(125_000.0)
    assert m.cash_on_cash_return == pytest.approx(m.net_monthly_cash_flow * 12 / 125_000.0)
    assert m.dscr == pytest.approx(0.99497, abs=1e-4)
    assert m.break_even_rent == pytest.approx(4015.90, abs=0.01)


def test_section8_mode_only_changes_rent_composition():
    std = compute_metrics(prepare_inputs(standard_example()))
    s8 = compute_metrics(prepare_inputs(section8_example()))
    assert s8 == std


def test_section8_reserve_counts_only_in_section8_mode():
    raw = standard_example()
    raw["inspection_reserve_monthly"] = "75"
    std = compute_metrics(prepare_inputs(raw))
    assert std.fixed_costs_excluding_debt == pytest.approx(660.0)

    raw["mode"] = "s8"
    s8 = compute_metrics(prepare_inputs(raw))
    assert s8.fixed_costs_excluding_debt == pytest.approx(735.0)
    assert s8.net_operating_income == pytest.approx(std.net_operating_income - 75.0)


def test_standard_mode_ignores_section8_rent_fields():
    raw = standard_example()
    raw.update(tenant_portion_monthly="9999", hap_monthly="9999")
    m = compute_metrics(prepare_inputs(raw))
    assert m.effective_monthly_rent == pytest.approx(4_000.0)


def test_no_debt_positive_noi_dscr_is_infinite():
    m = compute_metrics(prepare_inputs(all_cash_deal()))
    assert m.monthly_debt_service == 0.0
    assert m.net_operating_income > 0
    assert math.isinf(m.dscr) and m.dscr > 0


def test_no_debt_no_income_dscr_is_nan():
    m = compute_metrics(prepare_inputs({"purchase_price": "100000", "down_payment_pct": "100"}))
    assert m.net_operating_income == 0.0
    assert math.isnan(m.dscr)


def test_empty_inputs_degrade_to_zero_and_undefined():
    m = compute_metrics(prepare_inputs({}))
    assert m.purchase_price == 0.0
    assert m.monthly_debt_service == 0.0
    assert m.net_monthly_cash_flow == 0.0
    assert math.isnan(m.cap_rate)
    assert math.isnan(m.cash_on_cash_return)
    assert math.isnan(m.dscr)
    assert m.break_even_rent == 0.0


def test_compute_metrics_is_idempotent():
    inputs = prepare_inputs(standard_example())
    assert compute_metrics(inputs) == compute_metrics(inputs)
