from quickcheck.domain.underwriting import DecisionSignals, Verdict
from quickcheck.services.formatting import money2, pct, ratio

# Screening guardrails (not underwriting). Deliberately not configurable.
DSCR_MIN = 1.20
COC_MIN = 0.08

NEXT_STEP_GO = "Next: verify rent comps + taxes/insurance + vacancy; then do full underwriting."
NEXT_STEP_NO_GO = "Next: adjust price/down payment/rent/expenses until cash flow and DSCR clear the threshold."


def evaluate_decision(signals: DecisionSignals) -> Verdict:
    reasons = []
    warnings = []

    # 1. Blocking checks. NaN never compares below a threshold, so an
    #    undefined DSCR does not block.
    cash_flow_blocks = signals.net_monthly_cash_flow < 0
    dscr_blocks = signals.dscr < DSCR_MIN

    if cash_flow_blocks:
        reasons.append(f"Cash flow is negative ({money2(signals.net_monthly_cash_flow)}/mo).")
    if dscr_blocks:
        reasons.append(f"DSCR is below {DSCR_MIN:.2f} (currently {ratio(signals.dscr)}).")

    # 2. Non-blocking warnings
    if signals.cash_on_cash_return < COC_MIN:
        warnings.append(f"Cash-on-cash is under {COC_MIN * 100:.0f}% ({pct(signals.cash_on_cash_return)}).")
    if signals.break_even_rent > signals.gross_monthly_income:
        warnings.append("Break-even rent is above your gross rent input.")

    # 3. Verdict comes from the same two checks as the reasons
    is_go = not cash_flow_blocks and not dscr_blocks

    primary_signals = (
        ("Cash flow (monthly)", money2(signals.net_monthly_cash_flow)),
        ("DSCR", ratio(signals.dscr)),
    )

    return Verdict(
        is_go=is_go,
        blocking_reasons=tuple(reasons),
        warnings=tuple(warnings),
        primary_signals=primary_signals,
        next_step_message=NEXT_STEP_GO if is_go else NEXT_STEP_NO_GO,
        dscr_threshold=DSCR_MIN,
        cash_on_cash_threshold=COC_MIN,
    )
