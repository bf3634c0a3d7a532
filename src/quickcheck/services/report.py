# src/quickcheck/services/report.py
from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from fpdf import FPDF

from quickcheck.domain.deal import DealInputs
from quickcheck.domain.underwriting import DealMetrics, Verdict
from quickcheck.services.formatting import money, money2, pct, ratio

# Page layout, in mm on an A4 page
TOP_Y = 14
LINE_HEIGHT = 7
PAGE_BREAK_Y = 280
LEFT_X = 12
FONT_SIZE = 11

Page = List[Tuple[int, str]]


def build_report_lines(inputs: DealInputs, metrics: DealMetrics, verdict: Verdict) -> List[str]:
    mode = "Section 8" if inputs.is_subsidized else "Standard"
    lines = [
        f"Deal QuickCheck ({mode})",
        f"Price: {money(metrics.purchase_price)} | Loan: {money(metrics.loan_amount)} "
        f"| Cash invested: {money(metrics.cash_invested)}",
        "",
        "PRIMARY SIGNALS",
        f"Cash flow (mo): {money2(metrics.net_monthly_cash_flow)}",
        f"DSCR: {ratio(metrics.dscr)}",
        "",
        "KEY METRICS",
        f"NOI (mo): {money2(metrics.net_operating_income)}",
        f"Cap rate: {pct(metrics.cap_rate)}",
        f"Cash-on-cash: {pct(metrics.cash_on_cash_return)}",
        f"Break-even rent: {money2(metrics.break_even_rent)}",
        "",
        f"WHY {verdict.label}",
    ]

    if not verdict.blocking_reasons:
        lines.append("No blocking issues found for screening thresholds.")
    lines.extend(f"- {r}" for r in verdict.blocking_reasons)

    if verdict.warnings:
        lines.append("")
        lines.append("WARNINGS")
        lines.extend(f"- {w}" for w in verdict.warnings)

    lines.append("")
    lines.append("NOTE: Fast screening tool — not full underwriting.")
    return lines


def paginate(lines: List[str]) -> List[Page]:
    """
    Lay lines out top to bottom. After each line the offset moves down by
    LINE_HEIGHT; once it passes PAGE_BREAK_Y the next line starts a new page.
    """
    pages: List[Page] = [[]]
    y = TOP_Y
    for text in lines:
        if y > PAGE_BREAK_Y:
            pages.append([])
            y = TOP_Y
        pages[-1].append((y, text))
        y += LINE_HEIGHT
    return pages


def render_pdf(lines: List[str], path: str | Path) -> Path:
    pdf = FPDF(unit="mm", format="A4")
    pdf.set_auto_page_break(auto=False)
    pdf.set_font("Helvetica", size=FONT_SIZE)
    for page in paginate(lines):
        pdf.add_page()
        for y, text in page:
            # core fonts are latin-1 only
            safe = text.replace("—", "-").encode("latin-1", "replace").decode("latin-1")
            pdf.text(LEFT_X, y, safe)
    out = Path(path)
    pdf.output(str(out))
    return out
