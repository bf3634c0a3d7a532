from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd
import typer

from quickcheck.adapters.config import config
from quickcheck.adapters.logging_utils import get_logger, with_context
from quickcheck.analysis.finance_batch import screen_dataframe
from quickcheck.domain.deal import IncomeMode
from quickcheck.services.deal_analyzer import ScreenResult, screen_with_defaults
from quickcheck.services.report import build_report_lines, render_pdf
from quickcheck.services.share_codec import build_share_url

logger = get_logger(__name__)

app = typer.Typer(help="Deal QuickCheck: fast GO / NO-GO screening for rental deals.")


@app.callback()
def main(
    ctx: typer.Context,
    mode: Optional[IncomeMode] = typer.Option(
        None, "--mode", case_sensitive=False,
        help="std: market rent; s8: tenant portion + HAP (default from QUICKCHECK_DEFAULT_MODE)",
    ),
    price: Optional[str] = typer.Option(None, "--price", help="Purchase price ($)"),
    down: Optional[str] = typer.Option(None, "--down", help="Down payment (% of price)"),
    rate: Optional[str] = typer.Option(None, "--rate", help="Annual interest rate (%)"),
    term: Optional[str] = typer.Option(None, "--term", help="Loan term (years)"),
    closing: Optional[str] = typer.Option(None, "--closing", help="Closing costs ($)"),
    rent: Optional[str] = typer.Option(None, "--rent", help="Monthly rent, standard mode ($)"),
    tenant: Optional[str] = typer.Option(None, "--tenant", help="Tenant-paid portion, Section 8 ($/mo)"),
    hap: Optional[str] = typer.Option(None, "--hap", help="Housing assistance payment, Section 8 ($/mo)"),
    other: Optional[str] = typer.Option(None, "--other", help="Other income: laundry, parking ($/mo)"),
    taxes: Optional[str] = typer.Option(None, "--taxes", help="Property taxes ($/mo)"),
    insurance: Optional[str] = typer.Option(None, "--insurance", help="Insurance ($/mo)"),
    hoa: Optional[str] = typer.Option(None, "--hoa", help="HOA ($/mo)"),
    utilities: Optional[str] = typer.Option(None, "--utilities", help="Owner-paid utilities ($/mo)"),
    vacancy: Optional[str] = typer.Option(None, "--vacancy", help="Vacancy (% of rent)"),
    repairs: Optional[str] = typer.Option(None, "--repairs", help="Repairs (% of rent)"),
    capex: Optional[str] = typer.Option(None, "--capex", help="Capital reserves (% of rent)"),
    mgmt: Optional[str] = typer.Option(None, "--mgmt", help="Management (% of rent)"),
    reserve: Optional[str] = typer.Option(None, "--reserve", help="Section 8 inspection/turnover reserve ($/mo)"),
) -> None:
    """
    Deal options go before the command (quickcheck --price 350000 analyze).
    Anything left out takes the configured default.
    """
    ctx.obj = {
        "mode": mode.value if mode is not None else None,
        "purchase_price": price,
        "down_payment_pct": down,
        "interest_rate_pct": rate,
        "loan_term_years": term,
        "closing_costs": closing,
        "monthly_rent": rent,
        "tenant_portion_monthly": tenant,
        "hap_monthly": hap,
        "other_monthly_income": other,
        "taxes_monthly": taxes,
        "insurance_monthly": insurance,
        "hoa_monthly": hoa,
        "utilities_monthly": utilities,
        "vacancy_pct": vacancy,
        "repairs_pct": repairs,
        "capex_pct": capex,
        "management_pct": mgmt,
        "inspection_reserve_monthly": reserve,
    }


def _screen(ctx: typer.Context) -> ScreenResult:
    raw: Dict[str, Any] = ctx.obj or {}
    return screen_with_defaults(raw)


@app.command()
def analyze(ctx: typer.Context) -> None:
    """
    Screen one deal and print the report.
    """
    result = _screen(ctx)
    for line in build_report_lines(result.inputs, result.metrics, result.verdict):
        typer.echo(line)
    typer.echo(result.verdict.next_step_message)


@app.command()
def share(
    ctx: typer.Context,
    base_url: str = typer.Option(config.SHARE_BASE_URL, help="Link target"),
) -> None:
    """
    Print a share link that reproduces these inputs.
    """
    result = _screen(ctx)
    typer.echo(build_share_url(base_url, result.state))


@app.command("export-pdf")
def export_pdf(
    ctx: typer.Context,
    output: Path = typer.Option(Path(config.PDF_FILENAME), "--output", "-o", help="PDF path"),
) -> None:
    """
    Write the screening report as a PDF.
    """
    result = _screen(ctx)
    lines = build_report_lines(result.inputs, result.metrics, result.verdict)
    path = render_pdf(lines, output)
    logger.info("pdf exported", extra=with_context(path=str(path)))
    typer.echo(f"PDF exported: {path}")

@app.command("screen-batch")
def screen_batch(
    input_csv: Path = typer.Argument(..., help="CSV with one deal per row; columns are field names"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Where to write results (default: <input>_screened.csv)"),
) -> None:
    """
    Screen every row of a CSV independently and write per-row verdicts.
    """
    if not input_csv.exists():
        raise typer.BadParameter(f"file not found: {input_csv}", param_hint="INPUT_CSV")

    df = pd.read_csv(input_csv, dtype=str, keep_default_na=False, na_values=[""])
    screened = screen_dataframe(df)
    out = output or input_csv.with_name(f"{input_csv.stem}_screened.csv")
    pd.concat([df, screened], axis=1).to_csv(out, index=False)

    n_go = int(screened["is_go"].sum())
    logger.info(
        "batch screened",
        extra=with_context(rows=len(screened), go=n_go, output=str(out)),
    )
    typer.echo(f"Screened {len(screened)} deals ({n_go} GO) -> {out}")


if __name__ == "__main__":
    app()
