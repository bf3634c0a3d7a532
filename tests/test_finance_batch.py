import math

import pandas as pd
import pytest

from quickcheck.adapters.config import config
from quickcheck.analysis.finance_batch import OUTPUT_COLUMNS, screen_dataframe
from quickcheck.services.deal_analyzer import screen_with_defaults

from tests.fixtures.deals import cash_flow_beast, standard_example


def test_screen_dataframe_matches_single_deal_path():
    df = pd.DataFrame([standard_example(), cash_flow_beast()])
    out = screen_dataframe(df)

    assert list(out.columns) == OUTPUT_COLUMNS
    assert out.index.equals(df.index)
    assert out["is_go"].tolist() == [False, True]

    single = screen_with_defaults(cash_flow_beast())
    assert out.loc[1, "net_monthly_cash_flow"] == pytest.approx(single.metrics.net_monthly_cash_flow)
    assert out.loc[0, "blocking_reasons"].startswith("Cash flow is negative")


def test_missing_columns_and_empty_cells_use_defaults():
    df = pd.DataFrame({"monthly_rent": ["5000", None]})
    out = screen_dataframe(df)

    defaults_only = screen_with_defaults({})
    assert out.loc[1, "net_monthly_cash_flow"] == pytest.approx(defaults_only.metrics.net_monthly_cash_flow)
    assert out.loc[0, "net_monthly_cash_flow"] > out.loc[1, "net_monthly_cash_flow"]


def test_rows_are_independent():
    a = screen_dataframe(pd.DataFrame([cash_flow_beast()]))
    b = screen_dataframe(pd.DataFrame([standard_example(), cash_flow_beast()]))
    assert a.loc[0, "dscr"] == pytest.approx(b.loc[1, "dscr"])


def test_numeric_columns_are_accepted():
    df = pd.DataFrame({"purchase_price": [200_000], "down_payment_pct": [100], "monthly_rent": [2_400]})
    out = screen_dataframe(df, defaults=config.default_fields())
    assert math.isinf(out.loc[0, "dscr"])


def test_empty_frame():
    out = screen_dataframe(pd.DataFrame(columns=["purchase_price"]))
    assert out.empty
    assert list(out.columns) == OUTPUT_COLUMNS
