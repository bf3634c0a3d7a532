# src/quickcheck/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # Share links / export
    SHARE_BASE_URL: str = Field(default="http://localhost:8000/analyze")
    PDF_FILENAME: str = Field(default="deal-quickcheck.pdf")

    # -----------------------------
    # Default inputs (the worked example deal)
    # -----------------------------
    DEFAULT_MODE: str = Field(default="std")

    DEFAULT_PURCHASE_PRICE: float = Field(default=500_000.0)
    DEFAULT_DOWN_PAYMENT_PCT: float = Field(default=25.0)
    DEFAULT_INTEREST_RATE_PCT: float = Field(default=6.75)
    DEFAULT_LOAN_TERM_YEARS: float = Field(default=30.0)
    DEFAULT_CLOSING_COSTS: float = Field(default=0.0)

    DEFAULT_MONTHLY_RENT: float = Field(default=4000.0)
    DEFAULT_TENANT_PORTION_MONTHLY: float = Field(default=800.0)
    DEFAULT_HAP_MONTHLY: float = Field(default=3200.0)
    DEFAULT_OTHER_MONTHLY_INCOME: float = Field(default=0.0)

    DEFAULT_TAXES_MONTHLY: float = Field(default=520.0)
    DEFAULT_INSURANCE_MONTHLY: float = Field(default=140.0)
    DEFAULT_HOA_MONTHLY: float = Field(default=0.0)
    DEFAULT_UTILITIES_MONTHLY: float = Field(default=0.0)

    # percent of rent, in percent units (5 means 5%)
    DEFAULT_VACANCY_PCT: float = Field(default=5.0)
    DEFAULT_REPAIRS_PCT: float = Field(default=5.0)
    DEFAULT_CAPEX_PCT: float = Field(default=5.0)
    DEFAULT_MANAGEMENT_PCT: float = Field(default=8.0)

    DEFAULT_INSPECTION_RESERVE_MONTHLY: float = Field(default=0.0)

    model_config = SettingsConfigDict(
        env_prefix="QUICKCHECK_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "DEFAULT_DOWN_PAYMENT_PCT",
        "DEFAULT_INTEREST_RATE_PCT",
        "DEFAULT_VACANCY_PCT",
        "DEFAULT_REPAIRS_PCT",
        "DEFAULT_CAPEX_PCT",
        "DEFAULT_MANAGEMENT_PCT",
        mode="before",
    )
    @classmethod
    def _to_non_negative_percent(cls, v: Any) -> Any:
        if v is None:
            return v
        if isinstance(v, str):
            v = v.strip().replace("%", "")
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("percent must be numeric or percent-like") from err
        if f < 0:
            raise ValueError("percent must be non-negative")
        return f

    @field_validator("DEFAULT_MODE", mode="before")
    @classmethod
    def _mode_token(cls, v: Any) -> Any:
        t = str(v).strip().lower()
        if t not in ("std", "s8"):
            raise ValueError("DEFAULT_MODE must be 'std' or 's8'")
        return t

    def default_fields(self) -> dict[str, str]:
        """
        Default raw field state, keyed by field name, as the strings a form
        would hold before the user edits anything.
        """
        values = {
            "purchase_price": self.DEFAULT_PURCHASE_PRICE,
            "down_payment_pct": self.DEFAULT_DOWN_PAYMENT_PCT,
            "interest_rate_pct": self.DEFAULT_INTEREST_RATE_PCT,
            "loan_term_years": self.DEFAULT_LOAN_TERM_YEARS,
            "closing_costs": self.DEFAULT_CLOSING_COSTS,
            "monthly_rent": self.DEFAULT_MONTHLY_RENT,
            "tenant_portion_monthly": self.DEFAULT_TENANT_PORTION_MONTHLY,
            "hap_monthly": self.DEFAULT_HAP_MONTHLY,
            "other_monthly_income": self.DEFAULT_OTHER_MONTHLY_INCOME,
            "taxes_monthly": self.DEFAULT_TAXES_MONTHLY,
            "insurance_monthly": self.DEFAULT_INSURANCE_MONTHLY,
            "hoa_monthly": self.DEFAULT_HOA_MONTHLY,
            "utilities_monthly": self.DEFAULT_UTILITIES_MONTHLY,
            "vacancy_pct": self.DEFAULT_VACANCY_PCT,
            "repairs_pct": self.DEFAULT_REPAIRS_PCT,
            "capex_pct": self.DEFAULT_CAPEX_PCT,
            "management_pct": self.DEFAULT_MANAGEMENT_PCT,
            "inspection_reserve_monthly": self.DEFAULT_INSPECTION_RESERVE_MONTHLY,
        }
        fields = {k: _plain_number(v) for k, v in values.items()}
        fields["mode"] = self.DEFAULT_MODE
        return fields


def _plain_number(v: float) -> str:
    # 500000.0 -> "500000", 6.75 -> "6.75"
    f = float(v)
    if f.is_integer():
        return str(int(f))
    return str(f)


config = AppConfig()
