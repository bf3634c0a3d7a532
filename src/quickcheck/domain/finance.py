import math


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(x + 0.5))


def annuity_payment(rate_monthly: float, n_months: float, principal: float) -> float:
    r = rate_monthly
    # (1+r)^n - 1 without the cancellation that zeroes it for tiny r
    try:
        growth_m1 = math.expm1(n_months * math.log1p(r))
    except OverflowError:
        growth_m1 = math.inf
    if math.isinf(growth_m1):
        # very long terms: the payment converges to interest-only
        return principal * r
    if growth_m1 == 0:
        return principal / n_months
    return principal * r * (1 + growth_m1) / growth_m1


def payment_count(years: float) -> float:
    """Number of monthly payments, at least 1; +inf for terms too long to count."""
    try:
        months = float(years) * 12.0
    except OverflowError:
        return math.inf
    if not math.isfinite(months):
        return math.inf
    return max(1, round_half_up(months))


def monthly_mortgage_payment(principal: float, annual_rate_pct: float, years: float) -> float:
    """
    Fixed-rate amortized payment:
    M = P * [ r(1+r)^n / ((1+r)^n - 1) ]
    P = loan principal
    r = monthly rate, (annual_rate_pct / 100) / 12
    n = number of payments, years * 12 rounded, at least 1

    No principal -> no payment. A zero or negative rate pays the
    principal down in equal installments. A rate too small to move
    (1+r)^n does the same.
    """
    r = (annual_rate_pct / 100.0) / 12.0
    n = payment_count(years)

    if principal <= 0:
        return 0.0
    if r <= 0:
        return principal / n
    return annuity_payment(r, n, principal)


def break_even_rent(
    fixed_costs: float,
    debt_service: float,
    other_income: float,
    vacancy_frac: float,
    variable_frac: float,
) -> float:
    """
    Rent at which monthly cash flow is exactly zero, everything else fixed.

    NOI = (rent*(1-vacancy) + other) - fixed - rent*variable
    NOI - debt = 0
    => rent*((1-vacancy) - variable) + other - fixed - debt = 0
    => rent = (fixed + debt - other) / ((1-vacancy) - variable)

    When the coefficient is exactly zero rent has no effect on cash flow
    and there is no finite answer: returns +inf.
    """
    coeff = (1.0 - vacancy_frac) - variable_frac
    if coeff == 0:
        return math.inf
    return (fixed_costs + debt_service - other_income) / coeff
