"""Yearly gross income from work days, and taxes derived from it.

The earnings source is injected: anything with a
find_earnings_by_date_range(start_date, end_date) method works, so tests can
pass an in-memory fake instead of the JSON work-day store.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .taxes import TaxCalculationResult, TaxRules, calculate_yearly_taxes
from .taxes.calculator import DeductionsInput
from .taxes.schemas import to_decimal


class EarningRecord(Protocol):
    date: date
    hours_worked: Decimal
    hourly_rate: Decimal


class EarningsRepository(Protocol):
    def find_earnings_by_date_range(
        self, start_date: date, end_date: date
    ) -> Sequence[EarningRecord]:
        """Return all records dated within [start_date, end_date]."""
        ...


def get_yearly_gross_income(year: int, repository: EarningsRepository) -> Decimal:
    """Sum hours x rate over every record dated Jan 1 - Dec 31 of year.

    Hours and rates may come back as int, float, str or Decimal; floats are
    converted through their string form like every other amount. Returns
    Decimal("0") for a year with no records. Repository errors propagate
    unchanged.
    """
    records = repository.find_earnings_by_date_range(date(year, 1, 1), date(year, 12, 31))
    return sum(
        (
            Decimal(to_decimal(record.hours_worked)) * Decimal(to_decimal(record.hourly_rate))
            for record in records
        ),
        Decimal("0"),
    )


def calculate_taxes_from_work_days(
    year: int,
    repository: EarningsRepository,
    deductions: DeductionsInput = None,
    rules: Optional[TaxRules] = None,
) -> TaxCalculationResult:
    """Calculate yearly taxes on the gross income earned from work days.

    The health card and urban area flags have no effect on the calculation
    and are always passed as True here.
    """
    gross_income = get_yearly_gross_income(year, repository)
    return calculate_yearly_taxes(
        gross_income,
        year,
        deductions if deductions is not None else {},
        has_health_card=True,
        is_urban_area=True,
        rules=rules,
    )
