"""Romanian personal income tax calculation.

Computes income tax, health insurance (CASS) and social insurance (CAS) for
a year of gross income. Pure calculation: no records access, no I/O. The
rule set is passed in, or looked up by year when omitted.
"""

from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from .rules import rules_for_year
from .schemas import (
    AppliedTaxRates,
    DeductionBreakdown,
    DeductionSet,
    TaxCalculationRequest,
    TaxCalculationResult,
    TaxRules,
)

ZERO = Decimal("0")

DeductionsInput = Union[DeductionSet, Mapping[str, Any], None]


def calculate_yearly_taxes(
    gross_income: Any,
    year: int,
    deductions: DeductionsInput = None,
    has_health_card: bool = True,
    is_urban_area: bool = True,
    rules: Optional[TaxRules] = None,
) -> TaxCalculationResult:
    """Calculate yearly taxes for a gross income.

    Steps:
        1. Personal deduction defaults to the statutory amount when not given
        2. Taxable income = gross - all deductions, floored at 0
        3. Income tax on taxable income
        4. Health insurance on gross income (deductions don't reduce it)
        5. Social insurance on gross income capped at the ceiling

    Net income is gross - total taxes and is not floored, so it goes negative
    when the fixed-rate contributions exceed a very low income.

    Args:
        gross_income: Annual gross income in RON (>= 0)
        year: Tax year (2020-2030)
        deductions: DeductionSet or dict of deduction amounts (all optional)
        has_health_card: Accepted, currently has no effect
        is_urban_area: Accepted, currently has no effect
        rules: Rule set to apply (default: rules_for_year(year))

    Returns:
        TaxCalculationResult with all amounts as Decimal

    Raises:
        pydantic.ValidationError: If any input is out of range
    """
    request = TaxCalculationRequest(
        gross_income=gross_income,
        year=year,
        deductions=deductions if deductions is not None else {},
        has_health_card=has_health_card,
        is_urban_area=is_urban_area,
    )
    if rules is None:
        rules = rules_for_year(request.year)

    gross = request.gross_income
    ded = request.deductions

    personal = (
        rules.personal_deduction_annual
        if ded.personal_deduction is None
        else ded.personal_deduction
    )
    professional = ded.professional_deductions or ZERO
    health_ded = ded.health_insurance_deductions or ZERO
    social_ded = ded.social_insurance_deductions or ZERO
    pension = ded.voluntary_pension_deductions or ZERO

    total_deductions = personal + professional + health_ded + social_ded + pension

    taxable_income = max(ZERO, gross - total_deductions)
    income_tax = taxable_income * rules.income_tax_rate
    health_insurance = gross * rules.health_insurance_rate

    social_base = min(gross, rules.social_insurance_ceiling)
    social_insurance = social_base * rules.social_insurance_rate

    total_taxes = income_tax + health_insurance + social_insurance
    net_income = gross - total_taxes

    return TaxCalculationResult(
        gross_income=gross,
        taxable_income=taxable_income,
        income_tax=income_tax,
        health_insurance=health_insurance,
        social_insurance=social_insurance,
        total_taxes=total_taxes,
        net_income=net_income,
        breakdown=DeductionBreakdown(
            personal_deduction=personal,
            professional_deductions=professional,
            health_insurance_deductions=health_ded,
            social_insurance_deductions=social_ded,
            voluntary_pension_deductions=pension,
            total_deductions=total_deductions,
        ),
        tax_rates=AppliedTaxRates(
            income_tax_rate=rules.income_tax_rate,
            health_insurance_rate=rules.health_insurance_rate,
            social_insurance_rate=rules.social_insurance_rate,
        ),
    )
