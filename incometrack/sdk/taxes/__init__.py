"""taxes - Romanian personal income tax logic.

Scope:
- Yearly income tax, health insurance (CASS) and social insurance (CAS)
- Statutory personal deduction and social insurance ceiling
- Year-specific rules loaded from rules/{year}.yaml

Constraints:
- Pure calculation - no records access, receives amounts, returns results
- Exact Decimal arithmetic, no rounding

Modules:
- calculator: calculate_yearly_taxes
- rules: rules loading with prior-year fallback
- schemas: pydantic models for rules, inputs and results

Usage:
    from incometrack.sdk.taxes import calculate_yearly_taxes

    result = calculate_yearly_taxes(gross_income=100000, year=2024)
    result.total_taxes  # Decimal("44700.00")
"""

from .schemas import (
    TaxRules,
    DeductionSet,
    TaxCalculationRequest,
    TaxCalculationResult,
    DeductionBreakdown,
    AppliedTaxRates,
    MIN_TAX_YEAR,
    MAX_TAX_YEAR,
)

from .rules import (
    TaxRulesNotFoundError,
    get_tax_rules_dir,
    available_years,
    load_tax_rules,
    rules_for_year,
)

from .calculator import calculate_yearly_taxes

__all__ = [
    # Schemas
    "TaxRules",
    "DeductionSet",
    "TaxCalculationRequest",
    "TaxCalculationResult",
    "DeductionBreakdown",
    "AppliedTaxRates",
    "MIN_TAX_YEAR",
    "MAX_TAX_YEAR",
    # Rules
    "TaxRulesNotFoundError",
    "get_tax_rules_dir",
    "available_years",
    "load_tax_rules",
    "rules_for_year",
    # Calculation
    "calculate_yearly_taxes",
]
