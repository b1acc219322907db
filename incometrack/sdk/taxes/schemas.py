"""Pydantic schemas for tax rules, calculation inputs and results.

TaxRules validates the rules/*.yaml files. The request and result schemas
carry money as Decimal so that sums like total_taxes are exact.
"""

from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

MIN_TAX_YEAR = 2020
MAX_TAX_YEAR = 2030


def to_decimal(value: Any) -> Any:
    """Convert int/float input to Decimal through its string form.

    Floats go through str() so 0.1 becomes Decimal("0.1") rather than the
    binary expansion. Anything else is left for pydantic to validate.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    return value


Amount = Annotated[Decimal, BeforeValidator(to_decimal)]


class TaxRules(BaseModel):
    """Complete Romanian personal income tax rules for a year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    currency: str = "RON"
    income_tax_rate: Amount = Field(..., ge=0, le=1, description="Income tax on taxable income")
    health_insurance_rate: Amount = Field(..., ge=0, le=1, description="CASS, on gross income")
    social_insurance_rate: Amount = Field(..., ge=0, le=1, description="CAS, on gross up to ceiling")
    personal_deduction_annual: Amount = Field(..., ge=0)
    social_insurance_ceiling: Amount = Field(..., ge=0, description="Max base subject to CAS")
    # Informational only, not used by the calculation
    minimum_gross_salary: Optional[Amount] = Field(default=None, ge=0)


class DeductionSet(BaseModel):
    """Annual deductions. None for personal_deduction means the statutory default."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    personal_deduction: Optional[Amount] = Field(default=None, ge=0)
    professional_deductions: Optional[Amount] = Field(default=None, ge=0)
    health_insurance_deductions: Optional[Amount] = Field(default=None, ge=0)
    social_insurance_deductions: Optional[Amount] = Field(default=None, ge=0)
    voluntary_pension_deductions: Optional[Amount] = Field(default=None, ge=0)


class TaxCalculationRequest(BaseModel):
    """Validated input for a yearly tax calculation."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_income: Amount = Field(..., ge=0)
    year: int = Field(..., ge=MIN_TAX_YEAR, le=MAX_TAX_YEAR)
    deductions: DeductionSet = Field(default_factory=DeductionSet)
    # Accepted but not used in any computation yet
    has_health_card: bool = True
    is_urban_area: bool = True


class DeductionBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    personal_deduction: Decimal
    professional_deductions: Decimal
    health_insurance_deductions: Decimal
    social_insurance_deductions: Decimal
    voluntary_pension_deductions: Decimal
    total_deductions: Decimal


class AppliedTaxRates(BaseModel):
    model_config = ConfigDict(frozen=True)

    income_tax_rate: Decimal
    health_insurance_rate: Decimal
    social_insurance_rate: Decimal


class TaxCalculationResult(BaseModel):
    """Full tax breakdown for one year. Derived, never persisted."""
    model_config = ConfigDict(frozen=True)

    gross_income: Decimal
    taxable_income: Decimal
    income_tax: Decimal
    health_insurance: Decimal
    social_insurance: Decimal
    total_taxes: Decimal
    net_income: Decimal
    breakdown: DeductionBreakdown
    tax_rates: AppliedTaxRates
