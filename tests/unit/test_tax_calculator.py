"""Unit tests for the Romanian yearly tax calculation.

Expected values are hand-computed from the 2024 rules:
income tax 10% of (gross - deductions), CASS 10% of gross,
CAS 25% of min(gross, 132000), personal deduction 3000.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from incometrack.sdk.taxes import (
    DeductionSet,
    TaxRules,
    calculate_yearly_taxes,
)


class TestScenarios:
    """Worked examples."""

    def test_100k_no_deductions(self):
        result = calculate_yearly_taxes(100000, 2024, {})

        assert result.gross_income == 100000
        assert result.taxable_income == 97000
        assert result.income_tax == 9700
        assert result.health_insurance == 10000
        assert result.social_insurance == 25000
        assert result.total_taxes == 44700
        assert result.net_income == 55300

    def test_custom_personal_deduction(self):
        result = calculate_yearly_taxes(50000, 2024, {"personal_deduction": 5000})

        assert result.taxable_income == 45000
        assert result.income_tax == 4500
        assert result.breakdown.personal_deduction == 5000
        assert result.breakdown.total_deductions == 5000

    def test_social_insurance_ceiling_applies_health_does_not(self):
        result = calculate_yearly_taxes(200000, 2024, {})

        assert result.social_insurance == 33000  # 25% of 132000
        assert result.health_insurance == 20000  # 10% of 200000, uncapped

    def test_income_below_personal_deduction(self):
        result = calculate_yearly_taxes(2000, 2024, {})

        assert result.taxable_income == 0
        assert result.income_tax == 0
        assert result.health_insurance == 200
        assert result.social_insurance == 500
        assert result.net_income == 1300

    def test_all_deductions(self):
        result = calculate_yearly_taxes(120000, 2024, {
            "personal_deduction": 3000,
            "professional_deductions": 15000,
            "health_insurance_deductions": 2000,
            "social_insurance_deductions": 5000,
            "voluntary_pension_deductions": 3000,
        })

        assert result.breakdown.total_deductions == 28000
        assert result.taxable_income == 92000
        assert result.income_tax == 9200

    def test_zero_income(self):
        result = calculate_yearly_taxes(0, 2024)

        assert result.taxable_income == 0
        assert result.total_taxes == 0
        assert result.net_income == 0


class TestProperties:
    """Relations that hold for any gross income."""

    @pytest.mark.parametrize("gross", [
        "0", "1", "2999.99", "3000", "3000.01", "45000", "131999.99",
        "132000", "132000.01", "1000000",
    ])
    def test_default_deductions_formulae(self, gross):
        gross = Decimal(gross)
        result = calculate_yearly_taxes(gross, 2024)

        expected_taxable = max(Decimal("0"), gross - 3000)
        assert result.taxable_income == expected_taxable
        assert result.income_tax == expected_taxable * Decimal("0.10")
        assert result.health_insurance == gross * Decimal("0.10")
        assert result.social_insurance == min(gross, Decimal("132000")) * Decimal("0.25")

    @pytest.mark.parametrize("gross", ["0", "1234.56", "98765.43", "250000"])
    def test_totals_are_exact(self, gross):
        result = calculate_yearly_taxes(Decimal(gross), 2024, {"professional_deductions": "777.77"})

        assert result.total_taxes == result.income_tax + result.health_insurance + result.social_insurance
        assert result.net_income == result.gross_income - result.total_taxes

    def test_same_input_same_output(self):
        first = calculate_yearly_taxes(87654.32, 2024, {"voluntary_pension_deductions": 400})
        second = calculate_yearly_taxes(87654.32, 2024, {"voluntary_pension_deductions": 400})

        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_float_input_is_converted_exactly(self):
        result = calculate_yearly_taxes(0.1, 2024)

        assert result.gross_income == Decimal("0.1")
        assert result.health_insurance == Decimal("0.01")


class TestDeductions:
    """Personal deduction defaults and breakdown echoing."""

    def test_missing_personal_deduction_uses_statutory_default(self):
        result = calculate_yearly_taxes(10000, 2024, {"professional_deductions": 1000})

        assert result.breakdown.personal_deduction == 3000
        assert result.breakdown.total_deductions == 4000

    def test_explicit_zero_personal_deduction_is_honoured(self):
        result = calculate_yearly_taxes(10000, 2024, {"personal_deduction": 0})

        assert result.breakdown.personal_deduction == 0
        assert result.taxable_income == 10000

    def test_missing_categories_echo_zero(self):
        result = calculate_yearly_taxes(10000, 2024)
        b = result.breakdown

        assert b.professional_deductions == 0
        assert b.health_insurance_deductions == 0
        assert b.social_insurance_deductions == 0
        assert b.voluntary_pension_deductions == 0

    def test_deduction_set_instance_accepted(self):
        deductions = DeductionSet(professional_deductions=2000)
        result = calculate_yearly_taxes(20000, 2024, deductions)

        assert result.taxable_income == 15000

    def test_deductions_above_income_floor_taxable_at_zero(self):
        result = calculate_yearly_taxes(10000, 2024, {"professional_deductions": 50000})

        assert result.taxable_income == 0
        assert result.income_tax == 0

    def test_applied_rates_echoed(self):
        rates = calculate_yearly_taxes(10000, 2024).tax_rates

        assert rates.income_tax_rate == Decimal("0.10")
        assert rates.health_insurance_rate == Decimal("0.10")
        assert rates.social_insurance_rate == Decimal("0.25")


class TestFlags:
    """has_health_card and is_urban_area are accepted but inert."""

    @pytest.mark.parametrize("has_health_card,is_urban_area", [
        (True, True), (True, False), (False, True), (False, False),
    ])
    def test_flags_do_not_change_result(self, has_health_card, is_urban_area):
        baseline = calculate_yearly_taxes(60000, 2024)
        result = calculate_yearly_taxes(
            60000, 2024, has_health_card=has_health_card, is_urban_area=is_urban_area
        )

        assert result == baseline


class TestInjectedRules:
    """Rules passed in replace the yearly lookup."""

    def make_rules(self, **overrides) -> TaxRules:
        values = {
            "year": 2024,
            "income_tax_rate": "0.10",
            "health_insurance_rate": "0.10",
            "social_insurance_rate": "0.25",
            "personal_deduction_annual": "3000",
            "social_insurance_ceiling": "132000",
        }
        values.update(overrides)
        return TaxRules(**values)

    def test_net_income_can_go_negative(self):
        rules = self.make_rules(health_insurance_rate="0.60", social_insurance_rate="0.50")
        result = calculate_yearly_taxes(1000, 2024, rules=rules)

        # 0 income tax + 600 CASS + 500 CAS
        assert result.total_taxes == 1100
        assert result.net_income == -100

    def test_custom_personal_deduction_default(self):
        rules = self.make_rules(personal_deduction_annual="5000")
        result = calculate_yearly_taxes(20000, 2024, rules=rules)

        assert result.breakdown.personal_deduction == 5000
        assert result.taxable_income == 15000


class TestValidation:
    """Invalid input fails before any computation."""

    def test_negative_gross_income(self):
        with pytest.raises(ValidationError):
            calculate_yearly_taxes(-1, 2024)

    @pytest.mark.parametrize("year", [2019, 2031])
    def test_year_out_of_range(self, year):
        with pytest.raises(ValidationError):
            calculate_yearly_taxes(1000, year)

    def test_negative_deduction(self):
        with pytest.raises(ValidationError):
            calculate_yearly_taxes(1000, 2024, {"professional_deductions": -5})

    def test_unknown_deduction_key(self):
        with pytest.raises(ValidationError):
            calculate_yearly_taxes(1000, 2024, {"charity": 100})
