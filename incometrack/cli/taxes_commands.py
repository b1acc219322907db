"""Tax CLI commands for Income Track.

Romanian personal income tax: manual gross income or derived from work days.
"""

import json
from decimal import Decimal
from typing import Optional

import click
from pydantic import ValidationError

from incometrack.sdk import (
    WorkDayStore,
    available_years,
    calculate_taxes_from_work_days,
    calculate_yearly_taxes,
    get_yearly_gross_income,
    rules_for_year,
)
from incometrack.sdk.taxes import MAX_TAX_YEAR, MIN_TAX_YEAR

YEAR_RANGE = click.IntRange(MIN_TAX_YEAR, MAX_TAX_YEAR)


def deduction_options(func):
    """Attach the five deduction options to a command."""
    options = [
        click.option("--personal-deduction", default=None,
                     help="Personal deduction (default: statutory amount for the year)."),
        click.option("--professional", "professional_deductions", default=None,
                     help="Professional deductions."),
        click.option("--health-deductions", "health_insurance_deductions", default=None,
                     help="Health insurance deductions."),
        click.option("--social-deductions", "social_insurance_deductions", default=None,
                     help="Social insurance deductions."),
        click.option("--pension", "voluntary_pension_deductions", default=None,
                     help="Voluntary pension deductions."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _collect_deductions(**kwargs) -> dict:
    return {key: value for key, value in kwargs.items() if value is not None}


def _money(value: Decimal) -> str:
    return f"{value:,.2f} RON"


def _rate(value: Decimal) -> str:
    return f"{value * 100:.0f}%"


def format_tax_result(result, year: int) -> str:
    """Render a TaxCalculationResult as a text report."""
    b = result.breakdown
    r = result.tax_rates
    lines = [
        f"Romanian income taxes for {year}",
        "-" * 48,
        f"{'Gross income':<30} {_money(result.gross_income):>17}",
        "",
        "Deductions:",
        f"  {'Personal':<28} {_money(b.personal_deduction):>17}",
        f"  {'Professional':<28} {_money(b.professional_deductions):>17}",
        f"  {'Health insurance':<28} {_money(b.health_insurance_deductions):>17}",
        f"  {'Social insurance':<28} {_money(b.social_insurance_deductions):>17}",
        f"  {'Voluntary pension':<28} {_money(b.voluntary_pension_deductions):>17}",
        f"  {'Total':<28} {_money(b.total_deductions):>17}",
        "",
        f"{'Taxable income':<30} {_money(result.taxable_income):>17}",
        f"{'Income tax (' + _rate(r.income_tax_rate) + ')':<30} {_money(result.income_tax):>17}",
        f"{'Health insurance (' + _rate(r.health_insurance_rate) + ')':<30} {_money(result.health_insurance):>17}",
        f"{'Social insurance (' + _rate(r.social_insurance_rate) + ')':<30} {_money(result.social_insurance):>17}",
        "-" * 48,
        f"{'Total taxes':<30} {_money(result.total_taxes):>17}",
        f"{'Net income':<30} {_money(result.net_income):>17}",
    ]
    return "\n".join(lines)


def _echo_result(result, year: int, output_format: str):
    if output_format == "json":
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        click.echo(format_tax_result(result, year))


@click.group("taxes")
def taxes():
    """Romanian income tax calculations.

    \b
    Income tax 10% on income after deductions, health insurance (CASS) 10%
    on gross income, social insurance (CAS) 25% on gross income up to the
    yearly ceiling. Rates come from the rules for the tax year.
    """
    pass


@taxes.command("calc")
@click.argument("gross_income")
@click.option("--year", type=YEAR_RANGE, default=2024, show_default=True, help="Tax year.")
@deduction_options
@click.option("--no-health-card", is_flag=True, help="No health card (currently has no effect).")
@click.option("--rural", is_flag=True, help="Rural area (currently has no effect).")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def taxes_calc(gross_income: str, year: int, no_health_card: bool, rural: bool,
               output_format: str, **deductions):
    """Calculate taxes for a given GROSS_INCOME (RON)."""
    try:
        result = calculate_yearly_taxes(
            gross_income,
            year,
            _collect_deductions(**deductions),
            has_health_card=not no_health_card,
            is_urban_area=not rural,
        )
    except ValidationError as e:
        raise click.ClickException(f"Invalid input: {e}")

    _echo_result(result, year, output_format)


@taxes.command("from-workdays")
@click.argument("year", type=YEAR_RANGE)
@deduction_options
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def taxes_from_workdays(year: int, output_format: str, **deductions):
    """Calculate taxes for YEAR from recorded work days."""
    try:
        result = calculate_taxes_from_work_days(
            year, WorkDayStore(), _collect_deductions(**deductions)
        )
    except ValidationError as e:
        raise click.ClickException(f"Invalid input: {e}")

    _echo_result(result, year, output_format)


@taxes.command("gross")
@click.argument("year", type=YEAR_RANGE)
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def taxes_gross(year: int, output_format: str):
    """Show total gross income earned from work days in YEAR."""
    gross = get_yearly_gross_income(year, WorkDayStore())

    if output_format == "json":
        click.echo(json.dumps({"year": year, "gross_income": str(gross), "currency": "RON"}, indent=2))
        return

    click.echo(f"Gross income {year}: {_money(gross)}")


@taxes.command("rules")
@click.argument("year", type=YEAR_RANGE, required=False)
def taxes_rules(year: Optional[int]):
    """Show the tax rules that apply to YEAR (default: newest rules)."""
    years = available_years()
    if year is None:
        if not years:
            raise click.ClickException("No tax rules installed.")
        year = years[0]

    rules = rules_for_year(year)
    click.echo(f"Tax rules for {year} (from {rules.year} rules)")
    click.echo("-" * 40)
    click.echo(f"  Income tax rate:        {_rate(rules.income_tax_rate)}")
    click.echo(f"  Health insurance rate:  {_rate(rules.health_insurance_rate)}")
    click.echo(f"  Social insurance rate:  {_rate(rules.social_insurance_rate)}")
    click.echo(f"  Personal deduction:     {_money(rules.personal_deduction_annual)}")
    click.echo(f"  Social insurance cap:   {_money(rules.social_insurance_ceiling)}")
    if rules.minimum_gross_salary is not None:
        click.echo(f"  Minimum gross salary:   {_money(rules.minimum_gross_salary)} / month")
