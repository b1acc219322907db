"""Income Track MCP Server - FastMCP tools for work days and Romanian taxes.

Lets an assistant read and change work days and run tax calculations.
Tools never raise; failures come back as {"error": ...}.
"""

import logging
from decimal import Decimal
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from incometrack.sdk import (
    DEFAULT_BULK_HOURS,
    DEFAULT_BULK_RATE,
    WorkDayStore,
    calculate_taxes_from_work_days as sdk_taxes_from_work_days,
    calculate_yearly_taxes as sdk_calculate_yearly_taxes,
    get_yearly_gross_income as sdk_yearly_gross_income,
)

logger = logging.getLogger(__name__)

mcp = FastMCP("income-track")


def _store() -> WorkDayStore:
    return WorkDayStore()


def _deductions(
    personal_deduction: float | None,
    professional_deductions: float | None,
    health_insurance_deductions: float | None,
    social_insurance_deductions: float | None,
    voluntary_pension_deductions: float | None,
) -> dict[str, float]:
    values = {
        "personal_deduction": personal_deduction,
        "professional_deductions": professional_deductions,
        "health_insurance_deductions": health_insurance_deductions,
        "social_insurance_deductions": social_insurance_deductions,
        "voluntary_pension_deductions": voluntary_pension_deductions,
    }
    return {k: v for k, v in values.items() if v is not None}


# --- Tax tools ---

@mcp.tool()
async def calculate_yearly_taxes(
    gross_income: float = Field(description="Annual gross income in RON (>= 0)"),
    year: int = Field(default=2024, description="Tax year (2020-2030)"),
    personal_deduction: float | None = Field(default=None, description="Personal deduction; omit for the statutory default (3000 RON)"),
    professional_deductions: float | None = Field(default=None, description="Professional deductions in RON"),
    health_insurance_deductions: float | None = Field(default=None, description="Health insurance deductions in RON"),
    social_insurance_deductions: float | None = Field(default=None, description="Social insurance deductions in RON"),
    voluntary_pension_deductions: float | None = Field(default=None, description="Voluntary pension deductions in RON"),
    has_health_card: bool = Field(default=True, description="Has a health card (currently no effect)"),
    is_urban_area: bool = Field(default=True, description="Lives in an urban area (currently no effect)"),
) -> dict[str, Any]:
    """Calculate Romanian income tax, health insurance (CASS) and social insurance (CAS) for a gross income."""
    try:
        result = sdk_calculate_yearly_taxes(
            gross_income,
            year,
            _deductions(
                personal_deduction,
                professional_deductions,
                health_insurance_deductions,
                social_insurance_deductions,
                voluntary_pension_deductions,
            ),
            has_health_card=has_health_card,
            is_urban_area=is_urban_area,
        )
        return {"year": year, "currency": "RON", "result": result.model_dump(mode="json")}

    except Exception as e:
        logger.error(f"Error calculating taxes: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def calculate_taxes_from_work_days(
    year: int = Field(description="Tax year (2020-2030)"),
    personal_deduction: float | None = Field(default=None, description="Personal deduction; omit for the statutory default"),
    professional_deductions: float | None = Field(default=None, description="Professional deductions in RON"),
    health_insurance_deductions: float | None = Field(default=None, description="Health insurance deductions in RON"),
    social_insurance_deductions: float | None = Field(default=None, description="Social insurance deductions in RON"),
    voluntary_pension_deductions: float | None = Field(default=None, description="Voluntary pension deductions in RON"),
) -> dict[str, Any]:
    """Calculate yearly taxes on the gross income from all recorded work days of a year."""
    try:
        result = sdk_taxes_from_work_days(
            year,
            _store(),
            _deductions(
                personal_deduction,
                professional_deductions,
                health_insurance_deductions,
                social_insurance_deductions,
                voluntary_pension_deductions,
            ),
        )
        return {"year": year, "currency": "RON", "result": result.model_dump(mode="json")}

    except Exception as e:
        logger.error(f"Error calculating taxes from work days for {year}: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def get_yearly_gross_income(
    year: int = Field(description="Calendar year (e.g., 2024)"),
) -> dict[str, Any]:
    """Get total gross income (sum of hours x rate) from work days in a year."""
    try:
        gross = sdk_yearly_gross_income(year, _store())
        return {"year": year, "gross_income": str(gross), "currency": "RON"}

    except Exception as e:
        logger.error(f"Error getting gross income for {year}: {e}")
        return {"error": str(e), "gross_income": None}


# --- Work day tools ---

@mcp.tool()
async def list_work_days(
    year: int | None = Field(default=None, description="Filter by year"),
    month: int | None = Field(default=None, description="Filter by month (1-12)"),
    limit: int = Field(default=50, description="Maximum number of work days to return (default 50)"),
) -> dict[str, Any]:
    """List recorded work days, newest first, with hours, rate and earnings."""
    try:
        days = _store().list_work_days(year=year, month=month)
        limited = days[:limit]
        return {
            "work_days": [
                {**d.model_dump(mode="json"), "earnings": str(d.earnings)}
                for d in limited
            ],
            "count": len(limited),
            "total_available": len(days),
        }

    except Exception as e:
        logger.error(f"Error listing work days: {e}")
        return {"error": str(e), "work_days": [], "count": 0}


@mcp.tool()
async def add_work_day(
    date: str = Field(description="Date worked (YYYY-MM-DD)"),
    hours_worked: float = Field(description="Hours worked (> 0)"),
    hourly_rate: float = Field(description="Hourly rate in RON (> 0)"),
    notes: str | None = Field(default=None, description="Optional notes"),
) -> dict[str, Any]:
    """Record a work day. Fails if the date already has one."""
    try:
        work_day = _store().add_work_day(date, hours_worked, hourly_rate, notes=notes)
        return {"work_day": work_day.model_dump(mode="json"), "earnings": str(work_day.earnings)}

    except Exception as e:
        logger.error(f"Error adding work day {date}: {e}")
        return {"error": str(e), "work_day": None}


@mcp.tool()
async def add_work_days(
    year: int = Field(description="Year (e.g., 2024)"),
    month: int = Field(description="Month (1-12)"),
    days: str = Field(description="Days to add: comma-separated numbers (1,5,10), weekday names (mon,tue,wed), a range (1-5), or 'all-weekdays'"),
    hours_worked: float = Field(default=8, description="Hours per day (default 8)"),
    hourly_rate: float = Field(default=37, description="Hourly rate in RON (default 37)"),
    notes: str | None = Field(default=None, description="Notes stored on each added day"),
) -> dict[str, Any]:
    """Add several work days of a month at once. Days that already have a work day are skipped."""
    try:
        added = _store().add_work_days(year, month, days, hours_worked, hourly_rate, notes=notes)
        return {
            "added": [d.model_dump(mode="json") for d in added],
            "count": len(added),
            "dates": [d.date.isoformat() for d in added],
            "total_earnings": str(sum((d.earnings for d in added), Decimal("0"))),
        }

    except Exception as e:
        logger.error(f"Error adding work days {year}-{month:02d} ({days}): {e}")
        return {"error": str(e), "added": [], "count": 0}


@mcp.tool()
async def show_free_days(
    year: int = Field(description="Year (e.g., 2024)"),
    month: int = Field(description="Month (1-12)"),
) -> dict[str, Any]:
    """List days of a month with no work recorded, split into weekdays and weekends."""
    try:
        free = _store().free_days(year, month)
        potential = len(free.weekdays) * DEFAULT_BULK_HOURS * DEFAULT_BULK_RATE
        return {
            **free.model_dump(mode="json"),
            "total": free.total,
            "potential_weekday_earnings": str(potential),
        }

    except Exception as e:
        logger.error(f"Error listing free days {year}-{month:02d}: {e}")
        return {"error": str(e), "weekdays": [], "weekends": []}


@mcp.tool()
async def remove_work_day(
    work_day_id: str = Field(description="The 8-character work day ID (from list_work_days)"),
) -> dict[str, Any]:
    """Delete a work day by ID."""
    try:
        _store().remove_work_day(work_day_id)
        return {"removed": work_day_id}

    except Exception as e:
        logger.error(f"Error removing work day {work_day_id}: {e}")
        return {"error": str(e), "removed": None}


@mcp.tool()
async def get_monthly_summary(
    year: int = Field(description="Year (e.g., 2024)"),
    month: int = Field(description="Month (1-12)"),
) -> dict[str, Any]:
    """Get total hours, earnings and average hourly rate for a month."""
    try:
        summary = _store().summarize_month(year, month)
        return {"summary": summary.model_dump(mode="json")}

    except Exception as e:
        logger.error(f"Error summarizing {year}-{month:02d}: {e}")
        return {"error": str(e), "summary": None}


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
