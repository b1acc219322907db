"""Pydantic schemas for work-day records.

A work day is one dated entry of hours at an hourly rate. Stored as JSON,
one file per day; Decimal values are serialized as strings.
"""

from datetime import date as Date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .taxes.schemas import Amount


class WorkDay(BaseModel):
    """A single worked day. Also the earning record the tax aggregator sums."""
    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    date: Date
    hours_worked: Amount = Field(..., gt=0)
    hourly_rate: Amount = Field(..., gt=0, description="RON per hour")
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def earnings(self) -> Decimal:
        return self.hours_worked * self.hourly_rate


class MonthlySummary(BaseModel):
    """Aggregated work days for one calendar month."""

    month: str = Field(..., description="English month name, e.g. 'March'")
    month_number: int = Field(..., ge=1, le=12)
    year: int
    work_days: list[WorkDay]
    total_hours: Decimal
    total_earnings: Decimal
    average_hourly_rate: Decimal
    work_days_count: int


class FreeDay(BaseModel):
    """A calendar day with no recorded work."""

    date: Date
    day: int = Field(..., ge=1, le=31)
    day_name: str = Field(..., description="Short English weekday name, e.g. 'Mon'")


class FreeDays(BaseModel):
    """Unrecorded days of one month, split into weekdays and weekends."""

    month: str
    month_number: int = Field(..., ge=1, le=12)
    year: int
    weekdays: list[FreeDay]
    weekends: list[FreeDay]

    @property
    def total(self) -> int:
        return len(self.weekdays) + len(self.weekends)
