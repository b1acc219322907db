"""
Work-day storage and monthly aggregation.

Storage layout
--------------

Each work day is one JSON file:

    <data_dir>/work-days/<YYYY>/<id>.json

The id is derived from the date (first 8 hex chars of a sha256), so a date
can hold at most one work day and re-adding the same date is detected as a
duplicate rather than silently creating a second file.

WorkDayStore satisfies the EarningsRepository protocol used by
incometrack.sdk.income, so it can be passed straight to
get_yearly_gross_income() and calculate_taxes_from_work_days().
"""

import calendar
import hashlib
import json
import logging
import os
import re
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError

from .config import get_data_path
from .schemas import FreeDay, FreeDays, MonthlySummary, WorkDay

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)

WORK_DAYS_DIRNAME = "work-days"
WORK_DAY_ID_PATTERN = re.compile(r"[0-9a-f]{8}")

# Bulk-add defaults: a standard 8-hour day at the usual rate
DEFAULT_BULK_HOURS = Decimal("8")
DEFAULT_BULK_RATE = Decimal("37")

WEEKDAY_NAMES = {
    "mon": 0, "monday": 0,
    "tue": 1, "tuesday": 1,
    "wed": 2, "wednesday": 2,
    "thu": 3, "thursday": 3,
    "fri": 4, "friday": 4,
    "sat": 5, "saturday": 5,
    "sun": 6, "sunday": 6,
}


class WorkDayError(Exception):
    """Base error for work-day storage."""
    pass


class DuplicateWorkDayError(WorkDayError):
    """Raised when a date already has a work day."""
    def __init__(self, day: date):
        self.date = day
        super().__init__(f"Work day already exists for date {day.isoformat()}")


class WorkDayNotFoundError(WorkDayError):
    """Raised when a work day id does not exist."""
    def __init__(self, work_day_id: str):
        self.work_day_id = work_day_id
        super().__init__(f"Work day with id {work_day_id} not found")


def daily_earnings(hours: Decimal, hourly_rate: Decimal) -> Decimal:
    """Earnings for one day: hours x rate."""
    return hours * hourly_rate


def generate_work_day_id(day: date) -> str:
    """Generate the 8-char work day id for a date."""
    content = f"workday|{day.isoformat()}"
    return hashlib.sha256(content.encode()).hexdigest()[:8]


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {month}. Must be 1-12.")


def select_days(selector: str, year: int, month: int) -> List[date]:
    """Resolve a day selector to dates in one month, oldest first.

    Accepted forms:
        all-weekdays        every Monday to Friday
        10-15               inclusive range of day numbers, clipped to the month
        1,5,mon,friday      day numbers and/or weekday names (any mix)

    Day numbers past the end of the month select nothing.

    Raises:
        ValueError: If the month is not 1-12 or the selector is not understood
    """
    _check_month(month)
    last_day = calendar.monthrange(year, month)[1]
    month_days = [date(year, month, d) for d in range(1, last_day + 1)]
    text = selector.strip().lower()

    if text == "all-weekdays":
        return [d for d in month_days if d.weekday() < 5]

    if "-" in text:
        start_text, _, end_text = text.partition("-")
        try:
            start, end = int(start_text), int(end_text)
        except ValueError:
            raise ValueError(f"Invalid day range '{selector}'. Use START-END, e.g. 1-5.") from None
        return [d for d in month_days if start <= d.day <= end]

    numbers = set()
    weekdays = set()
    for token in text.split(","):
        token = token.strip()
        if not token:
            continue
        if token.isdigit():
            numbers.add(int(token))
        elif token in WEEKDAY_NAMES:
            weekdays.add(WEEKDAY_NAMES[token])
        else:
            raise ValueError(
                f"Unknown day '{token}'. Use day numbers, weekday names, a range like 1-5, or all-weekdays."
            )
    if not numbers and not weekdays:
        raise ValueError("No days selected.")

    return [d for d in month_days if d.day in numbers or d.weekday() in weekdays]


class WorkDayStore:
    """JSON-file store of work days.

    Args:
        root: Directory holding the per-year folders
              (default: <data_dir>/work-days/)
    """

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root else get_data_path() / WORK_DAYS_DIRNAME

    # ------------------------------------------------------------------
    # File helpers
    # ------------------------------------------------------------------

    def _path_for(self, work_day: WorkDay) -> Path:
        return self.root / str(work_day.date.year) / f"{work_day.id}.json"

    def _write(self, work_day: WorkDay) -> Path:
        path = self._path_for(work_day)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(work_day.model_dump(mode="json"), f, indent=2)
        return path

    def _read(self, path: Path) -> Optional[WorkDay]:
        try:
            with open(path) as f:
                return WorkDay.model_validate(json.load(f))
        except (json.JSONDecodeError, IOError, ValidationError) as e:
            logger.warning(f"Skipping unreadable work day file {path.name}: {e}")
            return None

    def _find_path(self, work_day_id: str) -> Optional[Path]:
        if not isinstance(work_day_id, str) or not WORK_DAY_ID_PATTERN.fullmatch(work_day_id):
            return None
        if not self.root.exists():
            return None
        for year_dir in self.root.iterdir():
            path = year_dir / f"{work_day_id}.json"
            if path.is_file():
                return path
        return None

    def _iter_work_days(self, years: Optional[List[int]] = None):
        if not self.root.exists():
            return
        if years is None:
            year_dirs = [p for p in self.root.iterdir() if p.is_dir() and p.name.isdigit()]
        else:
            year_dirs = [self.root / str(y) for y in years]

        for year_dir in year_dirs:
            if not year_dir.exists():
                continue
            for json_file in year_dir.glob("*.json"):
                work_day = self._read(json_file)
                if work_day is not None:
                    yield work_day

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def add_work_day(
        self,
        day: Any,
        hours_worked: Any,
        hourly_rate: Any,
        notes: Optional[str] = None,
    ) -> WorkDay:
        """Add a work day.

        Raises:
            DuplicateWorkDayError: If the date already has a work day
            pydantic.ValidationError: If hours or rate are not positive
        """
        day = _parse_date(day)
        if self.get_work_day_by_date(day) is not None:
            raise DuplicateWorkDayError(day)

        now = datetime.now()
        work_day = WorkDay(
            id=generate_work_day_id(day),
            date=day,
            hours_worked=hours_worked,
            hourly_rate=hourly_rate,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        path = self._write(work_day)
        logger.debug(f"Saved work day {work_day.id} ({day.isoformat()}) to {path}")
        return work_day

    def get_work_day(self, work_day_id: str) -> Optional[WorkDay]:
        path = self._find_path(work_day_id)
        return self._read(path) if path else None

    def get_work_day_by_date(self, day: Any) -> Optional[WorkDay]:
        return self.get_work_day(generate_work_day_id(_parse_date(day)))

    def update_work_day(
        self,
        work_day_id: str,
        *,
        day: Any = None,
        hours_worked: Any = None,
        hourly_rate: Any = None,
        notes: Optional[str] = None,
    ) -> WorkDay:
        """Update fields of an existing work day.

        Changing the date re-keys the work day (new id, new file).

        Raises:
            WorkDayNotFoundError: If no work day has this id
            DuplicateWorkDayError: If the new date already has a work day
        """
        existing = self.get_work_day(work_day_id)
        if existing is None:
            raise WorkDayNotFoundError(work_day_id)

        changes = {}
        if day is not None:
            new_date = _parse_date(day)
            if new_date != existing.date:
                if self.get_work_day_by_date(new_date) is not None:
                    raise DuplicateWorkDayError(new_date)
                changes["date"] = new_date
                changes["id"] = generate_work_day_id(new_date)
        if hours_worked is not None:
            changes["hours_worked"] = hours_worked
        if hourly_rate is not None:
            changes["hourly_rate"] = hourly_rate
        if notes is not None:
            changes["notes"] = notes
        changes["updated_at"] = datetime.now()

        # Re-validate the merged record
        updated = WorkDay.model_validate({**existing.model_dump(), **changes})

        self._write(updated)
        if updated.id != existing.id:
            self._path_for(existing).unlink()
        logger.debug(f"Updated work day {work_day_id} -> {updated.id}")
        return updated

    def remove_work_day(self, work_day_id: str) -> None:
        """Delete a work day.

        Raises:
            WorkDayNotFoundError: If no work day has this id
        """
        path = self._find_path(work_day_id)
        if path is None:
            raise WorkDayNotFoundError(work_day_id)
        path.unlink()
        logger.debug(f"Removed work day {work_day_id}")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_work_days(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        start_date: Any = None,
        end_date: Any = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[WorkDay]:
        """List work days with optional filters, newest first.

        Args:
            year: Only this calendar year
            month: Only this month (1-12), combined with year if given
            start_date: Only on or after this date
            end_date: Only on or before this date
            limit: Maximum number of work days to return
            offset: Number of work days to skip (after sorting)
        """
        start = _parse_date(start_date) if start_date is not None else None
        end = _parse_date(end_date) if end_date is not None else None

        results = []
        for work_day in self._iter_work_days([year] if year is not None else None):
            if month is not None and work_day.date.month != month:
                continue
            if start and work_day.date < start:
                continue
            if end and work_day.date > end:
                continue
            results.append(work_day)

        results.sort(key=lambda w: w.date, reverse=True)
        results = results[offset:]
        if limit is not None:
            results = results[:limit]
        return results

    def find_earnings_by_date_range(self, start_date: date, end_date: date) -> List[WorkDay]:
        """All work days within [start_date, end_date], oldest first."""
        start = _parse_date(start_date)
        end = _parse_date(end_date)
        years = list(range(start.year, end.year + 1))

        results = [
            w for w in self._iter_work_days(years)
            if start <= w.date <= end
        ]
        results.sort(key=lambda w: w.date)
        logger.debug(f"Found {len(results)} work day(s) between {start} and {end}")
        return results

    def summarize_month(self, year: int, month: int) -> MonthlySummary:
        """Totals for one month: hours, earnings, average rate, day count."""
        _check_month(month)

        last_day = calendar.monthrange(year, month)[1]
        work_days = self.find_earnings_by_date_range(
            date(year, month, 1), date(year, month, last_day)
        )

        total_hours = sum((w.hours_worked for w in work_days), Decimal("0"))
        total_earnings = sum(
            (daily_earnings(w.hours_worked, w.hourly_rate) for w in work_days),
            Decimal("0"),
        )
        average_rate = total_earnings / total_hours if total_hours > 0 else Decimal("0")

        return MonthlySummary(
            month=calendar.month_name[month],
            month_number=month,
            year=year,
            work_days=work_days,
            total_hours=total_hours,
            total_earnings=total_earnings,
            average_hourly_rate=average_rate,
            work_days_count=len(work_days),
        )

    def free_days(self, year: int, month: int) -> FreeDays:
        """Days of a month with no work day recorded, split into weekdays and weekends."""
        _check_month(month)
        last_day = calendar.monthrange(year, month)[1]
        recorded = {
            w.date for w in self.find_earnings_by_date_range(
                date(year, month, 1), date(year, month, last_day)
            )
        }

        weekdays, weekends = [], []
        for day_number in range(1, last_day + 1):
            day = date(year, month, day_number)
            if day in recorded:
                continue
            free = FreeDay(date=day, day=day_number, day_name=calendar.day_abbr[day.weekday()])
            (weekdays if day.weekday() < 5 else weekends).append(free)

        return FreeDays(
            month=calendar.month_name[month],
            month_number=month,
            year=year,
            weekdays=weekdays,
            weekends=weekends,
        )

    # ------------------------------------------------------------------
    # Bulk entry
    # ------------------------------------------------------------------

    def add_work_days(
        self,
        year: int,
        month: int,
        days: str,
        hours_worked: Any = DEFAULT_BULK_HOURS,
        hourly_rate: Any = DEFAULT_BULK_RATE,
        notes: Optional[str] = None,
    ) -> List[WorkDay]:
        """Add the same hours and rate to every selected day of a month.

        Args:
            year: Calendar year
            month: Month (1-12)
            days: Day selector, see select_days()
            hours_worked: Hours for each day (default 8)
            hourly_rate: Rate for each day (default 37)
            notes: Notes stored on each added day

        Dates that already have a work day are skipped, not overwritten.

        Returns:
            The added work days, oldest first (empty if nothing was free)

        Raises:
            ValueError: If the selector or month is invalid
            pydantic.ValidationError: If hours or rate are not positive
        """
        added = []
        for day in select_days(days, year, month):
            if self.get_work_day_by_date(day) is not None:
                logger.debug(f"Skipping {day.isoformat()}: already recorded")
                continue
            added.append(self.add_work_day(day, hours_worked, hourly_rate, notes=notes))

        logger.info(f"Added {len(added)} work day(s) for {year}-{month:02d} ({days})")
        return added
