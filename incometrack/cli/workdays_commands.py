"""Work-day CLI commands for Income Track."""

import json
from typing import Optional

import click
from pydantic import ValidationError

from incometrack.sdk import DEFAULT_BULK_HOURS, DEFAULT_BULK_RATE, WorkDayError, WorkDayStore


def format_work_day_row(work_day) -> str:
    notes = (work_day.notes or "")[:24]
    return (
        f"{work_day.id:<10} {work_day.date.isoformat():<12} "
        f"{work_day.hours_worked:>7} {work_day.hourly_rate:>10,.2f} "
        f"{work_day.earnings:>12,.2f}  {notes}"
    )


def _print_table(work_days):
    click.echo("-" * 72)
    click.echo(f"{'ID':<10} {'DATE':<12} {'HOURS':>7} {'RATE':>10} {'EARNINGS':>12}  NOTES")
    click.echo("-" * 72)
    for work_day in work_days:
        click.echo(format_work_day_row(work_day))
    click.echo("-" * 72)


@click.group("workdays")
def workdays():
    """Record and review worked days (hours x hourly rate)."""
    pass


@workdays.command("add")
@click.argument("date", type=click.DateTime(formats=["%Y-%m-%d"]))
@click.argument("hours")
@click.argument("rate")
@click.option("--notes", help="Free-text notes for the day.")
def workdays_add(date, hours: str, rate: str, notes: Optional[str]):
    """Add a work day: DATE (YYYY-MM-DD), HOURS worked, hourly RATE (RON)."""
    try:
        work_day = WorkDayStore().add_work_day(date.date(), hours, rate, notes=notes)
    except (WorkDayError, ValidationError) as e:
        raise click.ClickException(str(e))

    click.echo(f"Added {work_day.id}: {work_day.date.isoformat()} "
               f"{work_day.hours_worked}h x {work_day.hourly_rate} = {work_day.earnings:,.2f} RON")


@workdays.command("list")
@click.argument("year", type=int, required=False)
@click.option("--month", type=click.IntRange(1, 12), help="Filter by month (1-12).")
@click.option("--limit", type=click.IntRange(min=1), help="Maximum number of days to show.")
@click.option("--count", is_flag=True, help="Print only the number of matching days.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def workdays_list(year: Optional[int], month: Optional[int], limit: Optional[int],
                  count: bool, output_format: str):
    """List work days, newest first. Optionally filter by YEAR."""
    days = WorkDayStore().list_work_days(year=year, month=month, limit=limit)

    if count:
        click.echo(str(len(days)))
        return

    if output_format == "json":
        click.echo(json.dumps([d.model_dump(mode="json") for d in days], indent=2))
        return

    if not days:
        click.echo("No work days found.")
        click.echo("\nRun 'income-track workdays add DATE HOURS RATE' to add one.")
        return

    _print_table(days)
    click.echo(f"Total: {len(days)} day(s)")


@workdays.command("show")
@click.argument("work_day_id")
def workdays_show(work_day_id: str):
    """Show a single work day by ID."""
    work_day = WorkDayStore().get_work_day(work_day_id)
    if work_day is None:
        raise click.ClickException(f"Work day not found: {work_day_id}")

    click.echo(json.dumps(work_day.model_dump(mode="json"), indent=2))


@workdays.command("update")
@click.argument("work_day_id")
@click.option("--date", "new_date", type=click.DateTime(formats=["%Y-%m-%d"]), help="New date.")
@click.option("--hours", help="New hours worked.")
@click.option("--rate", help="New hourly rate.")
@click.option("--notes", help="New notes.")
def workdays_update(work_day_id: str, new_date, hours, rate, notes):
    """Update fields of a work day."""
    try:
        work_day = WorkDayStore().update_work_day(
            work_day_id,
            day=new_date.date() if new_date else None,
            hours_worked=hours,
            hourly_rate=rate,
            notes=notes,
        )
    except (WorkDayError, ValidationError) as e:
        raise click.ClickException(str(e))

    click.echo(f"Updated {work_day.id}: {work_day.date.isoformat()} "
               f"{work_day.hours_worked}h x {work_day.hourly_rate}")


@workdays.command("remove")
@click.argument("work_day_id")
@click.option("--force", is_flag=True, help="Skip confirmation prompt.")
def workdays_remove(work_day_id: str, force: bool):
    """Remove a work day by ID."""
    store = WorkDayStore()
    work_day = store.get_work_day(work_day_id)
    if work_day is None:
        raise click.ClickException(f"Work day not found: {work_day_id}")

    if not force:
        click.confirm(f"Remove work day {work_day.date.isoformat()} ({work_day_id})?", abort=True)

    store.remove_work_day(work_day_id)
    click.echo(f"Removed {work_day_id}")


@workdays.command("month")
@click.argument("year", type=int)
@click.argument("month", type=click.IntRange(1, 12))
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def workdays_month(year: int, month: int, output_format: str):
    """Summarize hours and earnings for MONTH of YEAR."""
    summary = WorkDayStore().summarize_month(year, month)

    if output_format == "json":
        click.echo(json.dumps(summary.model_dump(mode="json"), indent=2))
        return

    click.echo(f"{summary.month} {summary.year}")
    if summary.work_days:
        _print_table(summary.work_days)
    click.echo(f"Work days:       {summary.work_days_count}")
    click.echo(f"Total hours:     {summary.total_hours}")
    click.echo(f"Total earnings:  {summary.total_earnings:,.2f} RON")
    click.echo(f"Average rate:    {summary.average_hourly_rate:,.2f} RON/h")


@workdays.command("add-many")
@click.argument("year", type=int)
@click.argument("month", type=click.IntRange(1, 12))
@click.argument("days")
@click.option("--hours", default=str(DEFAULT_BULK_HOURS), show_default=True, help="Hours for each day.")
@click.option("--rate", default=str(DEFAULT_BULK_RATE), show_default=True, help="Hourly rate for each day.")
@click.option("--notes", help="Notes stored on each added day.")
def workdays_add_many(year: int, month: int, days: str, hours: str, rate: str, notes: Optional[str]):
    """Add work days for several DAYS of MONTH in YEAR.

    \b
    DAYS can be:
      1,5,10          day numbers
      mon,wed,friday  weekday names
      1-5             a range of day numbers
      all-weekdays    every Monday to Friday
    Numbers and weekday names can be mixed. Days already recorded are skipped.
    """
    try:
        added = WorkDayStore().add_work_days(year, month, days, hours, rate, notes=notes)
    except (ValueError, WorkDayError) as e:
        raise click.ClickException(str(e))

    if not added:
        click.echo("No work days added. The selected days are already recorded.")
        return

    total = sum(w.earnings for w in added)
    click.echo(f"Added {len(added)} work day(s), total {total:,.2f} RON")
    click.echo("Days: " + ", ".join(str(w.date.day) for w in added))


@workdays.command("free")
@click.argument("year", type=int)
@click.argument("month", type=click.IntRange(1, 12))
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def workdays_free(year: int, month: int, output_format: str):
    """Show days of MONTH in YEAR with no work recorded."""
    free = WorkDayStore().free_days(year, month)

    if output_format == "json":
        click.echo(json.dumps({**free.model_dump(mode="json"), "total": free.total}, indent=2))
        return

    if not free.total:
        click.echo(f"No free days in {free.month} {free.year}, every day is recorded.")
        return

    def _days(items):
        return ", ".join(f"{d.day} ({d.day_name})" for d in items) or "-"

    click.echo(f"Free days in {free.month} {free.year}")
    click.echo(f"Weekdays ({len(free.weekdays)}): {_days(free.weekdays)}")
    click.echo(f"Weekends ({len(free.weekends)}): {_days(free.weekends)}")
    click.echo(f"Total: {free.total}")
