"""Tests for the JSON work-day store and monthly summaries."""

import json
from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from incometrack.sdk import (
    DuplicateWorkDayError,
    WorkDayNotFoundError,
    WorkDayStore,
    generate_work_day_id,
    get_yearly_gross_income,
    select_days,
)


@pytest.fixture
def store(tmp_path):
    return WorkDayStore(root=tmp_path / "work-days")


class TestAddAndGet:

    def test_add_writes_one_file_per_day(self, store):
        work_day = store.add_work_day("2024-03-04", 8, 50, notes="client A")

        path = store.root / "2024" / f"{work_day.id}.json"
        assert path.exists()
        saved = json.loads(path.read_text())
        assert saved["date"] == "2024-03-04"
        assert Decimal(saved["hours_worked"]) == 8
        assert Decimal(saved["hourly_rate"]) == 50
        assert saved["notes"] == "client A"

    def test_id_derived_from_date(self, store):
        work_day = store.add_work_day(date(2024, 3, 4), 8, 50)

        assert work_day.id == generate_work_day_id(date(2024, 3, 4))
        assert len(work_day.id) == 8

    def test_round_trip(self, store):
        added = store.add_work_day("2024-03-04", "7.5", "62.50")

        loaded = store.get_work_day(added.id)
        assert loaded == added
        assert loaded.earnings == Decimal("468.750")
        assert store.get_work_day_by_date("2024-03-04") == added

    def test_duplicate_date_rejected(self, store):
        store.add_work_day("2024-03-04", 8, 50)

        with pytest.raises(DuplicateWorkDayError, match="2024-03-04"):
            store.add_work_day("2024-03-04", 4, 70)

    @pytest.mark.parametrize("hours,rate", [(0, 50), (8, 0), (-1, 50)])
    def test_non_positive_values_rejected(self, store, hours, rate):
        with pytest.raises(ValidationError):
            store.add_work_day("2024-03-04", hours, rate)

    def test_missing_returns_none(self, store):
        assert store.get_work_day("deadbeef") is None
        assert store.get_work_day_by_date("2024-01-01") is None

    @pytest.mark.parametrize("bad_id", ["*", "*/*", "2024/*", "????????", "../x", "DEADBEEF", ""])
    def test_id_is_matched_literally(self, store, bad_id):
        store.add_work_day("2024-03-04", 8, 50)

        assert store.get_work_day(bad_id) is None

    def test_unreadable_file_skipped(self, store):
        store.add_work_day("2024-03-04", 8, 50)
        (store.root / "2024" / "broken00.json").write_text("{not json")

        assert len(store.list_work_days()) == 1


class TestUpdateAndRemove:

    def test_update_fields(self, store):
        added = store.add_work_day("2024-03-04", 8, 50)

        updated = store.update_work_day(added.id, hours_worked=6, notes="half day")

        assert updated.id == added.id
        assert updated.hours_worked == 6
        assert updated.hourly_rate == 50
        assert updated.notes == "half day"
        assert store.get_work_day(added.id).hours_worked == 6

    def test_update_date_moves_record(self, store):
        added = store.add_work_day("2024-12-31", 8, 50)

        moved = store.update_work_day(added.id, day="2025-01-02")

        assert moved.id == generate_work_day_id(date(2025, 1, 2))
        assert store.get_work_day(added.id) is None
        assert (store.root / "2025" / f"{moved.id}.json").exists()

    def test_update_to_taken_date_rejected(self, store):
        first = store.add_work_day("2024-03-04", 8, 50)
        store.add_work_day("2024-03-05", 8, 50)

        with pytest.raises(DuplicateWorkDayError):
            store.update_work_day(first.id, day="2024-03-05")

    def test_update_missing(self, store):
        with pytest.raises(WorkDayNotFoundError):
            store.update_work_day("deadbeef", hours_worked=1)

    def test_failed_date_change_keeps_record(self, store, monkeypatch):
        added = store.add_work_day("2024-12-31", 8, 50)

        def failing_write(work_day):
            raise OSError("disk full")

        monkeypatch.setattr(store, "_write", failing_write)
        with pytest.raises(OSError):
            store.update_work_day(added.id, day="2025-01-02")

        assert store.get_work_day(added.id) == added

    def test_wildcard_id_removes_nothing(self, store):
        added = store.add_work_day("2024-03-04", 8, 50)

        with pytest.raises(WorkDayNotFoundError):
            store.remove_work_day("*")

        assert store.get_work_day(added.id) == added

    def test_remove(self, store):
        added = store.add_work_day("2024-03-04", 8, 50)

        store.remove_work_day(added.id)

        assert store.get_work_day(added.id) is None
        with pytest.raises(WorkDayNotFoundError):
            store.remove_work_day(added.id)


class TestQueries:

    @pytest.fixture
    def filled(self, store):
        for day, hours, rate in [
            ("2023-12-29", 8, 40),
            ("2024-01-02", 8, 50),
            ("2024-01-15", 6, 60),
            ("2024-02-01", 10, 45),
            ("2024-12-31", 4, 100),
        ]:
            store.add_work_day(day, hours, rate)
        return store

    def test_list_newest_first(self, filled):
        dates = [w.date.isoformat() for w in filled.list_work_days()]

        assert dates == ["2024-12-31", "2024-02-01", "2024-01-15", "2024-01-02", "2023-12-29"]

    def test_list_filters(self, filled):
        assert len(filled.list_work_days(year=2024)) == 4
        assert len(filled.list_work_days(year=2024, month=1)) == 2
        assert len(filled.list_work_days(start_date="2024-01-15", end_date="2024-02-01")) == 2
        assert [w.date.day for w in filled.list_work_days(year=2024, limit=2, offset=1)] == [1, 15]

    def test_date_range_inclusive_oldest_first(self, filled):
        days = filled.find_earnings_by_date_range(date(2023, 12, 29), date(2024, 1, 15))

        assert [w.date.isoformat() for w in days] == ["2023-12-29", "2024-01-02", "2024-01-15"]

    def test_store_feeds_yearly_gross_income(self, filled):
        # 400 + 360 + 450 + 400
        assert get_yearly_gross_income(2024, filled) == Decimal("1610")

    def test_monthly_summary(self, filled):
        summary = filled.summarize_month(2024, 1)

        assert summary.month == "January"
        assert summary.month_number == 1
        assert summary.work_days_count == 2
        assert summary.total_hours == 14
        assert summary.total_earnings == 760
        assert summary.average_hourly_rate == Decimal("760") / Decimal("14")

    def test_empty_month_summary(self, store):
        summary = store.summarize_month(2024, 7)

        assert summary.month == "July"
        assert summary.work_days == []
        assert summary.total_earnings == 0
        assert summary.average_hourly_rate == 0

    def test_invalid_month(self, store):
        with pytest.raises(ValueError):
            store.summarize_month(2024, 13)


class TestSelectDays:

    def test_all_weekdays(self):
        days = select_days("all-weekdays", 2024, 3)

        assert len(days) == 21
        assert days[0] == date(2024, 3, 1)
        assert all(d.weekday() < 5 for d in days)

    def test_range_clipped_to_month(self):
        assert [d.day for d in select_days("1-5", 2024, 3)] == [1, 2, 3, 4, 5]
        assert [d.day for d in select_days("28-35", 2024, 2)] == [28, 29]

    def test_numbers_and_weekday_names(self):
        assert [d.day for d in select_days("mon, 15", 2024, 3)] == [4, 11, 15, 18, 25]
        assert [d.day for d in select_days("Friday,SAT", 2024, 3)] == [1, 2, 8, 9, 15, 16, 22, 23, 29, 30]

    def test_day_past_month_end_selects_nothing(self):
        assert select_days("31", 2024, 4) == []

    @pytest.mark.parametrize("selector", ["funday", "a-b", "", " , "])
    def test_invalid_selector(self, selector):
        with pytest.raises(ValueError):
            select_days(selector, 2024, 3)

    def test_invalid_month(self):
        with pytest.raises(ValueError):
            select_days("1", 2024, 0)


class TestBulkAdd:

    def test_adds_defaults_and_skips_recorded_days(self, store):
        store.add_work_day("2024-03-04", 4, 50)

        added = store.add_work_days(2024, 3, "1-5")

        assert [w.date.day for w in added] == [1, 2, 3, 5]
        assert all(w.hours_worked == 8 and w.hourly_rate == 37 for w in added)
        assert added[0].earnings == 296
        assert store.get_work_day_by_date("2024-03-04").hours_worked == 4
        assert len(store.list_work_days(year=2024, month=3)) == 5

    def test_custom_hours_rate_and_notes(self, store):
        added = store.add_work_days(2024, 3, "mon", hours_worked="7.5", hourly_rate=60, notes="client A")

        assert len(added) == 4
        assert added[0].earnings == Decimal("450.0")
        assert {w.notes for w in added} == {"client A"}

    def test_nothing_free(self, store):
        store.add_work_days(2024, 3, "1,2")

        assert store.add_work_days(2024, 3, "1,2") == []

    def test_invalid_hours_writes_nothing(self, store):
        with pytest.raises(ValidationError):
            store.add_work_days(2024, 3, "1-5", hours_worked=0)

        assert store.list_work_days() == []


class TestFreeDays:

    def test_splits_weekdays_and_weekends(self, store):
        store.add_work_day("2024-03-04", 8, 50)  # Monday
        store.add_work_day("2024-03-02", 8, 50)  # Saturday

        free = store.free_days(2024, 3)

        assert free.month == "March"
        assert len(free.weekdays) == 20
        assert len(free.weekends) == 9
        assert free.total == 29
        assert (free.weekdays[0].day, free.weekdays[0].day_name) == (1, "Fri")
        assert (free.weekends[0].day, free.weekends[0].day_name) == (3, "Sun")
        assert date(2024, 3, 4) not in [d.date for d in free.weekdays]

    def test_fully_recorded_month(self, store):
        store.add_work_days(2024, 2, "1-29")

        assert store.free_days(2024, 2).total == 0

    def test_invalid_month(self, store):
        with pytest.raises(ValueError):
            store.free_days(2024, 13)
