import pytest
from datetime import date, datetime, timedelta
from helpers import (
    days_between, default_filter, end_of_day, filter_label, format_amount, format_date,
    in_period, monthly_totals, records_frame, roll_month, safe_date, shift_month,
    week_of, week_range, weeks_in_year,
)
from models import FilterState, FoodLog, IncomeLog

def test_shift_month():
    d = date(2023, 1, 31)
    # Shift +1 month -> Feb 28 (non-leap)
    assert shift_month(d, 1) == date(2023, 2, 28)

    d = date(2023, 12, 1)
    assert shift_month(d, 1) == date(2024, 1, 1)

def test_safe_date():
    assert safe_date(2023, 2, 30) == date(2023, 2, 28)
    assert safe_date(2024, 2, 30) == date(2024, 2, 29) # Leap year

def test_roll_month_spills_past_month_end():
    # Jan 31 + 1 month -> "Feb 31" -> Mar 3
    assert roll_month(datetime(2025, 1, 31)) == datetime(2025, 3, 3)
    assert roll_month(datetime(2025, 12, 15, 8, 30)) == datetime(2026, 1, 15, 8, 30)

def test_week_of_uses_iso_numbering():
    assert week_of(datetime(2025, 1, 1)) == (2025, 1)
    # Monday before New Year already belongs to week 1 of the next year
    assert week_of(datetime(2024, 12, 30)) == (2025, 1)
    # Sunday Jan 3 2021 is still in the last week of 2020
    assert week_of(datetime(2021, 1, 3, 23, 0)) == (2020, 53)

def test_week_range_is_monday_to_sunday():
    start, end = week_range(2025, 1)
    assert start == datetime(2024, 12, 30)
    assert end == datetime(2025, 1, 5)
    assert start.weekday() == 0 and end.weekday() == 6

def test_week_range_contains_every_day_of_its_week():
    d = datetime(2025, 1, 1, 15, 30)
    while d.year < 2027:
        start, end = week_range(*week_of(d))
        assert start <= d <= end_of_day(end)
        d += timedelta(days=1)

def test_in_period_week_boundaries():
    start, end = week_range(2025, 11)
    flt = FilterState(type="week", year=2025, week=11)
    last = end.replace(hour=23, minute=59, second=59, microsecond=999000)
    assert in_period(start, flt)
    assert in_period(last, flt)
    assert not in_period(start - timedelta(milliseconds=1), flt)
    assert not in_period(last + timedelta(milliseconds=1), flt)
    # the final microsecond of Sunday still belongs to the week
    assert in_period(end_of_day(end), flt)
    assert end_of_day(end).microsecond == 999999
    assert not in_period(end_of_day(end) + timedelta(microseconds=1), flt)

def test_in_period_other_filters():
    d = datetime(2025, 3, 12, 9, 0)
    assert in_period(d, FilterState(type="all", year=1999))
    assert in_period(d, FilterState(type="year", year=2025))
    assert not in_period(d, FilterState(type="year", year=2024))
    assert in_period(d, FilterState(type="month", year=2025, month=3))
    assert not in_period(d, FilterState(type="month", year=2025, month=4))
    assert not in_period(d, FilterState(type="week", year=2025))

def test_days_between_rounds_half_up():
    a = datetime(2025, 1, 1, 0, 0)
    assert days_between(a, datetime(2025, 1, 1, 11, 59)) == 0
    assert days_between(a, datetime(2025, 1, 1, 12, 0)) == 1
    assert days_between(datetime(2025, 1, 8), a) == 7
    assert days_between(a, datetime(2025, 1, 8)) == 7

def test_default_filter_is_current_iso_week():
    flt = default_filter(datetime(2025, 3, 12, 18, 0))
    assert flt.type == "week"
    assert (flt.year, flt.week) == (2025, 11)

def test_weeks_in_year():
    assert len(weeks_in_year(2025)) == 52
    assert len(weeks_in_year(2020)) == 53
    week, start, end = weeks_in_year(2025)[0]
    assert week == 1 and start == datetime(2024, 12, 30)

def test_formatting():
    assert format_date(date(2025, 3, 5)) == "05/03/2025"
    assert format_amount(1250000) == "1.250.000đ"
    assert format_amount(999.6) == "1.000đ"
    assert filter_label(FilterState(type="month", year=2025, month=3)) == "Month 3, 2025"
    assert filter_label(FilterState(type="all", year=2025)) == "All time"
    assert filter_label(FilterState(type="week", year=2025, week=1)) == "Week 1 (30/12/2024 - 05/01/2025)"

def test_monthly_totals_groups_per_series():
    income = [
        IncomeLog(date=datetime(2025, 1, 3), amount=500),
        IncomeLog(date=datetime(2025, 1, 20), amount=300),
        IncomeLog(date=datetime(2025, 2, 1), amount=100),
    ]
    food = [FoodLog(date=datetime(2025, 2, 14), amount=40)]
    g = monthly_totals({"Income": income, "Food": food})
    assert list(g.columns) == ["Income", "Food"]
    assert list(g.index) == ["2025-01", "2025-02"]
    assert g.loc["2025-01", "Income"] == 800
    assert g.loc["2025-01", "Food"] == 0
    assert g.loc["2025-02", "Food"] == 40

def test_monthly_totals_empty():
    assert monthly_totals({"Income": []}) is None

def test_records_frame_newest_first():
    logs = [FoodLog(date=datetime(2025, 1, 1), amount=1), FoodLog(date=datetime(2025, 1, 5), amount=2)]
    df = records_frame(logs)
    assert list(df["amount"]) == [2, 1]
    assert records_frame([]).empty
