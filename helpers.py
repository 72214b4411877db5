# helpers.py
# ISO week math, reporting-period filters, month helpers, display formatting, log tables & trends

from typing import Dict, Iterable, List, Optional, Tuple
from datetime import date, datetime, time, timedelta
import calendar
import math

import pandas as pd
from dateutil.relativedelta import relativedelta

from models import FilterState

SECONDS_PER_DAY = 24 * 60 * 60

# ---------- Weeks & periods ----------
def week_of(d: datetime) -> Tuple[int, int]:
    """Return (iso_year, iso_week); week 1 holds the year's first Thursday."""
    iso = d.isocalendar()
    return iso[0], iso[1]

def week_range(year: int, week: int) -> Tuple[datetime, datetime]:
    """Return (Monday 00:00, Sunday 00:00) of the given ISO week."""
    start = datetime.combine(date.fromisocalendar(year, week, 1), time.min)
    return start, start + timedelta(days=6)

def weeks_in_year(year: int) -> List[Tuple[int, datetime, datetime]]:
    """All ISO weeks of `year` as (week, start, end), for period pickers."""
    last_week = date(year, 12, 28).isocalendar()[1]
    return [(w, *week_range(year, w)) for w in range(1, last_week + 1)]

def end_of_day(d: datetime) -> datetime:
    return datetime.combine(d.date(), time.max)

def days_between(a: datetime, b: datetime) -> int:
    """
    Absolute whole-day difference, rounded half up (12h or more counts as a day).
    """
    diff = abs((a - b).total_seconds()) / SECONDS_PER_DAY
    return int(math.floor(diff + 0.5))

def in_period(d: datetime, flt: FilterState) -> bool:
    """True when `d` falls inside the reporting period selected by `flt`."""
    if flt.type == "all":
        return True
    if flt.type == "year":
        return d.year == flt.year
    if flt.type == "month":
        return d.year == flt.year and d.month == flt.month
    if flt.type == "week":
        if not flt.week:
            return False
        start, end = week_range(flt.year, flt.week)
        return start <= d <= end_of_day(end)
    return False

def default_filter(now: datetime) -> FilterState:
    """The filter applied on load: the ISO week containing `now`."""
    year, week = week_of(now)
    return FilterState(type="week", year=year, week=week)

# ---------- Month helpers ----------
def safe_date(y: int, m: int, d: int) -> date:
    """Return a valid date, clamping the day to the last day of the month if necessary."""
    last = calendar.monthrange(y, m)[1]
    return date(y, m, max(1, min(d, last)))

def shift_month(d: date, k: int) -> date:
    """Shift the date by k months, keeping the day if possible."""
    anchor = date(d.year, d.month, 15) + relativedelta(months=k)
    return safe_date(anchor.year, anchor.month, d.day)

def roll_month(d: datetime) -> datetime:
    """
    Advance one calendar month keeping the day number; a day past the end of
    the target month spills into the following month (Jan 31 -> Mar 3).
    """
    year, month = (d.year + 1, 1) if d.month == 12 else (d.year, d.month + 1)
    return d.replace(year=year, month=month, day=1) + timedelta(days=d.day - 1)

# ---------- Display ----------
def format_date(d: date) -> str:
    return d.strftime("%d/%m/%Y")

def format_datetime(d: datetime) -> str:
    return d.strftime("%d/%m/%Y %H:%M")

def format_amount(amount: float) -> str:
    """Group thousands with dots and append the currency sign: 1.250.000đ"""
    return f"{round(amount):,}".replace(",", ".") + "đ"

def filter_label(flt: FilterState) -> str:
    if flt.type == "week" and flt.week:
        start, end = week_range(flt.year, flt.week)
        return f"Week {flt.week} ({format_date(start)} - {format_date(end)})"
    if flt.type == "month":
        return f"Month {flt.month}, {flt.year}"
    if flt.type == "year":
        return f"Year {flt.year}"
    return "All time"

# ---------- Tables & trends ----------
def records_frame(records: Iterable) -> pd.DataFrame:
    """Newest-first table of log records (any model with `date` and `amount`)."""
    rows = [r.model_dump() for r in records]
    if not rows:
        return pd.DataFrame(columns=["date", "amount"])
    return pd.DataFrame(rows).sort_values("date", ascending=False).reset_index(drop=True)

def monthly_totals(series: Dict[str, Iterable]) -> Optional[pd.DataFrame]:
    """
    Sum each named series of dated amounts per month.
    Returns a DataFrame with YYYY-MM as index and one column per series.
    """
    rows = [
        {"Series": name, "Date": r.date, "Amount": r.amount}
        for name, records in series.items()
        for r in records
    ]
    if not rows:
        return None
    tmp = pd.DataFrame(rows)
    tmp["YYYY-MM"] = pd.to_datetime(tmp["Date"]).dt.to_period("M").astype(str)
    g = (
        tmp.groupby(["YYYY-MM", "Series"])["Amount"]
        .sum()
        .unstack(fill_value=0)
        .reindex(columns=list(series), fill_value=0)
        .sort_index()
    )
    return g
