# holiday_schedule.py
# Upcoming public holidays, reconciliation with saved user edits, holiday edits

from datetime import date, datetime
from typing import Dict, List, Optional
import logging

from models import Holiday, InvalidOperation

logger = logging.getLogger(__name__)

# (month, day, name) for fixed solar-calendar holidays
SOLAR_HOLIDAYS = [
    (1, 1, "New Year"),
    (4, 30, "Liberation Day"),
    (5, 1, "Labor Day"),
    (9, 2, "National Day"),
]

# Pre-computed solar dates of the lunar holidays
LUNAR_HOLIDAYS: Dict[int, Dict[str, str]] = {
    2025: {"tet": "2025-01-29", "hung_kings": "2025-04-07"},
    2026: {"tet": "2026-02-17", "hung_kings": "2026-04-26"},
    2027: {"tet": "2027-02-06", "hung_kings": "2027-04-16"},
}

LUNAR_NAMES = {"tet": "Lunar New Year", "hung_kings": "Hùng Kings' Festival"}

MIN_UPCOMING = 3

def holiday_id(day: date) -> str:
    return f"holiday-{day.isoformat()}"

def holidays_for_year(year: int) -> List[Holiday]:
    """Every holiday of `year`, unfiltered; lunar ones only when the table covers the year."""
    events = [(date(year, m, d), name) for m, d, name in SOLAR_HOLIDAYS]
    lunar = LUNAR_HOLIDAYS.get(year)
    if lunar:
        for key, name in LUNAR_NAMES.items():
            events.append((date.fromisoformat(lunar[key]), name))
    else:
        logger.debug(f"No lunar calendar mapping for {year}; lunar holidays omitted")
    return [Holiday(id=holiday_id(day), name=f"{name} {year}", date=day) for day, name in events]

def upcoming_holidays(now: datetime) -> List[Holiday]:
    """
    Holidays from today on for this year and next, reaching into year+2 when
    fewer than three remain. Sorted by date.
    """
    today = now.date()
    out: List[Holiday] = []
    for year in (today.year, today.year + 1):
        out.extend(h for h in holidays_for_year(year) if h.date >= today)
    if len(out) < MIN_UPCOMING:
        out.extend(h for h in holidays_for_year(today.year + 2) if h.date >= today)
    return sorted(out, key=lambda h: h.date)

def merge_holidays(fresh: List[Holiday], saved: List[Holiday]) -> List[Holiday]:
    """
    Reattach user edits to a freshly generated schedule, matching on id.
    `fresh` owns id/name/date; `saved` owns is_taking_off/start_date/end_date/note.
    Saved holidays missing from `fresh` (past or dropped) are discarded.
    """
    by_id = {h.id: h for h in saved}
    merged = []
    for h in fresh:
        prev = by_id.get(h.id)
        if prev is None:
            merged.append(h)
            continue
        merged.append(h.model_copy(update={
            "is_taking_off": prev.is_taking_off,
            "start_date": prev.start_date,
            "end_date": prev.end_date,
            "note": prev.note,
        }))
    return merged

def update_holiday(holidays: List[Holiday], hid: str, *,
                   is_taking_off: Optional[bool] = None,
                   start_date: Optional[date] = None,
                   end_date: Optional[date] = None,
                   note: Optional[str] = None) -> List[Holiday]:
    """
    Apply a user edit to one holiday. Marking a holiday as time off clears the
    flag on every other one, so at most one holiday is planned at a time.
    """
    target = next((h for h in holidays if h.id == hid), None)
    if target is None:
        raise InvalidOperation(f"Unknown holiday: {hid}")

    changes = {}
    if is_taking_off is not None:
        changes["is_taking_off"] = is_taking_off
    if start_date is not None:
        changes["start_date"] = start_date
    if end_date is not None:
        changes["end_date"] = end_date
    if note is not None:
        changes["note"] = note

    start = changes.get("start_date", target.start_date)
    end = changes.get("end_date", target.end_date)
    if start and end and end < start:
        raise InvalidOperation("Leave must end on or after its first day")

    updated = []
    for h in holidays:
        if h.id == hid:
            updated.append(h.model_copy(update=changes))
        elif is_taking_off and h.is_taking_off:
            updated.append(h.model_copy(update={"is_taking_off": False}))
        else:
            updated.append(h)
    return updated
