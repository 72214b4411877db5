# planner.py
# Can-I-afford-the-time-off projection for the holiday marked as leave

from datetime import datetime, time
from typing import List, Optional

from pydantic import BaseModel

from config import DEFAULT_FOOD_BUDGET, FIXED_EXPENSES
from helpers import days_between, end_of_day
from models import Debt, Holiday

class HolidayPlan(BaseModel):
    holiday_id: str
    days_off: int
    days_until: int
    total_needed: float
    gap: float
    weekly_saving_goal: float
    debt_due_in_holiday: int

    @property
    def is_ready(self) -> bool:
        return self.gap == 0

def planned_holiday(holidays: List[Holiday]) -> Optional[Holiday]:
    """First holiday marked as time off with a complete leave range."""
    for h in holidays:
        if h.is_taking_off and h.start_date and h.end_date:
            return h
    return None

def plan_holiday(holidays: List[Holiday], active_debts: List[Debt], savings_balance: int,
                 now: datetime, fixed_expenses: int = FIXED_EXPENSES,
                 food_budget: int = DEFAULT_FOOD_BUDGET) -> Optional[HolidayPlan]:
    """
    Funds needed to cover the leave (daily fixed + nominal food burn, plus any
    debt falling due during it) and the weekly saving that closes the gap with
    the current savings before the leave starts. None when no leave is planned.
    """
    holiday = planned_holiday(holidays)
    if holiday is None:
        return None

    start = datetime.combine(holiday.start_date, time.min)
    end = datetime.combine(holiday.end_date, time.min)
    days_off = max(0, days_between(start, end) + 1)
    days_until = max(0, days_between(now, start))
    # fractional weeks; never below one
    weeks_until = max(1, days_until / 7)

    burn_rate_per_day = fixed_expenses / 7 + food_budget / 7
    debt_due = sum(d.remaining for d in active_debts if start <= d.due_date <= end_of_day(end))
    total_needed = burn_rate_per_day * days_off + debt_due
    gap = max(0, total_needed - savings_balance)

    return HolidayPlan(
        holiday_id=holiday.id,
        days_off=days_off,
        days_until=days_until,
        total_needed=total_needed,
        gap=gap,
        weekly_saving_goal=gap / weeks_until,
        debt_due_in_holiday=debt_due,
    )
