# summary.py
# Period totals, planned vs actual spending, runway & fixed-cost trackers

from datetime import datetime
from typing import Iterable, List, Optional, Tuple
import math

from pydantic import BaseModel

from config import FIXED_EXPENSES, REFUEL_SHORT_INTERVAL_DAYS, WIFI_CYCLE_DAYS, WIFI_WARNING_DAYS
from debts import weekly_requirement
from helpers import days_between, in_period
from models import AppState, Debt, FilterState, GasLog

class Summary(BaseModel):
    income: int
    food_spending: int
    misc_spending: int
    fixed_expenses: int
    actual_debt_paid: int
    weekly_debt_contribution: float
    planned_spending: float
    actual_spending: int
    financial_status: int
    disposable_income: int
    days_off_can_take: float

    @property
    def has_surplus(self) -> bool:
        return self.financial_status > 0

def filtered_total(records: Iterable, flt: FilterState) -> int:
    """Sum of amounts of records dated inside the period."""
    return sum(r.amount for r in records if in_period(r.date, flt))

def weekly_debt_contribution(active_debts: List[Debt], now: datetime) -> float:
    return sum(weekly_requirement(d, now) for d in active_debts)

def actual_debt_paid(debts: List[Debt], flt: FilterState) -> int:
    """
    Payments made inside the period across all debts, active or completed.
    Withdrawals lower a debt's paid amount but are not counted here.
    """
    return sum(
        t.amount
        for d in debts
        for t in d.transactions
        if t.type == "payment" and in_period(t.date, flt)
    )

def days_off_can_take(active_debts: List[Debt], income: int, actual_spending: float) -> float:
    """Whole days the period surplus covers at the current daily burn; inf when unbounded."""
    if sum(d.remaining for d in active_debts) <= 0:
        return math.inf
    daily_spending = actual_spending / 7
    if daily_spending <= 0:
        return math.inf
    surplus = income - actual_spending
    if surplus <= 0:
        return 0
    return math.floor(surplus / daily_spending)

def build_summary(state: AppState, flt: FilterState, now: datetime,
                  fixed_expenses: int = FIXED_EXPENSES) -> Summary:
    active = state.active_debts
    income = filtered_total(state.income_logs, flt)
    food = filtered_total(state.food_logs, flt)
    misc = filtered_total(state.misc_logs, flt)
    debt_paid = actual_debt_paid(state.debts, flt)
    contribution = weekly_debt_contribution(active, now)

    planned = fixed_expenses + state.food_budget + state.misc_budget + contribution
    actual = fixed_expenses + food + misc + debt_paid

    return Summary(
        income=income,
        food_spending=food,
        misc_spending=misc,
        fixed_expenses=fixed_expenses,
        actual_debt_paid=debt_paid,
        weekly_debt_contribution=contribution,
        planned_spending=planned,
        actual_spending=actual,
        financial_status=income - actual,
        disposable_income=income - (fixed_expenses + food + misc),
        days_off_can_take=days_off_can_take(active, income, actual),
    )

# ---------- Fuel & internet ----------
def is_gas_filled_today(gas_history: List[GasLog], now: datetime) -> bool:
    if not gas_history:
        return False
    return gas_history[-1].date.date() == now.date()

def last_refuel_interval(gas_history: List[GasLog]) -> Optional[Tuple[int, bool]]:
    """(days between the last two refills, shorter than usual?) or None."""
    if len(gas_history) < 2:
        return None
    days = days_between(gas_history[-2].date, gas_history[-1].date)
    return days, days < REFUEL_SHORT_INTERVAL_DAYS

def refills_in_period(gas_history: List[GasLog], flt: FilterState) -> int:
    return sum(1 for g in gas_history if in_period(g.date, flt))

def wifi_paid_recently(last_payment: Optional[datetime], now: datetime) -> bool:
    if last_payment is None:
        return False
    return days_between(last_payment, now) < WIFI_CYCLE_DAYS

def wifi_renewal_due(last_payment: Optional[datetime], now: datetime) -> bool:
    if last_payment is None:
        return False
    return days_between(last_payment, now) >= WIFI_WARNING_DAYS
