# state.py
# Pure state transitions: every user action maps (state, input, now) -> new state

from datetime import datetime
from typing import Callable, List, Optional

from debts import add_payment, withdraw_payment
from helpers import in_period
from holiday_schedule import merge_holidays, update_holiday, upcoming_holidays
from models import AppState, Debt, ExpenseLog, FilterState, FoodLog, GasLog, IncomeLog, InvalidOperation
from summary import build_summary, wifi_paid_recently

QUICK_SPEND_NAME = "Quick spend"

def _update(state: AppState, **changes) -> AppState:
    return state.model_copy(update=changes)

# ---------- Income & savings ----------
def add_income(state: AppState, amount: int, now: datetime) -> AppState:
    if amount <= 0:
        raise InvalidOperation("Income must be positive")
    return _update(state, income_logs=state.income_logs + [IncomeLog(date=now, amount=amount)])

def edit_income(state: AppState, log_id: str, amount: int) -> AppState:
    if amount < 0:
        raise InvalidOperation("Income cannot be negative")
    if not any(log.id == log_id for log in state.income_logs):
        raise InvalidOperation(f"Unknown income record: {log_id}")
    logs = [
        log.model_copy(update={"amount": amount}) if log.id == log_id else log
        for log in state.income_logs
    ]
    return _update(state, income_logs=logs)

def deposit_savings(state: AppState, flt: FilterState, now: datetime) -> AppState:
    """Move the period surplus into the savings buffer."""
    surplus = build_summary(state, flt, now).financial_status
    if surplus <= 0:
        raise InvalidOperation("There is no surplus to save in this period")
    return _update(state, savings_balance=state.savings_balance + surplus)

def withdraw_savings(state: AppState, amount: int, now: datetime) -> AppState:
    """Spend from savings; the money re-enters the budget as flagged income."""
    if amount <= 0 or amount > state.savings_balance:
        raise InvalidOperation("Withdrawal must be positive and within the savings balance")
    log = IncomeLog(date=now, amount=amount, is_savings_withdrawal=True)
    return _update(
        state,
        income_logs=state.income_logs + [log],
        savings_balance=state.savings_balance - amount,
    )

# ---------- Spending ----------
def add_food(state: AppState, amount: int, now: datetime) -> AppState:
    if amount <= 0:
        return state
    return _update(state, food_logs=state.food_logs + [FoodLog(date=now, amount=amount)])

def add_misc(state: AppState, amount: int, now: datetime, name: str = QUICK_SPEND_NAME) -> AppState:
    if amount <= 0:
        return state
    log = ExpenseLog(date=now, amount=amount, name=name.strip() or QUICK_SPEND_NAME)
    return _update(state, misc_logs=state.misc_logs + [log])

def delete_misc(state: AppState, log_id: str) -> AppState:
    return _update(state, misc_logs=[log for log in state.misc_logs if log.id != log_id])

def set_budgets(state: AppState, food: Optional[int] = None, misc: Optional[int] = None) -> AppState:
    changes = {}
    if food is not None:
        changes["food_budget"] = food
    if misc is not None:
        changes["misc_budget"] = misc
    return AppState.model_validate({**state.model_dump(), **changes})

# ---------- Fixed costs ----------
def toggle_gas(state: AppState, now: datetime) -> AppState:
    """Mark today's refill, or undo it when today is already marked."""
    today = [g for g in state.gas_history if g.date.date() == now.date()]
    if today:
        return _update(state, gas_history=[g for g in state.gas_history if g.date.date() != now.date()])
    return _update(state, gas_history=state.gas_history + [GasLog(date=now)])

def add_gas_fill(state: AppState, when: datetime) -> AppState:
    history = sorted(state.gas_history + [GasLog(date=when)], key=lambda g: g.date)
    return _update(state, gas_history=history)

def toggle_wifi(state: AppState, now: datetime) -> AppState:
    if wifi_paid_recently(state.last_wifi_payment, now):
        return _update(state, last_wifi_payment=None)
    return _update(state, last_wifi_payment=now)

def set_wifi_payment(state: AppState, when: datetime) -> AppState:
    return _update(state, last_wifi_payment=when)

# ---------- Debts ----------
def add_debts(state: AppState, new: List[Debt]) -> AppState:
    return _update(state, debts=state.debts + list(new))

def _map_debt(state: AppState, debt_id: str, fn: Callable[[Debt], Debt]) -> AppState:
    if not any(d.id == debt_id for d in state.debts):
        raise InvalidOperation(f"Unknown debt: {debt_id}")
    return _update(state, debts=[fn(d) if d.id == debt_id else d for d in state.debts])

def edit_debt(state: AppState, debt_id: str, name: str, source: str, total_amount: int,
              due_date: datetime, target_month: int, target_year: int) -> AppState:
    """Edit the descriptive fields; the paid amount and transactions are untouched."""
    def _edit(d: Debt) -> Debt:
        return Debt.model_validate({
            **d.model_dump(),
            "name": name.strip(),
            "source": source.strip(),
            "total_amount": total_amount,
            "due_date": due_date,
            "target_month": target_month,
            "target_year": target_year,
        })
    return _map_debt(state, debt_id, _edit)

def delete_debt(state: AppState, debt_id: str) -> AppState:
    return _update(state, debts=[d for d in state.debts if d.id != debt_id])

def pay_debt(state: AppState, debt_id: str, amount: int, when: datetime) -> AppState:
    return _map_debt(state, debt_id, lambda d: add_payment(d, amount, when))

def withdraw_from_debt(state: AppState, debt_id: str, amount: int, reason: str, now: datetime) -> AppState:
    return _map_debt(state, debt_id, lambda d: withdraw_payment(d, amount, reason, now))

# ---------- Holidays ----------
def refresh_holidays(state: AppState, now: datetime) -> AppState:
    """Regenerate the upcoming schedule, keeping the user's edits."""
    return _update(state, holidays=merge_holidays(upcoming_holidays(now), state.holidays))

def edit_holiday(state: AppState, holiday_id: str, **changes) -> AppState:
    return _update(state, holidays=update_holiday(state.holidays, holiday_id, **changes))

# ---------- Views ----------
def misc_in_period(state: AppState, flt: FilterState) -> List[ExpenseLog]:
    """Misc records of the period, newest first (detail list)."""
    logs = [log for log in state.misc_logs if in_period(log.date, flt)]
    return sorted(logs, key=lambda log: log.date, reverse=True)
