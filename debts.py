# debts.py
# Debt creation (single, Shopee, recurring), payment transactions, bucketing & weekly requirement

from datetime import date, datetime, time, timedelta
from typing import Iterator, List, Optional, Tuple
import math
import re
import logging
from uuid import uuid4

from dateutil.relativedelta import relativedelta

from config import URGENT_DUE_DAYS
from helpers import days_between, roll_month
from models import Debt, DebtTransaction, InvalidOperation, RecurringTemplate, settled_amount

logger = logging.getLogger(__name__)

SCHEDULE_SUFFIX = re.compile(r"\s*\((Month \d+/\d+|Period \d+)\)\s*$")

SHOPEE_SOURCE = "Shopee SPayLater"
SHOPEE_DUE_DAY = 10

PAUSE, ACCELERATE, CONTINUE = "pause", "accelerate", "continue"
SUGGESTION_TEXT = {
    PAUSE: "Income is low this period, consider pausing contributions.",
    ACCELERATE: "Plenty of room! Consider paying more to finish early.",
    CONTINUE: "Keep contributing as planned.",
}

# ---------- Creation ----------
def new_debt(name: str, source: str, total_amount: int, due_date: datetime, now: datetime,
             target_month: Optional[int] = None, target_year: Optional[int] = None) -> Debt:
    return Debt(
        name=name.strip(),
        source=source.strip(),
        total_amount=total_amount,
        due_date=due_date,
        created_at=now,
        target_month=target_month,
        target_year=target_year,
    )

def iter_due_dates(start: datetime, end: datetime, frequency: str) -> Iterator[datetime]:
    """Yield start, start+1 period, ... while the date is on or before `end`."""
    current = start
    while current <= end:
        yield current
        if frequency == "weekly":
            current = current + timedelta(days=7)
        else:
            current = roll_month(current)

def expand_recurring(template: RecurringTemplate, now: datetime) -> List[Debt]:
    """
    One debt per period of the template, each bucketed to its own due month.
    Raises InvalidOperation before generating anything when the range is empty.
    """
    if template.start_date > template.end_date:
        raise InvalidOperation("Recurring debt must end on or after its start date")

    batch = uuid4().hex[:12]
    debts = []
    for count, due in enumerate(iter_due_dates(template.start_date, template.end_date, template.frequency), 1):
        if template.frequency == "monthly":
            suffix = f"(Month {due.month}/{due.year})"
        else:
            suffix = f"(Period {count})"
        debts.append(Debt(
            id=f"{batch}-{count}",
            name=f"{template.name.strip()} {suffix}",
            source=template.source.strip(),
            total_amount=template.total_amount,
            due_date=due,
            created_at=now,
            target_month=due.month,
            target_year=due.year,
        ))
    logger.info(f"Expanded recurring debt '{template.name}' into {len(debts)} {template.frequency} instance(s)")
    return debts

def base_name(name: str) -> str:
    """Drop the '(Month M/Y)' or '(Period N)' suffix added by the recurring expander."""
    return SCHEDULE_SUFFIX.sub("", name).strip()

def shopee_due_date(bill_month: int, bill_year: int) -> datetime:
    """A pay-later bill is due on the 10th of the month after the billing month."""
    due = date(bill_year, bill_month, SHOPEE_DUE_DAY) + relativedelta(months=1)
    return datetime.combine(due, time.min)

def shopee_debt(total_amount: int, bill_month: int, bill_year: int, now: datetime) -> Debt:
    return Debt(
        name=f"SPayLater - Bill M{bill_month}",
        source=SHOPEE_SOURCE,
        total_amount=total_amount,
        due_date=shopee_due_date(bill_month, bill_year),
        created_at=now,
        target_month=bill_month,
        target_year=bill_year,
    )

# ---------- Transactions ----------
def _with_transaction(debt: Debt, tx: DebtTransaction) -> Debt:
    transactions = debt.transactions + [tx]
    return debt.model_copy(update={
        "transactions": transactions,
        "amount_paid": settled_amount(transactions),
    })

def add_payment(debt: Debt, amount: int, when: datetime) -> Debt:
    """Record a payment dated `when` (the day the money left the budget)."""
    if amount <= 0:
        raise InvalidOperation("Payment amount must be positive")
    return _with_transaction(debt, DebtTransaction(date=when, amount=amount, type="payment"))

def withdraw_payment(debt: Debt, amount: int, reason: str, now: datetime) -> Debt:
    """Take back part of what was paid; a reason is mandatory."""
    if amount <= 0:
        raise InvalidOperation("Withdrawal amount must be positive")
    if amount > debt.amount_paid:
        logger.warning(f"Rejected withdrawal of {amount} from debt {debt.id}: only {debt.amount_paid} paid")
        raise InvalidOperation("Cannot withdraw more than has been paid")
    if not reason or not reason.strip():
        raise InvalidOperation("A reason is required to withdraw")
    tx = DebtTransaction(date=now, amount=amount, type="withdrawal", reason=reason.strip())
    return _with_transaction(debt, tx)

def debt_history(debts: List[Debt]) -> List[Tuple[Debt, DebtTransaction]]:
    """Every transaction across all debts, newest first."""
    pairs = [(d, t) for d in debts for t in d.transactions]
    return sorted(pairs, key=lambda p: p[1].date, reverse=True)

# ---------- Buckets, schedule & advice ----------
def display_debts(debts: List[Debt], month: int, year: int) -> List[Debt]:
    """Active debts bucketed to (month, year), earliest due first."""
    shown = [d for d in debts if d.is_active and d.bucket == (month, year)]
    return sorted(shown, key=lambda d: d.due_date)

def weekly_requirement(debt: Debt, now: datetime) -> float:
    """Amount to set aside each week to clear the debt by its due date."""
    if debt.remaining <= 0:
        return 0.0
    if debt.due_date <= now:
        return float(debt.remaining)
    weeks = max(1, math.ceil(days_between(now, debt.due_date) / 7))
    return debt.remaining / weeks

def days_left(debt: Debt, now: datetime) -> int:
    """Signed days until due, rounded up; negative when overdue."""
    return math.ceil((debt.due_date - now).total_seconds() / (24 * 60 * 60))

def due_status(debt: Debt, now: datetime) -> Tuple[str, int]:
    left = days_left(debt, now)
    if left < 0:
        return "overdue", left
    if left <= URGENT_DUE_DAYS:
        return "urgent", left
    return "on_track", left

def suggestion(debt: Debt, disposable_income: float, now: datetime) -> Optional[str]:
    """Advisory hint for one debt; see SUGGESTION_TEXT for the wording."""
    if debt.remaining <= 0:
        return None
    if disposable_income <= 0:
        return PAUSE
    if disposable_income > weekly_requirement(debt, now) * 2:
        return ACCELERATE
    return CONTINUE
