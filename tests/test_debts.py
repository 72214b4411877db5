import pytest
from datetime import datetime
from debts import (
    ACCELERATE, CONTINUE, PAUSE, add_payment, base_name, debt_history, display_debts,
    due_status, expand_recurring, new_debt, shopee_debt, suggestion, weekly_requirement,
    withdraw_payment,
)
from models import InvalidOperation, RecurringTemplate

NOW = datetime(2025, 3, 12, 12, 0)

def make_debt(total=1_000_000, due=datetime(2025, 3, 26), **kw):
    return new_debt(kw.pop("name", "Laptop"), "Bank", total, due, NOW, **kw)

def test_monthly_expansion_is_inclusive_of_end_date():
    template = RecurringTemplate(
        name="Phone", source="Store", total_amount=500_000, frequency="monthly",
        start_date=datetime(2025, 1, 15), end_date=datetime(2025, 3, 15),
    )
    debts = expand_recurring(template, NOW)
    assert [d.due_date for d in debts] == [datetime(2025, 1, 15), datetime(2025, 2, 15), datetime(2025, 3, 15)]
    assert [d.name for d in debts] == ["Phone (Month 1/2025)", "Phone (Month 2/2025)", "Phone (Month 3/2025)"]
    assert [(d.target_month, d.target_year) for d in debts] == [(1, 2025), (2, 2025), (3, 2025)]
    assert len({d.id for d in debts}) == 3
    assert all(d.amount_paid == 0 and d.transactions == [] for d in debts)

def test_weekly_expansion_numbers_periods():
    template = RecurringTemplate(
        name="Gym", total_amount=50_000, frequency="weekly",
        start_date=datetime(2025, 1, 1), end_date=datetime(2025, 1, 29),
    )
    debts = expand_recurring(template, NOW)
    assert len(debts) == 5
    assert debts[-1].name == "Gym (Period 5)"
    assert debts[-1].due_date == datetime(2025, 1, 29)

def test_monthly_expansion_rolls_over_short_months():
    template = RecurringTemplate(
        name="Rent", total_amount=1, frequency="monthly",
        start_date=datetime(2025, 1, 31), end_date=datetime(2025, 4, 30),
    )
    dues = [d.due_date for d in expand_recurring(template, NOW)]
    assert dues == [datetime(2025, 1, 31), datetime(2025, 3, 3), datetime(2025, 4, 3)]

def test_expansion_rejects_end_before_start():
    template = RecurringTemplate(
        name="Bad", total_amount=1, frequency="monthly",
        start_date=datetime(2025, 3, 15), end_date=datetime(2025, 1, 15),
    )
    with pytest.raises(InvalidOperation):
        expand_recurring(template, NOW)

def test_base_name_strips_schedule_suffix():
    assert base_name("Phone (Month 2/2025)") == "Phone"
    assert base_name("Gym (Period 12)") == "Gym"
    assert base_name("Plain (note)") == "Plain (note)"

def test_shopee_due_on_tenth_of_next_month():
    debt = shopee_debt(300_000, 12, 2025, NOW)
    assert debt.due_date == datetime(2026, 1, 10)
    assert (debt.target_month, debt.target_year) == (12, 2025)
    assert debt.source == "Shopee SPayLater"
    assert debt.name == "SPayLater - Bill M12"

def test_paid_amount_nets_withdrawals():
    debt = make_debt()
    debt = add_payment(debt, 600_000, datetime(2025, 3, 10))
    debt = withdraw_payment(debt, 100_000, "medicine", NOW)
    assert debt.amount_paid == 500_000
    assert [t.type for t in debt.transactions] == ["payment", "withdrawal"]
    assert debt.transactions[1].reason == "medicine"

def test_paying_in_full_completes_debt():
    debt = add_payment(make_debt(total=100), 100, NOW)
    assert not debt.is_active
    assert debt.remaining == 0

def test_withdrawal_rules():
    debt = add_payment(make_debt(), 200_000, NOW)
    with pytest.raises(InvalidOperation):
        withdraw_payment(debt, 300_000, "too much", NOW)
    with pytest.raises(InvalidOperation):
        withdraw_payment(debt, 50_000, "   ", NOW)
    with pytest.raises(InvalidOperation):
        add_payment(debt, 0, NOW)
    # rejected attempts leave the debt untouched
    assert debt.amount_paid == 200_000
    assert len(debt.transactions) == 1

def test_display_debts_bucket_and_order():
    late = make_debt(name="late", due=datetime(2025, 3, 28))
    early = make_debt(name="early", due=datetime(2025, 3, 5))
    bucketed = make_debt(name="april bill", due=datetime(2025, 3, 1), target_month=4, target_year=2025)
    done = add_payment(make_debt(name="done", total=10, due=datetime(2025, 3, 2)), 10, NOW)
    shown = display_debts([late, early, bucketed, done], 3, 2025)
    assert [d.name for d in shown] == ["early", "late"]
    assert [d.name for d in display_debts([late, bucketed], 4, 2025)] == ["april bill"]

def test_weekly_requirement():
    # due in 13.5 days -> rounds to 14 -> 2 weeks
    assert weekly_requirement(make_debt(), NOW) == 500_000
    # due in 9.5 days -> 10 days -> 2 weeks
    assert weekly_requirement(make_debt(due=datetime(2025, 3, 22)), NOW) == 500_000
    # overdue debt is needed in full this week
    assert weekly_requirement(make_debt(due=datetime(2025, 3, 1)), NOW) == 1_000_000
    paid = add_payment(make_debt(total=10), 10, NOW)
    assert weekly_requirement(paid, NOW) == 0

def test_due_status():
    assert due_status(make_debt(due=datetime(2025, 3, 10)), NOW)[0] == "overdue"
    assert due_status(make_debt(due=datetime(2025, 3, 14)), NOW) == ("urgent", 2)
    assert due_status(make_debt(), NOW) == ("on_track", 14)

def test_suggestion():
    debt = make_debt()  # needs 500k/week
    assert suggestion(debt, 0, NOW) == PAUSE
    assert suggestion(debt, 1_000_001, NOW) == ACCELERATE
    assert suggestion(debt, 1_000_000, NOW) == CONTINUE
    assert suggestion(add_payment(make_debt(total=5), 5, NOW), 100, NOW) is None

def test_debt_history_newest_first():
    a = add_payment(make_debt(name="a"), 10, datetime(2025, 3, 1))
    b = add_payment(make_debt(name="b"), 20, datetime(2025, 3, 5))
    a = add_payment(a, 30, datetime(2025, 3, 9))
    history = debt_history([a, b])
    assert [(d.name, t.amount) for d, t in history] == [("a", 30), ("b", 20), ("a", 10)]
