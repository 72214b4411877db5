import pytest
from datetime import date, datetime
from debts import new_debt
from models import Holiday
from planner import plan_holiday, planned_holiday

NOW = datetime(2025, 4, 7)

def leave(**kw):
    fields = dict(id="holiday-2025-04-30", name="Liberation Day 2025", date=date(2025, 4, 30),
                  is_taking_off=True, start_date=date(2025, 4, 28), end_date=date(2025, 5, 2))
    fields.update(kw)
    return Holiday(**fields)

def test_no_plan_without_complete_leave():
    assert plan_holiday([], [], 0, NOW) is None
    assert plan_holiday([leave(end_date=None)], [], 0, NOW) is None
    assert plan_holiday([leave(is_taking_off=False)], [], 0, NOW) is None

def test_plan_burn_rate_only():
    plan = plan_holiday([leave()], [], 0, NOW, fixed_expenses=100_000, food_budget=0)
    assert plan.holiday_id == "holiday-2025-04-30"
    assert plan.days_off == 5
    assert plan.days_until == 21
    assert plan.total_needed == pytest.approx(100_000 / 7 * 5)
    assert plan.gap == pytest.approx(plan.total_needed)
    # three weeks to go
    assert plan.weekly_saving_goal == pytest.approx(plan.total_needed / 3)
    assert not plan.is_ready

def test_plan_includes_debt_due_on_last_day():
    due_last_day = new_debt("Card", "", 300_000, datetime(2025, 5, 2, 18, 0), NOW)
    due_after = new_debt("Loan", "", 999_000, datetime(2025, 5, 3), NOW)
    plan = plan_holiday([leave()], [due_last_day, due_after], 0, NOW, fixed_expenses=0, food_budget=0)
    assert plan.debt_due_in_holiday == 300_000
    assert plan.total_needed == 300_000

def test_plan_ready_when_savings_cover_it():
    plan = plan_holiday([leave()], [], 10_000_000, NOW)
    assert plan.gap == 0
    assert plan.weekly_saving_goal == 0
    assert plan.is_ready

def test_imminent_leave_uses_one_week_minimum():
    plan = plan_holiday([leave()], [], 0, datetime(2025, 4, 26), fixed_expenses=70_000, food_budget=0)
    assert plan.days_until == 2
    assert plan.weekly_saving_goal == pytest.approx(plan.gap)

def test_planned_holiday_picks_first_complete_one():
    other = leave(id="holiday-2025-09-02", name="National Day 2025", date=date(2025, 9, 2))
    assert planned_holiday([leave(start_date=None), other]).id == "holiday-2025-09-02"
