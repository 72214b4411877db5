import math
import streamlit as st
from datetime import datetime
from typing import Optional

from helpers import filter_label, format_amount
from models import AppState, FilterState, InvalidOperation
from state import deposit_savings, set_budgets, withdraw_savings
from summary import build_summary

def summary_section(state: AppState, flt: FilterState, now: datetime) -> Optional[AppState]:
    s = build_summary(state, flt, now)
    st.markdown(f"### Actual spending: {filter_label(flt)}")
    st.caption("Includes fixed costs, food, misc and debt payments made in the period.")

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Income", format_amount(s.income))
    c2.metric("Actual spending", format_amount(s.actual_spending))
    c3.metric("Planned spending", format_amount(s.planned_spending))
    c4.metric("Surplus" if s.has_surplus else "Shortfall", format_amount(s.financial_status))

    d1, d2, d3 = st.columns(3)
    d1.metric("Debt paid (period)", format_amount(s.actual_debt_paid))
    d2.metric("Weekly debt need", format_amount(s.weekly_debt_contribution))
    days_off = "∞" if math.isinf(s.days_off_can_take) else f"{int(s.days_off_can_take)} day(s)"
    d3.metric("Days off you can take", days_off)

    st.markdown("### 🐷 Savings")
    st.write(f"Balance: **{format_amount(state.savings_balance)}**")
    c1, c2 = st.columns(2)
    try:
        if c1.button("Save this period's surplus", disabled=not s.has_surplus):
            return deposit_savings(state, flt, now)
        with c2.form("savings_withdraw", clear_on_submit=True):
            amount = st.number_input("Withdraw (đ)", min_value=0, value=0, step=1000)
            if st.form_submit_button("Withdraw to income"):
                return withdraw_savings(state, int(amount), now)
    except InvalidOperation as e:
        st.error(str(e))

    st.markdown("### Budgets")
    with st.form("budgets"):
        c1, c2 = st.columns(2)
        food = c1.number_input("Food budget (đ)", min_value=0, value=state.food_budget, step=1000)
        misc = c2.number_input("Misc budget (đ)", min_value=0, value=state.misc_budget, step=1000)
        if st.form_submit_button("Save budgets"):
            return set_budgets(state, food=int(food), misc=int(misc))
    return None
