import streamlit as st
from datetime import datetime, time
from typing import Optional

from config import GAS_COST, WIFI_COST
from helpers import format_amount, format_date, records_frame
from models import AppState, FilterState, InvalidOperation
from state import (
    add_food, add_gas_fill, add_income, add_misc, delete_misc, edit_income,
    misc_in_period, set_wifi_payment, toggle_gas, toggle_wifi,
)
from summary import (
    is_gas_filled_today, last_refuel_interval, refills_in_period,
    wifi_paid_recently, wifi_renewal_due,
)

def fixed_costs_section(state: AppState, flt: FilterState, now: datetime) -> Optional[AppState]:
    c1, c2 = st.columns(2)
    with c1:
        st.markdown(f"#### ⛽ Fuel ({format_amount(GAS_COST)})")
        filled = is_gas_filled_today(state.gas_history, now)
        st.caption(f"Refills this period: {refills_in_period(state.gas_history, flt)}")
        interval = last_refuel_interval(state.gas_history)
        if interval:
            days, shorter = interval
            msg = f"Last tank lasted {days} day(s)."
            (st.warning if shorter else st.caption)(msg)
        if st.button("Undo today's refill" if filled else "Filled today"):
            return toggle_gas(state, now)
        past = st.date_input("Past refill date", value=now.date(), key="gas_manual")
        if st.button("Add past refill"):
            return add_gas_fill(state, datetime.combine(past, time.min))
    with c2:
        st.markdown(f"#### 📶 Internet ({format_amount(WIFI_COST)})")
        paid = wifi_paid_recently(state.last_wifi_payment, now)
        if state.last_wifi_payment:
            st.caption(f"Last paid {format_date(state.last_wifi_payment)}")
        if wifi_renewal_due(state.last_wifi_payment, now):
            st.warning("Internet renewal is due.")
        if st.button("Undo payment" if paid else "Paid internet"):
            return toggle_wifi(state, now)
        past = st.date_input("Payment date", value=now.date(), key="wifi_manual")
        if st.button("Set payment date"):
            return set_wifi_payment(state, datetime.combine(past, time.min))
    return None

def logs_section(state: AppState, flt: FilterState, now: datetime) -> Optional[AppState]:
    c1, c2, c3 = st.columns(3)
    with c1.form("income_form", clear_on_submit=True):
        amount = st.number_input("Income (đ)", min_value=0, value=0, step=1000)
        if st.form_submit_button("Add income") and amount > 0:
            return add_income(state, int(amount), now)
    with c2.form("food_form", clear_on_submit=True):
        amount = st.number_input("Food spent (đ)", min_value=0, value=0, step=1000)
        if st.form_submit_button("Add food"):
            return add_food(state, int(amount), now)
    with c3.form("misc_quick_form", clear_on_submit=True):
        amount = st.number_input("Misc spent (đ)", min_value=0, value=0, step=1000)
        if st.form_submit_button("Add misc"):
            return add_misc(state, int(amount), now)

    with st.expander("Income history", expanded=False):
        st.dataframe(records_frame(state.income_logs), use_container_width=True, hide_index=True)
        if state.income_logs:
            with st.form("income_edit"):
                log_id = st.selectbox("Income record (ID)", options=[log.id for log in state.income_logs])
                value = st.number_input("New amount (đ)", min_value=0, value=0, step=1000)
                if st.form_submit_button("Update"):
                    try:
                        return edit_income(state, log_id, int(value))
                    except InvalidOperation as e:
                        st.error(str(e))

    with st.expander("Misc spending (this period)", expanded=False):
        st.dataframe(records_frame(misc_in_period(state, flt)), use_container_width=True, hide_index=True)
        with st.form("misc_form", clear_on_submit=True):
            m1, m2, m3 = st.columns([2, 1, 1])
            name = m1.text_input("What for")
            amount = m2.number_input("Amount (đ)", min_value=0, value=0, step=1000)
            when = m3.date_input("Date", value=now.date())
            if st.form_submit_button("Add"):
                return add_misc(state, int(amount), datetime.combine(when, time.min), name=name)
        if state.misc_logs:
            del_id = st.selectbox("Delete misc record (select ID)", options=[""] + [log.id for log in state.misc_logs])
            if del_id and st.button("Delete selected record", type="primary"):
                return delete_misc(state, del_id)
    return None
