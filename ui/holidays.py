import streamlit as st
from datetime import datetime
from typing import Optional

from helpers import format_amount, format_date
from models import AppState, InvalidOperation
from planner import plan_holiday
from state import edit_holiday

def holidays_section(state: AppState, now: datetime) -> Optional[AppState]:
    plan = plan_holiday(state.holidays, state.active_debts, state.savings_balance, now)
    if plan is None:
        st.info("Tick a holiday and pick your leave dates to see whether you can afford it.")
    else:
        c1, c2, c3 = st.columns(3)
        c1.metric("Days off", plan.days_off)
        c2.metric("Starts in", f"{plan.days_until} day(s)")
        c3.metric("Needed", format_amount(plan.total_needed))
        if plan.debt_due_in_holiday:
            st.caption(f"Includes {format_amount(plan.debt_due_in_holiday)} of debt due during the leave.")
        if plan.is_ready:
            st.success("Your savings already cover this leave.")
        else:
            st.warning(f"Short by {format_amount(plan.gap)}: save "
                       f"~{format_amount(plan.weekly_saving_goal)} per week until then.")

    for h in state.holidays:
        with st.expander(f"{h.name} · {format_date(h.date)}", expanded=h.is_taking_off):
            taking_off = st.checkbox(f"Taking time off for {h.name}", value=h.is_taking_off)
            if taking_off != h.is_taking_off:
                return edit_holiday(state, h.id, is_taking_off=taking_off)
            if not h.is_taking_off:
                continue
            with st.form(f"leave_{h.id}"):
                c1, c2 = st.columns(2)
                start = c1.date_input("Leave starts", value=h.start_date or h.date, key=f"start_{h.id}")
                end = c2.date_input("Leave ends", value=h.end_date or h.date, key=f"end_{h.id}")
                note = st.text_input("Note", value=h.note, key=f"note_{h.id}")
                if st.form_submit_button("Save leave"):
                    try:
                        return edit_holiday(state, h.id, start_date=start, end_date=end, note=note)
                    except InvalidOperation as e:
                        st.error(str(e))
    return None
