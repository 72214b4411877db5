import streamlit as st
import pandas as pd
from datetime import datetime, time
from typing import List, Optional

from debts import (
    SUGGESTION_TEXT, base_name, debt_history, display_debts, due_status,
    expand_recurring, new_debt, shopee_debt, shopee_due_date, suggestion, weekly_requirement,
)
from helpers import format_amount, format_date, format_datetime, shift_month
from models import AppState, Debt, InvalidOperation, RecurringTemplate
from state import add_debts, delete_debt, edit_debt, pay_debt, withdraw_from_debt

STATUS_TEXT = {"overdue": "Overdue by {} day(s)", "urgent": "Urgent! {} day(s) left", "on_track": "{} day(s) left"}

def _debt_card(state: AppState, debt: Debt, disposable: float, now: datetime) -> Optional[AppState]:
    status, left = due_status(debt, now)
    with st.expander(f"{debt.name}: {format_amount(debt.remaining)} left", expanded=status != "on_track"):
        st.caption(f"{debt.source} · due {format_date(debt.due_date)} · budget month {debt.bucket[0]}/{debt.bucket[1]}")
        (st.error if status == "overdue" else st.warning if status == "urgent" else st.caption)(
            STATUS_TEXT[status].format(abs(left)))
        st.progress(min(debt.amount_paid / debt.total_amount, 1.0) if debt.total_amount else 1.0,
                    text=f"Paid {format_amount(debt.amount_paid)} of {format_amount(debt.total_amount)}")
        st.write(f"~{format_amount(weekly_requirement(debt, now))}/week to finish on time")
        hint = suggestion(debt, disposable, now)
        if hint:
            st.info(SUGGESTION_TEXT[hint])

        with st.form(f"pay_{debt.id}", clear_on_submit=True):
            c1, c2, c3 = st.columns([1, 1, 2])
            amount = c1.number_input("Amount (đ)", min_value=0, value=0, step=1000, key=f"amount_{debt.id}")
            paid_on = c2.date_input("Paid on", value=now.date(), key=f"paid_on_{debt.id}",
                                    help="Pick the day the money left your budget.")
            reason = c3.text_input("Reason (required to withdraw)", key=f"reason_{debt.id}")
            pay, withdraw = st.columns(2)
            try:
                if pay.form_submit_button("Pay"):
                    return pay_debt(state, debt.id, int(amount), datetime.combine(paid_on, time.min))
                if withdraw.form_submit_button("Withdraw"):
                    return withdraw_from_debt(state, debt.id, int(amount), reason, now)
            except InvalidOperation as e:
                st.error(str(e))

        if debt.transactions:
            rows = [{"date": format_datetime(t.date), "type": t.type, "amount": t.amount, "reason": t.reason or ""}
                    for t in reversed(debt.transactions)]
            st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
    return None

def _add_debt_form(state: AppState, month: int, year: int, now: datetime) -> Optional[AppState]:
    kind = st.radio("Debt type", ["Standard", "Shopee SPayLater", "Recurring"], horizontal=True)
    with st.form("debt_form", clear_on_submit=True):
        c1, c2 = st.columns([2, 1])
        name = c1.text_input("Name", key="new_name", disabled=kind == "Shopee SPayLater")
        source = c1.text_input("Source / lender", key="new_source", disabled=kind == "Shopee SPayLater")
        total = c2.number_input("Amount (đ)", min_value=0, value=0, step=1000, key="new_total")
        if kind == "Shopee SPayLater":
            bill_month = c2.number_input("Bill month", min_value=1, max_value=12, value=month)
            bill_year = c2.number_input("Bill year", min_value=2000, max_value=2100, value=year)
            st.caption(f"Due on {format_date(shopee_due_date(int(bill_month), int(bill_year)))}")
        elif kind == "Recurring":
            start = c2.date_input("First due date", value=now.date())
            end = c2.date_input("Last due date", value=shift_month(now.date(), 3))
            frequency = c2.radio("Every", ["monthly", "weekly"], horizontal=True)
        else:
            due = c2.date_input("Due date", value=now.date())
            target_month = c2.number_input("Budget month", min_value=1, max_value=12, value=month, key="new_month")
            target_year = c2.number_input("Budget year", min_value=2000, max_value=2100, value=year, key="new_year")

        if not st.form_submit_button("Add debt"):
            return None
        try:
            if kind == "Shopee SPayLater":
                return add_debts(state, [shopee_debt(int(total), int(bill_month), int(bill_year), now)])
            if kind == "Recurring":
                template = RecurringTemplate(
                    name=name, source=source, total_amount=int(total), frequency=frequency,
                    start_date=datetime.combine(start, time.min), end_date=datetime.combine(end, time.min),
                )
                return add_debts(state, expand_recurring(template, now))
            debt = new_debt(name, source, int(total), datetime.combine(due, time.min), now,
                            target_month=int(target_month), target_year=int(target_year))
            return add_debts(state, [debt])
        except InvalidOperation as e:
            st.error(str(e))
    return None

def _edit_debt_form(state: AppState) -> Optional[AppState]:
    if not state.debts:
        return None
    by_id = {d.id: d for d in state.debts}
    debt_id = st.selectbox("Debt to edit (select ID)", options=[""] + list(by_id),
                           format_func=lambda i: by_id[i].name if i else "")
    if not debt_id:
        return None
    debt = by_id[debt_id]
    with st.form("debt_edit"):
        c1, c2 = st.columns([2, 1])
        name = c1.text_input("Name", value=base_name(debt.name), key=f"edit_name_{debt_id}")
        source = c1.text_input("Source / lender", value=debt.source, key=f"edit_source_{debt_id}")
        total = c2.number_input("Amount (đ)", min_value=0, value=debt.total_amount, step=1000, key=f"edit_total_{debt_id}")
        due = c2.date_input("Due date", value=debt.due_date.date(), key=f"edit_due_{debt_id}")
        month = c2.number_input("Budget month", min_value=1, max_value=12, value=debt.bucket[0], key=f"edit_month_{debt_id}")
        year = c2.number_input("Budget year", min_value=2000, max_value=2100, value=debt.bucket[1], key=f"edit_year_{debt_id}")
        save, remove = st.columns(2)
        if save.form_submit_button("Save changes"):
            return edit_debt(state, debt_id, name, source, int(total),
                             datetime.combine(due, time.min), int(month), int(year))
        if remove.form_submit_button("Delete debt", type="primary"):
            return delete_debt(state, debt_id)
    return None

def debts_section(state: AppState, disposable: float, now: datetime) -> Optional[AppState]:
    c1, c2 = st.columns(2)
    month = int(c1.selectbox("Budget month", options=list(range(1, 13)), index=now.month - 1, key="debt_filter_month"))
    year = int(c2.number_input("Budget year", min_value=2000, max_value=2100, value=now.year, key="debt_filter_year"))

    shown: List[Debt] = display_debts(state.debts, month, year)
    if not shown:
        st.info("No open debts for this month.")
    for debt in shown:
        updated = _debt_card(state, debt, disposable, now)
        if updated is not None:
            return updated

    st.markdown("### Add a debt")
    updated = _add_debt_form(state, month, year, now)
    if updated is not None:
        return updated

    st.markdown("### Edit / delete")
    updated = _edit_debt_form(state)
    if updated is not None:
        return updated

    with st.expander(f"Completed debts ({len(state.completed_debts)})", expanded=False):
        done = [{"name": d.name, "source": d.source, "total": d.total_amount, "due": format_date(d.due_date)}
                for d in state.completed_debts]
        st.dataframe(pd.DataFrame(done), use_container_width=True, hide_index=True)
    with st.expander("Payment history", expanded=False):
        rows = [{"date": format_datetime(t.date), "debt": d.name, "type": t.type, "amount": t.amount, "reason": t.reason or ""}
                for d, t in debt_history(state.debts)]
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
    return None
