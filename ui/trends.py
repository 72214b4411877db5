import streamlit as st
import pandas as pd

from helpers import monthly_totals
from models import AppState

def trends_section(state: AppState) -> None:
    payments = [t for d in state.debts for t in d.transactions if t.type == "payment"]
    g = monthly_totals({
        "Income": state.income_logs,
        "Food": state.food_logs,
        "Misc": state.misc_logs,
        "Debt paid": payments,
    })
    if g is None or g.empty:
        st.info("No records to show trends yet.")
        return

    window = st.radio("Window", ["Last 6 months", "Last 12 months", "All Time"], horizontal=True, index=1)
    n_months = 12 if window != "Last 6 months" else 6
    if window != "All Time" and g.shape[0] > n_months:
        g = g.iloc[-n_months:, :]

    st.line_chart(g)

    spend = g[["Food", "Misc", "Debt paid"]].sum(axis=1)
    mom = spend.pct_change().replace([float("inf"), float("-inf")], pd.NA) * 100.0
    combined = g.copy()
    combined["Spending MoM %"] = mom

    fmt = {c: "{:,.0f}đ" for c in g.columns}
    fmt["Spending MoM %"] = "{:.1f}%"
    st.subheader("Monthly totals and month-over-month change in spending")
    st.dataframe(combined.style.format(fmt, na_rep="-"), use_container_width=True)
