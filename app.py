# app.py
# Budget & Debt Planner: local JSON persistence, weekly view by default

import logging
from datetime import datetime

import streamlit as st

from data import load_state, save_state
from helpers import default_filter, weeks_in_year, format_date
from models import FilterState
from state import refresh_holidays
from summary import build_summary
from ui import (
    summary_section,
    fixed_costs_section,
    logs_section,
    debts_section,
    holidays_section,
    backup_section,
    trends_section,
)

logging.basicConfig(level=logging.INFO)

st.set_page_config(page_title="Budget & Debt Planner", layout="wide")
st.title("💰 Budget & Debt Planner")

now = datetime.now()

# Sidebar: reporting period
st.sidebar.header("⚙️ Reporting period")
current = default_filter(now)
period = st.sidebar.radio("Show", ["Week", "Month", "Year", "All time"], index=0)
if period == "All time":
    flt = FilterState(type="all", year=current.year)
else:
    year = int(st.sidebar.number_input("Year", min_value=2000, max_value=2100, value=current.year))
    if period == "Week":
        weeks = weeks_in_year(year)
        labels = {w: f"Week {w} ({format_date(s)} - {format_date(e)})" for w, s, e in weeks}
        default = current.week - 1 if year == current.year else 0
        week = st.sidebar.selectbox("Week", options=list(labels), index=default, format_func=labels.get)
        flt = FilterState(type="week", year=year, week=week)
    elif period == "Month":
        month = st.sidebar.selectbox("Month", options=list(range(1, 13)), index=now.month - 1)
        flt = FilterState(type="month", year=year, month=month)
    else:
        flt = FilterState(type="year", year=year)

# Load all local state; the holiday schedule is regenerated on every run
state = refresh_holidays(load_state(), now)

def _commit(updated):
    save_state(updated)
    st.rerun()

st.markdown("## 📊 Overview")
updated = summary_section(state, flt, now)
if updated is not None:
    _commit(updated)

st.markdown("---")
st.markdown("## 🧾 Fixed costs")
updated = fixed_costs_section(state, flt, now)
if updated is not None:
    _commit(updated)

st.markdown("---")
st.markdown("## ✍️ Income & spending")
updated = logs_section(state, flt, now)
if updated is not None:
    _commit(updated)

st.markdown("---")
st.markdown("## 🏦 Debts")
updated = debts_section(state, build_summary(state, flt, now).disposable_income, now)
if updated is not None:
    _commit(updated)

st.markdown("---")
st.markdown("## ✈️ Holiday planner")
updated = holidays_section(state, now)
if updated is not None:
    _commit(updated)

st.markdown("---")
st.markdown("## 📈 Monthly trends")
trends_section(state)

st.markdown("---")
st.markdown("## 💾 Backup")
updated = backup_section(state, now)
if updated is not None:
    _commit(updated)

st.caption("Data is stored locally under ./data/spending_app_data_v1.json.")
