import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import io
from datetime import date, timedelta

import pandas as pd
import streamlit as st

from datesheet.eligible_days import expand_holidays
from datesheet.errors import SchedulingError
from datesheet.io_utils import (
    ledger_to_frame, load_demand, load_holidays, load_ledger, write_ledger_csv
)
from datesheet.models import SchedulerConfig
from datesheet.scheduling.assign_dates import regenerate
from datesheet.scheduling.evaluation import summary
from datesheet.scheduling.ledger import Ledger
from datesheet.scheduling.reschedule import move
from datesheet.scheduling.validation import find_violations
from datesheet.semesters import semester_label

# ---------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------
st.set_page_config(page_title="Datesheet – Exam Dates", layout="wide")
st.title("Datesheet – Semester-aware Exam Date Scheduler")

# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------
def _bytes_of(upload):
    if upload is None:
        return None
    return upload.getvalue()

@st.cache_data
def load_demand_cached(demand_bytes: bytes, default_gap: int):
    return load_demand(io.BytesIO(demand_bytes), default_gap=default_gap)

@st.cache_data
def load_holidays_cached(holiday_bytes: bytes):
    if holiday_bytes is None:
        return []
    return load_holidays(io.BytesIO(holiday_bytes))

def ledger_csv_text(ledger) -> str:
    buf = io.StringIO()
    write_ledger_csv(buf, ledger)
    return buf.getvalue()

# The ledger is owned by this session; every move goes through move().
if "ledger" not in st.session_state:
    st.session_state.ledger = None
    st.session_state.result = None
    st.session_state.holidays = set()
    st.session_state.last_message = None

# ---------------------------------------------------------------------
# Form Inputs
# ---------------------------------------------------------------------
st.subheader("Inputs")
with st.form("controls"):
    c1, c2 = st.columns(2)
    demand_file = c1.file_uploader("Demand CSV (course_id,semester,gap_days,program_type)", type=["csv"])
    holidays_file = c2.file_uploader("(Optional) Holidays CSV (date,name,recurring)", type=["csv"])

    c3, c4, c5 = st.columns(3)
    start = c3.date_input("Start date", date.today())
    end = c4.date_input("End date", date.today() + timedelta(days=21))
    capacity = c5.number_input("Max exams per day", 1, 20, 4)
    default_gap = st.number_input("Gap days when the CSV leaves gap_days empty", 0, 30, 2)
    merge_similar = st.checkbox("Merge BTCS-/BT- course codes", value=False)

    submitted = st.form_submit_button("Generate Schedule")

config = SchedulerConfig(capacity=int(capacity), default_gap_days=int(default_gap))

with st.expander("Or load a saved ledger"):
    ledger_file = st.file_uploader("Ledger CSV", type=["csv"], key="ledger_upload")
    if ledger_file is not None and st.button("Load ledger"):
        st.session_state.ledger = load_ledger(io.BytesIO(_bytes_of(ledger_file)), config)
        st.session_state.result = None
        st.session_state.last_message = f"Loaded {len(st.session_state.ledger)} exams"

# ---------------------------------------------------------------------
# Run on Submit
# ---------------------------------------------------------------------
if submitted:
    if demand_file is None:
        st.error("Please upload a demand CSV.")
        st.stop()
    if st.session_state.ledger is None:
        st.session_state.ledger = Ledger()
    try:
        demand = load_demand_cached(_bytes_of(demand_file), config.default_gap_days)
        holidays = expand_holidays(load_holidays_cached(_bytes_of(holidays_file)), start, end)
        # replaces the session ledger wholesale; left untouched if this raises
        result = regenerate(st.session_state.ledger, demand, start, end, holidays, config,
                            merge_similar=merge_similar)
    except (SchedulingError, ValueError, KeyError) as e:
        st.error(str(e))
        st.stop()
    st.session_state.result = result
    st.session_state.holidays = holidays
    st.session_state.last_message = None

ledger = st.session_state.ledger
if ledger is None:
    st.info("Upload demand data and generate a schedule to begin.")
    st.stop()

# ---------------------------------------------------------------------
# UI Output
# ---------------------------------------------------------------------
if st.session_state.result is not None:
    st.subheader("Summary")
    st.text(summary(ledger, st.session_state.result, st.session_state.holidays, config))

st.subheader("Schedule")
df = ledger_to_frame(ledger)
if not df.empty:
    df.insert(2, "semester_label", df["semester"].map(semester_label))
st.dataframe(df)

violations = find_violations(ledger, config.capacity, st.session_state.holidays)
if violations:
    st.warning(f"{len(violations)} rule violation(s) present (override moves)")
    st.dataframe(pd.DataFrame([v.__dict__ for v in violations]))

# ---------------------------------------------------------------------
# Manual move
# ---------------------------------------------------------------------
st.subheader("Reschedule an exam")
if len(ledger):
    with st.form("move"):
        ids = [p.id for p in ledger]
        pid = st.selectbox("Exam", ids, format_func=lambda i: f"{i} ({ledger.get(i).date})")
        target = st.date_input("New date", ledger.get(ids[0]).date)
        override = st.checkbox("Override rules", value=False)
        do_move = st.form_submit_button("Move")
    if do_move:
        outcome = move(ledger, pid, target, override_rules=override, config=config)
        if outcome.accepted:
            st.session_state.last_message = outcome.message
            st.rerun()
        else:
            st.error(outcome.message)

if st.session_state.last_message:
    st.caption(st.session_state.last_message)

st.download_button("Download ledger.csv", ledger_csv_text(ledger), file_name="ledger.csv", mime="text/csv")
