# app.py
# -----------------------------------------------
# 💵 Tip Ledger (Streamlit)
# -----------------------------------------------
# Requires: streamlit, sqlmodel, pandas, reportlab, psycopg2-binary (if using Postgres)
# Log a shift, then review any month: summary, per-shift table and PDF.

import os
from datetime import date

import streamlit as st

from config import WAGE_RATES, database_url, log_level
from domain import LedgerError, Role, ShiftRecordInput, YearMonth
from logging_utils import configure_root_logger
from repository import ShiftLedgerRepository
from reports import monthly_report_pdf
from services import EarningsAggregator
from utils import display_rows_to_dataframe, format_average, usd

TITLE_APP = "Tip Ledger"
st.set_page_config(page_title=TITLE_APP, page_icon="💵", layout="centered")

configure_root_logger(log_level())

DB_URL = database_url()

# Require Postgres when hosted (Render / HF Spaces / Streamlit Cloud)
if ("RENDER" in os.environ or "SPACE_ID" in os.environ or os.getenv("STREAMLIT_RUNTIME") == "cloud"):
    if DB_URL.startswith("sqlite"):
        st.error("DATABASE_URL (Postgres) is missing. Set the environment variable on the host.")

@st.cache_resource
def get_repo(url: str) -> ShiftLedgerRepository:
    repo = ShiftLedgerRepository(url, echo=False)
    repo.initialize()
    return repo

try:
    repo = get_repo(DB_URL)
except LedgerError as e:
    st.error(f"Could not open the ledger database: {e}")
    st.stop()

aggregator = EarningsAggregator(repo)

st.title(f"💵 {TITLE_APP}")
st.caption("Log each shift with its tips; the wage rate is fixed by role at the moment you save.")

def _flash_success_if_any():
    msg = st.session_state.pop("_flash_success", None)
    if msg:
        st.success(msg)

# =========================
# ➕ Log a shift
# =========================
st.subheader("➕ Log a shift")
_flash_success_if_any()

with st.form("log_shift", clear_on_submit=True):
    role = st.radio(
        "Role", options=list(Role), horizontal=True,
        format_func=lambda r: f"{r.value.title()} ({usd(WAGE_RATES[r])}/h)",
    )
    shift_date = st.date_input("Date", value=date.today(), max_value=date.today())
    tips = st.number_input("Tips ($)", min_value=0.0, step=1.0, format="%.2f")
    hours = st.number_input("Hours worked", min_value=0.0, step=0.25, format="%.2f")
    submitted = st.form_submit_button("Save shift", use_container_width=True)

if submitted:
    if hours <= 0:
        st.warning("Hours worked must be greater than zero.")
    else:
        entry = ShiftRecordInput.for_role(shift_date, role, hours, tips, rates=WAGE_RATES)
        try:
            new_id = repo.insert(entry)
        except LedgerError as e:
            st.error(f"Failed to save shift: {e}")
        else:
            row = aggregator.describe_shift(entry.to_record(new_id))
            st.session_state["_flash_success"] = (
                f"Saved {row.date.isoformat()} · {row.role.value} · Total {usd(row.total_earnings)}"
                f" · {usd(row.earnings_per_hour)}/h"
            )
            st.rerun()

# =========================
# 🗓️ Month
# =========================
st.subheader("🗓️ Month")
current = YearMonth.of(date.today())
try:
    months = repo.months_with_shifts()
except LedgerError as e:
    st.error(f"Failed to list months: {e}")
    st.stop()
if current not in months:
    months.insert(0, current)
ym = st.selectbox("Month", options=months, format_func=str, label_visibility="collapsed")

try:
    ms = aggregator.summarize_month(ym)
    df = display_rows_to_dataframe(aggregator.list_month(ym))
except LedgerError as e:
    st.error(f"Failed to load {ym}: {e}")
    st.stop()

c1, c2, c3 = st.columns(3)
c1.metric("Shifts", ms.shift_count)
c2.metric("Hours", f"{ms.total_hours:.2f}")
c3.metric("Avg $/h", format_average(ms.average_earnings_per_hour))
c4, c5, c6 = st.columns(3)
c4.metric("Tips", usd(ms.total_tips))
c5.metric("Wages", usd(ms.total_wage_earnings))
c6.metric("Total", usd(ms.total_earnings))

if df.empty:
    st.info("No shifts logged for this month.")
else:
    st.dataframe(
        df,
        use_container_width=True,
        hide_index=True,
        column_config={
            "Hours": st.column_config.NumberColumn(format="%.2f"),
            "Tips": st.column_config.NumberColumn(format="$%.2f"),
            "Wage Rate": st.column_config.NumberColumn(format="$%.2f"),
            "Wage Earnings": st.column_config.NumberColumn(format="$%.2f"),
            "Total": st.column_config.NumberColumn(format="$%.2f"),
            "$/hr": st.column_config.NumberColumn(format="$%.2f"),
        },
    )

# =========================
# ⬇️ PDF of the month shown
# =========================
pdf_bytes = monthly_report_pdf(df, ms)
st.download_button(
    "Download PDF for this month",
    data=pdf_bytes,
    file_name=f"tips_{ym}.pdf",
    mime="application/pdf",
    use_container_width=True,
)
