# dashboard.py
import streamlit as st

import calendar_utils
from app_state import load_state
from calendar_utils import format_date, period_bounds
from config import load_settings, open_store
from insights import ai_evaluation
from reports import report_for, year_end_report

st.set_page_config(page_title="Habit Reports", layout="centered")
st.title("Habit Reports")

settings = load_settings()
store = open_store(settings)

# -- read on every rerun, nothing cached
state = load_state(store)
now = calendar_utils.now()

st.caption(f"Storage: {settings['STORAGE_BACKEND']}")

if not state.habits:
    st.info("No habits yet. Add one from the Today page.")
else:
    # -- weekly
    start, end = period_bounds("week", now)
    st.subheader(f"Weekly Report ({format_date(start)} to {format_date(end)})")
    for stat in report_for("week", state.habits, state.habit_entries, now):
        col1, col2, col3 = st.columns(3)
        col1.metric(f"{stat.name} total", f"{stat.total_minutes} min")
        col2.metric("Days tracked", stat.days_tracked)
        col3.metric("Daily average", f"{stat.avg_minutes} min")

    # -- monthly chart
    st.subheader("Monthly Report")
    month_rows = [s.to_dict() for s in report_for("month", state.habits, state.habit_entries, now)]
    st.bar_chart(month_rows, x="name", y=["totalMinutes", "daysTracked"])

    # -- year end
    st.subheader("Year End Report")
    st.table([
        {
            "Habit": row["name"],
            "Total Time": f"{row['totalHours']}h",
            "Days Tracked": row["daysTracked"],
            "Consistency": f"{row['consistency']}%",
        }
        for row in year_end_report(state.habits, state.habit_entries, now)
    ])

# premium view
if state.is_premium:
    st.subheader("AI Insights")
    for insight in ai_evaluation(state, now):
        st.write(insight)
else:
    st.caption("Turn on Premium to see AI insights.")

if st.button("🔄 Refresh"):
    st.rerun()
