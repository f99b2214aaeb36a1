"""6_Quiz_Results.py — every completed attempt of one quiz (admins)."""
import streamlit as st

from components import api_client
from components.api_client import APIError
from components.formatting import format_date
from components.session import call_api, require_admin, sidebar

st.set_page_config(page_title="Quiz Results", page_icon="📊", layout="wide")

user = require_admin()
sidebar(user)

quiz_id = st.session_state.get("results_quiz_id")
if not quiz_id:
    st.info("Choose a quiz on the admin dashboard.")
    st.page_link("pages/4_Admin_Dashboard.py", label="Back to Admin Dashboard")
    st.stop()

try:
    data = call_api(api_client.quiz_results, quiz_id)
except APIError as e:
    st.error(f"Failed to load results: {e}")
    st.stop()

quiz = data["quiz"]
summary = data["summary"]
results = data["results"]

st.title(f"📊 {quiz['title']}")
st.caption(f"{quiz['subject']} · {quiz['total_marks']} marks · {quiz['time_limit']} min")

c1, c2, c3, c4, c5 = st.columns(5)
c1.metric("Attempts", summary["attempts"])
c2.metric("Average", f"{summary['average']:.1f}%")
c3.metric("Highest", f"{summary['highest']:.1f}%")
c4.metric("Lowest", f"{summary['lowest']:.1f}%")
c5.metric("Passed", summary["passed"])
st.divider()

if not results:
    st.info("No completed attempts yet.")
    st.stop()

for row in results:
    cols = st.columns([3, 2, 1, 2, 1, 1])
    cols[0].markdown(f"**{row['student_name']}**  \n{row['student_email']}")
    cols[1].write(f"{row['score']} / {row['total_marks']} ({row['percentage']:.1f}%)")
    cols[2].write(row["grade"])
    cols[3].write(format_date(row["completed_at"]))
    cols[4].write(row["time_taken_display"])
    if cols[5].button("View", key=f"view-{row['id']}"):
        st.session_state["review_attempt_id"] = row["id"]
        st.switch_page("pages/2_Results.py")

st.page_link("pages/4_Admin_Dashboard.py", label="Back to Admin Dashboard")
