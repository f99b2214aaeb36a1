"""3_Quiz_History.py — the signed-in student's completed attempts."""
import streamlit as st

from components import api_client
from components.api_client import APIError
from components.formatting import format_date, history_metrics
from components.session import call_api, require_auth, sidebar

st.set_page_config(page_title="Quiz History", page_icon="📜", layout="wide")

user = require_auth()
sidebar(user)

st.title("📜 Quiz History")

try:
    attempts = call_api(api_client.get_history)
except APIError as e:
    st.error(f"Failed to load quiz history: {e}")
    st.stop()

if not attempts:
    st.info("You have not completed any quizzes yet.")
    st.page_link("Home.py", label="Browse quizzes")
    st.stop()

metrics = history_metrics(attempts)
c1, c2, c3 = st.columns(3)
c1.metric("Quizzes taken", metrics["taken"])
c2.metric("Average score", f"{metrics['average']:.1f}%")
c3.metric("Best score", f"{metrics['best']:.1f}%")
st.divider()

for attempt in attempts:
    cols = st.columns([4, 2, 1, 2, 2, 1])
    cols[0].markdown(f"**{attempt['quiz_title']}**  \n{attempt.get('subject') or ''}")
    cols[1].write(f"{attempt['score']} / {attempt['total_marks']} ({attempt['percentage']:.1f}%)")
    cols[2].write(attempt["grade"])
    cols[3].write(format_date(attempt["completed_at"]))
    cols[4].write(attempt["time_taken_display"])
    if cols[5].button("View", key=f"view-{attempt['id']}"):
        st.session_state["review_attempt_id"] = attempt["id"]
        st.switch_page("pages/2_Results.py")
