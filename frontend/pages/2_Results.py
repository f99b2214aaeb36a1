"""2_Results.py — score summary and per-question review of one attempt."""
import streamlit as st

from components import api_client
from components.api_client import APIError
from components.formatting import GRADE_COLOURS, format_date
from components.session import call_api, require_auth

st.set_page_config(page_title="Results", page_icon="🏁", layout="wide")

require_auth()

attempt_id = st.session_state.get("review_attempt_id")
if not attempt_id:
    st.info("No attempt selected.")
    st.page_link("pages/3_Quiz_History.py", label="Open my history")
    st.stop()

try:
    data = call_api(api_client.get_review, attempt_id)
except APIError as e:
    st.error(f"Failed to load results: {e}")
    st.stop()

attempt = data["attempt"]
quiz = data["quiz"]
grade = data["grade"]

# ── Summary ───────────────────────────────────────────────────────────────
st.title(f"🏁 {quiz['title']}")
st.markdown(
    f"<h2 style='color:{GRADE_COLOURS.get(grade, '#000')}'>Grade {grade} · "
    f"{attempt['percentage']:.2f}%</h2>",
    unsafe_allow_html=True,
)

c1, c2, c3, c4 = st.columns(4)
c1.metric("Score", f"{attempt['score']} / {attempt['total_marks']}")
c2.metric("Correct", data["correct_count"])
c3.metric("Wrong", data["wrong_count"])
c4.metric("Unanswered", data["unanswered_count"])
st.caption(
    f"Completed {format_date(attempt['completed_at'])} · "
    f"time taken {attempt['time_taken_display']}"
)

print_mode = st.toggle("Printable view", value=False)
st.divider()

# ── Per-question review ───────────────────────────────────────────────────
for item in data["items"]:
    selected = item["selected_option"]
    if selected is None:
        icon = "⚪"
    elif item["is_correct"]:
        icon = "✅"
    else:
        icon = "❌"

    with st.container(border=not print_mode):
        st.markdown(f"**{icon} Q{item['question_order']}. {item['question_text']}**")
        for key, text in item["options"].items():
            marker = ""
            if key == item["correct_option"]:
                marker = " ← correct"
            if key == selected and not item["is_correct"]:
                marker = " ← your answer"
            st.markdown(f"- {key}. {text}{marker}")
        st.caption(f"{item['marks_obtained']} / {item['marks']} mark(s)")
        if item["explanation"]:
            st.info(item["explanation"])

if not print_mode:
    st.page_link("Home.py", label="Back to Dashboard")
