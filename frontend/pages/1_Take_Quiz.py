"""
1_Take_Quiz.py — one question at a time against a countdown.

Every selection is saved to the server as a draft answer, so a reload
resumes the same attempt with its answers and remaining time. When the
countdown reaches zero the attempt is submitted automatically.
"""
import streamlit as st

from components import api_client
from components.api_client import APIError
from components.countdown import Countdown
from components.formatting import format_clock
from components.session import call_api, require_auth

st.set_page_config(page_title="Take Quiz", page_icon="📝", layout="wide")

OPTION_KEYS = ["A", "B", "C", "D"]

# ── Auth guard ─────────────────────────────────────────────────────────────
require_auth()

quiz_id = st.session_state.get("quiz_id")
if not quiz_id:
    st.info("Pick a quiz from the dashboard first.")
    st.page_link("Home.py", label="Back to Dashboard")
    st.stop()


# ── Attempt state ──────────────────────────────────────────────────────────
def _load_attempt() -> dict:
    data = call_api(api_client.start_attempt, quiz_id)
    state = {
        "quiz": data["quiz"],
        "attempt": data["attempt"],
        "questions": data["questions"],
        "answers": dict(data["attempt"].get("answers") or {}),
        "index": 0,
        "expired": False,
    }

    def _time_up():
        state["expired"] = True

    state["countdown"] = Countdown(data["attempt"]["remaining_seconds"], on_complete=_time_up)
    state["countdown"].start()
    if state["countdown"].is_expired:
        state["expired"] = True
    return state


state = st.session_state.get("attempt")
if state is None or state["quiz"]["id"] != quiz_id:
    try:
        state = _load_attempt()
    except APIError as e:
        st.error(f"Failed to load quiz: {e}")
        st.page_link("Home.py", label="Back to Dashboard")
        st.stop()
    st.session_state["attempt"] = state

quiz = state["quiz"]
questions = state["questions"]
attempt_id = state["attempt"]["id"]
countdown: Countdown = state["countdown"]


def _submit():
    try:
        call_api(api_client.submit_attempt, attempt_id, state["answers"])
    except APIError as e:
        st.error(f"Failed to submit quiz: {e}")
        return
    st.session_state.pop("attempt", None)
    st.session_state["review_attempt_id"] = attempt_id
    st.switch_page("pages/2_Results.py")


# ── Header + timer ─────────────────────────────────────────────────────────
head_left, head_right = st.columns([4, 1])
with head_left:
    st.title(quiz["title"])
    st.caption(f"Question {state['index'] + 1} of {len(questions)}")


@st.fragment(run_every=1)
def _timer_badge():
    left = countdown.tick()
    st.metric("Time left", format_clock(left))
    if countdown.is_expired:
        st.rerun()


with head_right:
    _timer_badge()

if state["expired"]:
    st.warning("⏰ Time's up! Your answers are being submitted now.")
    _submit()
    st.stop()

st.progress((state["index"] + 1) / len(questions))

# ── Current question ───────────────────────────────────────────────────────
question = questions[state["index"]]
saved = state["answers"].get(question["id"])

st.subheader(question["question_text"])
st.caption(f"{question['marks']} mark(s)")
choice = st.radio(
    "Choose one answer",
    OPTION_KEYS,
    index=OPTION_KEYS.index(saved) if saved in OPTION_KEYS else None,
    format_func=lambda k: f"{k}. {question['option_' + k.lower()]}",
    key=f"choice-{question['id']}",
)

if choice and choice != saved:
    try:
        call_api(api_client.save_answer, attempt_id, question["id"], choice)
        state["answers"][question["id"]] = choice
    except APIError as e:
        st.error(str(e))

# ── Navigation ─────────────────────────────────────────────────────────────
col_prev, _, col_next = st.columns([1, 3, 1])
with col_prev:
    if st.button("← Previous", disabled=state["index"] == 0):
        state["index"] -= 1
        st.rerun()
with col_next:
    if state["index"] < len(questions) - 1:
        if st.button("Next →"):
            state["index"] += 1
            st.rerun()
    else:
        unanswered = len(questions) - len(state["answers"])
        if unanswered:
            st.caption(f"{unanswered} unanswered")
        if st.button("Submit Quiz", type="primary"):
            _submit()
