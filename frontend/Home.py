"""
Home.py — Entry point of the QuizPro Streamlit app.
Checks for a valid JWT; redirects to login if missing.
Shows the published quizzes when authenticated.
"""
import streamlit as st

from components import api_client
from components.api_client import APIError
from components.formatting import quiz_card_html
from components.session import call_api, require_auth, sidebar

st.set_page_config(
    page_title="QuizPro",
    page_icon="📝",
    layout="wide",
)

st.markdown(
    """
    <style>
    .dash-card {
        border: 1px solid #d4d4d8;
        border-radius: 12px;
        padding: 1.2rem 1.4rem;
        margin-bottom: 0.6rem;
    }
    .dash-card h3 { margin-bottom: 0.3rem; }
    .dash-card p  { color: #52525b; margin: 0; font-size: 0.9rem; }
    .badge {
        display: inline-block;
        background: #e0e7ff;
        color: #3730a3;
        border-radius: 6px;
        padding: 0.1rem 0.5rem;
        font-size: 0.75rem;
        font-weight: 600;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# ── Auth guard ─────────────────────────────────────────────────────────────────
user = require_auth()
sidebar(user)

# ── Dashboard header ──────────────────────────────────────────────────────────
st.markdown(f"## 👋 Welcome back, **{user['name']}**")
col_hist, col_admin = st.columns([1, 5])
with col_hist:
    st.page_link("pages/3_Quiz_History.py", label="📜 My history")
if user.get("role") == "admin":
    with col_admin:
        st.page_link("pages/4_Admin_Dashboard.py", label="🛠️ Admin dashboard")
st.divider()

# ── Quiz cards ────────────────────────────────────────────────────────────────
try:
    quizzes = call_api(api_client.list_quizzes)
except APIError as e:
    st.error(f"Failed to load quizzes: {e}")
    st.stop()

if not quizzes:
    st.info("No quizzes are available right now. Check back later.")
    st.stop()

columns = st.columns(3)
for i, quiz in enumerate(quizzes):
    with columns[i % 3]:
        st.markdown(quiz_card_html(quiz), unsafe_allow_html=True)
        if st.button("Start quiz →", key=f"start-{quiz['id']}"):
            st.session_state.pop("attempt", None)
            st.session_state["quiz_id"] = quiz["id"]
            st.switch_page("pages/1_Take_Quiz.py")
