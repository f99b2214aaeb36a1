"""
0_Login.py — Login & Register page.
This is page 0 in the Streamlit sidebar so it always appears first.
"""
import re

import streamlit as st
from components.api_client import login, register, APIError
from components.session import store_login

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

# ── Page config ───────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="QuizPro — Login",
    page_icon="📝",
    layout="centered",
)

# ── Redirect if already logged in ────────────────────────────────────────────
if st.session_state.get("access_token"):
    st.success("You are already logged in.")
    st.page_link("Home.py", label="Go to Dashboard →")
    st.stop()

st.title("📝 QuizPro")
st.caption("Timed multiple-choice assessments")

tab_login, tab_register = st.tabs(["Sign In", "Create Account"])

# ── LOGIN ─────────────────────────────────────────────────────────────────────
with tab_login:
    with st.form("login_form"):
        email = st.text_input("Email", placeholder="you@example.com")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign In")

    if submitted:
        if not email or not password:
            st.error("Please fill in both fields.")
        else:
            try:
                data = login(email.strip().lower(), password)
                store_login(data)
                st.success(f"Welcome back, {data['user']['name']}!")
                st.rerun()
            except APIError as e:
                st.error(str(e))

# ── REGISTER ──────────────────────────────────────────────────────────────────
with tab_register:
    with st.form("register_form"):
        r_name = st.text_input("Full name", key="r_name")
        r_email = st.text_input("Email", placeholder="you@example.com", key="r_email")
        r_password = st.text_input("Password (min 6 chars)", type="password", key="r_pass")
        r_confirm = st.text_input("Confirm Password", type="password", key="r_confirm")
        r_submitted = st.form_submit_button("Create Account")

    if r_submitted:
        if not r_name.strip():
            st.error("Name is required.")
        elif not r_email or not EMAIL_RE.fullmatch(r_email.strip()):
            st.error("Please enter a valid email address.")
        elif len(r_password) < 6:
            st.error("Password must be at least 6 characters.")
        elif r_password != r_confirm:
            st.error("Passwords do not match.")
        else:
            try:
                data = register(r_name.strip(), r_email.strip().lower(), r_password)
                store_login(data)
                st.success("Account created! Redirecting…")
                st.rerun()
            except APIError as e:
                st.error(str(e))
