"""
session.py — auth state kept in st.session_state.

Keys: access_token, refresh_token, user. Pages call require_auth() /
require_admin() at the top and call_api() for requests that should survive
an expired access token.
"""
import streamlit as st

from components import api_client
from components.api_client import APIError

_SESSION_KEYS = ["access_token", "refresh_token", "user", "attempt"]


def store_login(data: dict) -> None:
    st.session_state["access_token"] = data["access_token"]
    st.session_state["refresh_token"] = data["refresh_token"]
    st.session_state["user"] = data["user"]


def sign_out() -> None:
    token = st.session_state.get("access_token")
    try:
        if token:
            api_client.logout(token)
    except APIError as e:
        if e.status_code != 401:
            raise
    finally:
        for k in _SESSION_KEYS:
            st.session_state.pop(k, None)


def require_auth() -> dict:
    if not st.session_state.get("access_token"):
        st.warning("Please sign in first.")
        st.page_link("pages/0_Login.py", label="👉 Go to Login")
        st.stop()
    return st.session_state["user"]


def require_admin() -> dict:
    user = require_auth()
    if user.get("role") != "admin":
        st.error("This page is only available to administrators.")
        st.page_link("Home.py", label="Back to Dashboard")
        st.stop()
    return user


def call_api(fn, *args, **kwargs):
    """
    Call an api_client function with the current access token, refreshing it
    once on 401. A failed refresh signs the user out.
    """
    try:
        return fn(st.session_state["access_token"], *args, **kwargs)
    except APIError as e:
        if e.status_code != 401 or not st.session_state.get("refresh_token"):
            raise
    try:
        st.session_state["access_token"] = api_client.refresh_token(
            st.session_state["refresh_token"]
        )
    except APIError:
        for k in _SESSION_KEYS:
            st.session_state.pop(k, None)
        st.warning("Your session has expired. Please sign in again.")
        st.page_link("pages/0_Login.py", label="👉 Go to Login")
        st.stop()
    return fn(st.session_state["access_token"], *args, **kwargs)


def sidebar(user: dict) -> None:
    with st.sidebar:
        st.markdown(f"**{user.get('name') or user['email']}**")
        st.caption(f"{user['email']} · {user.get('role', 'student')}")
        st.divider()
        if st.button("Sign Out", key="sidebar-logout"):
            sign_out()
            st.rerun()
