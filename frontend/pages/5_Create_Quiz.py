"""
5_Create_Quiz.py — author a quiz and its questions.

Questions are edited locally (add, remove, move up/down) and sent together
with the quiz details in one request. New quizzes start unpublished.
"""
import uuid

import streamlit as st

from components import api_client
from components.api_client import APIError
from components.session import call_api, require_admin, sidebar

st.set_page_config(page_title="Create Quiz", page_icon="➕", layout="wide")

OPTION_KEYS = ["A", "B", "C", "D"]

user = require_admin()
sidebar(user)


def _blank_question() -> dict:
    return {
        "temp_id": uuid.uuid4().hex,
        "question_text": "",
        "option_a": "",
        "option_b": "",
        "option_c": "",
        "option_d": "",
        "correct_option": "A",
        "marks": 1,
        "explanation": "",
    }


def _move(index: int, offset: int) -> None:
    items = st.session_state["draft_questions"]
    target = index + offset
    if 0 <= target < len(items):
        items[index], items[target] = items[target], items[index]


def _validate(details: dict, items: list) -> str | None:
    if not details["title"].strip():
        return "Quiz title is required"
    if not items:
        return "At least one question is required"
    for i, q in enumerate(items, start=1):
        if not q["question_text"].strip():
            return f"Question {i}: all questions must have text"
        if any(not q[f"option_{k.lower()}"].strip() for k in OPTION_KEYS):
            return f"Question {i}: all options must be filled"
    return None


st.session_state.setdefault("draft_questions", [])
questions = st.session_state["draft_questions"]

st.title("➕ Create Quiz")

# ── Quiz details ───────────────────────────────────────────────────────────
st.subheader("Quiz Details")
title = st.text_input("Quiz Title")
description = st.text_area("Description")
c1, c2, c3 = st.columns(3)
subject = c1.text_input("Subject", placeholder="General")
time_limit = c2.number_input("Time limit (minutes)", min_value=1, value=60, step=1)
auto_marks = c3.checkbox("Total marks = sum of question marks", value=True)
total_marks = None
if not auto_marks:
    total_marks = c3.number_input("Total marks", min_value=1, value=100, step=1)

# ── Questions ──────────────────────────────────────────────────────────────
st.subheader(f"Questions ({len(questions)})")

for i, q in enumerate(questions):
    tid = q["temp_id"]
    with st.expander(f"Question {i + 1}: {q['question_text'][:60] or '(empty)'}", expanded=True):
        q["question_text"] = st.text_area("Question", q["question_text"], key=f"text-{tid}")
        oc1, oc2 = st.columns(2)
        for col, key in zip([oc1, oc2, oc1, oc2], OPTION_KEYS):
            field = f"option_{key.lower()}"
            q[field] = col.text_input(f"Option {key}", q[field], key=f"{field}-{tid}")
        mc1, mc2 = st.columns(2)
        q["correct_option"] = mc1.selectbox(
            "Correct option", OPTION_KEYS,
            index=OPTION_KEYS.index(q["correct_option"]), key=f"correct-{tid}",
        )
        q["marks"] = int(mc2.number_input("Marks", min_value=1, value=int(q["marks"]), key=f"marks-{tid}"))
        q["explanation"] = st.text_input("Explanation (shown after submission)", q["explanation"], key=f"expl-{tid}")

        b1, b2, b3, _ = st.columns([1, 1, 1, 5])
        if b1.button("↑", key=f"up-{tid}", disabled=i == 0):
            _move(i, -1)
            st.rerun()
        if b2.button("↓", key=f"down-{tid}", disabled=i == len(questions) - 1):
            _move(i, 1)
            st.rerun()
        if b3.button("🗑️", key=f"rm-{tid}"):
            questions.pop(i)
            st.rerun()

if st.button("Add question"):
    questions.append(_blank_question())
    st.rerun()

st.divider()

# ── Save ───────────────────────────────────────────────────────────────────
if st.button("Create quiz", type="primary"):
    details = {
        "title": title,
        "description": description,
        "subject": subject.strip() or "General",
        "time_limit": int(time_limit),
    }
    if total_marks is not None:
        details["total_marks"] = int(total_marks)

    problem = _validate(details, questions)
    if problem:
        st.error(problem)
    else:
        payload = {
            **details,
            "questions": [{k: v for k, v in q.items() if k != "temp_id"} for q in questions],
        }
        try:
            created = call_api(api_client.create_quiz, payload)
            st.session_state.pop("draft_questions", None)
            st.success(f"Quiz '{created['title']}' created. Publish it from the dashboard.")
            st.page_link("pages/4_Admin_Dashboard.py", label="Go to Admin Dashboard")
        except APIError as e:
            st.error(str(e))
