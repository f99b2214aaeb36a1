"""4_Admin_Dashboard.py — counters and quiz management for admins."""
import streamlit as st

from components import api_client
from components.api_client import APIError
from components.formatting import format_date
from components.session import call_api, require_admin, sidebar

st.set_page_config(page_title="QuizPro Admin", page_icon="🛠️", layout="wide")

user = require_admin()
sidebar(user)

st.title("🛠️ QuizPro Admin")

try:
    stats = call_api(api_client.admin_stats)
    mine_only = st.toggle("Only quizzes I created", value=False)
    quizzes = call_api(api_client.admin_quizzes, mine=mine_only)
except APIError as e:
    st.error(f"Failed to load dashboard: {e}")
    st.stop()

c1, c2, c3, c4 = st.columns(4)
c1.metric("Quizzes", stats["total_quizzes"])
c2.metric("Published", stats["published_quizzes"])
c3.metric("Students", stats["total_students"])
c4.metric("Completed attempts", stats["total_attempts"])

st.page_link("pages/5_Create_Quiz.py", label="➕ Create quiz")
st.divider()

if not quizzes:
    st.info("No quizzes yet.")
    st.stop()

for quiz in quizzes:
    cols = st.columns([4, 1, 1, 2, 1, 1, 1])
    cols[0].markdown(f"**{quiz['title']}**  \n{quiz['subject']} · {quiz['question_count']} questions")
    cols[1].write(f"{quiz['total_marks']} marks")
    cols[2].write(f"{quiz['time_limit']} min")
    cols[3].write(format_date(quiz["created_at"]))

    label = "Unpublish" if quiz["is_published"] else "Publish"
    if cols[4].button(label, key=f"pub-{quiz['id']}"):
        try:
            call_api(api_client.set_published, quiz["id"], not quiz["is_published"])
            st.rerun()
        except APIError as e:
            st.error(str(e))

    if cols[5].button("Results", key=f"res-{quiz['id']}"):
        st.session_state["results_quiz_id"] = quiz["id"]
        st.switch_page("pages/6_Quiz_Results.py")

    if cols[6].button("Delete", key=f"del-{quiz['id']}"):
        st.session_state["confirm_delete"] = quiz["id"]

    with st.expander("Edit details"):
        with st.form(f"edit-{quiz['id']}"):
            title = st.text_input("Title", value=quiz["title"])
            subject = st.text_input("Subject", value=quiz["subject"])
            description = st.text_area("Description", value=quiz["description"])
            e1, e2, e3 = st.columns(3)
            time_limit = e1.number_input("Time limit (minutes)", min_value=1, value=quiz["time_limit"])
            total_marks = e2.number_input("Total marks", min_value=1, value=quiz["total_marks"])
            is_active = e3.checkbox("Active", value=quiz["is_active"],
                                    help="Inactive quizzes are hidden from students.")
            if st.form_submit_button("Save"):
                try:
                    call_api(api_client.update_quiz, quiz["id"], {
                        "title": title,
                        "subject": subject,
                        "description": description,
                        "time_limit": int(time_limit),
                        "total_marks": int(total_marks),
                        "is_active": is_active,
                    })
                    st.rerun()
                except APIError as e:
                    st.error(str(e))

    if st.session_state.get("confirm_delete") == quiz["id"]:
        st.warning(f"Delete **{quiz['title']}** and all of its attempts?")
        yes, no = st.columns([1, 6])
        if yes.button("Yes, delete", key=f"del-yes-{quiz['id']}"):
            try:
                call_api(api_client.delete_quiz, quiz["id"])
                st.session_state.pop("confirm_delete", None)
                st.rerun()
            except APIError as e:
                st.error(str(e))
        if no.button("Cancel", key=f"del-no-{quiz['id']}"):
            st.session_state.pop("confirm_delete", None)
            st.rerun()
