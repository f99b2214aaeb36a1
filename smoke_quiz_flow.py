"""
End-to-end smoke run of the quiz flow against a live server.

Requires a running Flask server (python backend/run.py or flask run) and an
admin account created with:
    flask --app backend/run.py create-admin admin@quizpro.local admin123

Run from project root:
    python smoke_quiz_flow.py

Registers (or reuses) two students, has the admin author and publish a quiz,
then takes it: start, resume, answer, submit, review, history, results.
"""

import json
import os
import sys
import uuid
import requests

BASE = os.getenv("API_BASE_URL", "http://localhost:5000")

# ── Test credentials ──────────────────────────────────────────────────────────
ADMIN_EMAIL    = os.getenv("ADMIN_EMAIL", "admin@quizpro.local")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
EMAIL          = "smoke_student@quizpro.local"
EMAIL_B        = "smoke_student_b@quizpro.local"  # second student for isolation
PASSWORD       = "smoketest123"


def hdr(label: str):
    print("\n" + "=" * 60)
    print(label)
    print("=" * 60)


def check(resp: requests.Response, *expected):
    if resp.status_code not in expected:
        print(f"FAIL  expected={expected}  got={resp.status_code}")
        try:
            print(json.dumps(resp.json(), indent=2))
        except ValueError:
            print(resp.text[:600])
        sys.exit(1)
    return resp


def login(email: str, password: str) -> str:
    r = requests.post(f"{BASE}/api/auth/login",
                      json={"email": email, "password": password})
    check(r, 200)
    return r.json()["access_token"]


def register_or_login(name: str, email: str, password: str) -> str:
    """Return an access token, registering the student first if needed."""
    r = requests.post(f"{BASE}/api/auth/register",
                      json={"name": name, "email": email, "password": password})
    if r.status_code == 201:
        return r.json()["access_token"]
    if r.status_code == 409:
        return login(email, password)
    check(r, 201)


# ── Setup ─────────────────────────────────────────────────────────────────────
hdr("Acquiring access tokens")
admin   = {"Authorization": f"Bearer {login(ADMIN_EMAIL, ADMIN_PASSWORD)}"}
auth_a  = {"Authorization": f"Bearer {register_or_login('Smoke A', EMAIL, PASSWORD)}"}
auth_b  = {"Authorization": f"Bearer {register_or_login('Smoke B', EMAIL_B, PASSWORD)}"}
print("OK  admin + two students signed in")

# ── Auth enforcement ──────────────────────────────────────────────────────────
hdr("Auth enforcement – missing token 401, student on admin route 403")
check(requests.get(f"{BASE}/api/quizzes"), 401)
check(requests.get(f"{BASE}/api/admin/stats", headers=auth_a), 403)
print("OK")

# ── Authoring ─────────────────────────────────────────────────────────────────
hdr("POST /api/admin/quizzes – validation error for a quiz with no questions")
r = requests.post(f"{BASE}/api/admin/quizzes", headers=admin,
                  json={"title": "Empty", "time_limit": 5, "questions": []})
check(r, 400)
print(f"OK  error='{r.json()['error']}'")

hdr("POST /api/admin/quizzes – create a three-question quiz")
title = f"Smoke Quiz {uuid.uuid4().hex[:6]}"
questions = [
    {"question_text": "2 + 2?", "option_a": "3", "option_b": "4", "option_c": "5",
     "option_d": "22", "correct_option": "B", "marks": 1},
    {"question_text": "Capital of France?", "option_a": "Paris", "option_b": "Rome",
     "option_c": "Lima", "option_d": "Oslo", "correct_option": "A", "marks": 2,
     "explanation": "Paris has been the capital since 987."},
    {"question_text": "H2O is?", "option_a": "Salt", "option_b": "Air",
     "option_c": "Water", "option_d": "Iron", "correct_option": "C", "marks": 2},
]
r = requests.post(f"{BASE}/api/admin/quizzes", headers=admin, json={
    "title": title, "subject": "General Knowledge", "time_limit": 5, "questions": questions,
})
check(r, 201)
quiz = r.json()
quiz_id = quiz["id"]
assert quiz["total_marks"] == 5, f"expected total_marks 5, got {quiz['total_marks']}"
assert quiz["is_published"] is False, "new quiz should start unpublished"
print(f"OK  quiz_id={quiz_id}")

hdr("Unpublished quiz hidden from students")
ids = [q["id"] for q in check(requests.get(f"{BASE}/api/quizzes", headers=auth_a), 200).json()]
assert quiz_id not in ids, "unpublished quiz visible to a student"
check(requests.post(f"{BASE}/api/quizzes/{quiz_id}/attempts", headers=auth_a), 404)
print("OK")

hdr("POST /api/admin/quizzes/<id>/publish")
check(requests.post(f"{BASE}/api/admin/quizzes/{quiz_id}/publish", headers=admin,
                    json={"is_published": True}), 200)
print("OK  published")

# ── Taking the quiz ───────────────────────────────────────────────────────────
hdr("POST /api/quizzes/<id>/attempts – start, then resume")
r = check(requests.post(f"{BASE}/api/quizzes/{quiz_id}/attempts", headers=auth_a), 201)
started = r.json()
attempt_id = started["attempt"]["id"]
qids = [q["id"] for q in started["questions"]]
assert all("correct_option" not in q for q in started["questions"]), "answer key leaked"
print(f"OK  attempt_id={attempt_id}  remaining={started['attempt']['remaining_seconds']}s")

check(requests.put(f"{BASE}/api/attempts/{attempt_id}/answers", headers=auth_a,
                   json={"question_id": qids[0], "selected_option": "B"}), 200)
r = check(requests.post(f"{BASE}/api/quizzes/{quiz_id}/attempts", headers=auth_a), 200)
assert r.json()["attempt"]["id"] == attempt_id, "expected the same attempt to resume"
assert r.json()["attempt"]["answers"].get(qids[0]) == "B", "draft answer lost on resume"
print("OK  resumed with saved answer")

hdr("Cross-student access must return 404")
check(requests.get(f"{BASE}/api/attempts/{attempt_id}", headers=auth_b), 404)
check(requests.post(f"{BASE}/api/attempts/{attempt_id}/submit", headers=auth_b), 404)
print("OK")

hdr("POST /api/attempts/<id>/submit – one right, one wrong, one blank")
r = requests.post(f"{BASE}/api/attempts/{attempt_id}/submit", headers=auth_a, json={
    "answers": [{"question_id": qids[1], "selected_option": "D"}],
})
check(r, 200)
result = r.json()
assert result["status"] == "completed"
assert result["score"] == 1, f"expected score 1, got {result['score']}"
assert result["percentage"] == 20.0, f"expected 20.0%, got {result['percentage']}"
print(f"OK  score={result['score']}/{result['total_marks']}  grade={result['grade']}")

check(requests.post(f"{BASE}/api/attempts/{attempt_id}/submit", headers=auth_a), 409)
print("OK  second submit rejected with 409")

hdr("GET /api/attempts/<id>/review")
review = check(requests.get(f"{BASE}/api/attempts/{attempt_id}/review", headers=auth_a), 200).json()
counts = (review["correct_count"], review["wrong_count"], review["unanswered_count"])
assert counts == (1, 1, 1), f"unexpected review counts {counts}"
print(f"OK  correct/wrong/unanswered = {counts}")

hdr("GET /api/attempts – history")
history = check(requests.get(f"{BASE}/api/attempts", headers=auth_a), 200).json()
assert any(h["id"] == attempt_id for h in history), "attempt missing from history"
print(f"OK  {len(history)} completed attempt(s)")

# ── Admin results ─────────────────────────────────────────────────────────────
hdr("GET /api/admin/quizzes/<id>/results")
body = check(requests.get(f"{BASE}/api/admin/quizzes/{quiz_id}/results", headers=admin), 200).json()
print(f"OK  summary={body['summary']}")

hdr("DELETE /api/admin/quizzes/<id> – clean up")
check(requests.delete(f"{BASE}/api/admin/quizzes/{quiz_id}", headers=admin), 200)
check(requests.get(f"{BASE}/api/admin/quizzes/{quiz_id}", headers=admin), 404)
print("OK  quiz, attempts and answers removed")

# ── Done ───────────────────────────────────────────────────────────────────────
hdr("ALL CHECKS PASSED")
print("Quiz flow smoke run completed successfully.\n")
