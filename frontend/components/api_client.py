"""
api_client.py — single HTTP client for all frontend → Flask communication.
Reads API_BASE_URL from .env (falls back to localhost:5000).
Pages pass the JWT access token stored in st.session_state.
"""
import os
import requests
from dotenv import load_dotenv

load_dotenv()

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000")


class APIError(Exception):
    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code


def _headers(token: str | None = None) -> dict:
    h = {"Content-Type": "application/json"}
    if token:
        h["Authorization"] = f"Bearer {token}"
    return h


def _raise(resp: requests.Response) -> None:
    if not resp.ok:
        try:
            msg = resp.json().get("error", resp.text)
        except ValueError:
            msg = resp.text
        raise APIError(msg, resp.status_code)


# ── Auth ─────────────────────────────────────────────────────────────────────

def register(name: str, email: str, password: str) -> dict:
    resp = requests.post(
        f"{API_BASE_URL}/api/auth/register",
        json={"name": name, "email": email, "password": password},
        headers=_headers(),
        timeout=10,
    )
    _raise(resp)
    return resp.json()


def login(email: str, password: str) -> dict:
    resp = requests.post(
        f"{API_BASE_URL}/api/auth/login",
        json={"email": email, "password": password},
        headers=_headers(),
        timeout=10,
    )
    _raise(resp)
    return resp.json()


def refresh_token(refresh_tok: str) -> str:
    resp = requests.post(
        f"{API_BASE_URL}/api/auth/refresh",
        headers=_headers(refresh_tok),
        timeout=10,
    )
    _raise(resp)
    return resp.json()["access_token"]


def logout(access_token: str) -> None:
    resp = requests.post(
        f"{API_BASE_URL}/api/auth/logout",
        headers=_headers(access_token),
        timeout=10,
    )
    _raise(resp)


# ── Generic authenticated helpers ────────────────────────────────────────────

def authed_get(path: str, access_token: str, params: dict | None = None):
    resp = requests.get(
        f"{API_BASE_URL}{path}",
        headers=_headers(access_token),
        params=params,
        timeout=30,
    )
    _raise(resp)
    return resp.json()


def authed_post(path: str, access_token: str, payload: dict | list | None = None):
    resp = requests.post(
        f"{API_BASE_URL}{path}",
        json=payload if payload is not None else {},
        headers=_headers(access_token),
        timeout=30,
    )
    _raise(resp)
    return resp.json()


def authed_put(path: str, access_token: str, payload: dict):
    resp = requests.put(
        f"{API_BASE_URL}{path}",
        json=payload,
        headers=_headers(access_token),
        timeout=30,
    )
    _raise(resp)
    return resp.json()


def authed_patch(path: str, access_token: str, payload: dict):
    resp = requests.patch(
        f"{API_BASE_URL}{path}",
        json=payload,
        headers=_headers(access_token),
        timeout=30,
    )
    _raise(resp)
    return resp.json()


def authed_delete(path: str, access_token: str):
    resp = requests.delete(
        f"{API_BASE_URL}{path}",
        headers=_headers(access_token),
        timeout=10,
    )
    _raise(resp)
    return resp.json()


# ── Student quizzes & attempts ───────────────────────────────────────────────

def list_quizzes(access_token: str) -> list:
    return authed_get("/api/quizzes", access_token)


def start_attempt(access_token: str, quiz_id: str) -> dict:
    return authed_post(f"/api/quizzes/{quiz_id}/attempts", access_token)


def save_answer(access_token: str, attempt_id: str, question_id: str, option: str) -> dict:
    return authed_put(
        f"/api/attempts/{attempt_id}/answers",
        access_token,
        {"question_id": question_id, "selected_option": option},
    )


def submit_attempt(access_token: str, attempt_id: str, answers: dict | None = None) -> dict:
    """*answers* maps question_id → selected option; sent along with the submit."""
    payload = {
        "answers": [
            {"question_id": qid, "selected_option": opt}
            for qid, opt in (answers or {}).items()
        ]
    }
    return authed_post(f"/api/attempts/{attempt_id}/submit", access_token, payload)


def get_review(access_token: str, attempt_id: str) -> dict:
    return authed_get(f"/api/attempts/{attempt_id}/review", access_token)


def get_history(access_token: str) -> list:
    return authed_get("/api/attempts", access_token)


# ── Admin ────────────────────────────────────────────────────────────────────

def admin_stats(access_token: str) -> dict:
    return authed_get("/api/admin/stats", access_token)


def admin_quizzes(access_token: str, mine: bool = False) -> list:
    return authed_get("/api/admin/quizzes", access_token, params={"mine": "1"} if mine else None)


def create_quiz(access_token: str, quiz: dict) -> dict:
    return authed_post("/api/admin/quizzes", access_token, quiz)


def update_quiz(access_token: str, quiz_id: str, fields: dict) -> dict:
    return authed_patch(f"/api/admin/quizzes/{quiz_id}", access_token, fields)


def set_published(access_token: str, quiz_id: str, is_published: bool) -> dict:
    return authed_post(
        f"/api/admin/quizzes/{quiz_id}/publish",
        access_token,
        {"is_published": is_published},
    )


def delete_quiz(access_token: str, quiz_id: str) -> dict:
    return authed_delete(f"/api/admin/quizzes/{quiz_id}", access_token)


def quiz_results(access_token: str, quiz_id: str) -> dict:
    return authed_get(f"/api/admin/quizzes/{quiz_id}/results", access_token)
