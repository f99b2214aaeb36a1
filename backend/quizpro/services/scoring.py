"""
Answer grading and score arithmetic.

Public API
----------
    grade_answer(question, selected_option) -> (is_correct, marks_obtained)
    compute_score(answers)                  -> int
    compute_percentage(score, total_marks)  -> float
    grade_letter(percentage)                -> "A" | "B" | "C" | "F"
    summarize(percentages)                  -> dict

Pure functions: no database access, so they are shared by the attempt
service, the admin results view and the tests.
"""

from __future__ import annotations

from typing import Iterable

# Lower bounds (inclusive) for each letter grade, checked in order
GRADE_BOUNDARIES = (
    (80.0, "A"),
    (60.0, "B"),
    (40.0, "C"),
)
FAIL_GRADE = "F"
PASS_PERCENTAGE = 40.0


def grade_answer(question, selected_option: str | None) -> tuple[bool, int]:
    """Return (is_correct, marks_obtained) for one selected option."""
    if not selected_option:
        return False, 0
    if selected_option.strip().upper() == question.correct_option:
        return True, question.marks
    return False, 0


def compute_score(answers: Iterable) -> int:
    return sum(a.marks_obtained or 0 for a in answers)


def compute_percentage(score: float, total_marks: float) -> float:
    if not total_marks or total_marks <= 0:
        return 0.0
    return round(score / total_marks * 100, 2)


def grade_letter(percentage: float) -> str:
    for lower, letter in GRADE_BOUNDARIES:
        if percentage >= lower:
            return letter
    return FAIL_GRADE


def summarize(percentages: Iterable[float]) -> dict:
    """
    Aggregate a quiz's completed attempts for the admin results page.

    Returns
    -------
    dict
        attempts, average, highest, lowest : numbers (0 when empty)
        passed                             : attempts at or above PASS_PERCENTAGE
    """
    values = [float(p or 0) for p in percentages]
    if not values:
        return {"attempts": 0, "average": 0.0, "highest": 0.0, "lowest": 0.0, "passed": 0}
    return {
        "attempts": len(values),
        "average":  round(sum(values) / len(values), 2),
        "highest":  max(values),
        "lowest":   min(values),
        "passed":   sum(1 for v in values if v >= PASS_PERCENTAGE),
    }
