"""Display helpers shared by the dashboard, results, history and admin pages."""
import html
from datetime import datetime

GRADE_COLOURS = {
    "A": "#16a34a",
    "B": "#2563eb",
    "C": "#d97706",
    "F": "#dc2626",
}


def format_clock(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def format_date(value: str | None) -> str:
    """ISO timestamp → ``Jan 05, 2026 14:30``."""
    if not value:
        return "-"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return value
    return parsed.strftime("%b %d, %Y %H:%M")


def quiz_card_html(quiz: dict) -> str:
    """Dashboard card; quiz text is author input, so it is escaped."""
    return f"""
        <div class="dash-card">
          <span class="badge">{html.escape(quiz.get('subject') or '')}</span>
          <h3>{html.escape(quiz.get('title') or '')}</h3>
          <p>{html.escape(quiz.get('description') or '')}</p>
          <p>{quiz['question_count']} questions · {quiz['total_marks']} marks ·
             {quiz['time_limit']} min</p>
        </div>
        """


def history_metrics(attempts: list[dict]) -> dict:
    """Headline numbers for the history page: count, average and best percentage."""
    percentages = [a["percentage"] for a in attempts]
    if not percentages:
        return {"taken": 0, "average": 0.0, "best": 0.0}
    return {
        "taken": len(percentages),
        "average": round(sum(percentages) / len(percentages), 1),
        "best": max(percentages),
    }
