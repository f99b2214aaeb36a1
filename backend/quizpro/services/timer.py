"""
Attempt deadlines.

An attempt's deadline is ``started_at + quiz.time_limit``. Remaining time is
computed from that, not stored, so it survives page reloads and needs no
per-second work on the server.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def remaining_seconds(
    started_at: datetime,
    time_limit_minutes: int,
    now: Optional[datetime] = None,
) -> int:
    """Seconds left before an attempt's deadline, never negative."""
    now = now or datetime.now(timezone.utc)
    elapsed = (now - _aware(started_at)).total_seconds()
    return max(0, int(math.ceil(time_limit_minutes * 60 - elapsed)))


def elapsed_seconds(started_at: datetime, now: Optional[datetime] = None) -> int:
    now = now or datetime.now(timezone.utc)
    return max(0, int((now - _aware(started_at)).total_seconds()))


def format_duration(seconds: Optional[int]) -> str:
    """Human readable time taken: ``1h 5m``, ``4m 2s``, ``9s`` or ``-``."""
    if not seconds:
        return "-"
    hours, rest = divmod(int(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"
