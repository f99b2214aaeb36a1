"""
countdown.py — the quiz timer.

Kept in st.session_state across reruns. Remaining time is derived from a
clock reading, never decremented per tick, so a late or skipped rerun does
not make it drift.
"""
import math
import time
from typing import Callable, Optional


class Countdown:
    def __init__(
        self,
        total_seconds: int,
        on_complete: Optional[Callable[[], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._initial = max(0, int(total_seconds))
        self._on_complete = on_complete
        self._clock = clock
        self._remaining = float(self._initial)
        self._started_at: Optional[float] = None
        self._fired = False

    # ── controls ─────────────────────────────────────────────────────────────

    def start(self) -> None:
        if self._started_at is None and self._remaining > 0:
            self._started_at = self._clock()

    def pause(self) -> None:
        if self._started_at is not None:
            self._remaining = self._current()
            self._started_at = None

    def reset(self, new_seconds: Optional[int] = None) -> None:
        """Stop and rewind, to ``new_seconds`` when given."""
        if new_seconds is not None:
            self._initial = max(0, int(new_seconds))
        self._remaining = float(self._initial)
        self._started_at = None
        self._fired = False

    def tick(self) -> int:
        """
        Read the clock; at zero, stop and fire ``on_complete`` (once).
        Returns the whole seconds left.
        """
        if self._started_at is not None and self._current() <= 0:
            self._remaining = 0.0
            self._started_at = None
            if not self._fired:
                self._fired = True
                if self._on_complete is not None:
                    self._on_complete()
        return self.seconds

    # ── readings ─────────────────────────────────────────────────────────────

    def _current(self) -> float:
        if self._started_at is None:
            return self._remaining
        return max(0.0, self._remaining - (self._clock() - self._started_at))

    @property
    def seconds(self) -> int:
        return int(math.ceil(self._current()))

    @property
    def minutes(self) -> int:
        return self.seconds // 60

    @property
    def display_seconds(self) -> int:
        return self.seconds % 60

    @property
    def is_active(self) -> bool:
        return self._started_at is not None and self._current() > 0

    @property
    def is_expired(self) -> bool:
        return self.seconds == 0
