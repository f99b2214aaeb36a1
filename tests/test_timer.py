"""
Tests for the quiz timer

Tests cover:
- Server-side deadline arithmetic for attempts
- The client Countdown: start/pause/reset, expiry callback, no drift
- Duration and clock formatting
"""

from datetime import datetime, timedelta, timezone

from components.countdown import Countdown
from components.formatting import format_clock
from quizpro.services.timer import elapsed_seconds, format_duration, remaining_seconds


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class TestRemainingSeconds:
    def test_full_time_at_start(self):
        start = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert remaining_seconds(start, 10, now=start) == 600

    def test_counts_down(self):
        start = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert remaining_seconds(start, 10, now=start + timedelta(seconds=90)) == 510

    def test_clamped_at_zero(self):
        start = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert remaining_seconds(start, 1, now=start + timedelta(minutes=5)) == 0

    def test_naive_start_is_treated_as_utc(self):
        start = datetime(2026, 1, 1, 12, 0)
        now = datetime(2026, 1, 1, 12, 1, tzinfo=timezone.utc)
        assert remaining_seconds(start, 2, now=now) == 60
        assert elapsed_seconds(start, now=now) == 60


class TestCountdown:
    def test_not_running_until_started(self):
        clock = FakeClock()
        timer = Countdown(90, clock=clock)
        clock.advance(30)
        assert timer.seconds == 90
        assert not timer.is_active

    def test_minutes_and_display_seconds(self):
        clock = FakeClock()
        timer = Countdown(125, clock=clock)
        timer.start()
        clock.advance(0.5)
        assert timer.minutes == 2
        assert timer.display_seconds == 5

    def test_pause_freezes_remaining_time(self):
        clock = FakeClock()
        timer = Countdown(60, clock=clock)
        timer.start()
        clock.advance(20)
        timer.pause()
        clock.advance(100)
        assert timer.seconds == 40
        assert not timer.is_active

    def test_reset_stops_and_rewinds(self):
        clock = FakeClock()
        timer = Countdown(60, clock=clock)
        timer.start()
        clock.advance(20)
        timer.reset(300)
        assert timer.seconds == 300
        assert not timer.is_active

    def test_fires_on_complete_once(self):
        clock = FakeClock()
        calls = []
        timer = Countdown(3, on_complete=lambda: calls.append(1), clock=clock)
        timer.start()
        clock.advance(2)
        assert timer.tick() == 1
        assert calls == []
        clock.advance(5)
        assert timer.tick() == 0
        assert timer.tick() == 0
        assert calls == [1]
        assert timer.is_expired

    def test_skipped_ticks_do_not_drift(self):
        clock = FakeClock()
        timer = Countdown(600, clock=clock)
        timer.start()
        # one tick after a long gap lands on the true remaining time
        clock.advance(123.4)
        assert timer.tick() == 477

    def test_paused_timer_never_expires(self):
        clock = FakeClock()
        calls = []
        timer = Countdown(5, on_complete=lambda: calls.append(1), clock=clock)
        timer.start()
        timer.pause()
        clock.advance(60)
        assert timer.tick() == 5
        assert not timer.is_expired
        assert calls == []

    def test_zero_length_timer_is_expired(self):
        timer = Countdown(0, clock=FakeClock())
        timer.start()
        assert timer.is_expired
        assert not timer.is_active


class TestFormatting:
    def test_format_clock(self):
        assert format_clock(0) == '00:00'
        assert format_clock(65) == '01:05'
        assert format_clock(-3) == '00:00'

    def test_format_duration(self):
        assert format_duration(None) == '-'
        assert format_duration(0) == '-'
        assert format_duration(9) == '9s'
        assert format_duration(242) == '4m 2s'
        assert format_duration(3900) == '1h 5m'
