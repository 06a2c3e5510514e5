# ABOUTME: Unit tests for the fixed window policy functions
# ABOUTME: Tests window roll-forward, counting, retry hints and next-window reservations

import pytest

from ratelimiter.components.policy import fixed_window
from ratelimiter.exceptions import MaxWaitExceededError
from ratelimiter.models.limiter.config import LimiterConfig
from ratelimiter.models.policy.enum import PolicyType
from ratelimiter.models.policy.state import FixedWindowState


def make_config(limit: int = 5, interval: float = 1.0) -> LimiterConfig:
    return LimiterConfig(id="login", policy=PolicyType.FIXED_WINDOW, limit=limit, interval=interval)


class TestFixedWindowRollForward:
    """Test how windows advance."""

    @pytest.mark.unit
    def test_state_inside_window_is_kept(self):
        config = make_config(interval=10.0)
        state = FixedWindowState(hits=3, window_start_at=0.0)

        assert fixed_window.roll_forward(config, state, 9.99) is state

    @pytest.mark.unit
    def test_rolls_to_window_containing_now(self):
        config = make_config(interval=10.0)
        state = FixedWindowState(hits=3, window_start_at=0.0)

        rolled = fixed_window.roll_forward(config, state, 35.0)

        assert rolled == FixedWindowState(hits=0, window_start_at=30.0)

    @pytest.mark.unit
    def test_rolls_exactly_at_window_end(self):
        config = make_config(interval=10.0)
        state = FixedWindowState(hits=3, window_start_at=0.0)

        assert fixed_window.roll_forward(config, state, 10.0) == FixedWindowState(hits=0, window_start_at=10.0)

    @pytest.mark.unit
    def test_future_window_is_kept(self):
        config = make_config(interval=10.0)
        state = FixedWindowState(hits=2, window_start_at=20.0)

        assert fixed_window.roll_forward(config, state, 5.0) is state


class TestFixedWindowConsume:
    """Test consume decisions."""

    @pytest.mark.unit
    def test_limit_then_reject_then_reset(self):
        """limit=5 per second: five hits pass at t=0, the sixth waits for t=1."""
        config = make_config(limit=5, interval=1.0)
        state = fixed_window.initial_state(config, 0.0)

        for expected_remaining in [4, 3, 2, 1, 0]:
            decision = fixed_window.consume(config, state, 0.0, 1)
            assert decision.accepted is True
            assert decision.remaining == expected_remaining
            state = decision.state

        rejected = fixed_window.consume(config, state, 0.0, 1)
        assert rejected.accepted is False
        assert 0 < rejected.retry_after <= 1.0
        assert rejected.state.hits == 5

        after_reset = fixed_window.consume(config, rejected.state, 1.0, 1)
        assert after_reset.accepted is True
        assert after_reset.remaining == 4
        assert after_reset.state.window_start_at == 1.0

    @pytest.mark.unit
    def test_retry_after_is_time_until_window_end(self):
        config = make_config(limit=5, interval=60.0)
        state = FixedWindowState(hits=4, window_start_at=0.0)

        decision = fixed_window.consume(config, state, 45.0, 2)

        assert decision.accepted is False
        assert decision.retry_after == pytest.approx(15.0)
        assert decision.remaining == 1

    @pytest.mark.unit
    def test_rejection_is_idempotent(self):
        config = make_config(limit=5, interval=60.0)
        state = FixedWindowState(hits=5, window_start_at=0.0)

        first = fixed_window.consume(config, state, 10.0, 1)
        second = fixed_window.consume(config, first.state, 10.0, 1)

        assert first.state == second.state == state
        assert first.retry_after == second.retry_after

    @pytest.mark.unit
    def test_consume_after_rollover_counts_in_new_window(self):
        config = make_config(limit=5, interval=10.0)
        state = FixedWindowState(hits=5, window_start_at=0.0)

        decision = fixed_window.consume(config, state, 12.0, 1)

        assert decision.accepted is True
        assert decision.state == FixedWindowState(hits=1, window_start_at=10.0)

    @pytest.mark.unit
    def test_two_windows_may_accept_twice_the_limit_around_boundary(self):
        """Documented boundary burst of the fixed window algorithm."""
        config = make_config(limit=5, interval=10.0)
        state = fixed_window.initial_state(config, 0.0)

        end_of_first = fixed_window.consume(config, state, 9.9, 5)
        start_of_second = fixed_window.consume(config, end_of_first.state, 10.0, 5)

        assert end_of_first.accepted is True
        assert start_of_second.accepted is True


class TestFixedWindowReserve:
    """Test reservations."""

    @pytest.mark.unit
    def test_reserve_in_current_window(self):
        config = make_config(limit=5, interval=10.0)
        state = FixedWindowState(hits=2, window_start_at=0.0)

        decision = fixed_window.reserve(config, state, 4.0, 3)

        assert decision.wait == 0.0
        assert decision.remaining == 0
        assert decision.state == FixedWindowState(hits=5, window_start_at=0.0)

    @pytest.mark.unit
    def test_reserve_books_next_window_when_full(self):
        config = make_config(limit=5, interval=10.0)
        state = FixedWindowState(hits=4, window_start_at=0.0)

        decision = fixed_window.reserve(config, state, 4.0, 3)

        assert decision.wait == pytest.approx(6.0)
        assert decision.remaining == 2
        assert decision.state == FixedWindowState(hits=3, window_start_at=10.0)

    @pytest.mark.unit
    def test_reservations_fill_future_windows_in_order(self):
        config = make_config(limit=5, interval=10.0)
        state = FixedWindowState(hits=5, window_start_at=0.0)

        first = fixed_window.reserve(config, state, 4.0, 3)
        second = fixed_window.reserve(config, first.state, 4.0, 2)
        third = fixed_window.reserve(config, second.state, 4.0, 1)

        assert first.wait == pytest.approx(6.0)
        assert second.wait == pytest.approx(6.0)
        assert third.wait == pytest.approx(16.0)
        assert third.state == FixedWindowState(hits=1, window_start_at=20.0)

    @pytest.mark.unit
    def test_consume_before_booked_window_opens_is_rejected(self):
        config = make_config(limit=5, interval=1.0)
        state = FixedWindowState(hits=5, window_start_at=0.0)

        reserved = fixed_window.reserve(config, state, 0.0, 1)
        rejected = fixed_window.consume(config, reserved.state, 0.1, 1)

        assert reserved.wait == pytest.approx(1.0)
        assert rejected.accepted is False
        assert rejected.remaining == 0
        assert rejected.retry_after == pytest.approx(0.9)
        assert rejected.state is reserved.state

    @pytest.mark.unit
    def test_consume_counts_reservations_once_booked_window_opens(self):
        config = make_config(limit=5, interval=1.0)
        booked = FixedWindowState(hits=4, window_start_at=1.0)

        accepted = fixed_window.consume(config, booked, 1.0, 1)
        rejected = fixed_window.consume(config, accepted.state, 1.5, 1)

        assert accepted.accepted is True
        assert accepted.state == FixedWindowState(hits=5, window_start_at=1.0)
        assert rejected.accepted is False
        assert rejected.retry_after == pytest.approx(0.5)

    @pytest.mark.unit
    def test_reserve_beyond_max_wait_raises(self):
        config = make_config(limit=5, interval=10.0)
        state = FixedWindowState(hits=5, window_start_at=0.0)

        with pytest.raises(MaxWaitExceededError):
            fixed_window.reserve(config, state, 1.0, 1, max_wait=5.0)


class TestFixedWindowTtl:
    """Test the state expiry hint."""

    @pytest.mark.unit
    def test_ttl_is_time_until_window_end(self):
        config = make_config(limit=5, interval=10.0)

        assert fixed_window.state_ttl(config, FixedWindowState(hits=1, window_start_at=0.0), 4.0) == pytest.approx(6.0)
        assert fixed_window.state_ttl(config, FixedWindowState(hits=1, window_start_at=10.0), 4.0) == pytest.approx(16.0)
