"""
Savings Tracker - Progress Calculator Tests.

Property-based and unit tests for ProgressCalculator class.
Tests ensure correct progress, remaining and segment arithmetic,
including the unclamped overflow once a goal is passed.

**Property: Progress Formula Correctness**
**Property: Remaining Amount Is Never Negative**
"""

import math
import sys

import pytest
from hypothesis import given, settings, assume
from hypothesis.strategies import floats, integers, none, one_of

from savings_tracker.calculator import ProgressCalculator


balances = floats(min_value=0, max_value=1e9, allow_nan=False, allow_infinity=False)
goals = floats(min_value=-1e9, max_value=1e9, allow_nan=False, allow_infinity=False)


class TestProgressCalculatorUnit:
    """Unit tests for ProgressCalculator edge cases."""

    def setup_method(self) -> None:
        """Initialise ProgressCalculator for each test."""
        self.calc = ProgressCalculator()

    def test_default_segment_count(self) -> None:
        """Verify the default bar has 10 segments."""
        assert self.calc.segment_count == 10

    def test_invalid_segment_count(self) -> None:
        """Verify a bar needs at least one segment."""
        with pytest.raises(ValueError, match="at least 1"):
            ProgressCalculator(0)

    @pytest.mark.parametrize("segment_count", [0, -1, -10])
    def test_invalid_segment_count_per_call(self, segment_count: int) -> None:
        """Verify a per-call segment count is held to the same rule."""
        with pytest.raises(ValueError, match="at least 1"):
            self.calc.calculate_filled_segments(1000.0, 250.0, segment_count)

    def test_quarter_progress(self) -> None:
        """Verify 250 of 1000 is 25% with 2 of 10 segments filled."""
        assert self.calc.calculate_progress(1000.0, 250.0) == 0.25
        assert self.calc.calculate_remaining(1000.0, 250.0) == 750.0
        assert self.calc.calculate_filled_segments(1000.0, 250.0) == 2

    def test_progress_without_goal(self) -> None:
        """Verify a missing goal gives zero progress and nothing remaining."""
        assert self.calc.calculate_progress(None, 50.0) == 0.0
        assert self.calc.calculate_remaining(None, 50.0) == 0.0
        assert self.calc.calculate_filled_segments(None, 50.0) == 0

    def test_progress_with_zero_goal(self) -> None:
        """Verify a zero goal gives zero progress."""
        assert self.calc.calculate_progress(0.0, 50.0) == 0.0
        assert self.calc.calculate_remaining(0.0, 50.0) == 0.0

    def test_negative_goal_remaining(self) -> None:
        """Verify a negative goal still parses, so remaining clamps to zero."""
        assert self.calc.calculate_progress(-100.0, 50.0) == 0.0
        assert self.calc.calculate_remaining(-100.0, 50.0) == 0.0

    def test_goal_exactly_reached(self) -> None:
        """Verify reaching the goal fills every segment."""
        assert self.calc.calculate_progress(500.0, 500.0) == 1.0
        assert self.calc.calculate_remaining(500.0, 500.0) == 0.0
        assert self.calc.calculate_filled_segments(500.0, 500.0) == 10

    def test_overflow_is_not_clamped(self) -> None:
        """Verify a balance above the goal overflows the bar."""
        assert self.calc.calculate_progress(100.0, 250.0) == 2.5
        assert self.calc.calculate_filled_segments(100.0, 250.0) == 25

    def test_custom_segment_count(self) -> None:
        """Verify an explicit segment count overrides the default."""
        assert self.calc.calculate_filled_segments(1000.0, 250.0, 20) == 5
        assert ProgressCalculator(4).calculate_filled_segments(1000.0, 250.0) == 1

    def test_segments_round_down(self) -> None:
        """Verify partial segments are not filled."""
        assert self.calc.calculate_filled_segments(1000.0, 199.99) == 1

    def test_infinite_progress_is_capped(self) -> None:
        """Verify a vanishingly small goal does not break the segment count."""
        assert self.calc.calculate_progress(5e-324, 1e9) == float("inf")
        assert self.calc.calculate_filled_segments(5e-324, 1e9) == sys.maxsize


class TestProgressCalculatorProperty:
    """
    Property-based tests for ProgressCalculator.

    **Property: Progress Formula Correctness**
    **Property: Remaining Amount Is Never Negative**
    """

    def setup_method(self) -> None:
        """Initialise ProgressCalculator for each test."""
        self.calc = ProgressCalculator()

    @given(goals, balances)
    @settings(max_examples=200)
    def test_progress_formula(self, goal: float, balance: float) -> None:
        """
        Property: Progress is balance / goal for a positive goal, else 0.
        """
        progress = self.calc.calculate_progress(goal, balance)
        if goal > 0:
            assert progress == balance / goal
        else:
            assert progress == 0.0

    @given(one_of(none(), goals), balances)
    @settings(max_examples=200)
    def test_remaining_formula(self, goal, balance: float) -> None:
        """
        Property: Remaining is max(goal - balance, 0), or 0 without a goal.
        """
        remaining = self.calc.calculate_remaining(goal, balance)
        assert remaining >= 0
        if goal is None:
            assert remaining == 0.0
        else:
            assert remaining == max(goal - balance, 0.0)

    @given(goals, balances, integers(min_value=1, max_value=100))
    @settings(max_examples=200)
    def test_filled_segments_formula(
        self,
        goal: float,
        balance: float,
        segment_count: int
    ) -> None:
        """
        Property: Filled segments is floor(segment_count * progress).
        """
        progress = self.calc.calculate_progress(goal, balance)
        assume(math.isfinite(segment_count * progress))
        filled = self.calc.calculate_filled_segments(goal, balance, segment_count)
        assert filled == math.floor(segment_count * progress)
        assert filled >= 0
