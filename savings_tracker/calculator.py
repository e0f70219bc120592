"""
Savings Tracker - Progress Calculator Module.

This module provides the pure arithmetic behind the progress display:
progress ratio, remaining amount and the number of filled bar segments.
None of these functions have side effects.

Classes:
    ProgressCalculator: Derived-value calculations for a savings goal.
"""

import math
import sys
from typing import Optional

from savings_tracker.schema import DEFAULT_SEGMENT_COUNT


class ProgressCalculator:
    """
    Derived-value calculations for a savings goal.

    Progress is intentionally not clamped to 1. A balance above the goal
    yields progress above 1 and a filled segment count above the bar size.

    Attributes:
        segment_count: Default number of cells in the progress bar.

    Example:
        >>> calc = ProgressCalculator()
        >>> calc.calculate_progress(1000.0, 250.0)
        0.25
        >>> calc.calculate_filled_segments(1000.0, 250.0)
        2
    """

    def __init__(self, segment_count: int = DEFAULT_SEGMENT_COUNT):
        """
        Initialises the ProgressCalculator.

        Args:
            segment_count: Default number of bar cells. Must be positive.

        Raises:
            ValueError: If segment_count is less than 1.
        """
        if segment_count < 1:
            raise ValueError(
                f"Segment count must be at least 1, got {segment_count}"
            )
        self.segment_count = segment_count

    def calculate_progress(
        self,
        goal_value: Optional[float],
        current_savings: float
    ) -> float:
        """
        Calculates the ratio of current savings to the goal.

        Formula: current_savings / goal_value

        Args:
            goal_value: Parsed goal, or None if the goal did not parse.
            current_savings: Running balance.

        Returns:
            Unclamped progress ratio. Returns 0.0 if the goal is absent
            or not positive.
        """
        if goal_value is None or goal_value <= 0:
            return 0.0
        return current_savings / goal_value

    def calculate_remaining(
        self,
        goal_value: Optional[float],
        current_savings: float
    ) -> float:
        """
        Calculates how much is still needed to reach the goal.

        Formula: max(goal_value - current_savings, 0)

        Args:
            goal_value: Parsed goal, or None if the goal did not parse.
            current_savings: Running balance.

        Returns:
            Remaining amount, never negative. Returns 0.0 if the goal
            did not parse.
        """
        if goal_value is None:
            return 0.0
        return max(goal_value - current_savings, 0.0)

    def calculate_filled_segments(
        self,
        goal_value: Optional[float],
        current_savings: float,
        segment_count: Optional[int] = None
    ) -> int:
        """
        Calculates how many bar cells are filled.

        Formula: floor(segment_count * progress)

        Args:
            goal_value: Parsed goal, or None if the goal did not parse.
            current_savings: Running balance.
            segment_count: Bar size. Defaults to the calculator's setting.

        Returns:
            Filled cell count. May exceed segment_count once the goal
            has been passed; capped at sys.maxsize when progress is
            infinite (a vanishingly small goal).

        Raises:
            ValueError: If segment_count is less than 1.
        """
        if segment_count is None:
            segment_count = self.segment_count
        elif segment_count < 1:
            raise ValueError(
                f"Segment count must be at least 1, got {segment_count}"
            )

        progress = self.calculate_progress(goal_value, current_savings)
        cells = segment_count * progress
        if math.isinf(cells):
            return sys.maxsize
        return math.floor(cells)
