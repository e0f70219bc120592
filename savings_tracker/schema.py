"""
Savings Tracker - Data Schema Module.

This module defines the core data models and persisted keys for the
savings tracker. Monetary values are plain floats, matching the
floating-point type used by the key-value store.

Persisted Layout:
    - savingsGoal: raw goal text entered by the user (default "")
    - currentSavings: running balance (default 0.0)

Classes:
    OperationResult: Outcome of a balance mutation.
    SavingsSnapshot: Immutable view of the state and its derived values.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# Key-value store keys
GOAL_KEY = "savingsGoal"
CURRENT_SAVINGS_KEY = "currentSavings"

# Defaults used when the store holds no value
DEFAULT_GOAL_TEXT = ""
DEFAULT_CURRENT_SAVINGS = 0.0

# Number of cells in the progress bar
DEFAULT_SEGMENT_COUNT = 10


class OperationResult(Enum):
    """
    Outcome of an add or withdraw operation.

    Attributes:
        APPLIED: The balance changed and was persisted.
        INVALID_AMOUNT: The amount text did not parse; nothing changed.
        INSUFFICIENT_FUNDS: The balance would have gone negative; nothing changed.
    """

    APPLIED = "APPLIED"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"

    @property
    def applied(self) -> bool:
        """Returns True if the operation changed the balance."""
        return self is OperationResult.APPLIED


@dataclass(frozen=True)
class SavingsSnapshot:
    """
    Point-in-time copy of a SavingsState with its derived values.

    Attributes:
        goal_text: Raw goal text as entered.
        goal_value: Parsed goal, or None if the text does not parse.
        current_savings: Running balance.
        pending_amount_text: Contents of the amount field.
        progress: Unclamped ratio of balance to goal (0 without a positive goal).
        remaining: Amount still needed to reach the goal, never negative.
        filled_segments: Number of filled cells in the progress bar.
        segment_count: Total cells in the progress bar.
    """

    goal_text: str
    goal_value: Optional[float]
    current_savings: float
    pending_amount_text: str
    progress: float
    remaining: float
    filled_segments: int
    segment_count: int = DEFAULT_SEGMENT_COUNT

    @property
    def goal_reached(self) -> bool:
        """Returns True once the balance meets a positive goal."""
        return self.goal_value is not None and self.goal_value > 0 and self.progress >= 1
