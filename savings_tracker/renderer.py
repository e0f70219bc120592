"""
Savings Tracker - Console Renderer Module.

This module turns a SavingsState into the text screen shown by the
command-line front end: goal, amount field, balance, percentage of the
goal achieved, amount left and a segmented progress bar.

Display Rules:
    - Balance and remaining amount use two decimal places
    - Progress is shown as a percentage with one decimal place
    - Bar cell i is filled iff i < filled_segments

Classes:
    SavingsView: Formatted view model of the current state.
    ConsoleRenderer: Renders a SavingsView as plain text.
"""

from dataclasses import dataclass
from typing import List, Optional

from savings_tracker.state import SavingsState

FILLED_CELL = "█"
EMPTY_CELL = "░"


def render_bar(
    filled_segments: int,
    segment_count: int,
    filled_char: str = FILLED_CELL,
    empty_char: str = EMPTY_CELL
) -> str:
    """
    Draws a segmented progress bar.

    Exactly segment_count cells are drawn; a filled count above the bar
    size fills every cell.

    Args:
        filled_segments: Number of filled cells (may exceed segment_count).
        segment_count: Total cells.
        filled_char: Character for a filled cell.
        empty_char: Character for an empty cell.

    Returns:
        Bar string of length segment_count.
    """
    return "".join(
        filled_char if index < filled_segments else empty_char
        for index in range(segment_count)
    )


@dataclass(frozen=True)
class SavingsView:
    """
    Formatted values for display.

    Attributes:
        goal_text: Goal field contents.
        amount_text: Amount field contents.
        current_savings: Balance, two decimals.
        progress_percent: Progress * 100, one decimal.
        remaining: Amount left, two decimals.
        bar: Segmented progress bar.
    """

    goal_text: str
    amount_text: str
    current_savings: str
    progress_percent: str
    remaining: str
    bar: str

    @classmethod
    def from_state(
        cls,
        state: SavingsState,
        segment_count: Optional[int] = None
    ) -> "SavingsView":
        """
        Builds the view model from a state.

        Args:
            state: State to display.
            segment_count: Bar size. Defaults to the state's calculator setting.

        Returns:
            SavingsView with all values formatted.
        """
        snapshot = state.snapshot(segment_count)
        return cls(
            goal_text=snapshot.goal_text,
            amount_text=snapshot.pending_amount_text,
            current_savings=f"{snapshot.current_savings:.2f}",
            progress_percent=f"{snapshot.progress * 100:.1f}",
            remaining=f"{snapshot.remaining:.2f}",
            bar=render_bar(snapshot.filled_segments, snapshot.segment_count),
        )


class ConsoleRenderer:
    """
    Renders a SavingsView as plain text lines.

    Example:
        >>> renderer = ConsoleRenderer()
        >>> print(renderer.render(SavingsView.from_state(state)))
    """

    TITLE = "Money Goal Tracker"
    WIDTH = 40

    def render_lines(self, view: SavingsView) -> List[str]:
        """Returns the screen as a list of lines."""
        goal = view.goal_text or "(not set)"
        return [
            "=" * self.WIDTH,
            f"  {self.TITLE}",
            "=" * self.WIDTH,
            f"  Goal:            {goal}",
            f"  Amount:          {view.amount_text}",
            "  " + "-" * (self.WIDTH - 4),
            f"  [{view.bar}]",
            f"  Current Savings: {view.current_savings}",
            f"  {view.progress_percent} % of your goal achieved",
            f"  {view.remaining} left to reach the goal",
            "=" * self.WIDTH,
        ]

    def render(self, view: SavingsView) -> str:
        """Returns the screen as a single string."""
        return "\n".join(self.render_lines(view))
