"""
Savings Tracker - Savings State Module.

This module holds the single state object behind the tracker: the goal
text, the running balance and the pending amount field. Balance
mutations persist immediately; goal edits are kept in memory until the
next explicit save or balance mutation.

Failed operations are silent: they leave the state untouched and report
the reason only through the returned OperationResult.

Classes:
    SavingsState: Savings goal, balance and their update rules.
"""

import logging
import math
from typing import Optional

from savings_tracker.calculator import ProgressCalculator
from savings_tracker.schema import (
    CURRENT_SAVINGS_KEY,
    DEFAULT_CURRENT_SAVINGS,
    DEFAULT_GOAL_TEXT,
    GOAL_KEY,
    OperationResult,
    SavingsSnapshot,
)
from savings_tracker.storage import PersistenceStore
from savings_tracker.validator import AmountParser

logger = logging.getLogger(__name__)


class SavingsState:
    """
    Savings goal, running balance and pending input.

    The balance is never negative: withdrawals (or negative deposits)
    that would overdraw it are rejected without changing anything.

    Attributes:
        calculator: ProgressCalculator used for derived values.

    Example:
        >>> from savings_tracker.storage import InMemoryStore
        >>> state = SavingsState(InMemoryStore())
        >>> state.set_goal("1000")
        >>> state.add("250")
        <OperationResult.APPLIED: 'APPLIED'>
        >>> state.progress()
        0.25
    """

    def __init__(
        self,
        store: PersistenceStore,
        calculator: Optional[ProgressCalculator] = None,
        parser: Optional[AmountParser] = None
    ):
        """
        Initialises the state from the store.

        Args:
            store: Key-value store to load from and persist to.
            calculator: Progress calculator. Defaults to a 10-segment one.
            parser: Amount parser. Defaults to AmountParser().
        """
        self._store = store
        self.calculator = calculator or ProgressCalculator()
        self._parser = parser or AmountParser()

        self._goal_text = store.load_string(GOAL_KEY, DEFAULT_GOAL_TEXT)
        self._current_savings = self._load_balance()
        self._pending_amount_text = ""

    def _load_balance(self) -> float:
        balance = self._store.load_float(CURRENT_SAVINGS_KEY, DEFAULT_CURRENT_SAVINGS)
        if balance < 0:
            logger.warning(
                "Discarding negative stored balance %s; starting from %s",
                balance,
                DEFAULT_CURRENT_SAVINGS
            )
            return DEFAULT_CURRENT_SAVINGS
        return balance

    @property
    def goal_text(self) -> str:
        """Raw goal text as entered."""
        return self._goal_text

    @property
    def goal_value(self) -> Optional[float]:
        """Goal parsed as a number, or None if the text does not parse."""
        return self._parser.parse(self._goal_text)

    @property
    def current_savings(self) -> float:
        """Running balance."""
        return self._current_savings

    @property
    def pending_amount_text(self) -> str:
        """Contents of the amount field."""
        return self._pending_amount_text

    def set_goal(self, text: str) -> None:
        """
        Replaces the goal text verbatim.

        The goal is not validated and not persisted here; call save()
        to commit it.

        Args:
            text: New goal text.
        """
        self._goal_text = text

    def set_pending_amount(self, text: str) -> None:
        """Replaces the contents of the amount field."""
        self._pending_amount_text = text

    def add(self, amount_text: Optional[str] = None) -> OperationResult:
        """
        Adds an amount to the balance.

        Args:
            amount_text: Amount to add. Defaults to the pending amount.

        Returns:
            APPLIED on success, INVALID_AMOUNT if the text does not
            parse or the balance would overflow, INSUFFICIENT_FUNDS if a
            negative amount would overdraw the balance.
        """
        if amount_text is None:
            amount_text = self._pending_amount_text

        amount = self._parser.parse(amount_text)
        if amount is None:
            logger.debug("Add ignored: %r is not a number", amount_text)
            return OperationResult.INVALID_AMOUNT

        new_balance = self._current_savings + amount
        if not math.isfinite(new_balance):
            logger.debug("Add ignored: %s would overflow %s", amount, self._current_savings)
            return OperationResult.INVALID_AMOUNT
        if new_balance < 0:
            logger.debug("Add ignored: %s would overdraw %s", amount, self._current_savings)
            return OperationResult.INSUFFICIENT_FUNDS

        self._apply_balance(new_balance)
        return OperationResult.APPLIED

    def withdraw(self, amount_text: Optional[str] = None) -> OperationResult:
        """
        Withdraws an amount from the balance.

        Args:
            amount_text: Amount to withdraw. Defaults to the pending amount.

        Returns:
            APPLIED on success, INVALID_AMOUNT if the text does not
            parse or the balance would overflow, INSUFFICIENT_FUNDS if
            the balance would go negative.
        """
        if amount_text is None:
            amount_text = self._pending_amount_text

        amount = self._parser.parse(amount_text)
        if amount is None:
            logger.debug("Withdraw ignored: %r is not a number", amount_text)
            return OperationResult.INVALID_AMOUNT

        new_balance = self._current_savings - amount
        if not math.isfinite(new_balance):
            logger.debug("Withdraw ignored: %s would overflow %s", amount, self._current_savings)
            return OperationResult.INVALID_AMOUNT
        if new_balance < 0:
            logger.debug("Withdraw ignored: %s exceeds %s", amount, self._current_savings)
            return OperationResult.INSUFFICIENT_FUNDS

        self._apply_balance(new_balance)
        return OperationResult.APPLIED

    def reset(self) -> None:
        """Sets the balance to zero and persists. The goal is kept."""
        self._current_savings = DEFAULT_CURRENT_SAVINGS
        self.save()

    def save(self) -> None:
        """Persists the goal text and balance in one store write."""
        self._store.save_many({
            GOAL_KEY: self._goal_text,
            CURRENT_SAVINGS_KEY: self._current_savings,
        })

    def _apply_balance(self, new_balance: float) -> None:
        self._current_savings = new_balance
        self._pending_amount_text = ""
        self.save()

    def progress(self) -> float:
        """Unclamped ratio of balance to goal; 0.0 without a positive goal."""
        return self.calculator.calculate_progress(self.goal_value, self._current_savings)

    def remaining(self) -> float:
        """Amount still needed to reach the goal; 0.0 if the goal does not parse."""
        return self.calculator.calculate_remaining(self.goal_value, self._current_savings)

    def filled_segments(self, segment_count: Optional[int] = None) -> int:
        """Filled cells of a bar with segment_count cells. Not clamped."""
        return self.calculator.calculate_filled_segments(
            self.goal_value,
            self._current_savings,
            segment_count
        )

    def snapshot(self, segment_count: Optional[int] = None) -> SavingsSnapshot:
        """
        Captures the state and its derived values.

        Args:
            segment_count: Bar size. Defaults to the calculator's setting.

        Returns:
            Immutable SavingsSnapshot.
        """
        if segment_count is None:
            segment_count = self.calculator.segment_count

        return SavingsSnapshot(
            goal_text=self._goal_text,
            goal_value=self.goal_value,
            current_savings=self._current_savings,
            pending_amount_text=self._pending_amount_text,
            progress=self.progress(),
            remaining=self.remaining(),
            filled_segments=self.filled_segments(segment_count),
            segment_count=segment_count,
        )
