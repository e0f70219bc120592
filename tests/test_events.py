"""
Savings Tracker - User Events Tests.

Unit tests for UserEvent and dispatch_event.
Tests ensure each front-end intent reaches the right state operation.
"""

import pytest

from savings_tracker.events import EventType, UserEvent, dispatch_event
from savings_tracker.schema import CURRENT_SAVINGS_KEY, GOAL_KEY, OperationResult
from savings_tracker.state import SavingsState
from savings_tracker.storage import InMemoryStore


class TestDispatchEvent:
    """Unit tests for dispatch_event."""

    def setup_method(self) -> None:
        """Initialise a state with a goal and balance for each test."""
        self.store = InMemoryStore({GOAL_KEY: "1000", CURRENT_SAVINGS_KEY: 100.0})
        self.state = SavingsState(self.store)

    def test_goal_text_changed(self) -> None:
        """Verify a goal edit updates the goal without writing."""
        result = dispatch_event(self.state, UserEvent(EventType.GOAL_TEXT_CHANGED, "2000"))

        assert result is None
        assert self.state.goal_text == "2000"
        assert self.store.write_count == 0

    def test_amount_text_changed(self) -> None:
        """Verify an amount edit fills the amount field."""
        dispatch_event(self.state, UserEvent(EventType.AMOUNT_TEXT_CHANGED, "50"))
        assert self.state.pending_amount_text == "50"

    def test_add_pressed(self) -> None:
        """Verify add uses the amount field."""
        dispatch_event(self.state, UserEvent(EventType.AMOUNT_TEXT_CHANGED, "50"))
        result = dispatch_event(self.state, UserEvent(EventType.ADD_PRESSED))

        assert result is OperationResult.APPLIED
        assert self.state.current_savings == 150.0
        assert self.state.pending_amount_text == ""

    def test_withdraw_pressed(self) -> None:
        """Verify withdraw uses the amount field."""
        dispatch_event(self.state, UserEvent(EventType.AMOUNT_TEXT_CHANGED, "40"))
        result = dispatch_event(self.state, UserEvent(EventType.WITHDRAW_PRESSED))

        assert result is OperationResult.APPLIED
        assert self.state.current_savings == 60.0

    def test_withdraw_pressed_rejected(self) -> None:
        """Verify an overdrawing withdrawal reports and changes nothing."""
        dispatch_event(self.state, UserEvent(EventType.AMOUNT_TEXT_CHANGED, "150"))
        result = dispatch_event(self.state, UserEvent(EventType.WITHDRAW_PRESSED))

        assert result is OperationResult.INSUFFICIENT_FUNDS
        assert self.state.current_savings == 100.0
        assert self.state.pending_amount_text == "150"

    def test_reset_pressed(self) -> None:
        """Verify reset zeroes the balance."""
        result = dispatch_event(self.state, UserEvent(EventType.RESET_PRESSED))

        assert result is None
        assert self.state.current_savings == 0.0
        assert self.store.data[CURRENT_SAVINGS_KEY] == 0.0

    def test_background_tap_has_no_effect(self) -> None:
        """Verify a background tap leaves the state alone."""
        self.state.set_pending_amount("5")
        result = dispatch_event(self.state, UserEvent(EventType.BACKGROUND_TAP))

        assert result is None
        assert self.state.pending_amount_text == "5"
        assert self.state.current_savings == 100.0
        assert self.store.write_count == 0


class TestUserEvent:
    """Unit tests for UserEvent construction."""

    @pytest.mark.parametrize("event_type", [
        EventType.GOAL_TEXT_CHANGED,
        EventType.AMOUNT_TEXT_CHANGED,
    ])
    def test_text_events_require_text(self, event_type: EventType) -> None:
        """Verify text-change events need a payload."""
        with pytest.raises(ValueError, match="requires text"):
            UserEvent(event_type)

    def test_empty_text_allowed(self) -> None:
        """Verify clearing a field is a valid edit."""
        event = UserEvent(EventType.GOAL_TEXT_CHANGED, "")
        assert event.text == ""

    def test_button_events_without_text(self) -> None:
        """Verify button presses need no payload."""
        assert UserEvent(EventType.ADD_PRESSED).text is None
