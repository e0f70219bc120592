"""
Savings Tracker - User Events Module.

This module maps the intents emitted by a front end (text edits and
button presses) onto SavingsState operations.

Classes:
    EventType: Kinds of user intent.
    UserEvent: A single intent with optional text payload.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from savings_tracker.schema import OperationResult
from savings_tracker.state import SavingsState

logger = logging.getLogger(__name__)


class EventType(Enum):
    """
    Kinds of user intent.

    Attributes:
        GOAL_TEXT_CHANGED: The goal field was edited (carries text).
        AMOUNT_TEXT_CHANGED: The amount field was edited (carries text).
        ADD_PRESSED: Add the pending amount.
        WITHDRAW_PRESSED: Withdraw the pending amount.
        RESET_PRESSED: Zero the balance.
        BACKGROUND_TAP: Dismiss input focus; no state effect.
    """

    GOAL_TEXT_CHANGED = "goal_text_changed"
    AMOUNT_TEXT_CHANGED = "amount_text_changed"
    ADD_PRESSED = "add_pressed"
    WITHDRAW_PRESSED = "withdraw_pressed"
    RESET_PRESSED = "reset_pressed"
    BACKGROUND_TAP = "background_tap"


TEXT_EVENTS = frozenset({EventType.GOAL_TEXT_CHANGED, EventType.AMOUNT_TEXT_CHANGED})


@dataclass(frozen=True)
class UserEvent:
    """
    A single user intent.

    Attributes:
        type: Kind of intent.
        text: New field contents for text-change events.
    """

    type: EventType
    text: Optional[str] = None

    def __post_init__(self) -> None:
        if self.type in TEXT_EVENTS and self.text is None:
            raise ValueError(f"{self.type.value} requires text")


def dispatch_event(state: SavingsState, event: UserEvent) -> Optional[OperationResult]:
    """
    Applies a user event to the state.

    Args:
        state: State to update.
        event: Intent to apply.

    Returns:
        The OperationResult for add/withdraw presses, otherwise None.
    """
    logger.debug("Dispatching %s", event.type.value)

    if event.type is EventType.GOAL_TEXT_CHANGED:
        state.set_goal(event.text)
    elif event.type is EventType.AMOUNT_TEXT_CHANGED:
        state.set_pending_amount(event.text)
    elif event.type is EventType.ADD_PRESSED:
        return state.add()
    elif event.type is EventType.WITHDRAW_PRESSED:
        return state.withdraw()
    elif event.type is EventType.RESET_PRESSED:
        state.reset()

    return None
