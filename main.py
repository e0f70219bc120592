"""
Savings Tracker - Main Entry Point.

Records a savings goal and running balance, and shows progress towards
the goal as a segmented bar.

Usage:
    python main.py [options] show
    python main.py [options] goal <text>
    python main.py [options] add <amount>
    python main.py [options] withdraw <amount>
    python main.py [options] reset
    python main.py [options] interactive

Example:
    python main.py goal 1000
    python main.py add 250
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from pydantic import ValidationError

from savings_tracker import __version__
from savings_tracker.calculator import ProgressCalculator
from savings_tracker.config import LOG_LEVELS, Settings
from savings_tracker.events import EventType, UserEvent, dispatch_event
from savings_tracker.renderer import ConsoleRenderer, SavingsView
from savings_tracker.schema import OperationResult
from savings_tracker.state import SavingsState
from savings_tracker.storage import JsonFileStore

logger = logging.getLogger(__name__)

PROMPT = "> "

INTERACTIVE_HELP = """\
  Commands:
    goal <text>        Set the savings goal
    amount <text>      Fill in the amount field
    add [amount]       Add the amount to your savings
    withdraw [amount]  Withdraw the amount from your savings
    reset              Set your savings back to zero
    tap                Dismiss the input field
    show               Redraw the screen
    help               Show this help
    quit               Save and exit"""


def print_screen(state: SavingsState, segment_count: int) -> None:
    """Prints the current screen."""
    view = SavingsView.from_state(state, segment_count)
    print(ConsoleRenderer().render(view))


def print_rejection(result: OperationResult, amount_text: str) -> None:
    """
    Prints a one-line explanation for a rejected operation.

    Args:
        result: Non-applied operation result.
        amount_text: The amount text that was rejected.
    """
    if result is OperationResult.INVALID_AMOUNT:
        print(f"  ❌ '{amount_text}' is not a valid amount")
    elif result is OperationResult.INSUFFICIENT_FUNDS:
        print(f"  ❌ Not enough savings for that change ({amount_text})")


def apply_event(
    state: SavingsState,
    event: UserEvent,
    strict: bool
) -> Optional[OperationResult]:
    """
    Dispatches an event and reports a rejection when strict.

    Args:
        state: State to update.
        event: Event to apply.
        strict: Whether rejected operations are reported.

    Returns:
        OperationResult for add/withdraw events, otherwise None.
    """
    amount_text = state.pending_amount_text
    result = dispatch_event(state, event)

    if result is not None and not result.applied and strict:
        print_rejection(result, amount_text)

    return result


def run_interactive(
    state: SavingsState,
    segment_count: int,
    strict: bool,
    lines: Optional[Iterable[str]] = None
) -> int:
    """
    Runs a line-oriented session that mirrors the single-screen app.

    Args:
        state: State to operate on.
        segment_count: Bar size.
        strict: Whether rejected operations are reported.
        lines: Input lines. Defaults to standard input.

    Returns:
        Exit code.
    """
    stream = iter(lines if lines is not None else sys.stdin)

    print_screen(state, segment_count)
    print("  Type 'help' for commands.")

    while True:
        print(PROMPT, end="", flush=True)
        try:
            raw = next(stream)
        except StopIteration:
            print()
            break

        command, _, argument = raw.strip().partition(" ")
        command = command.lower()
        argument = argument.strip()

        if not command:
            continue
        if command in ("quit", "exit"):
            break
        if command == "help":
            print(INTERACTIVE_HELP)
            continue
        if command == "show":
            print_screen(state, segment_count)
            continue

        if command == "goal":
            apply_event(state, UserEvent(EventType.GOAL_TEXT_CHANGED, argument), strict)
            state.save()
        elif command == "amount":
            apply_event(state, UserEvent(EventType.AMOUNT_TEXT_CHANGED, argument), strict)
        elif command in ("add", "withdraw"):
            if argument:
                apply_event(state, UserEvent(EventType.AMOUNT_TEXT_CHANGED, argument), strict)
            event_type = EventType.ADD_PRESSED if command == "add" else EventType.WITHDRAW_PRESSED
            apply_event(state, UserEvent(event_type), strict)
        elif command == "reset":
            apply_event(state, UserEvent(EventType.RESET_PRESSED), strict)
        elif command == "tap":
            apply_event(state, UserEvent(EventType.BACKGROUND_TAP), strict)
            continue
        else:
            print(f"  Unknown command: {command}. Type 'help' for commands.")
            continue

        print_screen(state, segment_count)

    state.save()
    print("  Savings saved. Goodbye!")
    return 0


def run_command(
    state: SavingsState,
    args: argparse.Namespace,
    settings: Settings
) -> int:
    """
    Executes a single subcommand.

    Args:
        state: State to operate on.
        args: Parsed command-line arguments.
        settings: Effective settings.

    Returns:
        Exit code (0 for success, 1 for a rejected operation in strict mode).
    """
    command = args.command or "show"
    segment_count = settings.segment_count

    if command == "interactive":
        return run_interactive(state, segment_count, settings.strict)

    result: Optional[OperationResult] = None

    if command == "goal":
        dispatch_event(state, UserEvent(EventType.GOAL_TEXT_CHANGED, args.text))
        state.save()
    elif command in ("add", "withdraw"):
        dispatch_event(state, UserEvent(EventType.AMOUNT_TEXT_CHANGED, args.amount))
        event_type = EventType.ADD_PRESSED if command == "add" else EventType.WITHDRAW_PRESSED
        result = apply_event(state, UserEvent(event_type), settings.strict)
    elif command == "reset":
        dispatch_event(state, UserEvent(EventType.RESET_PRESSED))

    print_screen(state, segment_count)

    if result is not None and not result.applied and settings.strict:
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Builds the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Savings Tracker - track progress towards a savings goal"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="JSON file holding the goal and balance "
             "(default: ~/.savings_tracker/savings.json)"
    )
    parser.add_argument(
        "--segments",
        type=int,
        default=None,
        help="Number of cells in the progress bar (default: 10)"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Report rejected amounts and exit with status 1"
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("show", help="Show the current savings screen")

    goal_parser = subparsers.add_parser("goal", help="Set the savings goal")
    goal_parser.add_argument("text", help="Goal amount")

    add_parser = subparsers.add_parser("add", help="Add to your savings")
    add_parser.add_argument("amount", help="Amount to add")

    withdraw_parser = subparsers.add_parser("withdraw", help="Withdraw from your savings")
    withdraw_parser.add_argument("amount", help="Amount to withdraw")

    subparsers.add_parser("reset", help="Set your savings back to zero")
    subparsers.add_parser("interactive", help="Start an interactive session")

    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """
    Loads settings, letting command-line options override the environment.

    Raises:
        pydantic.ValidationError: If a setting is invalid.
    """
    overrides = {
        "data_file": args.data_file,
        "segment_count": args.segments,
        "strict": args.strict,
        "log_level": args.log_level,
    }
    return Settings(**{key: value for key, value in overrides.items() if value is not None})


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments. Defaults to sys.argv[1:].

    Returns:
        Exit code.
    """
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except ValidationError as e:
        print(f"  ❌ ERROR: Invalid configuration: {e}")
        return 1

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.debug("Using data file %s", settings.data_file)

    store = JsonFileStore(settings.data_file)
    state = SavingsState(store, ProgressCalculator(settings.segment_count))

    try:
        return run_command(state, args, settings)
    except OSError as e:
        print(f"  ❌ ERROR: Could not save to {settings.data_file}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
