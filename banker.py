#!/usr/bin/env python3
"""
Banker's Algorithm Simulator
Main entry point: loads the configuration and runs the command session.

Educational tool for demonstrating deadlock avoidance.
"""

import argparse
import sys
from typing import Iterable, Iterator, List, Optional

from models.errors import BankerError, ConfigurationError
from models.ledger import ResourceLedger
from utils.matrix_loader import load_maximum
from utils.logger import SimulatorLogger
from utils.commands import CommandType, parse_command
from algorithms.avoidance import find_safe_sequence, request_resources, release_resources
from analysis.events import EventLog, SessionEvent, EventType


PROMPT = "Enter command (RQ, RL, *, SAFE, EXIT): "


def run_session(
    ledger: ResourceLedger,
    lines: Iterable[str],
    logger: SimulatorLogger,
    event_log: Optional[EventLog] = None
) -> EventLog:
    """
    Apply commands to the ledger until input ends or EXIT is read.

    Each command runs to completion before the next is read. Errors in a
    single command are logged and the session continues.

    Args:
        ledger: Ledger to operate on
        lines: Command lines (a file, a list, or interactive input)
        logger: Logger for decisions and state
        event_log: Log to append to (a new one is created when None)

    Returns:
        EventLog containing one event per request/release/error
    """
    if event_log is None:
        event_log = EventLog()

    seq = 0
    for line in lines:
        if not line.strip() or line.lstrip().startswith("#"):
            continue

        seq += 1
        logger.log(f"> {line.strip()}", "debug")

        try:
            command = parse_command(line, ledger.num_resources)

            if command.command_type == CommandType.EXIT:
                break

            if command.command_type == CommandType.DISPLAY:
                logger.log_state(ledger.display())
                continue

            if command.command_type == CommandType.SAFE:
                logger.log_safety(find_safe_sequence(ledger))
                continue

            if command.command_type == CommandType.REQUEST:
                outcome = request_resources(ledger, command.customer, command.vector)
                logger.log_request(outcome)
            else:
                outcome = release_resources(ledger, command.customer, command.vector)
                logger.log_release(outcome)

            event_log.add(SessionEvent.from_outcome(seq, outcome))
            logger.log_vector("Available now", ledger.available.tolist())

        except BankerError as e:
            logger.log(str(e), "error")
            event_log.add(SessionEvent(seq=seq, event_type=EventType.ERROR, message=str(e)))

    return event_log


def _interactive_lines() -> Iterator[str]:
    """Yield lines typed at the prompt until EOF."""
    while True:
        try:
            yield input(PROMPT)
        except EOFError:
            return


def _display_initial_state(ledger: ResourceLedger, logger: SimulatorLogger) -> None:
    """Display initial available resources, maximum and allocation matrices."""
    logger.log("Initial available resources:")
    for r, units in enumerate(ledger.available):
        logger.log(f"  Resource {r}: {units}")

    logger.log("\nMaximum resource matrix:")
    for c, row in enumerate(ledger.maximum_matrix):
        logger.log(f"  Customer {c}: {' '.join(str(v) for v in row)}")

    logger.log("\nInitial allocation matrix:")
    for c, row in enumerate(ledger.allocation_matrix):
        logger.log(f"  Customer {c}: {' '.join(str(v) for v in row)}")

    sequence = find_safe_sequence(ledger)
    if sequence is None:
        logger.log("Initial state is UNSAFE: some customer can never reach its maximum", "warning")
    else:
        logger.log_safety(sequence)


def _display_statistics(event_log: EventLog, logger: SimulatorLogger) -> None:
    """Display final session statistics."""
    summary = event_log.summary()

    logger.log("\nSession Statistics:")
    logger.log(f"  Requests Granted: {summary['granted']}")
    logger.log(f"  Requests Denied: {summary['denied']}")
    for key in sorted(k for k in summary if k.startswith("denied:")):
        logger.log(f"    {key.split(':', 1)[1]}: {summary[key]}")
    logger.log(f"  Releases: {summary['released']}")
    logger.log(f"  Releases Rejected: {summary['rejected']}")
    logger.log(f"  Errors: {summary['error']}")


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="Banker's Algorithm deadlock avoidance simulator"
    )
    parser.add_argument(
        'total_units',
        type=int,
        nargs='+',
        help='Total units of each resource class (one integer per class)'
    )
    parser.add_argument(
        '--maximum',
        type=str,
        default='maximum.txt',
        help='Path to the maximum demand matrix file (default: maximum.txt)'
    )
    parser.add_argument(
        '--customers',
        type=int,
        default=None,
        help='Expected number of customers (rows in the maximum file)'
    )
    parser.add_argument(
        '--commands',
        type=str,
        default=None,
        help='Read commands from this file instead of the interactive prompt'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write the session log to this file'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the simulator."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.customers is not None and args.customers <= 0:
        parser.error('--customers must be positive')

    logger = SimulatorLogger(verbose=args.verbose, log_file=args.log_file)

    try:
        try:
            maximum = load_maximum(args.maximum, len(args.total_units), args.customers)
            ledger = ResourceLedger(args.total_units, maximum, num_customers=args.customers)
        except ConfigurationError as e:
            logger.log(f"Invalid configuration: {e}", "error")
            return 1

        _display_initial_state(ledger, logger)

        if args.commands:
            try:
                with open(args.commands, 'r', encoding='utf-8') as f:
                    event_log = run_session(ledger, f, logger)
            except OSError as e:
                logger.log(f"Cannot read commands file: {e}", "error")
                return 1
        else:
            event_log = run_session(ledger, _interactive_lines(), logger)

        _display_statistics(event_log, logger)
        return 0
    finally:
        logger.close()


if __name__ == '__main__':
    sys.exit(main())
