"""
Command parser for the Banker's Algorithm Simulator.

Grammar (keywords are case-insensitive):
    RQ <customer> <r0> ... <rN>    request resources
    RL <customer> <r0> ... <rN>    release resources
    *                              display ledger state
    SAFE                           run the safety check
    EXIT | QUIT                    end the session
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from models.errors import CommandParseError


class CommandType(Enum):
    """Kinds of session commands."""
    REQUEST = "RQ"
    RELEASE = "RL"
    DISPLAY = "*"
    SAFE = "SAFE"
    EXIT = "EXIT"


_KEYWORDS = {
    "RQ": CommandType.REQUEST,
    "RL": CommandType.RELEASE,
    "*": CommandType.DISPLAY,
    "SAFE": CommandType.SAFE,
    "EXIT": CommandType.EXIT,
    "QUIT": CommandType.EXIT,
}


@dataclass
class Command:
    """
    A parsed session command.

    Attributes:
        command_type: What to do
        customer: Customer index (RQ/RL only)
        vector: [R] Units to request or release (RQ/RL only)
    """
    command_type: CommandType
    customer: int = -1
    vector: List[int] = field(default_factory=list)


def parse_command(line: str, num_resources: int) -> Command:
    """
    Parse one input line.

    Args:
        line: Raw input line
        num_resources: Number of resource classes (values expected after the customer)

    Returns:
        Parsed Command

    Raises:
        CommandParseError: If the line is empty, the keyword is unknown, or
            the arguments are missing or not integers
    """
    tokens = line.split()
    if not tokens:
        raise CommandParseError("Empty command")

    keyword = tokens[0].upper()
    if keyword not in _KEYWORDS:
        raise CommandParseError(
            f"Unknown command '{tokens[0]}' (expected RQ, RL, *, SAFE or EXIT)"
        )

    command_type = _KEYWORDS[keyword]
    args = tokens[1:]

    if command_type not in (CommandType.REQUEST, CommandType.RELEASE):
        if args:
            raise CommandParseError(f"'{tokens[0]}' takes no arguments")
        return Command(command_type)

    if len(args) != num_resources + 1:
        raise CommandParseError(
            f"Usage: {command_type.value} <customer> followed by {num_resources} "
            f"values (got {len(args)} arguments)"
        )

    try:
        values = [int(arg) for arg in args]
    except ValueError:
        raise CommandParseError(f"Arguments must be integers: {' '.join(args)}")

    return Command(command_type, customer=values[0], vector=values[1:])
