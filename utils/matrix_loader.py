"""
Maximum Matrix Loader for the Banker's Algorithm Simulator.

Reads the maximum-demand matrix: one row per customer, integers separated
by commas and/or whitespace. Blank lines are ignored.
"""

import re
from typing import List, Optional

from models.errors import MatrixLoadError


_SEPARATOR = re.compile(r"\s*,\s*|\s+")


def load_maximum(
    file_path: str,
    num_resources: int,
    num_customers: Optional[int] = None
) -> List[List[int]]:
    """
    Load the maximum-demand matrix from a text file.

    Args:
        file_path: Path to the matrix file
        num_resources: Expected number of entries per row
        num_customers: Expected number of rows (not checked when None)

    Returns:
        Matrix as a list of rows

    Raises:
        MatrixLoadError: If the file cannot be read or is malformed
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            text = f.read()
    except FileNotFoundError:
        raise MatrixLoadError(f"Maximum matrix file not found: {file_path}")
    except OSError as e:
        raise MatrixLoadError(f"Cannot read maximum matrix file {file_path}: {e}")

    return parse_maximum(text, num_resources, num_customers)


def parse_maximum(
    text: str,
    num_resources: int,
    num_customers: Optional[int] = None
) -> List[List[int]]:
    """
    Parse the maximum-demand matrix from text.

    Args:
        text: File contents
        num_resources: Expected number of entries per row
        num_customers: Expected number of rows (not checked when None)

    Returns:
        Matrix as a list of rows

    Raises:
        MatrixLoadError: If a row has the wrong length or a non-integer/negative value
    """
    matrix = []

    for line_no, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped:
            continue

        row = [_parse_value(token, line_no) for token in _SEPARATOR.split(stripped)]

        if len(row) != num_resources:
            raise MatrixLoadError(
                f"Line {line_no}: expected {num_resources} values, found {len(row)}"
            )
        matrix.append(row)

    if not matrix:
        raise MatrixLoadError("Maximum matrix is empty")

    if num_customers is not None and len(matrix) != num_customers:
        raise MatrixLoadError(
            f"Expected {num_customers} customer rows, found {len(matrix)}"
        )

    return matrix


def _parse_value(token: str, line_no: int) -> int:
    """Parse one matrix entry."""
    if not token:
        raise MatrixLoadError(f"Line {line_no}: empty field")
    try:
        value = int(token)
    except ValueError:
        raise MatrixLoadError(f"Line {line_no}: '{token}' is not an integer")
    if value < 0:
        raise MatrixLoadError(f"Line {line_no}: negative value {value}")
    return value
