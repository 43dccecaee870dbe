"""
Logger utility for the Banker's Algorithm Simulator.

Provides per-command logging with verbosity levels.
"""

from typing import List, Optional, Sequence
from datetime import datetime

from algorithms.avoidance import Outcome


class SimulatorLogger:
    """
    Logger for session commands and decisions.

    Format: "C1 requests [0, 4, 2, 0] - GRANTED (reason)"
    """

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None):
        """
        Initialize logger.

        Args:
            verbose: Enable verbose output
            log_file: Optional file path for logging
        """
        self.verbose = verbose
        self.log_file = log_file
        self.file_handle = None

        if self.log_file:
            self.file_handle = open(self.log_file, 'w', encoding='utf-8')
            self._write_header()

    def _write_header(self) -> None:
        """Write log file header."""
        if self.file_handle:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            self.file_handle.write(f"Banker Session Log - {timestamp}\n")
            self.file_handle.write("="*60 + "\n\n")

    def log(self, message: str, level: str = "info") -> None:
        """
        Log a message.

        Args:
            message: Message to log
            level: Log level (info, debug, warning, error)
        """
        if level == "debug" and not self.verbose:
            return

        formatted = self._format_message(message, level)

        print(formatted)

        if self.file_handle:
            self.file_handle.write(formatted + "\n")
            self.file_handle.flush()

    def _format_message(self, message: str, level: str) -> str:
        """Format message with level prefix."""
        if level == "error":
            return f"[ERROR] {message}"
        elif level == "warning":
            return f"[WARNING] {message}"
        elif level == "debug":
            return f"[DEBUG] {message}"
        else:
            return message

    def log_request(self, outcome: Outcome) -> None:
        """
        Log the decision for a resource request.

        Args:
            outcome: Result returned by request_resources
        """
        message = (
            f"C{outcome.customer} requests {outcome.vector} - "
            f"{outcome.decision.value} ({outcome.message})"
        )
        self.log(message, "info" if outcome.succeeded else "warning")

    def log_release(self, outcome: Outcome) -> None:
        """
        Log the decision for a resource release.

        Args:
            outcome: Result returned by release_resources
        """
        message = (
            f"C{outcome.customer} releases {outcome.vector} - "
            f"{outcome.decision.value} ({outcome.message})"
        )
        self.log(message, "info" if outcome.succeeded else "warning")

    def log_safety(self, sequence: Optional[Sequence[int]]) -> None:
        """Log the result of a safety check."""
        if sequence is None:
            self.log("System is in an UNSAFE state", "warning")
        else:
            seq_str = " -> ".join(f"C{c}" for c in sequence)
            self.log(f"System is in a SAFE state (sequence: {seq_str})")

    def log_vector(self, label: str, values: List[int]) -> None:
        """Log a labelled vector, debug level."""
        self.log(f"  {label}: {values}", "debug")

    def log_state(self, state_str: str) -> None:
        """
        Log a ledger snapshot.

        Args:
            state_str: Formatted ledger state
        """
        self.log(state_str)

    def close(self) -> None:
        """Close log file if open."""
        if self.file_handle:
            self.file_handle.close()
            self.file_handle = None

    def __del__(self):
        """Cleanup on destruction."""
        self.close()
