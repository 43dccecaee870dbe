"""
Error types for the Banker's Algorithm Simulator.

Denials that leave the ledger untouched (exceeds need, insufficient available,
unsafe state, exceeds allocation) are reported as outcomes, not raised.
"""


class BankerError(Exception):
    """Base class for all simulator errors."""
    pass


class ConfigurationError(BankerError):
    """Raised when the initial setup (totals, maximum, allocation) is malformed."""
    pass


class MatrixLoadError(ConfigurationError):
    """Raised when a maximum-demand matrix file cannot be read or parsed."""
    pass


class InvalidConsumerIndex(BankerError):
    """Raised when a customer index is outside [0, num_customers)."""

    def __init__(self, customer: int, num_customers: int):
        self.customer = customer
        self.num_customers = num_customers
        super().__init__(
            f"Invalid customer index {customer} "
            f"(valid range: 0..{num_customers - 1})"
        )


class InvalidVectorError(BankerError):
    """Raised when a request/release vector has the wrong length or negative entries."""
    pass


class CommandParseError(BankerError):
    """Raised when an interactive command cannot be parsed."""
    pass
