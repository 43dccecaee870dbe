"""
Resource Ledger for the Banker's Algorithm Simulator.

Holds the state the safety algorithm reasons about: available units per
resource class, each customer's declared maximum, current allocation and the
derived remaining need.
"""

import numpy as np
from typing import Dict, List, Optional, Sequence

from models.errors import ConfigurationError, InvalidConsumerIndex, InvalidVectorError


class ResourceLedger:
    """
    Allocation state for a fixed population of customers and resource classes.

    Attributes:
        available: [R] Free units of each resource class
        total: [R] Total supply of each resource class (constant)
        maximum_matrix: [C][R] Maximum demand declared by each customer (constant)
        allocation_matrix: [C][R] Units currently held by each customer
        need_matrix: [C][R] Computed as Max - Allocation

    Invariants:
        0 <= allocation <= maximum
        need == maximum - allocation
        available + allocation.sum(axis=0) == total
        available >= 0

    Need is never stored. It is derived from maximum - allocation on every
    read so the two cannot drift apart.
    """

    def __init__(
        self,
        total_units: Sequence[int],
        maximum: Sequence[Sequence[int]],
        allocation: Optional[Sequence[Sequence[int]]] = None,
        num_customers: Optional[int] = None
    ):
        """
        Initialize the ledger: available = total_units - initial allocation.

        Args:
            total_units: [R] Total supply of each resource class
            maximum: [C][R] Maximum demand of each customer
            allocation: Optional [C][R] allocation held at start-up (default all zero)
            num_customers: Optional expected customer count, checked against maximum

        Raises:
            ConfigurationError: On negative values or mismatched dimensions
        """
        self._total = _to_vector(total_units, "total_units")
        num_resources = len(self._total)
        if num_resources == 0:
            raise ConfigurationError("At least one resource class is required")

        self._maximum = _to_matrix(maximum, num_resources, "maximum")
        rows = self._maximum.shape[0]

        if num_customers is not None and rows != num_customers:
            raise ConfigurationError(
                f"maximum has {rows} rows but {num_customers} customers were declared"
            )

        if allocation is None:
            self._allocation = np.zeros((rows, num_resources), dtype=int)
        else:
            self._allocation = _to_matrix(allocation, num_resources, "allocation")
            if self._allocation.shape[0] != rows:
                raise ConfigurationError(
                    f"allocation has {self._allocation.shape[0]} rows, "
                    f"maximum has {rows}"
                )
            _validate_initial_allocation(self._allocation, self._maximum, self._total)

        self._available = self._total - self._allocation.sum(axis=0)

    @property
    def num_customers(self) -> int:
        """Number of customers in the system."""
        return self._maximum.shape[0]

    @property
    def num_resources(self) -> int:
        """Number of resource classes in the system."""
        return len(self._total)

    @property
    def available(self) -> np.ndarray:
        """Copy of the available vector [R]."""
        return self._available.copy()

    @property
    def total(self) -> np.ndarray:
        """Copy of the total units vector [R]."""
        return self._total.copy()

    @property
    def maximum_matrix(self) -> np.ndarray:
        """Copy of the maximum demand matrix [C][R]."""
        return self._maximum.copy()

    @property
    def allocation_matrix(self) -> np.ndarray:
        """Copy of the allocation matrix [C][R]."""
        return self._allocation.copy()

    @property
    def need_matrix(self) -> np.ndarray:
        """
        Need matrix [C][R].
        Computed as: Need = Max - Allocation
        """
        return self._maximum - self._allocation

    def maximum_of(self, customer: int) -> np.ndarray:
        self.check_customer(customer)
        return self._maximum[customer].copy()

    def allocation_of(self, customer: int) -> np.ndarray:
        self.check_customer(customer)
        return self._allocation[customer].copy()

    def need_of(self, customer: int) -> np.ndarray:
        self.check_customer(customer)
        return self._maximum[customer] - self._allocation[customer]

    def check_customer(self, customer: int) -> None:
        """
        Raises:
            InvalidConsumerIndex: If customer is outside [0, num_customers)
        """
        if isinstance(customer, bool) or not isinstance(customer, (int, np.integer)):
            raise InvalidConsumerIndex(customer, self.num_customers)
        if customer < 0 or customer >= self.num_customers:
            raise InvalidConsumerIndex(customer, self.num_customers)

    def check_vector(self, vector: Sequence[int], name: str = "vector") -> np.ndarray:
        """
        Convert a request/release vector to an int array of length R.

        Raises:
            InvalidVectorError: If the length is wrong or any entry is negative
        """
        try:
            values = _to_vector(vector, name)
        except ConfigurationError as e:
            raise InvalidVectorError(str(e)) from e
        if len(values) != self.num_resources:
            raise InvalidVectorError(
                f"{name} has {len(values)} entries, expected {self.num_resources}"
            )
        return values

    def apply_delta(self, customer: int, delta: Sequence[int]) -> None:
        """
        Move units between available and a customer's allocation.

        Adds delta to allocation[customer] and subtracts it from available.
        Bounds are NOT checked: the caller validates before calling and undoes
        a tentative change by applying the negated delta.

        Args:
            customer: Customer index
            delta: [R] Signed change to the customer's allocation
        """
        self.check_customer(customer)
        delta = np.asarray(delta, dtype=int)
        if delta.shape != (self.num_resources,):
            raise InvalidVectorError(
                f"delta has shape {delta.shape}, expected ({self.num_resources},)"
            )

        # Compute both rows before writing so a failure cannot leave half an update
        new_allocation = self._allocation[customer] + delta
        new_available = self._available - delta
        self._allocation[customer] = new_allocation
        self._available = new_available

    def snapshot(self) -> Dict[str, np.ndarray]:
        """
        Capture the full observable state for exact comparison.

        Returns:
            Dictionary of copied arrays
        """
        return {
            'available': self.available,
            'maximum': self.maximum_matrix,
            'allocation': self.allocation_matrix,
            'need': self.need_matrix,
        }

    def matches(self, snapshot: Dict[str, np.ndarray]) -> bool:
        """True if the current state is identical to a previous snapshot()."""
        current = self.snapshot()
        return all(np.array_equal(current[key], snapshot[key]) for key in current)

    def display(self) -> str:
        """
        Generate readable string representation of the ledger.

        Returns:
            Formatted string showing available and all matrices
        """
        header = "        " + " ".join([f"R{i:<3}" for i in range(self.num_resources)])

        def _rows(matrix: np.ndarray) -> List[str]:
            return [
                f"  C{c:<3}: " + " ".join([f"{matrix[c][r]:<4}" for r in range(self.num_resources)])
                for c in range(self.num_customers)
            ]

        output = []
        output.append("\n" + "="*60)
        output.append("LEDGER STATE")
        output.append("="*60)

        output.append("\nAvailable Resources:")
        output.append(header)
        output.append("        " + " ".join([f"{v:<4}" for v in self._available]))

        output.append("\nMaximum Matrix:")
        output.append(header)
        output.extend(_rows(self._maximum))

        output.append("\nAllocation Matrix:")
        output.append(header)
        output.extend(_rows(self._allocation))

        output.append("\nNeed Matrix (Max - Allocation):")
        output.append(header)
        output.extend(_rows(self.need_matrix))

        output.append("\n" + "="*60)
        return "\n".join(output)

    def assert_resource_conservation(self, context=""):
        """Verify conservation and bounds: allocated + available = total for all resources.

        Args:
            context: Description of when this check is being run (for error messages)

        Raises:
            AssertionError: If an invariant is violated
        """
        allocated = self._allocation.sum(axis=0)

        for r in range(self.num_resources):
            assert allocated[r] + self._available[r] == self._total[r], (
                f"Resource conservation violated for R{r} {context}\n"
                f"  Allocated: {allocated[r]}, Available: {self._available[r]}, "
                f"Total: {self._total[r]}"
            )
            assert self._available[r] >= 0, (
                f"Negative available resources for R{r} {context}\n"
                f"  Available: {self._available[r]}"
            )

        assert np.all(self._allocation >= 0), f"Negative allocation {context}"
        assert np.all(self._allocation <= self._maximum), (
            f"Allocation exceeds maximum {context}"
        )


# Per-cell ceiling so column sums and work vectors cannot overflow int64
_MAX_UNITS = int(np.iinfo(np.int32).max)


def _to_vector(values: Sequence[int], name: str) -> np.ndarray:
    """Convert to a 1-D int array, rejecting non-integers, negatives and oversized values."""
    try:
        values = list(values)
    except TypeError:
        raise ConfigurationError(f"{name} must be a sequence of integers, got {values!r}")
    for i, v in enumerate(values):
        if isinstance(v, bool) or not isinstance(v, (int, np.integer)):
            raise ConfigurationError(f"{name}[{i}] is not an integer: {v!r}")
        if v < 0:
            raise ConfigurationError(f"{name}[{i}] cannot be negative ({v})")
        if v > _MAX_UNITS:
            raise ConfigurationError(f"{name}[{i}] exceeds {_MAX_UNITS} ({v})")
    return np.array(values, dtype=int)


def _to_matrix(rows: Sequence[Sequence[int]], num_resources: int, name: str) -> np.ndarray:
    """Convert to a [C][R] int array, checking every row has R entries."""
    try:
        rows = list(rows)
    except TypeError:
        raise ConfigurationError(f"{name} must be a matrix of integers, got {rows!r}")
    matrix = np.zeros((len(rows), num_resources), dtype=int)
    for c, row in enumerate(rows):
        vector = _to_vector(row, f"{name}[{c}]")
        if len(vector) != num_resources:
            raise ConfigurationError(
                f"{name} row {c} has {len(vector)} entries, expected {num_resources}"
            )
        matrix[c] = vector
    return matrix


def _validate_initial_allocation(
    allocation: np.ndarray,
    maximum: np.ndarray,
    total: np.ndarray
) -> None:
    """
    Check an initial allocation against maximum demand and total supply.

    Critical validation: For each resource r, sum(allocation[:,r]) <= total[r]

    Raises:
        ConfigurationError: If any customer holds more than its maximum or a
            resource class is over-allocated
    """
    for c in range(allocation.shape[0]):
        for r in range(allocation.shape[1]):
            if allocation[c][r] > maximum[c][r]:
                raise ConfigurationError(
                    f"Customer {c}: allocation[{r}] ({allocation[c][r]}) "
                    f"exceeds maximum[{r}] ({maximum[c][r]})"
                )

    allocated = allocation.sum(axis=0)
    for r in range(len(total)):
        if allocated[r] > total[r]:
            raise ConfigurationError(
                f"Resource R{r} initial allocations ({allocated[r]}) "
                f"exceed total units ({total[r]})"
            )
