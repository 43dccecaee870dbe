"""
Textbook Banker's Algorithm instances shared by the tests.
"""

from models.ledger import ResourceLedger


# Silberschatz 5 customers x 4 resources, Available = [1, 5, 2, 0]
FOUR_RESOURCE_TOTAL = [3, 14, 12, 12]
FOUR_RESOURCE_MAXIMUM = [
    [0, 0, 1, 2],
    [1, 7, 5, 0],
    [2, 3, 5, 6],
    [0, 6, 5, 2],
    [0, 6, 5, 6],
]
FOUR_RESOURCE_ALLOCATION = [
    [0, 0, 1, 2],
    [1, 0, 0, 0],
    [1, 3, 5, 4],
    [0, 6, 3, 2],
    [0, 0, 1, 4],
]

# Silberschatz 5 customers x 3 resources, Available = [3, 3, 2]
THREE_RESOURCE_TOTAL = [10, 5, 7]
THREE_RESOURCE_MAXIMUM = [
    [7, 5, 3],
    [3, 2, 2],
    [9, 0, 2],
    [2, 2, 2],
    [4, 3, 3],
]
THREE_RESOURCE_ALLOCATION = [
    [0, 1, 0],
    [2, 0, 0],
    [3, 0, 2],
    [2, 1, 1],
    [0, 0, 2],
]


def four_resource_ledger() -> ResourceLedger:
    return ResourceLedger(FOUR_RESOURCE_TOTAL, FOUR_RESOURCE_MAXIMUM, FOUR_RESOURCE_ALLOCATION)


def three_resource_ledger() -> ResourceLedger:
    return ResourceLedger(THREE_RESOURCE_TOTAL, THREE_RESOURCE_MAXIMUM, THREE_RESOURCE_ALLOCATION)


def assert_invariants(ledger: ResourceLedger) -> None:
    """Check all four ledger invariants from outside the ledger."""
    allocation = ledger.allocation_matrix
    maximum = ledger.maximum_matrix
    assert (allocation >= 0).all() and (allocation <= maximum).all(), "0 <= allocation <= maximum"
    assert (ledger.need_matrix == maximum - allocation).all(), "need == maximum - allocation"
    assert (ledger.available + allocation.sum(axis=0) == ledger.total).all(), "conservation"
    assert (ledger.available >= 0).all(), "available >= 0"
