"""
Deadlock Avoidance (Banker's Algorithm) for the Simulator.

Implements the safety algorithm and the request/release transitions that
keep the ledger in a safe state.
"""

import numpy as np
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from models.ledger import ResourceLedger


class Decision(Enum):
    """Final decision for a request or release."""
    GRANTED = "GRANTED"
    DENIED = "DENIED"
    RELEASED = "RELEASED"
    REJECTED = "REJECTED"


class DenialReason(Enum):
    """Why a request or release was refused. The ledger is unchanged in every case."""
    EXCEEDS_NEED = "exceeds need"
    INSUFFICIENT_AVAILABLE = "insufficient available"
    UNSAFE_STATE = "unsafe state"
    EXCEEDS_ALLOCATION = "exceeds allocation"


@dataclass
class Outcome:
    """
    Result of a request or release.

    Attributes:
        decision: GRANTED/DENIED for requests, RELEASED/REJECTED for releases
        customer: Customer index
        vector: [R] Units requested or released
        reason: Why the operation was refused (None when it succeeded)
        message: Human-readable description
        safe_sequence: Finishing order found by the safety check (granted requests only)
    """
    decision: Decision
    customer: int
    vector: List[int]
    reason: Optional[DenialReason] = None
    message: str = ""
    safe_sequence: List[int] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.decision in (Decision.GRANTED, Decision.RELEASED)


def find_safe_sequence(ledger: ResourceLedger) -> Optional[List[int]]:
    """
    Run the safety algorithm and return a finishing order if one exists.

    Algorithm:
    1. Initialize Work = Available, Finish = [False] * num_customers
    2. In one pass over customers (index order), every unfinished customer i
       with Need[i] <= Work is marked finished and Work += Allocation[i]
    3. Repeat passes until a pass marks nobody
    4. SAFE iff every customer is finished

    Time Complexity: O(C²×R)

    Args:
        ledger: Current ledger (not modified)

    Returns:
        List of customer indices in simulated finishing order, or None if unsafe

    References:
        Silberschatz, A., Galvin, P. B., & Gagne, G. (2018).
        Operating System Concepts (10th ed.). Chapter 7.5: Deadlock Avoidance.
    """
    work = ledger.available
    need = ledger.need_matrix
    allocation = ledger.allocation_matrix
    finish = np.zeros(ledger.num_customers, dtype=bool)
    sequence = []

    made_progress = True
    while made_progress:
        made_progress = False

        for i in range(ledger.num_customers):
            if finish[i]:
                continue

            if np.all(need[i] <= work):
                # Customer can run to completion and return everything it holds
                work += allocation[i]
                finish[i] = True
                sequence.append(i)
                made_progress = True

    if np.all(finish):
        return sequence
    return None


def is_safe_state(ledger: ResourceLedger) -> bool:
    """True if some order exists in which every customer can obtain its need and finish."""
    return find_safe_sequence(ledger) is not None


def request_resources(
    ledger: ResourceLedger,
    customer: int,
    request: Sequence[int]
) -> Outcome:
    """
    Handle a resource request using Banker's Algorithm.

    Steps:
    1. Validate: request <= need (otherwise EXCEEDS_NEED)
    2. Check: request <= available (otherwise INSUFFICIENT_AVAILABLE)
    3. Tentatively allocate resources
    4. Run safety algorithm on new state
    5. If safe: keep allocation (GRANTED)
       If unsafe: apply the negated request (DENIED, UNSAFE_STATE)

    Args:
        ledger: Ledger to update
        customer: Index of requesting customer
        request: [R] Units requested of each resource class

    Returns:
        Outcome describing the decision

    Raises:
        InvalidConsumerIndex: If customer is out of range
        InvalidVectorError: If request has the wrong length or negative entries
    """
    ledger.check_customer(customer)
    request = ledger.check_vector(request, "request")
    requested = request.tolist()

    need = ledger.need_of(customer)
    if np.any(request > need):
        return Outcome(
            Decision.DENIED, customer, requested, DenialReason.EXCEEDS_NEED,
            f"Request {requested} exceeds need {need.tolist()}"
        )

    available = ledger.available
    if np.any(request > available):
        return Outcome(
            Decision.DENIED, customer, requested, DenialReason.INSUFFICIENT_AVAILABLE,
            f"Request {requested} exceeds available {available.tolist()}"
        )

    # Tentative allocation
    ledger.apply_delta(customer, request)

    sequence = find_safe_sequence(ledger)

    if sequence is None:
        ledger.apply_delta(customer, -request)
        return Outcome(
            Decision.DENIED, customer, requested, DenialReason.UNSAFE_STATE,
            "Granting would leave the system in an unsafe state"
        )

    ledger.assert_resource_conservation(f"after granting {requested} to C{customer}")

    seq_str = " -> ".join([f"C{c}" for c in sequence])
    return Outcome(
        Decision.GRANTED, customer, requested,
        message=f"Safe state maintained, sequence: {seq_str}",
        safe_sequence=sequence
    )


def release_resources(
    ledger: ResourceLedger,
    customer: int,
    release: Sequence[int]
) -> Outcome:
    """
    Return units held by a customer to the available pool.

    Releasing only grows Available and shrinks one customer's outstanding
    claim, so a safe state stays safe and no safety check is run.

    Args:
        ledger: Ledger to update
        customer: Index of releasing customer
        release: [R] Units to release of each resource class

    Returns:
        Outcome with RELEASED, or REJECTED/EXCEEDS_ALLOCATION

    Raises:
        InvalidConsumerIndex: If customer is out of range
        InvalidVectorError: If release has the wrong length or negative entries
    """
    ledger.check_customer(customer)
    release = ledger.check_vector(release, "release")
    released = release.tolist()

    held = ledger.allocation_of(customer)
    if np.any(release > held):
        return Outcome(
            Decision.REJECTED, customer, released, DenialReason.EXCEEDS_ALLOCATION,
            f"Release {released} exceeds allocation {held.tolist()}"
        )

    ledger.apply_delta(customer, -release)
    ledger.assert_resource_conservation(f"after C{customer} released {released}")

    return Outcome(
        Decision.RELEASED, customer, released,
        message=f"Available now {ledger.available.tolist()}"
    )
