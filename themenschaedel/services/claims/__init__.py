"""Episode claim workflow.

A claim gives one user exclusive ownership of an episode for editing.

Exports:
    - ClaimCoordinator: guarded and unconditional claim transitions
    - ClaimRepository: storage access for claims
"""

from themenschaedel.services.claims.coordinator import CLAIM, UNCLAIM, ClaimCoordinator
from themenschaedel.services.claims.repository import ClaimRepository

__all__ = [
    "CLAIM",
    "UNCLAIM",
    "ClaimCoordinator",
    "ClaimRepository",
]
