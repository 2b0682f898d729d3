"""Authorization for episode abilities.

Exports:
    - AuthorizationOracle: protocol the claim coordinator consults
    - Gate: ability registry implementing the oracle
    - EpisodePolicy: default rules for "claim" and "unclaim"
    - create_gate: build a gate with the episode policy registered
"""

from themenschaedel.services.authorization.gate import AuthorizationOracle, Gate
from themenschaedel.services.authorization.policy import EpisodePolicy, create_gate

__all__ = [
    "AuthorizationOracle",
    "EpisodePolicy",
    "Gate",
    "create_gate",
]
