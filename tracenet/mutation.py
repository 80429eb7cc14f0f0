"""
Mutation method catalog: maps method names to their parameter records.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .activation import Activation


@dataclass(frozen=True)
class MutationMethod:
    """A named perturbation recipe and its kind-specific parameters."""

    name: str
    # Candidate squash functions (MOD_ACTIVATION)
    allowed: Tuple[Activation, ...] = field(default_factory=tuple)
    # Offset range (MOD_BIAS)
    min: float = 0.0
    max: float = 0.0


MOD_ACTIVATION = MutationMethod(name="MOD_ACTIVATION", allowed=tuple(Activation))
MOD_BIAS = MutationMethod(name="MOD_BIAS", min=-1.0, max=1.0)

MUTATIONS: Dict[str, MutationMethod] = {
    MOD_ACTIVATION.name: MOD_ACTIVATION,
    MOD_BIAS.name: MOD_BIAS,
}


def is_known(method: Optional[MutationMethod]) -> bool:
    """Check catalog membership by name, so re-parameterized copies still match."""
    return method is not None and method.name in MUTATIONS


def list_mutations() -> list[str]:
    """Return list of valid mutation method names."""
    return list(MUTATIONS.keys())
