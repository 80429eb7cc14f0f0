"""
Connection between two nodes, with the gating and trace state the learning
rule keeps per edge.
"""

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

import numpy as np

from .config import get_config

if TYPE_CHECKING:
    from .node import Node


class ExtendedTrace:
    __slots__ = ["nodes", "values"]
    """
    Per-downstream-node traces of gated influence. `nodes` and `values` are
    parallel lists; node lookup is by identity.
    """

    def __init__(self):
        self.nodes: List["Node"] = []
        self.values: List[float] = []

    def index(self, node: "Node") -> int:
        """Position of `node` in the trace, or -1 when it is not tracked."""
        for i, tracked in enumerate(self.nodes):
            if tracked is node:
                return i
        return -1

    def append(self, node: "Node", value: float) -> None:
        self.nodes.append(node)
        self.values.append(value)

    def __len__(self) -> int:
        return len(self.nodes)


class Connection:
    __slots__ = [
        "from_node",
        "to_node",
        "weight",
        "gain",
        "gater",
        "eligibility",
        "xtrace",
        "previous_delta_weight",
        "total_delta_weight",
    ]
    """
    Directed weighted edge. Referenced, never owned, by its source, its target
    and (optionally) the node gating it.
    """

    def __init__(
        self,
        from_node: "Node",
        to_node: "Node",
        weight: Optional[float] = None,
    ):
        self.from_node = from_node
        self.to_node = to_node
        if weight is None:
            spread = get_config().weight_init
            weight = np.random.uniform(-spread, spread)
        self.weight: float = float(weight)

        # Effective multiplier, driven by the gater's activation when gated
        self.gain: float = 1.0
        self.gater: Optional["Node"] = None

        self.eligibility: float = 0.0
        self.xtrace = ExtendedTrace()

        # For tracking momentum
        self.previous_delta_weight: float = 0.0
        # Batch training
        self.total_delta_weight: float = 0.0

    def reset_traces(self) -> None:
        """Drop eligibility and every extended trace entry."""
        self.eligibility = 0.0
        self.xtrace = ExtendedTrace()

    def to_json(self, index_of: Callable[["Node"], int]) -> Dict[str, Any]:
        """
        Serialize the edge with its endpoints resolved through `index_of`,
        which the owning network supplies.
        """
        return {
            "weight": self.weight,
            "from": index_of(self.from_node),
            "to": index_of(self.to_node),
            "gater": index_of(self.gater) if self.gater is not None else None,
        }

    def __repr__(self) -> str:
        gated = " gated" if self.gater is not None else ""
        return f"Connection(w={self.weight:.4f}, gain={self.gain:.4f}{gated})"
