"""
Group: an ordered collection of nodes wired and driven as one unit.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from loguru import logger

from .activation import Activation
from .connection import Connection
from .node import Node, NodeType


@dataclass
class GroupConnections:
    """Connections entering, leaving and looping within a group."""

    incoming: List[Connection] = field(default_factory=list)
    outgoing: List[Connection] = field(default_factory=list)
    self_conns: List[Connection] = field(default_factory=list)


class Group:
    """Ordered node collection exposing a bulk wiring surface."""

    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"Group size must be positive, got {size}")

        self.nodes: List[Node] = [Node() for _ in range(size)]
        self.connections = GroupConnections()
        self.logger = logger.bind(component="group")

    def activate(self, values: Optional[Sequence[float]] = None) -> List[float]:
        """Activate every member in order, optionally forcing their outputs."""
        if values is not None and len(values) != len(self.nodes):
            raise ValueError(
                f"Array with values should be same as the amount of nodes "
                f"({len(values)} != {len(self.nodes)})"
            )

        if values is None:
            return [node.activate() for node in self.nodes]
        return [node.activate(value) for node, value in zip(self.nodes, values)]

    def propagate(
        self,
        rate: float = 0.3,
        momentum: float = 0.0,
        update: bool = False,
        target: Optional[Sequence[float]] = None,
    ) -> None:
        """Propagate every member, last node first."""
        if target is not None and len(target) != len(self.nodes):
            raise ValueError(
                f"Array with target values should be same as the amount of nodes "
                f"({len(target)} != {len(self.nodes)})"
            )

        for i in reversed(range(len(self.nodes))):
            node = self.nodes[i]
            if target is None:
                node.propagate(rate, momentum, update)
            else:
                node.propagate(rate, momentum, update, target[i])

    def connect(
        self, target: Union[Node, "Group"], weight: Optional[float] = None
    ) -> List[Connection]:
        """
        Connect every member to a node or to every member of a group.
        Connecting a group to itself enables each member's self-connection.
        """
        connections: List[Connection] = []

        if target is self:
            for node in self.nodes:
                self_conn = node.connect(node, weight)[0]
                self.connections.self_conns.append(self_conn)
                connections.append(self_conn)
            return connections

        if isinstance(target, Node):
            for node in self.nodes:
                if node is not target and node.is_projecting_to(target):
                    raise ValueError("Already projecting a connection to this node!")

        for node in self.nodes:
            created = node.connect(target, weight)
            self.connections.outgoing.extend(created)
            connections.extend(created)

        self.logger.debug(
            f"Connected {len(self.nodes)} nodes with {len(connections)} connections"
        )
        return connections

    def set(
        self,
        bias: Optional[float] = None,
        squash: Optional[Activation] = None,
        type: Optional[Union[NodeType, str]] = None,
    ) -> None:
        """Overwrite a parameter on every member."""
        for node in self.nodes:
            if bias is not None:
                node.bias = bias
            if squash is not None:
                node.squash = squash
            if type is not None:
                node.type = NodeType(type)

    def clear(self) -> None:
        for node in self.nodes:
            node.clear()

    def __len__(self) -> int:
        return len(self.nodes)
