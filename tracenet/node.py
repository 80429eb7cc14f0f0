#
# Node: the atomic computational and learning unit of a network.
# Learns online with eligibility traces and extended (gated-influence) traces,
# an approximation of backpropagation-through-time that needs no unrolling.
#

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Union

import numpy as np
from loguru import logger

from .activation import Activation, get_activation
from .config import get_config
from .connection import Connection
from .mutation import MOD_ACTIVATION, MOD_BIAS, MutationMethod, is_known

if TYPE_CHECKING:
    from .group import Group


def setup_node_logger(level: Optional[str] = None) -> None:
    """Setup colored logging for tracenet, defaulting to the configured level."""
    level = level or get_config().log_level
    logger.remove()
    logger.configure(extra={"component": "tracenet"})
    logger.add(
        lambda msg: print(msg, end=""),
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        + "<level>{level: <8}</level> | "
        + "<cyan>{extra[component]}</cyan> | "
        + "<level>{message}</level>",
        level=level,
        colorize=True,
    )


class NodeType(str, Enum):
    """Roles a node can play in a network."""

    INPUT = "input"
    HIDDEN = "hidden"
    OUTPUT = "output"
    CONSTANT = "constant"


@dataclass
class NodeError:
    """Error signals of the last backward pass."""

    responsibility: float = 0.0
    projected: float = 0.0
    gated: float = 0.0


@dataclass
class NodeConnections:
    """The four edge sets of a node. Only `self_conn` is created by the node."""

    self_conn: Connection
    incoming: List[Connection] = field(default_factory=list)
    outgoing: List[Connection] = field(default_factory=list)
    gated: List[Connection] = field(default_factory=list)


class Node:
    __slots__ = [
        "bias",
        "squash",
        "type",
        "activation",
        "state",
        "old",
        "mask",
        "derivative",
        "previous_delta_bias",
        "total_delta_bias",
        "connections",
        "error",
        "logger",
    ]
    """
    A neuron that can be wired into recurrent, self-connected and gated
    topologies. An orchestrator calls `activate` on every node in topological
    order and then `propagate` in reverse order; the node relies on that
    ordering and does not check it.
    """

    def __init__(self, type: Union[NodeType, str] = NodeType.HIDDEN):
        self.type = NodeType(type)

        if self.type is NodeType.INPUT:
            self.bias: float = 0.0
        else:
            spread = get_config().bias_init
            self.bias = float(np.random.uniform(-spread, spread))
        self.squash: Activation = Activation.LOGISTIC

        self.activation: float = 0.0
        self.state: float = 0.0
        self.old: float = 0.0
        self.derivative: float = 0.0

        # Dropout multiplier
        self.mask: float = 1.0

        # For tracking momentum
        self.previous_delta_bias: float = 0.0
        # Batch training
        self.total_delta_bias: float = 0.0

        self.connections = NodeConnections(self_conn=Connection(self, self, 0.0))
        self.error = NodeError()

        self.logger = logger.bind(component=f"node:{self.type.value}")

    # --- Forward pass ---

    def _compute_state(self) -> None:
        self_conn = self.connections.self_conn
        self.state = self_conn.gain * self_conn.weight * self.state + self.bias

        for connection in self.connections.incoming:
            self.state += (
                connection.from_node.activation * connection.weight * connection.gain
            )

    def activate(self, value: Optional[float] = None) -> float:
        """
        Compute the node's output and update the traces the learning rule needs.

        Args:
            value: Forced output, used to drive input nodes. `state` is left
                untouched when given.

        Returns:
            The node's activation
        """
        if value is not None:
            self.activation = value
            return self.activation

        self.old = self.state
        self._compute_state()

        self.activation = self.squash.apply(self.state) * self.mask
        self.derivative = self.squash.derivative(self.state)

        # Gated influence per distinct downstream node, in first-seen order
        influences: Dict["Node", float] = {}
        for connection in self.connections.gated:
            node = connection.to_node
            if node in influences:
                influences[node] += connection.weight * connection.from_node.activation
            else:
                influences[node] = connection.weight * connection.from_node.activation
                if node.connections.self_conn.gater is self:
                    influences[node] += node.old

            # This node's output becomes the connection's multiplier
            connection.gain = self.activation

        self_conn = self.connections.self_conn
        for connection in self.connections.incoming:
            connection.eligibility = (
                self_conn.gain * self_conn.weight * connection.eligibility
                + connection.from_node.activation * connection.gain
            )

            xtrace = connection.xtrace
            for node, influence in influences.items():
                contribution = self.derivative * connection.eligibility * influence
                index = xtrace.index(node)
                if index > -1:
                    node_self = node.connections.self_conn
                    xtrace.values[index] = (
                        node_self.gain * node_self.weight * xtrace.values[index]
                        + contribution
                    )
                else:
                    # Gating added after earlier activations, nothing to decay
                    xtrace.append(node, contribution)

        return self.activation

    def no_trace_activate(self, value: Optional[float] = None) -> float:
        """Activate without mask or trace bookkeeping, for inference only."""
        if value is not None:
            self.activation = value
            return self.activation

        self._compute_state()
        self.activation = self.squash.apply(self.state)

        for connection in self.connections.gated:
            connection.gain = self.activation

        return self.activation

    # --- Backward pass ---

    def propagate(
        self,
        rate: float = 0.3,
        momentum: float = 0.0,
        update: bool = False,
        target: Optional[float] = None,
    ) -> None:
        """
        Compute this node's error responsibility and adjust its incoming
        weights and bias.

        Every downstream node must already have propagated in this pass.

        Args:
            rate: Learning rate
            momentum: Fraction of the previous committed delta added on commit
            update: Commit the accumulated deltas. Calling with False several
                times and then True once applies a batched update.
            target: Desired activation, required for output nodes
        """
        if self.type is NodeType.OUTPUT:
            if target is None:
                raise ValueError("Output nodes need a target value to propagate")
            self.error.responsibility = self.error.projected = (
                target - self.activation
            )
        else:
            error = 0.0
            for connection in self.connections.outgoing:
                error += (
                    connection.to_node.error.responsibility
                    * connection.weight
                    * connection.gain
                )
            self.error.projected = self.derivative * error

            error = 0.0
            for connection in self.connections.gated:
                node = connection.to_node
                influence = (
                    node.old if node.connections.self_conn.gater is self else 0.0
                )
                influence += connection.weight * connection.from_node.activation
                error += node.error.responsibility * influence
            self.error.gated = self.derivative * error

            self.error.responsibility = self.error.projected + self.error.gated

        # Constant nodes are frozen
        if self.type is NodeType.CONSTANT:
            return

        for connection in self.connections.incoming:
            gradient = self.error.projected * connection.eligibility

            xtrace = connection.xtrace
            for node, value in zip(xtrace.nodes, xtrace.values):
                gradient += node.error.responsibility * value

            delta_weight = rate * gradient * self.mask
            connection.total_delta_weight += delta_weight
            if update:
                connection.total_delta_weight += (
                    momentum * connection.previous_delta_weight
                )
                connection.weight += connection.total_delta_weight
                connection.previous_delta_weight = connection.total_delta_weight
                connection.total_delta_weight = 0.0

        delta_bias = rate * self.error.responsibility
        self.total_delta_bias += delta_bias
        if update:
            self.total_delta_bias += momentum * self.previous_delta_bias
            self.bias += self.total_delta_bias
            self.previous_delta_bias = self.total_delta_bias
            self.total_delta_bias = 0.0

    # --- Wiring ---

    def connect(
        self, target: Union["Node", "Group"], weight: Optional[float] = None
    ) -> List[Connection]:
        """
        Project connections to a node or to every node of a group.

        Connecting to itself enables the self-connection. Group targets are
        connected unconditionally, without a duplicate check.

        Returns:
            The connections created, or the self-connection when enabled

        Raises:
            ValueError: If already projecting a connection to the target node
        """
        if isinstance(target, Node):
            return [self._connect_node(target, weight)]

        connections = []
        for node in target.nodes:
            connection = Connection(self, node, weight)
            node.connections.incoming.append(connection)
            self.connections.outgoing.append(connection)
            target.connections.incoming.append(connection)
            connections.append(connection)

        self.logger.debug(f"Connected to group of {len(target.nodes)} nodes")
        return connections

    def _connect_node(self, target: "Node", weight: Optional[float]) -> Connection:
        if target is self:
            self_conn = self.connections.self_conn
            if self_conn.weight != 0:
                if get_config().warnings:
                    self.logger.warning("This connection already exists!")
            else:
                self_conn.weight = 1.0 if weight is None else weight
                self.logger.debug(f"Enabled self-connection, w={self_conn.weight}")
            return self_conn

        if self.is_projecting_to(target):
            raise ValueError("Already projecting a connection to this node!")

        connection = Connection(self, target, weight)
        target.connections.incoming.append(connection)
        self.connections.outgoing.append(connection)

        self.logger.debug(f"Connected to {target!r}, w={connection.weight:.4f}")
        return connection

    def disconnect(self, node: "Node", twosided: bool = False) -> None:
        """
        Remove the first connection from this node to `node`.

        Disconnecting from itself only deactivates the self-connection.
        A missing connection is ignored.

        Args:
            node: Node to disconnect from
            twosided: Also remove the connection from `node` to this node
        """
        if node is self:
            self.connections.self_conn.weight = 0.0
            return

        outgoing = self.connections.outgoing
        for i, connection in enumerate(outgoing):
            if connection.to_node is node:
                del outgoing[i]
                _remove_by_identity(node.connections.incoming, connection)
                if connection.gater is not None:
                    connection.gater.ungate(connection)

                self.logger.debug(f"Disconnected from {node!r}")
                break

        if twosided:
            node.disconnect(self)

    def is_projecting_to(self, node: "Node") -> bool:
        """Check if this node projects a connection to `node`."""
        if node is self:
            return self.connections.self_conn.weight != 0

        return any(conn.to_node is node for conn in self.connections.outgoing)

    def is_projected_by(self, node: "Node") -> bool:
        """Check if `node` projects a connection to this node."""
        if node is self:
            return self.connections.self_conn.weight != 0

        return any(conn.from_node is node for conn in self.connections.incoming)

    # --- Gating ---

    def gate(self, connections: Union[Connection, Sequence[Connection]]) -> None:
        """
        Let this node's activation multiply the given connections' weights.

        Gating a connection this node already gates corrupts the trace
        bookkeeping; callers must not do it.
        """
        if isinstance(connections, Connection):
            connections = [connections]
        else:
            connections = list(connections)

        for connection in connections:
            self.connections.gated.append(connection)
            connection.gater = self

        self.logger.debug(f"Gating {len(connections)} connection(s)")

    def ungate(self, connections: Union[Connection, Sequence[Connection]]) -> None:
        """Remove this node's gate from the given connections."""
        if isinstance(connections, Connection):
            connections = [connections]
        else:
            connections = list(connections)

        for connection in reversed(connections):
            if not _remove_by_identity(self.connections.gated, connection):
                self.logger.debug(f"Not gating {connection!r}, skipped")
                continue
            connection.gater = None
            connection.gain = 1.0

    # --- Reset, mutation, serialization ---

    def clear(self) -> None:
        """
        Reset per-pass state so the node behaves like a fresh one with the same
        weights, bias and topology. Severs recurrent memory between sequences.
        """
        for connection in self.connections.incoming:
            connection.reset_traces()

        for connection in self.connections.gated:
            connection.gain = 0.0

        self.error.responsibility = self.error.projected = self.error.gated = 0.0
        self.old = self.state = self.activation = 0.0

    def mutate(self, method: Optional[MutationMethod]) -> None:
        """
        Apply a parametric mutation.

        Raises:
            ValueError: If no method is given or the method is not catalogued
        """
        if method is None:
            raise ValueError("No mutate method given!")
        if not is_known(method):
            raise ValueError(f"This method does not exist! ({method.name})")

        if method.name == MOD_ACTIVATION.name:
            choices = [fn for fn in method.allowed if fn is not self.squash]
            if not choices:
                self.logger.warning(
                    f"No activation other than {self.squash.name} allowed, unchanged"
                )
                return
            old_squash = self.squash
            self.squash = choices[np.random.randint(len(choices))]
            self.logger.debug(
                f"Mutated squash {old_squash.name} -> {self.squash.name}"
            )
        elif method.name == MOD_BIAS.name:
            modification = np.random.uniform(method.min, method.max)
            self.bias += float(modification)
            self.logger.debug(f"Mutated bias by {modification:+.4f}")

    def to_json(self) -> Dict[str, Any]:
        """Static parameters only; topology belongs to the network."""
        return {
            "bias": self.bias,
            "type": self.type.value,
            "squash": self.squash.name,
            "mask": self.mask,
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Node":
        """
        Rebuild a node from `to_json` output. Runtime state starts fresh.

        Raises:
            KeyError: If the activation name is unknown
        """
        node = cls()
        node.bias = float(data["bias"])
        node.type = NodeType(data["type"])
        node.mask = float(data["mask"])
        node.squash = get_activation(data["squash"])
        node.logger = logger.bind(component=f"node:{node.type.value}")
        return node

    def __repr__(self) -> str:
        return (
            f"Node(type='{self.type.value}', bias={self.bias:.4f}, "
            f"squash={self.squash.name})"
        )


def _remove_by_identity(connections: List[Connection], target: Connection) -> bool:
    for i, connection in enumerate(connections):
        if connection is target:
            del connections[i]
            return True
    return False
