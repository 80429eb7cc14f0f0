"""
tracenet
Gated, recurrent neural network nodes that learn online with eligibility traces.
"""

# Import core node functionality
from .node import Node, NodeType, NodeError, NodeConnections, setup_node_logger
from .connection import Connection, ExtendedTrace
from .group import Group, GroupConnections

# Import catalogs
from .activation import Activation, get_activation, list_activations
from .mutation import (
    MOD_ACTIVATION,
    MOD_BIAS,
    MUTATIONS,
    MutationMethod,
    is_known,
    list_mutations,
)

# Import configuration functionality
from .config import (
    TracenetConfig,
    configure,
    get_config,
    load_config,
    load_config_from_string,
    reset_config,
)
from .node_config import load_node_config, save_node_config, validate_node_config

__all__ = [
    # Core components
    "Node",
    "NodeType",
    "NodeError",
    "NodeConnections",
    "setup_node_logger",
    "Connection",
    "ExtendedTrace",
    "Group",
    "GroupConnections",
    # Catalogs
    "Activation",
    "get_activation",
    "list_activations",
    "MutationMethod",
    "MOD_ACTIVATION",
    "MOD_BIAS",
    "MUTATIONS",
    "is_known",
    "list_mutations",
    # Configuration components
    "TracenetConfig",
    "configure",
    "get_config",
    "load_config",
    "load_config_from_string",
    "reset_config",
    "load_node_config",
    "save_node_config",
    "validate_node_config",
]

__version__ = "0.1.0"
