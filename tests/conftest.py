"""
Pytest fixtures for tracenet tests.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add the repository root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tracenet import Node, NodeType, reset_config


@pytest.fixture(autouse=True)
def fresh_state():
    """Seed the global RNG and restore default settings around each test."""
    np.random.seed(1234)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def input_node():
    return Node(NodeType.INPUT)


@pytest.fixture
def output_node():
    node = Node(NodeType.OUTPUT)
    node.bias = 0.1
    return node


@pytest.fixture
def gated_setup():
    """
    A (input) -> C (hidden gater), X (input) -> B (output) with the X->B
    connection gated by C. Weights are fixed and biases zeroed.
    """
    a = Node(NodeType.INPUT)
    x = Node(NodeType.INPUT)
    c = Node(NodeType.HIDDEN)
    b = Node(NodeType.OUTPUT)
    c.bias = 0.0
    b.bias = 0.0

    conn_ac = a.connect(c, 1.0)[0]
    conn_xb = x.connect(b, 0.5)[0]
    c.gate(conn_xb)

    return {"a": a, "x": x, "c": c, "b": b, "conn_ac": conn_ac, "conn_xb": conn_xb}
