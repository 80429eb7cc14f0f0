"""
Tests for the Group collection.
"""

import pytest

from tracenet import Activation, Group, Node, NodeType


class TestGroup:
    """Tests for group construction, wiring and passes."""

    def test_construction(self):
        group = Group(4)
        assert len(group) == 4
        assert all(node.type is NodeType.HIDDEN for node in group.nodes)
        assert group.connections.incoming == []

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            Group(0)

    def test_activate_with_values(self):
        group = Group(2)
        assert group.activate([0.2, 0.8]) == [0.2, 0.8]

    def test_activate_length_mismatch(self):
        with pytest.raises(ValueError, match="same as the amount of nodes"):
            Group(2).activate([1.0])

    def test_set_parameters(self):
        group = Group(3)
        group.set(bias=0.0, squash=Activation.IDENTITY, type="output")

        for node in group.nodes:
            assert node.bias == 0.0
            assert node.squash is Activation.IDENTITY
            assert node.type is NodeType.OUTPUT

    def test_group_to_group(self):
        source, target = Group(2), Group(3)

        connections = source.connect(target, 1.0)

        assert len(connections) == 6
        assert source.connections.outgoing == connections
        assert len(target.connections.incoming) == 6
        for node in target.nodes:
            assert len(node.connections.incoming) == 2

    def test_group_to_node(self):
        group, node = Group(3), Node()

        connections = group.connect(node)

        assert len(connections) == 3
        assert len(node.connections.incoming) == 3
        assert all(node.is_projected_by(member) for member in group.nodes)

    def test_group_to_itself_enables_self_connections(self):
        group = Group(2)

        connections = group.connect(group, 0.5)

        assert len(group.connections.self_conns) == 2
        for node, conn in zip(group.nodes, connections):
            assert conn is node.connections.self_conn
            assert conn.weight == 0.5

    def test_forward_and_backward(self):
        inputs, outputs = Group(2), Group(1)
        inputs.set(type=NodeType.INPUT)
        outputs.set(bias=0.0, squash=Activation.IDENTITY, type=NodeType.OUTPUT)
        connections = inputs.connect(outputs, 1.0)

        inputs.activate([1.0, 0.5])
        assert outputs.activate() == [pytest.approx(1.5)]

        outputs.propagate(rate=0.1, update=True, target=[2.0])

        assert connections[0].weight == pytest.approx(1.0 + 0.1 * 0.5 * 1.0)
        assert connections[1].weight == pytest.approx(1.0 + 0.1 * 0.5 * 0.5)
        assert outputs.nodes[0].bias == pytest.approx(0.05)

    def test_propagate_length_mismatch(self):
        with pytest.raises(ValueError, match="target values"):
            Group(2).propagate(target=[1.0])

    def test_clear(self):
        group = Group(2)
        group.connect(group, 0.5)
        group.activate()

        group.clear()

        assert all(node.activation == node.state == 0.0 for node in group.nodes)

    def test_failed_connect_to_node_registers_nothing(self):
        group, target = Group(2), Node()
        existing = group.nodes[1].connect(target)[0]

        with pytest.raises(ValueError, match="Already projecting"):
            group.connect(target)

        assert group.nodes[0].connections.outgoing == []
        assert group.nodes[1].connections.outgoing == [existing]
        assert target.connections.incoming == [existing]
        assert group.connections.outgoing == []

    def test_connect_to_own_member_enables_its_self_connection(self):
        group = Group(2)
        member = group.nodes[0]

        connections = group.connect(member, 1.0)

        assert connections[0] is member.connections.self_conn
        assert member.connections.self_conn.weight == 1.0
        assert group.nodes[1].is_projecting_to(member)
