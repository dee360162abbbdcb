# -*- coding: utf-8 -*-
"""
Tests for edges and PortGraph

Tests cover:
- connect_edge / disconnect_edge contracts
- Replace-not-merge semantics on inputs
- Re-entrant observers
- PortGraph lookup, teardown and validation
"""
import pytest
from unittest.mock import MagicMock

from nodeio.nodegraph.datatypes import DataType
from nodeio.nodegraph.edge import Edge, connect_edge, disconnect_edge
from nodeio.nodegraph.errors import InvalidGraphOperationError
from nodeio.nodegraph.graph import PortGraph
from nodeio.nodegraph.node import EffectNode
from nodeio.nodegraph.port import Port


class TestConnectEdge:
    """Tests for connect_edge."""

    def test_connect_either_order(self, make_output, make_input):
        out, inp = make_output("b"), make_input("a")
        edge = connect_edge(inp, out)
        assert edge.output is out
        assert edge.input is inp
        assert out.edges == [edge]
        assert inp.edges == [edge]

    def test_replace_existing_input_edge(self, make_output, make_input):
        """Connecting C->A after B->A leaves only C->A; B has no edge."""
        a = make_input("a")
        b = make_output("b")
        c = make_output("c")

        stale = connect_edge(b, a)
        fresh = connect_edge(c, a)

        assert a.edges == [fresh]
        assert b.edges == []
        assert stale not in b.edges
        assert c.edges == [fresh]

    def test_output_fans_out(self, make_output, make_input):
        out = make_output("src")
        targets = [make_input(f"t{i}") for i in range(3)]
        for t in targets:
            connect_edge(out, t)
        assert len(out.edges) == 3
        assert all(len(t.edges) == 1 for t in targets)

    def test_input_never_exceeds_one_edge(self, make_output, make_input):
        a = make_input("a")
        outs = [make_output(f"o{i}") for i in range(5)]
        for out in outs * 2:
            connect_edge(out, a)
            assert len(a.edges) == 1

    def test_two_outputs_rejected(self, make_output):
        with pytest.raises(InvalidGraphOperationError):
            connect_edge(make_output("x"), make_output("y"))

    def test_two_inputs_rejected(self, make_input):
        with pytest.raises(InvalidGraphOperationError):
            connect_edge(make_input("x"), make_input("y"))

    def test_unclassified_rejected(self, make_output, node):
        with pytest.raises(InvalidGraphOperationError):
            connect_edge(make_output("x"), Port(node, "loose"))

    def test_type_mismatch_rejected(self, make_output, make_input):
        with pytest.raises(InvalidGraphOperationError):
            connect_edge(make_output("x", DataType.TEXTURE), make_input("y", DataType.FLOAT))

    def test_type_check_can_be_disabled(self, make_output, make_input):
        edge = connect_edge(
            make_output("x", DataType.TEXTURE), make_input("y", DataType.FLOAT),
            enforce_types=False,
        )
        assert edge.is_registered

    def test_edge_constructor_checks_direction(self, make_output, make_input):
        with pytest.raises(InvalidGraphOperationError):
            Edge(make_input("a"), make_output("b"))

    def test_both_ports_notified(self, make_output, make_input):
        out, inp = make_output("b"), make_input("a")
        out_obs, in_obs = MagicMock(), MagicMock()
        out.edges_changed.connect(out_obs)
        inp.edges_changed.connect(in_obs)

        edge = connect_edge(out, inp)
        disconnect_edge(edge)

        assert out_obs.call_count == 2
        assert in_obs.call_count == 2


class TestDisconnectEdge:
    """Tests for disconnect_edge."""

    def test_disconnect_removes_from_both(self, make_output, make_input):
        out, inp = make_output("b"), make_input("a")
        edge = connect_edge(out, inp)
        assert disconnect_edge(edge)
        assert out.edges == [] and inp.edges == []
        assert not edge.is_registered

    def test_disconnect_twice_is_noop(self, make_output, make_input):
        edge = connect_edge(make_output("b"), make_input("a"))
        disconnect_edge(edge)
        observer = MagicMock()
        edge.output.edges_changed.connect(observer)
        assert not disconnect_edge(edge)
        observer.assert_not_called()


class TestReentrancy:
    """Observers that mutate the graph while being notified."""

    def test_reconnect_during_disconnect_still_single_edge(self, make_output, make_input):
        a = make_input("a")
        b, c, d = make_output("b"), make_output("c"), make_output("d")
        connect_edge(b, a)

        fired = []

        def sneak_in():
            # Handler wires another source while A is being cleared
            if not fired and not a.edges:
                fired.append(True)
                connect_edge(d, a)

        a.edges_changed.connect(sneak_in)
        final = connect_edge(c, a)

        assert a.edges == [final]
        assert d.edges == []
        assert b.edges == []

    def test_handler_sees_complete_state(self, make_output, make_input):
        a = make_input("a")
        b, c = make_output("b"), make_output("c")
        connect_edge(b, a)
        seen = []
        a.edges_changed.connect(lambda: seen.append(len(a.edges)))
        connect_edge(c, a)
        assert all(n <= 1 for n in seen)


class TestPortGraph:
    """Tests for PortGraph."""

    @pytest.fixture
    def graph(self, timeline):
        graph = PortGraph("Test")
        blur = graph.add_node(EffectNode(node_id="blur", timeline=timeline))
        out = Port(blur, "texture")
        out.set_output_data_type(DataType.TEXTURE)
        comp = graph.add_node(EffectNode(node_id="comp", timeline=timeline))
        for name in ("base", "blend"):
            Port(comp, name).add_accepted_input_type(DataType.TEXTURE)
        return graph

    def test_connect_by_path(self, graph):
        edge = graph.connect("blur:texture", "comp:base")
        assert edge.output is graph.get_port("blur:texture")
        assert graph.edges == [edge]

    def test_unknown_path(self, graph):
        with pytest.raises(InvalidGraphOperationError):
            graph.get_port("blur:nope")
        with pytest.raises(InvalidGraphOperationError):
            graph.get_port("nobody")

    def test_edges_listed_once(self, graph):
        graph.connect("blur:texture", "comp:base")
        graph.connect("blur:texture", "comp:blend")
        assert len(graph.edges) == 2
        assert len(graph.get_edges_from_node("blur")) == 2
        assert len(graph.get_edges_to_node("comp")) == 2

    def test_remove_node_disconnects_first(self, graph):
        graph.connect("blur:texture", "comp:base")
        base = graph.get_port("comp:base")
        graph.remove_node("blur")
        assert base.edges == []
        assert graph.edges == []
        assert "blur" not in graph.nodes

    def test_duplicate_node_id(self, graph, timeline):
        with pytest.raises(InvalidGraphOperationError):
            graph.add_node(EffectNode(node_id="blur", timeline=timeline))

    def test_enforce_types_flag(self, graph, timeline):
        font = graph.add_node(EffectNode(node_id="font", timeline=timeline))
        Port(font, "out").set_output_data_type(DataType.FONT)
        with pytest.raises(InvalidGraphOperationError):
            graph.connect("font:out", "comp:base")
        graph.enforce_types = False
        graph.connect("font:out", "comp:base")

    def test_validate_clean_graph(self, graph):
        graph.connect("blur:texture", "comp:base")
        assert graph.validate() == []

    def test_validate_reports_dangling_edge(self, graph, timeline):
        stray = EffectNode(node_id="stray", timeline=timeline)
        out = Port(stray, "out")
        out.set_output_data_type(DataType.TEXTURE)
        connect_edge(out, graph.get_port("comp:blend"))
        problems = graph.validate()
        assert any("outside the graph" in p for p in problems)

    def test_clear(self, graph):
        graph.connect("blur:texture", "comp:base")
        graph.clear()
        assert graph.nodes == {}
