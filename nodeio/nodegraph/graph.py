# -*- coding: utf-8 -*-
"""
PortGraph - Container for nodes, their ports and the edges between them.

A PortGraph represents the node I/O of one document. It is a thin index
over the nodes: edges live on the ports, and the graph only adds lookup,
teardown and invariant checks.

Example:
    graph = PortGraph("Sequence 01")

    blur = graph.add_node(EffectNode(name="Blur"))
    out = Port(blur, "texture_out")
    out.set_output_data_type(DataType.TEXTURE)

    comp = graph.add_node(EffectNode(name="Composite"))
    base = Port(comp, "base")
    base.add_accepted_input_type(DataType.TEXTURE)

    graph.connect(out, base)
    data = graph.to_dict()
"""
from typing import Dict, List, Optional, Union, TYPE_CHECKING

from loguru import logger

from .commands import ConnectEdgeCommand
from .edge import Edge, connect_edge, disconnect_edge
from .errors import InvalidGraphOperationError
from .node import EffectNode
from .port import Port

if TYPE_CHECKING:
    from .context import TimelineContext


PortRef = Union[Port, str]


class PortGraph:
    """
    Container for effect nodes and their connections.

    Attributes:
        name: Human-readable graph name
        nodes: Dictionary of node_id -> EffectNode
        enforce_types: Reject edges between incompatible data types
    """

    def __init__(self, name: str = "Untitled Graph", enforce_types: bool = True):
        """
        Create a new port graph.

        Args:
            name: Human-readable name for this graph
            enforce_types: Whether connect() checks data type compatibility
        """
        self.name = name
        self.enforce_types = enforce_types
        self.nodes: Dict[str, EffectNode] = {}

    # =========================================================================
    # Node Management
    # =========================================================================

    def add_node(self, node: EffectNode) -> EffectNode:
        """
        Add a node to the graph.

        Returns:
            The added node (for chaining)
        """
        if node.node_id in self.nodes and self.nodes[node.node_id] is not node:
            raise InvalidGraphOperationError(f"Duplicate node id: {node.node_id}")
        self.nodes[node.node_id] = node
        logger.debug(f"Added node: {node}")
        return node

    def remove_node(self, node_id: str) -> None:
        """
        Remove a node after disconnecting all of its edges.

        Args:
            node_id: ID of node to remove
        """
        node = self.nodes.get(node_id)
        if not node:
            return
        node.destroy()
        del self.nodes[node_id]
        logger.debug(f"Removed node: {node}")

    def get_node(self, node_id: str) -> Optional[EffectNode]:
        """Get a node by ID."""
        return self.nodes.get(node_id)

    def clear(self) -> None:
        """Remove all nodes and edges."""
        for node_id in list(self.nodes.keys()):
            self.remove_node(node_id)

    # =========================================================================
    # Ports
    # =========================================================================

    @property
    def ports(self) -> List[Port]:
        """All ports of all nodes, in node then port order."""
        return [port for node in self.nodes.values() for port in node.ports]

    def get_port(self, path: str) -> Port:
        """
        Resolve a ``<node_id>:<port_id>`` handle.

        Raises:
            InvalidGraphOperationError: If node or port is not found
        """
        node_id, sep, port_id = path.partition(":")
        node = self.nodes.get(node_id)
        port = node.get_port(port_id) if node and sep else None
        if port is None:
            raise InvalidGraphOperationError(f"Port not found: {path}")
        return port

    def _resolve(self, ref: PortRef) -> Port:
        return self.get_port(ref) if isinstance(ref, str) else ref

    # =========================================================================
    # Edge Management
    # =========================================================================

    def connect(self, a: PortRef, b: PortRef) -> Edge:
        """
        Connect two ports (either order), replacing the input's edge.

        Args:
            a: Port or port path
            b: Port or port path

        Returns:
            The created edge
        """
        return connect_edge(self._resolve(a), self._resolve(b), self.enforce_types)

    def connect_command(self, a: PortRef, b: PortRef) -> ConnectEdgeCommand:
        """Undoable connect using this graph's type-compatibility setting."""
        return ConnectEdgeCommand(self._resolve(a), self._resolve(b), self.enforce_types)

    def disconnect(self, edge: Edge) -> bool:
        """Remove an edge. Returns False if it was already gone."""
        return disconnect_edge(edge)

    @property
    def edges(self) -> List[Edge]:
        """Every edge, each listed once, in output-port order."""
        result: List[Edge] = []
        seen = set()
        for port in self.ports:
            if not port.is_output:
                continue
            for edge in port.edges:
                if edge not in seen:
                    seen.add(edge)
                    result.append(edge)
        return result

    def get_edges_from_node(self, node_id: str) -> List[Edge]:
        """Edges leaving any output port of a node."""
        return [edge for edge in self.edges if edge.output.node.node_id == node_id]

    def get_edges_to_node(self, node_id: str) -> List[Edge]:
        """Edges arriving at any input port of a node."""
        return [edge for edge in self.edges if edge.input.node.node_id == node_id]

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(self) -> List[str]:
        """
        Check graph invariants.

        Returns:
            Human-readable descriptions of every violation (empty if valid)
        """
        problems: List[str] = []
        for port in self.ports:
            if port.is_input and port.is_output:
                problems.append(f"{port.path} is both input and output")
            if port.keyframing and not port.keyframable:
                problems.append(f"{port.path} keyframes but is not keyframable")
            if port.is_input and len(port.edges) > 1:
                problems.append(f"{port.path} has {len(port.edges)} incoming edges")
            for edge in port.edges:
                if not (edge.output.is_output and edge.input.is_input):
                    problems.append(f"{edge} does not run output -> input")
                if not edge.is_registered:
                    problems.append(f"{edge} is registered on only one endpoint")
                for end in (edge.output, edge.input):
                    if end.node.node_id not in self.nodes:
                        problems.append(f"{edge} references port outside the graph: {end.path}")
            for field in port.fields:
                times = field.keyframes.times()
                if any(b <= a for a, b in zip(times, times[1:])):
                    problems.append(f"{field!r} keyframes are not strictly increasing")
        return problems

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict:
        """
        Serialize graph for saving.

        Returns:
            Dictionary representation of nodes, ports, fields and edges
        """
        from .serialization import graph_to_document
        return graph_to_document(self).model_dump(mode="json")

    @classmethod
    def from_dict(
        cls,
        data: dict,
        timeline: Optional['TimelineContext'] = None,
        enforce_types: bool = True,
    ) -> 'PortGraph':
        """
        Load graph from saved data.

        Args:
            data: Dictionary from to_dict()
            timeline: Time context shared by the restored nodes
            enforce_types: Type checking for the restored graph

        Returns:
            Restored PortGraph instance
        """
        from .serialization import GraphDocument, graph_from_document
        document = GraphDocument.model_validate(data)
        return graph_from_document(document, timeline=timeline, enforce_types=enforce_types)

    def __repr__(self) -> str:
        return f"<PortGraph '{self.name}' nodes={len(self.nodes)} edges={len(self.edges)}>"
