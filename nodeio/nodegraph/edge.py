# -*- coding: utf-8 -*-
"""
Edge - A directed link from one output Port to one input Port.

Edges are owned by neither port. They are created by connect_edge and
destroyed by disconnect_edge; nothing else severs the link.

Example:
    edge = connect_edge(blur.get_port("texture_out"), composite.get_port("base"))
    disconnect_edge(edge)
"""
from typing import TYPE_CHECKING, Optional, Tuple
from uuid import uuid4

from loguru import logger

from .errors import InvalidGraphOperationError

if TYPE_CHECKING:
    from .port import Port


class Edge:
    """
    Represents a connection between two ports.

    Attributes:
        edge_id: Unique identifier
        output: Output-classified port (data source)
        input: Input-classified port (data destination)
    """

    def __init__(self, output: 'Port', input: 'Port', edge_id: Optional[str] = None):
        if not (output.is_output and input.is_input):
            raise InvalidGraphOperationError(
                f"Edge must run from an output to an input, got "
                f"{output.path} -> {input.path}"
            )
        self.edge_id = edge_id or str(uuid4())
        self.output = output
        self.input = input

    @property
    def is_registered(self) -> bool:
        """True while both endpoint ports reference this edge."""
        return self in self.output._edges and self in self.input._edges

    def to_dict(self) -> dict:
        return {"output": self.output.path, "input": self.input.path}

    def __repr__(self) -> str:
        return f"<Edge {self.output.path} -> {self.input.path}>"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Edge):
            return False
        return self.edge_id == other.edge_id

    def __hash__(self) -> int:
        return hash(self.edge_id)


def split_endpoints(a: 'Port', b: 'Port') -> Tuple['Port', 'Port']:
    """
    Order two ports as (output, input).

    Raises:
        InvalidGraphOperationError: Unless exactly one port is an input and
            the other an output
    """
    if a.is_output and b.is_input:
        return a, b
    if a.is_input and b.is_output:
        return b, a
    raise InvalidGraphOperationError(
        f"Cannot connect {a.path} ({a.classification}) to "
        f"{b.path} ({b.classification}): need one output and one input"
    )


def _detach_incoming(input: 'Port') -> None:
    # Observers may reconnect while we disconnect, so loop until empty
    while input._edges:
        disconnect_edge(input._edges[0])


def _register(edge: Edge) -> None:
    edge.output._edges.append(edge)
    edge.input._edges.append(edge)
    edge.output.edges_changed.emit()
    edge.input.edges_changed.emit()


def connect_edge(a: 'Port', b: 'Port', enforce_types: bool = True) -> Edge:
    """
    Connect two ports, replacing the input's existing edge.

    Args:
        a: One endpoint (either order)
        b: The other endpoint
        enforce_types: Require the input to accept the output's data type

    Returns:
        The created edge

    Raises:
        InvalidGraphOperationError: Same-class or unclassified ports, or
            incompatible data types
    """
    output, input = split_endpoints(a, b)

    if enforce_types and not input.can_accept(output.output_data_type):
        raise InvalidGraphOperationError(
            f"{input.path} does not accept {output.output_data_type.display_name}"
        )

    _detach_incoming(input)

    edge = Edge(output, input)
    _register(edge)
    logger.debug(f"Connected: {edge}")
    return edge


def restore_edge(edge: Edge) -> Edge:
    """
    Re-register a previously disconnected edge object.

    Used by undo/redo so later commands holding the edge stay valid. The
    input's current edge is replaced, as with connect_edge.
    """
    if edge.is_registered:
        return edge
    _detach_incoming(edge.input)
    _register(edge)
    logger.debug(f"Restored: {edge}")
    return edge


def disconnect_edge(edge: Edge) -> bool:
    """
    Remove an edge from both endpoint ports.

    Returns:
        True if the edge was registered, False if it was already gone
    """
    removed = False
    for port in (edge.output, edge.input):
        if edge in port._edges:
            port._edges.remove(edge)
            removed = True

    if removed:
        edge.output.edges_changed.emit()
        edge.input.edges_changed.emit()
        logger.debug(f"Disconnected: {edge}")
    return removed
