# -*- coding: utf-8 -*-
"""
Serialization - Document models for saving and restoring a PortGraph.

The document stores node identity, every port with its flags and
classification, each field's static value or keyframe sequence, and the
edge list as pairs of port paths. Edges are restored by replaying
connect() calls; edges that no longer fit are skipped with a warning.
"""
from typing import Any, Callable, List, Optional

from loguru import logger
from pydantic import BaseModel, Field as ModelField

from .context import TimelineContext
from .datatypes import DataType, Interpolation, NodeCategory
from .errors import InvalidGraphOperationError
from .field import Field
from .graph import PortGraph
from .keyframes import Keyframe
from .node import EffectNode
from .port import Port

DOCUMENT_VERSION = 1


class KeyframeModel(BaseModel):
    time: int
    value: Any = None
    # JSON has no tuples; vectors are stored as lists and flagged here
    vector: bool = False


class FieldModel(BaseModel):
    field_id: str = ""
    enabled: bool = True
    interpolation: Optional[Interpolation] = None
    static_value: Any = None
    static_vector: bool = False
    keyframes: List[KeyframeModel] = ModelField(default_factory=list)


class PortModel(BaseModel):
    port_id: str
    name: str = ""
    savable: bool = True
    keyframable: bool = True
    keyframing: bool = False
    accepted_input_types: List[DataType] = ModelField(default_factory=list)
    output_type: DataType = DataType.INVALID
    fields: List[FieldModel] = ModelField(default_factory=list)


class NodeModel(BaseModel):
    node_id: str
    name: str = ""
    category: NodeCategory = NodeCategory.EFFECT
    ports: List[PortModel] = ModelField(default_factory=list)


class EdgeModel(BaseModel, frozen=True):
    """An edge between two ports, by ``<node_id>:<port_id>`` path."""
    output: str
    input: str


class GraphDocument(BaseModel):
    version: int = DOCUMENT_VERSION
    name: str = "Untitled Graph"
    nodes: List[NodeModel] = ModelField(default_factory=list)
    edges: List[EdgeModel] = ModelField(default_factory=list)


# =============================================================================
# Graph -> Document
# =============================================================================

def _is_vector(value: Any) -> bool:
    return isinstance(value, tuple)


def _restore_value(value: Any, vector: bool) -> Any:
    if vector and isinstance(value, list):
        return tuple(value)
    return value


def field_to_model(field: Field, include_values: bool = True) -> FieldModel:
    model = FieldModel(
        field_id=field.field_id,
        enabled=field.enabled,
        interpolation=field.interpolation if field.has_explicit_interpolation else None,
    )
    if include_values:
        model.static_value = field.static_value
        model.static_vector = _is_vector(field.static_value)
        model.keyframes = [
            KeyframeModel(time=k.time, value=k.value, vector=_is_vector(k.value))
            for k in field.keyframes
        ]
    return model


def port_to_model(port: Port) -> PortModel:
    # Non-savable ports carry runtime values; keep their shape only
    return PortModel(
        port_id=port.port_id,
        name=port.name,
        savable=port.savable,
        keyframable=port.keyframable,
        keyframing=port.keyframing,
        accepted_input_types=port.accepted_input_types,
        output_type=port.output_data_type if port.is_output else DataType.INVALID,
        fields=[field_to_model(f, include_values=port.savable) for f in port.fields],
    )


def graph_to_document(graph: PortGraph) -> GraphDocument:
    return GraphDocument(
        name=graph.name,
        nodes=[
            NodeModel(
                node_id=node.node_id,
                name=node.name,
                category=node.category,
                ports=[port_to_model(port) for port in node.ports],
            )
            for node in graph.nodes.values()
        ],
        edges=[EdgeModel(output=e.output.path, input=e.input.path) for e in graph.edges],
    )


# =============================================================================
# Document -> Graph
# =============================================================================

def _restore_port(node: EffectNode, model: PortModel) -> Port:
    port = Port(
        node,
        model.port_id,
        name=model.name,
        savable=model.savable,
        keyframable=model.keyframable,
    )
    for data_type in model.accepted_input_types:
        port.add_accepted_input_type(data_type)
    if model.output_type != DataType.INVALID:
        port.set_output_data_type(model.output_type)

    for field_model in model.fields:
        field = Field(
            static_value=_restore_value(field_model.static_value, field_model.static_vector),
            field_id=field_model.field_id,
            interpolation=field_model.interpolation,
            enabled=field_model.enabled,
        )
        for key in field_model.keyframes:
            field.keyframes.insert(Keyframe(key.time, _restore_value(key.value, key.vector)))
        port.add_field(field)

    if model.keyframing and model.keyframable:
        port._set_keyframing_internal(True)
    return port


def graph_from_document(
    document: GraphDocument,
    timeline: Optional[TimelineContext] = None,
    enforce_types: bool = True,
    keyframing_forbidden: Optional[Callable[[EffectNode], bool]] = None,
) -> PortGraph:
    """
    Build a PortGraph from a validated document.

    Args:
        document: Parsed document
        timeline: Time context shared by every restored node
        enforce_types: Type checking used when replaying edges
        keyframing_forbidden: Node classification predicate

    Returns:
        Restored graph
    """
    if document.version > DOCUMENT_VERSION:
        logger.warning(
            f"Document version {document.version} is newer than supported "
            f"version {DOCUMENT_VERSION}"
        )

    timeline = timeline or TimelineContext()
    graph = PortGraph(name=document.name, enforce_types=enforce_types)

    for node_model in document.nodes:
        node = EffectNode(
            node_id=node_model.node_id,
            name=node_model.name,
            category=node_model.category,
            timeline=timeline,
            keyframing_forbidden=keyframing_forbidden,
        )
        for port_model in node_model.ports:
            _restore_port(node, port_model)
        graph.add_node(node)

    for edge_model in document.edges:
        try:
            graph.connect(edge_model.output, edge_model.input)
        except InvalidGraphOperationError as e:
            logger.warning(f"Failed to restore edge {edge_model.output} -> {edge_model.input}: {e}")

    return graph
