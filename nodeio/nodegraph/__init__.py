# -*- coding: utf-8 -*-
"""
NodeGraph - Ports, fields, keyframes and edges between effect nodes.
"""
from .datatypes import DataType, Interpolation, NodeCategory
from .errors import InvalidGraphOperationError
from .keyframes import Keyframe, KeyframeTrack
from .context import TimelineContext, ConfirmationGate
from .field import Field
from .edge import Edge, connect_edge, disconnect_edge
from .node import EffectNode
from .port import Port, request_keyframing_change
from .graph import PortGraph
from .commands import (
    SetKeyframingCommand,
    KeyframeDataChange,
    KeyframeDeleteCommand,
    SetValueCommand,
    SetEnabledCommand,
    ConnectEdgeCommand,
    DisconnectEdgeCommand,
)
from .serialization import GraphDocument, graph_to_document, graph_from_document

__all__ = [
    "DataType",
    "Interpolation",
    "NodeCategory",
    "InvalidGraphOperationError",
    "Keyframe",
    "KeyframeTrack",
    "TimelineContext",
    "ConfirmationGate",
    "Field",
    "Edge",
    "connect_edge",
    "disconnect_edge",
    "EffectNode",
    "Port",
    "request_keyframing_change",
    "PortGraph",
    "SetKeyframingCommand",
    "KeyframeDataChange",
    "KeyframeDeleteCommand",
    "SetValueCommand",
    "SetEnabledCommand",
    "ConnectEdgeCommand",
    "DisconnectEdgeCommand",
    "GraphDocument",
    "graph_to_document",
    "graph_from_document",
]
