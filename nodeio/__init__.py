"""
nodeio - Node I/O and keyframe animation for a non-linear video editor.

Typed ports between effect nodes, optionally keyframed fields, and
undo-journaled mutation of both.
"""
from nodeio.core.config import ConfigManager, NodeIOConfig
from nodeio.core.commands import UndoManager, CompositeCommand, UndoableCommand
from nodeio.core.events import Signal
from nodeio.core.logging import setup_logging
from nodeio.nodegraph import (
    DataType,
    Interpolation,
    NodeCategory,
    InvalidGraphOperationError,
    TimelineContext,
    Field,
    Edge,
    EffectNode,
    Port,
    PortGraph,
    connect_edge,
    disconnect_edge,
    request_keyframing_change,
)
from nodeio.document import NodeDocument

__version__ = "0.1.0"

__all__ = [
    "ConfigManager",
    "NodeIOConfig",
    "UndoManager",
    "CompositeCommand",
    "UndoableCommand",
    "Signal",
    "setup_logging",
    "DataType",
    "Interpolation",
    "NodeCategory",
    "InvalidGraphOperationError",
    "TimelineContext",
    "Field",
    "Edge",
    "EffectNode",
    "Port",
    "PortGraph",
    "connect_edge",
    "disconnect_edge",
    "request_keyframing_change",
    "NodeDocument",
]
