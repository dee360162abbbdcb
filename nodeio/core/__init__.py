"""
Core infrastructure shared by the node graph: signals, configuration,
logging and the undo command system.
"""
from .events import Signal
from .config import ConfigManager, NodeIOConfig, GeneralSettings, UndoSettings, GraphSettings
from .logging import setup_logging, setup_logging_from_config
from .commands import UndoableCommand, UndoJournal, UndoManager, CompositeCommand, SetPropertyCommand

__all__ = [
    "Signal",
    "ConfigManager",
    "NodeIOConfig",
    "GeneralSettings",
    "UndoSettings",
    "GraphSettings",
    "setup_logging",
    "setup_logging_from_config",
    "UndoableCommand",
    "UndoJournal",
    "UndoManager",
    "CompositeCommand",
    "SetPropertyCommand",
]
