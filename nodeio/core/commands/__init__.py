"""
Command System.

Provides Command pattern infrastructure:
- UndoableCommand: Commands with undo/redo support
- UndoJournal: Protocol for anything commands are pushed onto
- UndoManager: Stack-based undo/redo management
- SetPropertyCommand, CompositeCommand: Reusable implementations
"""
from .base import UndoableCommand, UndoJournal
from .undo_manager import UndoManager
from .composite import SetPropertyCommand, CompositeCommand

__all__ = [
    # Base interfaces
    "UndoableCommand",
    "UndoJournal",
    # Systems
    "UndoManager",
    # Reusable implementations
    "SetPropertyCommand",
    "CompositeCommand",
]
