"""
Command Pattern - Base Interfaces.

Provides:
- UndoableCommand: Command with undo/redo support
- UndoJournal: The push contract every mutator depends on
"""
from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable


class UndoableCommand(ABC):
    """
    Command that supports undo/redo operations.

    Use this for operations that modify state and should be reversible.
    Push onto an UndoJournal to enable undo/redo functionality.

    Example:
        class RenamePortCommand(UndoableCommand):
            def __init__(self, port, new_name):
                self.port = port
                self.old_name = port.name
                self.new_name = new_name

            @property
            def description(self) -> str:
                return f"Rename to {self.new_name}"

            def execute(self):
                self.port.name = self.new_name

            def undo(self):
                self.port.name = self.old_name
    """

    @property
    def description(self) -> str:
        """
        Human-readable description for UI display.

        Returns:
            Description string (default: class name)
        """
        return self.__class__.__name__

    @abstractmethod
    def execute(self) -> None:
        """
        Execute the command (forward operation).

        This is called when the command is pushed and on redo.
        """
        pass

    @abstractmethod
    def undo(self) -> None:
        """
        Reverse the command.

        Must restore state to exactly what it was before execute().
        """
        pass

    def redo(self) -> None:
        """
        Re-execute the command after undo.

        Default implementation calls execute().
        Override if redo requires different logic.
        """
        self.execute()


@runtime_checkable
class UndoJournal(Protocol):
    """
    Anything commands can be pushed onto.

    ``push`` runs the command's forward step before returning and records it
    so a later undo/redo invokes the matching inverse/forward step.
    """

    def push(self, command: UndoableCommand) -> None:
        ...
