"""
Reusable command implementations.

- SetPropertyCommand: Generic property setter with undo
- CompositeCommand: Group multiple commands as one
"""
from typing import Any, Iterator, List, Optional

from .base import UndoableCommand


class SetPropertyCommand(UndoableCommand):
    """
    Generic command to set a property with undo support.

    Captures the old value on construction for undo.

    Example:
        cmd = SetPropertyCommand(port, "name", "Opacity")
        undo_manager.push(cmd)

        # Later: undo restores the original name
        undo_manager.undo()
    """

    _UNSET = object()

    def __init__(self, target: Any, property_name: str, new_value: Any,
                 old_value: Any = _UNSET):
        """
        Initialize property change command.

        Args:
            target: Object to modify
            property_name: Name of property to change
            new_value: New value to set
            old_value: Previous value (auto-captured if omitted)
        """
        self.target = target
        self.property_name = property_name
        self.new_value = new_value

        if old_value is self._UNSET:
            self.old_value = getattr(target, property_name, None)
        else:
            self.old_value = old_value

    @property
    def description(self) -> str:
        return f"Set {self.property_name} to {self.new_value}"

    def execute(self) -> None:
        setattr(self.target, self.property_name, self.new_value)

    def undo(self) -> None:
        setattr(self.target, self.property_name, self.old_value)


class CompositeCommand(UndoableCommand):
    """
    Groups multiple commands as a single undoable unit.

    All sub-commands execute together and undo together.
    Undo happens in reverse order of execution.

    Example:
        ca = CompositeCommand(description="Enable keyframing")
        ca.append(SetKeyframingCommand(port, True))
        for field in port.fields:
            field.prepare_data_for_keyframing(True, ca)
        journal.push(ca)

        # Single undo reverts every step
        journal.undo()
    """

    def __init__(self, commands: Optional[List[UndoableCommand]] = None,
                 description: str = "Composite Command"):
        """
        Initialize composite command.

        Args:
            commands: Commands to execute together
            description: Description for this composite
        """
        self._commands: List[UndoableCommand] = list(commands or [])
        self._description = description

    @property
    def description(self) -> str:
        return self._description

    def append(self, command: UndoableCommand) -> None:
        """Add a sub-command to the end of the batch."""
        self._commands.append(command)

    @property
    def commands(self) -> List[UndoableCommand]:
        return list(self._commands)

    def is_empty(self) -> bool:
        return not self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[UndoableCommand]:
        return iter(self._commands)

    def execute(self) -> None:
        """Execute all sub-commands in order."""
        for cmd in self._commands:
            cmd.execute()

    def undo(self) -> None:
        """Undo all sub-commands in reverse order."""
        for cmd in reversed(self._commands):
            cmd.undo()

    def redo(self) -> None:
        """Redo all sub-commands in order."""
        for cmd in self._commands:
            cmd.redo()
