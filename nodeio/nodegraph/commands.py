# -*- coding: utf-8 -*-
"""
Undoable commands for ports, fields and edges.

Every graph mutation that should be reversible goes through one of these,
usually batched in a CompositeCommand and pushed onto an UndoJournal.
"""
from typing import Any, List, Optional, TYPE_CHECKING

from nodeio.core.commands import UndoableCommand

from .edge import Edge, connect_edge, disconnect_edge, restore_edge, split_endpoints

if TYPE_CHECKING:
    from .field import Field
    from .keyframes import Keyframe
    from .port import Port


class SetKeyframingCommand(UndoableCommand):
    """Flip a port's keyframing flag."""

    def __init__(self, port: 'Port', enabled: bool):
        self.port = port
        self.old_value = port.keyframing
        self.new_value = enabled

    @property
    def description(self) -> str:
        state = "Enable" if self.new_value else "Disable"
        return f"{state} keyframing on {self.port.name}"

    def execute(self) -> None:
        self.port._set_keyframing_internal(self.new_value)

    def undo(self) -> None:
        self.port._set_keyframing_internal(self.old_value)


class KeyframeDataChange(UndoableCommand):
    """
    Before/after snapshot of a field's keyframes and static value.

    Construct before mutating the field, mutate it, then call
    set_new_keyframes() to capture the result. Executing re-applies the
    captured result, so pushing after the mutation is harmless.
    """

    def __init__(self, field: 'Field'):
        self.field = field
        self._old_keys = field.keyframes.snapshot()
        self._old_static = field.static_value
        self._new_keys = None
        self._new_static = None
        self._captured = False

    @property
    def description(self) -> str:
        return f"Change keyframes of {self.field!r}"

    def set_new_keyframes(self) -> None:
        self._new_keys = self.field.keyframes.snapshot()
        self._new_static = self.field.static_value
        self._captured = True

    def execute(self) -> None:
        if not self._captured:
            return
        self.field.keyframes.restore(self._new_keys)
        self.field.static_value = self._new_static
        self.field.changed.emit()

    def undo(self) -> None:
        self.field.keyframes.restore(self._old_keys)
        self.field.static_value = self._old_static
        self.field.changed.emit()


class KeyframeDeleteCommand(UndoableCommand):
    """Remove one keyframe by index."""

    def __init__(self, field: 'Field', index: int):
        self.field = field
        self.index = index
        self._removed: Optional['Keyframe'] = None

    @property
    def description(self) -> str:
        return f"Delete keyframe {self.index} of {self.field!r}"

    def execute(self) -> None:
        self._removed = self.field.keyframes.remove_at(self.index)
        self.field.changed.emit()

    def undo(self) -> None:
        if self._removed is not None:
            self.field.keyframes.insert(self._removed)
            self.field.changed.emit()


class SetValueCommand(UndoableCommand):
    """Journaled wrapper around Field.set_value_at."""

    def __init__(self, field: 'Field', time: int, value: Any):
        self.field = field
        self.time = time
        self.value = value
        self._old_keys = field.keyframes.snapshot()
        self._old_static = field.static_value

    @property
    def description(self) -> str:
        return f"Set {self.field!r} to {self.value!r} at {self.time}"

    def execute(self) -> None:
        self.field.set_value_at(self.time, self.value)

    def undo(self) -> None:
        self.field.keyframes.restore(self._old_keys)
        self.field.static_value = self._old_static
        self.field.changed.emit()


class SetEnabledCommand(UndoableCommand):
    """Enable or disable every field of a port."""

    def __init__(self, port: 'Port', enabled: bool):
        self.port = port
        self.enabled = enabled
        self._old = [field.enabled for field in port.fields]

    @property
    def description(self) -> str:
        return f"{'Enable' if self.enabled else 'Disable'} {self.port.name}"

    def execute(self) -> None:
        self.port.set_enabled(self.enabled)

    def undo(self) -> None:
        for field, enabled in zip(self.port.fields, self._old):
            field.set_enabled(enabled)


class ConnectEdgeCommand(UndoableCommand):
    """
    Connect two ports; undo restores whatever the input was wired to.

    The same Edge object is re-registered on redo so commands pushed later
    that reference it stay valid.
    """

    def __init__(self, a: 'Port', b: 'Port', enforce_types: bool = True):
        self.output, self.input = split_endpoints(a, b)
        self.enforce_types = enforce_types
        self.edge: Optional[Edge] = None
        self._replaced: List[Edge] = []

    @property
    def description(self) -> str:
        return f"Connect {self.output.path} -> {self.input.path}"

    def execute(self) -> None:
        if self.edge is None:
            self._replaced = self.input.edges
            self.edge = connect_edge(self.output, self.input, self.enforce_types)
        else:
            restore_edge(self.edge)

    def undo(self) -> None:
        if self.edge is not None:
            disconnect_edge(self.edge)
        for edge in self._replaced:
            restore_edge(edge)


class DisconnectEdgeCommand(UndoableCommand):
    """Sever an edge; undo re-registers it."""

    def __init__(self, edge: Edge):
        self.edge = edge

    @property
    def description(self) -> str:
        return f"Disconnect {self.edge.output.path} -> {self.edge.input.path}"

    def execute(self) -> None:
        disconnect_edge(self.edge)

    def undo(self) -> None:
        restore_edge(self.edge)
