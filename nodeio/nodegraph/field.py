# -*- coding: utf-8 -*-
"""
Field - A single typed, optionally keyframed parameter slot.

A Field lives inside a Port. While its port is not keyframing, the field
holds one static value; once keyframing is on, values come from its
KeyframeTrack and are interpolated between samples.

Example:
    port = Port(node, "opacity", "Opacity")
    opacity = port.add_field(Field(static_value=1.0))

    opacity.get_value_at(0)       # 1.0
    opacity.set_value_at(0, 0.5)  # overwrites the static value
"""
from typing import Any, Optional, TYPE_CHECKING

from nodeio.core.commands import SetPropertyCommand
from nodeio.core.events import Signal

from .commands import KeyframeDataChange
from .datatypes import Interpolation
from .errors import InvalidGraphOperationError
from .keyframes import KeyframeTrack, default_interpolation

if TYPE_CHECKING:
    from nodeio.core.commands import CompositeCommand, UndoJournal
    from .port import Port


class Field:
    """
    Typed parameter slot owned by a Port.

    Attributes:
        field_id: Optional identifier used by serialization
        static_value: Value used while keyframing is disabled
        keyframes: Samples used while keyframing is enabled
        enabled: Whether the field is editable
        changed: Signal emitted after any value write
        clicked: Signal emitted by click()
    """

    def __init__(
        self,
        static_value: Any = None,
        field_id: str = "",
        interpolation: Optional[Interpolation] = None,
        enabled: bool = True,
    ):
        self.field_id = field_id
        self.static_value = static_value
        self.keyframes = KeyframeTrack()
        self.enabled = enabled
        self._interpolation = interpolation
        self._port: Optional['Port'] = None
        self._index = -1

        self.changed = Signal("FieldChanged")
        self.clicked = Signal("FieldClicked")

    # =========================================================================
    # Ownership
    # =========================================================================

    def _attach(self, port: 'Port', index: int) -> None:
        if self._port is not None:
            raise InvalidGraphOperationError(
                f"Field already belongs to port '{self._port.port_id}'"
            )
        self._port = port
        self._index = index

    @property
    def port(self) -> Optional['Port']:
        return self._port

    @property
    def index(self) -> int:
        """Position within the owning port, -1 while unowned."""
        return self._index

    @property
    def keyframing(self) -> bool:
        return self._port is not None and self._port.keyframing

    def current_time(self) -> int:
        """The owning node's current (local) frame."""
        if self._port is None:
            raise InvalidGraphOperationError("Field is not attached to a port")
        return self._port.node.current_time

    # =========================================================================
    # Settings
    # =========================================================================

    @property
    def interpolation(self) -> Interpolation:
        """Explicit setting, else derived from the kind of value stored."""
        if self._interpolation is not None:
            return self._interpolation
        sample = self.keyframes[0].value if self.keyframes else self.static_value
        return default_interpolation(sample)

    @interpolation.setter
    def interpolation(self, method: Optional[Interpolation]) -> None:
        self._interpolation = method
        self.changed.emit()

    @property
    def has_explicit_interpolation(self) -> bool:
        return self._interpolation is not None

    def set_interpolation(self, method: Optional[Interpolation], journal: 'UndoJournal') -> None:
        """Journaled interpolation change; ``None`` reverts to the derived default."""
        journal.push(SetPropertyCommand(self, "interpolation", method, old_value=self._interpolation))

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def click(self) -> None:
        self.clicked.emit()

    # =========================================================================
    # Values
    # =========================================================================

    def get_value_at(self, time: float) -> Any:
        """
        Value at a node-local frame.

        Static value when not keyframing or when no keyframes exist yet.
        """
        if not self.keyframing:
            return self.static_value
        return self.keyframes.value_at(time, self.interpolation, default=self.static_value)

    def set_value_at(self, time: int, value: Any) -> None:
        """
        Write a value at a node-local frame.

        Overwrites the static value when not keyframing, otherwise inserts
        or overwrites the keyframe at ``time``. Not journaled here; wrap in
        SetValueCommand for undo.
        """
        if self.keyframing:
            self.keyframes.set(time, value)
        else:
            self.static_value = value
        self.changed.emit()

    def insert_keyframe_at_current_time(self, ca: 'CompositeCommand') -> None:
        """
        Materialize a keyframe holding the current value at the current time.

        The change is recorded into ``ca``.
        """
        kdc = KeyframeDataChange(self)

        now = self.current_time()
        self.set_value_at(now, self.get_value_at(now))

        kdc.set_new_keyframes()
        ca.append(kdc)

    def prepare_data_for_keyframing(self, enabled: bool, ca: 'CompositeCommand') -> None:
        """
        Convert this field's data for a keyframing transition.

        Enabling turns the static value into one keyframe at the current
        time. Disabling keeps the value at the current time as the static
        value and discards every keyframe. Must run before the port flag
        flips; the change is recorded into ``ca``.
        """
        kdc = KeyframeDataChange(self)

        now = self.current_time()
        if enabled:
            self.keyframes.clear()
            self.keyframes.set(now, self.static_value)
        else:
            self.static_value = self.get_value_at(now)
            self.keyframes.clear()

        kdc.set_new_keyframes()
        ca.append(kdc)
        self.changed.emit()

    # =========================================================================
    # Keyframe search
    # =========================================================================

    def nearest_keyframe_before(self, target_time: int, offset: int = 0) -> Optional[int]:
        """Closest keyframe strictly before ``target_time`` in caller coordinates."""
        return self.keyframes.nearest_before(target_time, offset)

    def nearest_keyframe_after(self, target_time: int, offset: int = 0) -> Optional[int]:
        """Closest keyframe strictly after ``target_time`` in caller coordinates."""
        return self.keyframes.nearest_after(target_time, offset)

    def keyframe_index_at(self, target_time: int, offset: int = 0) -> Optional[int]:
        """Index of the keyframe whose converted time equals ``target_time``."""
        return self.keyframes.index_of(target_time - offset)

    def __repr__(self) -> str:
        port = self._port.port_id if self._port else "?"
        return f"<Field {port}[{self._index}]>"
