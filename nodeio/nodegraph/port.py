# -*- coding: utf-8 -*-
"""
Port - A named connection point on a node.

A port is either an input (accepts a set of data types, at most one
incoming edge) or an output (produces one data type, any number of
edges). It owns zero or more Fields and a keyframing switch that converts
field data between static values and keyframe tracks.

Example:
    node = EffectNode(name="Opacity", timeline=TimelineContext(playhead=100))

    amount = Port(node, "amount", "Amount")
    amount.add_accepted_input_type(DataType.FLOAT)
    amount.add_field(Field(static_value=3))

    amount.set_keyframing_enabled(True, journal)   # keyframe (100, 3)
    amount.toggle_keyframe_at_playhead(journal)    # deletes it again
"""
from typing import Any, Iterator, List, Optional, TYPE_CHECKING

from loguru import logger

from nodeio.core.commands import CompositeCommand
from nodeio.core.events import Signal

from .commands import KeyframeDeleteCommand, SetKeyframingCommand
from .datatypes import DataType
from .edge import disconnect_edge
from .errors import InvalidGraphOperationError
from .field import Field

if TYPE_CHECKING:
    from nodeio.core.commands import UndoJournal
    from .context import ConfirmationGate
    from .edge import Edge
    from .node import EffectNode


DISABLE_KEYFRAMES_TITLE = "Disable Keyframes"
DISABLE_KEYFRAMES_MESSAGE = (
    "Disabling keyframes will delete all current keyframes. "
    "Are you sure you want to do this?"
)


class Port:
    """
    Connection point owning fields and edges.

    Attributes:
        port_id: Identifier unique within the owning node
        name: Display name
        savable: Whether field values are persisted
        keyframable: Whether keyframing may ever be enabled
        changed: Forwarded from every field's ``changed``
        clicked: Forwarded from every field's ``clicked``
        edges_changed: Emitted after an edge is added or removed
        keyframing_changed: Emitted with the keyframing flag
    """

    def __init__(
        self,
        node: 'EffectNode',
        port_id: str,
        name: str = "",
        savable: bool = True,
        keyframable: bool = True,
    ):
        if node is None:
            raise InvalidGraphOperationError("A port must belong to a node")

        self.node = node
        self.port_id = port_id
        self.name = name or port_id
        self.savable = savable
        self.keyframable = keyframable

        self._keyframing = False
        self._accepted_inputs: List[DataType] = []
        self._output_type = DataType.INVALID
        self._fields: List[Field] = []
        self._edges: List['Edge'] = []

        self.changed = Signal("PortChanged")
        self.clicked = Signal("PortClicked")
        self.edges_changed = Signal("PortEdgesChanged")
        self.keyframing_changed = Signal("PortKeyframingChanged")

        node.add_port(self)

    # =========================================================================
    # Fields
    # =========================================================================

    def add_field(self, field: Field) -> Field:
        """
        Append a field and take ownership of it.

        The field's ``changed``/``clicked`` signals are forwarded to this
        port's signals of the same name.

        Returns:
            The added field (for chaining)
        """
        field._attach(self, len(self._fields))
        field.changed.connect(self.changed.emit)
        field.clicked.connect(self.clicked.emit)
        self._fields.append(field)
        return field

    def field(self, index: int) -> Field:
        return self._fields[index]

    @property
    def fields(self) -> List[Field]:
        return list(self._fields)

    @property
    def field_count(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(list(self._fields))

    def _single_field(self) -> Field:
        if len(self._fields) != 1:
            raise InvalidGraphOperationError(
                f"{self.path} has {len(self._fields)} fields; single-field "
                f"access needs exactly one"
            )
        return self._fields[0]

    def get_value_at(self, time: float) -> Any:
        """Value of the only field at a node-local frame."""
        return self._single_field().get_value_at(time)

    def set_value_at(self, time: int, value: Any) -> None:
        """Write the only field at a node-local frame."""
        self._single_field().set_value_at(time, value)

    def set_enabled(self, enabled: bool) -> None:
        for field in self._fields:
            field.set_enabled(enabled)

    # =========================================================================
    # Classification
    # =========================================================================

    def add_accepted_input_type(self, data_type: DataType) -> None:
        """
        Mark this port as an input accepting ``data_type``.

        Raises:
            InvalidGraphOperationError: If the port is already an output
        """
        if self._output_type != DataType.INVALID:
            raise InvalidGraphOperationError(
                f"{self.path} is an output and cannot accept inputs"
            )
        if data_type == DataType.INVALID:
            raise InvalidGraphOperationError("Cannot accept the invalid data type")
        if data_type not in self._accepted_inputs:
            self._accepted_inputs.append(data_type)

    def set_output_data_type(self, data_type: DataType) -> None:
        """
        Mark this port as an output producing ``data_type``.

        Raises:
            InvalidGraphOperationError: If the port is already an input
        """
        if self._accepted_inputs:
            raise InvalidGraphOperationError(
                f"{self.path} is an input and cannot produce output"
            )
        self._output_type = data_type

    def can_accept(self, data_type: DataType) -> bool:
        if not self.is_input:
            return False
        return data_type in self._accepted_inputs

    @property
    def accepted_input_types(self) -> List[DataType]:
        return list(self._accepted_inputs)

    @property
    def output_data_type(self) -> DataType:
        if not self.is_output:
            raise InvalidGraphOperationError(f"{self.path} is not an output")
        return self._output_type

    @property
    def is_input(self) -> bool:
        return bool(self._accepted_inputs)

    @property
    def is_output(self) -> bool:
        return self._output_type != DataType.INVALID

    @property
    def classification(self) -> str:
        if self.is_input:
            return "input"
        if self.is_output:
            return "output"
        return "unclassified"

    @property
    def path(self) -> str:
        """Graph-wide handle ``<node_id>:<port_id>``."""
        return f"{self.node.node_id}:{self.port_id}"

    # =========================================================================
    # Edges
    # =========================================================================

    @property
    def edges(self) -> List['Edge']:
        return list(self._edges)

    @property
    def is_connected(self) -> bool:
        return bool(self._edges)

    def disconnect_all(self) -> None:
        """Sever every incident edge. Part of node teardown."""
        for edge in list(self._edges):
            disconnect_edge(edge)

    # =========================================================================
    # Keyframing
    # =========================================================================

    @property
    def keyframing(self) -> bool:
        return self._keyframing

    def _set_keyframing_internal(self, enabled: bool) -> None:
        if self.node.forbids_keyframing:
            return
        self._keyframing = enabled
        self.keyframing_changed.emit(self._keyframing)

    def set_keyframing_enabled(
        self,
        enabled: bool,
        journal: 'UndoJournal',
        confirmed: bool = False,
    ) -> bool:
        """
        Switch between static values and keyframes.

        Enabling turns each field's static value into a keyframe at the
        current time. Disabling is destructive (every field keeps only its
        value at the current time) and proceeds only when ``confirmed``.
        Both directions push one composite command onto ``journal``.

        Args:
            enabled: Requested state
            journal: Where the transition is recorded
            confirmed: Caller's answer to the destructive-disable question

        Returns:
            True if the transition happened

        Raises:
            InvalidGraphOperationError: Enabling on a non-keyframable port
        """
        if enabled == self._keyframing:
            return False

        if self.node.forbids_keyframing:
            logger.debug(f"Keyframing toggle ignored on {self.path}: node forbids keyframing")
            return False

        if enabled:
            if not self.keyframable:
                raise InvalidGraphOperationError(f"{self.path} is not keyframable")

            ca = CompositeCommand(description=f"Enable keyframing on {self.name}")
            ca.append(SetKeyframingCommand(self, True))
            for field in self._fields:
                field.prepare_data_for_keyframing(True, ca)
            journal.push(ca)

        else:
            if not confirmed:
                # Let bound views snap back to the unchanged state
                self.keyframing_changed.emit(self._keyframing)
                logger.debug(f"Keyframing disable declined on {self.path}")
                return False

            ca = CompositeCommand(description=f"Disable keyframing on {self.name}")
            for field in self._fields:
                field.prepare_data_for_keyframing(False, ca)
            ca.append(SetKeyframingCommand(self, False))
            journal.push(ca)

        logger.debug(f"Keyframing {'enabled' if enabled else 'disabled'} on {self.path}")
        return True

    def set_keyframe_on_all_fields(self, ca: CompositeCommand) -> None:
        """Materialize a keyframe at the current time on every field."""
        for field in self._fields:
            field.insert_keyframe_at_current_time(ca)

    # =========================================================================
    # Navigation
    # =========================================================================

    def previous_keyframe_time(self) -> Optional[int]:
        """Latest keyframe across all fields strictly before the playhead."""
        timeline = self.node.timeline
        earlier = [
            t for t in (
                field.nearest_keyframe_before(timeline.playhead, timeline.time_offset)
                for field in self._fields
            )
            if t is not None
        ]
        return max(earlier) if earlier else None

    def next_keyframe_time(self) -> Optional[int]:
        """Earliest keyframe across all fields strictly after the playhead."""
        timeline = self.node.timeline
        later = [
            t for t in (
                field.nearest_keyframe_after(timeline.playhead, timeline.time_offset)
                for field in self._fields
            )
            if t is not None
        ]
        return min(later) if later else None

    def jump_to_previous_keyframe(self) -> Optional[int]:
        """
        Seek the timeline to the previous keyframe, if any.

        Returns:
            The sequence frame sought to, or None
        """
        key = self.previous_keyframe_time()
        if key is not None:
            self.node.timeline.seek(key)
        return key

    def jump_to_next_keyframe(self) -> Optional[int]:
        """Seek the timeline to the next keyframe, if any."""
        key = self.next_keyframe_time()
        if key is not None:
            self.node.timeline.seek(key)
        return key

    def toggle_keyframe_at_playhead(self, journal: 'UndoJournal') -> Optional[bool]:
        """
        Add or remove keyframes at the playhead on every field.

        If no field has a keyframe at the playhead, one is created on every
        field. Otherwise every keyframe found there is deleted. Either way
        the change is one composite command.

        Returns:
            True if keyframes were created, False if deleted, None when the
            port is not keyframing
        """
        if not self._keyframing:
            logger.debug(f"Keyframe toggle ignored on {self.path}: keyframing is off")
            return None

        timeline = self.node.timeline

        found = []
        for field in self._fields:
            index = field.keyframe_index_at(timeline.playhead, timeline.time_offset)
            if index is not None:
                found.append((field, index))

        if not found:
            ca = CompositeCommand(description=f"Add keyframe on {self.name}")
            self.set_keyframe_on_all_fields(ca)
            journal.push(ca)
            return True

        ca = CompositeCommand(description=f"Delete keyframe on {self.name}")
        for field, index in found:
            ca.append(KeyframeDeleteCommand(field, index))
        journal.push(ca)
        return False

    def __repr__(self) -> str:
        return f"<Port {self.path} {self.classification}>"


def request_keyframing_change(
    port: Port,
    enabled: bool,
    journal: 'UndoJournal',
    gate: 'ConfirmationGate',
) -> bool:
    """
    Caller-side keyframing toggle that asks before destroying keyframes.

    The gate is consulted only when disabling an active keyframing port;
    its answer is handed to Port.set_keyframing_enabled as ``confirmed``.
    """
    confirmed = False
    if not enabled and port.keyframing and not port.node.forbids_keyframing:
        confirmed = bool(gate(DISABLE_KEYFRAMES_TITLE, DISABLE_KEYFRAMES_MESSAGE))
    return port.set_keyframing_enabled(enabled, journal, confirmed=confirmed)
