# -*- coding: utf-8 -*-
"""
EffectNode - The owner of a set of ports.

Only the parts of a node the port graph needs are modeled: identity,
category, the timeline it reads time from, and ordered teardown.

Example:
    node = EffectNode(name="Transform", timeline=TimelineContext(playhead=100))
    position = Port(node, "position", "Position")
    position.add_field(Field(static_value=(0.0, 0.0)))
"""
from typing import Callable, List, Optional, TYPE_CHECKING
from uuid import uuid4

from loguru import logger

from nodeio.core.events import Signal

from .context import TimelineContext
from .datatypes import NodeCategory
from .errors import InvalidGraphOperationError

if TYPE_CHECKING:
    from .port import Port


def forbids_keyframing_for_transitions(node: 'EffectNode') -> bool:
    """Default classification: transitions never keyframe their ports."""
    return node.category == NodeCategory.TRANSITION


class EffectNode:
    """
    A node instance owning ports.

    Attributes:
        node_id: Unique identifier for this node instance
        name: Display name
        category: Classification consulted by keyframing rules
        timeline: Where the node reads current time and playhead from
        destroyed: Signal emitted after destroy()
    """

    def __init__(
        self,
        node_id: Optional[str] = None,
        name: str = "",
        category: NodeCategory = NodeCategory.EFFECT,
        timeline: Optional[TimelineContext] = None,
        keyframing_forbidden: Optional[Callable[['EffectNode'], bool]] = None,
    ):
        self.node_id = node_id or str(uuid4())
        self.name = name or self.node_id[:8]
        self.category = category
        self.timeline = timeline or TimelineContext()
        self._keyframing_forbidden = keyframing_forbidden or forbids_keyframing_for_transitions
        self._ports: List['Port'] = []
        self.destroyed = Signal("NodeDestroyed")

    # =========================================================================
    # Ports
    # =========================================================================

    def add_port(self, port: 'Port') -> 'Port':
        """Register a port. Called by the Port constructor."""
        if self.get_port(port.port_id) is not None:
            raise InvalidGraphOperationError(
                f"Node {self.node_id} already has a port '{port.port_id}'"
            )
        self._ports.append(port)
        return port

    def get_port(self, port_id: str) -> Optional['Port']:
        for port in self._ports:
            if port.port_id == port_id:
                return port
        return None

    @property
    def ports(self) -> List['Port']:
        return list(self._ports)

    @property
    def input_ports(self) -> List['Port']:
        return [port for port in self._ports if port.is_input]

    @property
    def output_ports(self) -> List['Port']:
        return [port for port in self._ports if port.is_output]

    # =========================================================================
    # Collaborators
    # =========================================================================

    @property
    def current_time(self) -> int:
        return self.timeline.current_time

    @property
    def forbids_keyframing(self) -> bool:
        return bool(self._keyframing_forbidden(self))

    # =========================================================================
    # Teardown
    # =========================================================================

    def destroy(self) -> None:
        """Disconnect every incident edge, then drop the ports."""
        for port in self._ports:
            port.disconnect_all()
        self._ports.clear()
        logger.debug(f"Destroyed node: {self}")
        self.destroyed.emit(self)

    def __repr__(self) -> str:
        return f"<EffectNode {self.name}({self.node_id[:8]})>"
