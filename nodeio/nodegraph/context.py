# -*- coding: utf-8 -*-
"""
Collaborators a node consults at call time.

- TimelineContext: current time, playhead and the clip-to-sequence offset
- ConfirmationGate: synchronous yes/no source for destructive transitions
"""
from typing import Protocol

from nodeio.core.events import Signal


class TimelineContext:
    """
    Time coordinates of the clip a node is applied to.

    The playhead is a frame on the shared sequence timeline. Keyframes are
    stored in clip-local frames; ``time_offset`` converts local frames to
    sequence frames by addition.

    Attributes:
        playhead: Current sequence frame
        timeline_in: Sequence frame where the clip starts
        clip_in: Source frame shown at timeline_in
        seeked: Signal emitted with the new playhead after seek()
    """

    def __init__(self, playhead: int = 0, timeline_in: int = 0, clip_in: int = 0):
        self.playhead = playhead
        self.timeline_in = timeline_in
        self.clip_in = clip_in
        self.seeked = Signal("TimelineSeeked")

    @property
    def time_offset(self) -> int:
        """Additive conversion from clip-local frames to sequence frames."""
        return self.timeline_in - self.clip_in

    @property
    def current_time(self) -> int:
        """The playhead expressed in clip-local frames."""
        return self.to_local_time(self.playhead)

    def to_local_time(self, sequence_time: int) -> int:
        return sequence_time - self.time_offset

    def seek(self, frame: int) -> None:
        """Move the playhead to a sequence frame."""
        self.playhead = frame
        self.seeked.emit(frame)

    def __repr__(self) -> str:
        return (
            f"<TimelineContext playhead={self.playhead} "
            f"offset={self.time_offset}>"
        )


class ConfirmationGate(Protocol):
    """
    Synchronous yes/no decision source.

    Typically a thin wrapper over a modal dialog; tests use a lambda.
    """

    def __call__(self, title: str, message: str) -> bool:
        ...
