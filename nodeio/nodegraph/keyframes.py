# -*- coding: utf-8 -*-
"""
Keyframes - Time-indexed samples and their interpolation.

A KeyframeTrack keeps keyframes sorted by strictly increasing integer
frame. Writing at an existing frame overwrites that sample in place,
writing anywhere else inserts while preserving the order.

Example:
    track = KeyframeTrack()
    track.set(0, 0.0)
    track.set(10, 1.0)

    track.value_at(5, Interpolation.LINEAR)   # 0.5
    track.value_at(5, Interpolation.HOLD)     # 0.0
    track.value_at(50, Interpolation.LINEAR)  # 1.0 (clamped)
"""
import math
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from numbers import Real
from typing import Any, Iterator, List, Optional, Tuple

from .datatypes import Interpolation


@dataclass(frozen=True)
class Keyframe:
    """A single sample: integer frame and the value held there."""
    time: int
    value: Any

    def to_dict(self) -> dict:
        return {"time": self.time, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict) -> 'Keyframe':
        return cls(time=int(data["time"]), value=data.get("value"))


def _is_scalar(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def is_interpolable(value: Any) -> bool:
    """
    True for values that can be blended linearly.

    Plain numbers (bool excluded) and non-empty tuples/lists of numbers.
    """
    if _is_scalar(value):
        return True
    if isinstance(value, (tuple, list)) and value:
        return all(_is_scalar(v) for v in value)
    return False


def default_interpolation(value: Any) -> Interpolation:
    """LINEAR for numeric values, HOLD for everything else."""
    return Interpolation.LINEAR if is_interpolable(value) else Interpolation.HOLD


def _blend(a: Any, b: Any, t: float) -> Any:
    value = a + (b - a) * t
    # Integer parameters stay integers, rounded half up
    if isinstance(a, int) and isinstance(b, int):
        return math.floor(value + 0.5)
    return value


def lerp(a: Any, b: Any, t: float) -> Any:
    """
    Linearly blend ``a`` towards ``b`` by ``t`` in [0, 1].

    Vectors are blended per component and keep the container type of ``a``.
    Integer endpoints produce rounded integers. Values that cannot be
    blended together hold ``a``.
    """
    if _is_scalar(a) and _is_scalar(b):
        return _blend(a, b, t)
    if (is_interpolable(a) and is_interpolable(b)
            and not _is_scalar(a) and not _is_scalar(b)
            and len(a) == len(b)):
        return type(a)(_blend(x, y, t) for x, y in zip(a, b))
    return a


class KeyframeTrack:
    """
    Ordered time -> value samples owned by a Field.

    Invariant: times are strictly increasing, no two keyframes share a time.
    """

    def __init__(self, keyframes: Optional[List[Keyframe]] = None):
        self._keys: List[Keyframe] = []
        for key in keyframes or []:
            self.set(key.time, key.value)

    # =========================================================================
    # Access
    # =========================================================================

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[Keyframe]:
        return iter(list(self._keys))

    def __getitem__(self, index: int) -> Keyframe:
        return self._keys[index]

    def __bool__(self) -> bool:
        return bool(self._keys)

    def __eq__(self, other) -> bool:
        if not isinstance(other, KeyframeTrack):
            return False
        return self._keys == other._keys

    def times(self) -> List[int]:
        """All keyframe frames in ascending order."""
        return [key.time for key in self._keys]

    def index_of(self, time: int) -> Optional[int]:
        """Index of the keyframe exactly at ``time``, or None."""
        i = bisect_left(self.times(), time)
        if i < len(self._keys) and self._keys[i].time == time:
            return i
        return None

    def value_at(self, time: float, interpolation: Interpolation,
                 default: Any = None) -> Any:
        """
        Value at ``time``.

        Exact matches return the stored value, times outside the track clamp
        to the first/last keyframe and times in between are filled according
        to ``interpolation``. An empty track returns ``default``.
        """
        if not self._keys:
            return default

        times = self.times()
        if time <= times[0]:
            return self._keys[0].value
        if time >= times[-1]:
            return self._keys[-1].value

        # times[i - 1] <= time < times[i]
        i = bisect_right(times, time)
        before = self._keys[i - 1]
        if before.time == time or interpolation == Interpolation.HOLD:
            return before.value

        after = self._keys[i]
        t = (time - before.time) / (after.time - before.time)
        return lerp(before.value, after.value, t)

    def nearest_before(self, target: int, offset: int = 0) -> Optional[int]:
        """
        Closest converted time strictly below ``target``.

        Each stored time is shifted by ``offset`` before comparing.
        """
        found = None
        for key in self._keys:
            comp = key.time + offset
            if comp < target and (found is None or comp > found):
                found = comp
        return found

    def nearest_after(self, target: int, offset: int = 0) -> Optional[int]:
        """Closest converted time strictly above ``target``."""
        found = None
        for key in self._keys:
            comp = key.time + offset
            if comp > target and (found is None or comp < found):
                found = comp
        return found

    # =========================================================================
    # Mutation
    # =========================================================================

    def set(self, time: int, value: Any) -> int:
        """
        Insert or overwrite the keyframe at ``time``.

        Returns:
            Index of the written keyframe
        """
        time = int(time)
        times = self.times()
        i = bisect_left(times, time)
        key = Keyframe(time, value)
        if i < len(self._keys) and self._keys[i].time == time:
            self._keys[i] = key
        else:
            self._keys.insert(i, key)
        return i

    def insert(self, keyframe: Keyframe) -> int:
        """Insert a keyframe object, overwriting one at the same time."""
        return self.set(keyframe.time, keyframe.value)

    def remove_at(self, index: int) -> Keyframe:
        """Remove and return the keyframe at ``index``."""
        return self._keys.pop(index)

    def clear(self) -> None:
        self._keys.clear()

    def snapshot(self) -> Tuple[Keyframe, ...]:
        """Immutable copy of the current samples, for undo."""
        return tuple(self._keys)

    def restore(self, snapshot: Tuple[Keyframe, ...]) -> None:
        """Replace all samples with a previous snapshot."""
        self._keys = list(snapshot)

    def to_list(self) -> List[dict]:
        return [key.to_dict() for key in self._keys]

    def __repr__(self) -> str:
        return f"<KeyframeTrack {[(k.time, k.value) for k in self._keys]}>"
