# -*- coding: utf-8 -*-
"""
Enumerations shared by ports, fields and nodes.
"""
from enum import Enum


class DataType(Enum):
    """Data carried across an edge. INVALID marks an unclassified port."""
    INVALID = "invalid"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    STRING = "string"
    COLOR = "color"
    VECTOR = "vector"
    FONT = "font"
    FILE = "file"
    MATRIX = "matrix"
    TEXTURE = "texture"
    FOOTAGE = "footage"

    @property
    def display_name(self) -> str:
        return self.name.title()


class Interpolation(Enum):
    """How a field fills the gap between two keyframes."""
    LINEAR = "linear"
    HOLD = "hold"


class NodeCategory(Enum):
    """Coarse node classification consulted by keyframing rules."""
    EFFECT = "effect"
    TRANSITION = "transition"
    GENERATOR = "generator"
