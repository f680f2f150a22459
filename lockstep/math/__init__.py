"""Deterministic fixed-point math."""

from .fixed import Fix64, Scalar
from .vec2 import (
    FixedVec2,
    absolute,
    add,
    angle_between,
    cross,
    distance,
    distance_squared,
    divide,
    dot,
    fast_in_range,
    multiply,
    negate,
    project,
    scale,
    subtract,
    truncate,
)

__all__ = [
    "Fix64",
    "FixedVec2",
    "Scalar",
    "absolute",
    "add",
    "angle_between",
    "cross",
    "distance",
    "distance_squared",
    "divide",
    "dot",
    "fast_in_range",
    "multiply",
    "negate",
    "project",
    "scale",
    "subtract",
    "truncate",
]
