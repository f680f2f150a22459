"""Deterministic fixed-point 2D vector math for lockstep simulations."""

from .math import Fix64, FixedVec2

__all__ = ["Fix64", "FixedVec2"]
