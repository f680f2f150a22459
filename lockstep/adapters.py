"""Conversions between FixedVec2 and host float vectors (numpy arrays).

These are boundary adapters for rendering and input. Deterministic logic
should never call them.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import numpy as np

from .math.fixed import Fix64, Scalar
from .math.vec2 import FixedVec2
from .settings_schema import AdapterSettings, load_last_used, save_last_used

logger = logging.getLogger(__name__)


def from_array(values: Sequence[float] | np.ndarray, settings: AdapterSettings | None = None) -> FixedVec2:
    """Build a FixedVec2 from a 2- or 3-element float vector.

    A third component is dropped. Components are truncated toward zero unless
    the settings ask for nearest rounding.
    """
    settings = settings or AdapterSettings()
    arr = np.asarray(values, dtype=np.float64)
    if arr.shape not in ((2,), (3,)):
        raise ValueError(f"Expected a 2- or 3-element vector, got shape {arr.shape}.")

    vec = FixedVec2(
        Fix64.from_float(float(arr[0]), settings.rounding),
        Fix64.from_float(float(arr[1]), settings.rounding),
    )
    if settings.warn_on_precision_loss:
        error = float(np.max(np.abs(to_array2(vec) - arr[:2])))
        if error > settings.precision_loss_threshold:
            logger.warning("Lossy conversion %s -> %s (error %.3g).", arr[:2].tolist(), vec, error)
    return vec


def to_array2(vec: FixedVec2) -> np.ndarray:
    return np.array([vec.x.to_float(), vec.y.to_float()], dtype=np.float64)


def to_array3(vec: FixedVec2) -> np.ndarray:
    """Float 3-vector with a zero z component."""
    return np.array([vec.x.to_float(), vec.y.to_float(), 0.0], dtype=np.float64)


def widen(vec: FixedVec2) -> tuple[Scalar, Scalar, Scalar]:
    return (vec.x, vec.y, type(vec.x).ZERO)


def narrow(components: Sequence[Scalar]) -> FixedVec2:
    if len(components) != 3:
        raise ValueError(f"Expected 3 components, got {len(components)}.")
    return FixedVec2(components[0], components[1])


class VectorAdapter:
    """Float boundary bound to one set of adapter settings."""

    def __init__(self, settings: AdapterSettings | None = None) -> None:
        self.settings = settings or AdapterSettings()

    @classmethod
    def from_last_used(cls, path: Path | None = None) -> "VectorAdapter":
        return cls(load_last_used(path))

    def save(self, path: Path | None = None) -> Path:
        return save_last_used(self.settings, path)

    def from_array(self, values: Sequence[float] | np.ndarray) -> FixedVec2:
        return from_array(values, self.settings)

    def to_array2(self, vec: FixedVec2) -> np.ndarray:
        return to_array2(vec)

    def to_array3(self, vec: FixedVec2) -> np.ndarray:
        return to_array3(vec)
