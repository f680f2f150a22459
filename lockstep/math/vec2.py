"""Deterministic 2D vector built on a fixed-point scalar."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .fixed import Fix64, Scalar


@dataclass(frozen=True, eq=False)
class FixedVec2:
    """2D vector of two fixed-point components.

    Arithmetic is componentwise and inherits the scalar's rules: overflow
    wraps and division by zero yields the scalar's sentinel. Every operation
    returns a new vector except :meth:`normalize_this`, which scales the
    receiver in place and must not be called concurrently on a shared
    instance.

    ``>`` and ``<`` compare :attr:`component_sum` of the difference. That is a
    weak order: (2, 0) and (0, 2) are unequal, yet neither is greater.
    """

    x: Scalar
    y: Scalar

    ZERO: ClassVar["FixedVec2"]
    IDENTITY: ClassVar["FixedVec2"]

    @classmethod
    def from_ints(cls, x: int, y: int) -> "FixedVec2":
        return cls(Fix64.from_int(x), Fix64.from_int(y))

    def _zero(self) -> Scalar:
        return type(self.x).ZERO

    @property
    def component_sum(self) -> Scalar:
        """x + y, used only for ordering."""
        return self.x + self.y

    # Arithmetic

    def __add__(self, other: "FixedVec2") -> "FixedVec2":
        if not isinstance(other, FixedVec2):
            return NotImplemented
        return FixedVec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "FixedVec2") -> "FixedVec2":
        if not isinstance(other, FixedVec2):
            return NotImplemented
        return FixedVec2(self.x - other.x, self.y - other.y)

    def __mul__(self, other: "FixedVec2 | Scalar | int") -> "FixedVec2":
        if isinstance(other, FixedVec2):
            return FixedVec2(self.x * other.x, self.y * other.y)
        return FixedVec2(self.x * other, self.y * other)

    def __rmul__(self, scalar: "Scalar | int") -> "FixedVec2":
        return self.__mul__(scalar)

    def __truediv__(self, other: "FixedVec2 | Scalar | int") -> "FixedVec2":
        if isinstance(other, FixedVec2):
            return FixedVec2(self.x / other.x, self.y / other.y)
        return FixedVec2(self.x / other, self.y / other)

    def __neg__(self) -> "FixedVec2":
        return FixedVec2(-self.x, -self.y)

    def __abs__(self) -> "FixedVec2":
        return FixedVec2(abs(self.x), abs(self.y))

    # Equality and ordering

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FixedVec2):
            return self.x == other.x and self.y == other.y
        if isinstance(other, (type(self.x), int)) and not isinstance(other, bool):
            return self.x == other and self.y == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __gt__(self, other: "FixedVec2") -> bool:
        if not isinstance(other, FixedVec2):
            return NotImplemented
        return (self.x - other.x) + (self.y - other.y) > self._zero()

    def __lt__(self, other: "FixedVec2") -> bool:
        if not isinstance(other, FixedVec2):
            return NotImplemented
        return (other.x - self.x) + (other.y - self.y) > self._zero()

    def compare_to(self, other: "FixedVec2") -> int:
        """-1, 0 or 1 by component sum. Sorting aid only, not a total order."""
        mine = self.component_sum
        theirs = other.component_sum
        return (mine > theirs) - (mine < theirs)

    # Geometry

    def dot(self, other: "FixedVec2") -> Scalar:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "FixedVec2") -> Scalar:
        """2D cross product returning a scalar (z-component)."""
        return self.x * other.y - self.y * other.x

    def magnitude_squared(self) -> Scalar:
        return self.x * self.x + self.y * self.y

    def magnitude(self) -> Scalar:
        """Length. A squared length that wrapped negative yields zero."""
        squared = self.magnitude_squared()
        if squared == self._zero():
            return self._zero()
        return squared.sqrt()

    def get_length_squared(self) -> Scalar:
        return self.magnitude_squared()

    def get_length(self) -> Scalar:
        """Length, or the raw squared length when it is not positive.

        A squared length that wrapped negative is returned unchanged instead of
        reaching sqrt.
        """
        squared = self.magnitude_squared()
        if squared > self._zero():
            return squared.sqrt()
        return squared

    def normalize(self) -> "FixedVec2":
        """Unit vector in the same direction.

        Maps to zero when the magnitude is zero, including a squared length
        that wrapped negative.
        """
        zero = self._zero()
        magnitude = self.magnitude()
        if magnitude == zero:
            return FixedVec2(zero, zero)
        return FixedVec2(self.x / magnitude, self.y / magnitude)

    def normalize_this(self) -> None:
        """Normalize in place. A zero vector is left untouched.

        This is the only mutator. Do not call it on a vector that is used as
        a set member or dict key, or on the ZERO/IDENTITY constants.
        """
        magnitude = self.magnitude()
        if magnitude == self._zero():
            return
        object.__setattr__(self, "x", self.x / magnitude)
        object.__setattr__(self, "y", self.y / magnitude)

    def rotate_left_90(self) -> "FixedVec2":
        return FixedVec2(-self.y, self.x)

    def rotate_right_90(self) -> "FixedVec2":
        return FixedVec2(self.y, -self.x)

    def rotate(self, angle: Scalar) -> "FixedVec2":
        """Rotate counter-clockwise by angle (radians)."""
        cos_a = angle.cos()
        sin_a = angle.sin()
        return FixedVec2(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a,
        )

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


FixedVec2.ZERO = FixedVec2(Fix64.ZERO, Fix64.ZERO)
FixedVec2.IDENTITY = FixedVec2(Fix64.ONE, Fix64.ZERO)


def add(a: FixedVec2, b: FixedVec2) -> FixedVec2:
    return a + b


def subtract(a: FixedVec2, b: FixedVec2) -> FixedVec2:
    return a - b


def multiply(a: FixedVec2, b: FixedVec2) -> FixedVec2:
    """Componentwise product."""
    return a * b


def divide(a: FixedVec2, b: FixedVec2) -> FixedVec2:
    """Componentwise quotient. Zero components divide per the scalar."""
    return a / b


def scale(v: FixedVec2, factor: Scalar) -> FixedVec2:
    return v * factor


def negate(v: FixedVec2) -> FixedVec2:
    return -v


def absolute(v: FixedVec2) -> FixedVec2:
    return abs(v)


def dot(a: FixedVec2, b: FixedVec2) -> Scalar:
    return a.dot(b)


def cross(a: FixedVec2, b: FixedVec2) -> Scalar:
    return a.cross(b)


def project(a: FixedVec2, b: FixedVec2) -> FixedVec2:
    """Projection of a onto b. b must be non-zero."""
    return b * (a.dot(b) / b.dot(b))


def distance(v1: FixedVec2, v2: FixedVec2) -> Scalar:
    return (v1 - v2).magnitude()


def distance_squared(v1: FixedVec2, v2: FixedVec2) -> Scalar:
    return (v1 - v2).magnitude_squared()


def angle_between(v1: FixedVec2, v2: FixedVec2) -> Scalar:
    """Signed angle from v1 to v2 in radians."""
    return type(v1.x).atan2(v1.cross(v2), v1.dot(v2))


def fast_in_range(v1: FixedVec2, v2: FixedVec2, dist: Scalar) -> bool:
    """Axis-aligned proximity test.

    Accepts any point inside the square of half-side ``dist`` around v2, which
    includes corners farther than ``dist`` in Euclidean terms.
    """
    return abs(v1.y - v2.y) < dist and abs(v1.x - v2.x) < dist


def truncate(v: FixedVec2, max_length: Scalar) -> FixedVec2:
    """Clamp the length of v to max_length, keeping its direction."""
    if v.get_length_squared() > max_length * max_length:
        return v.normalize() * max_length
    return v
