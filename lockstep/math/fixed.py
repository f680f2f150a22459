"""Q32.32 fixed-point scalar with deterministic wraparound arithmetic.

Every operation works on the raw signed 64-bit integer, so results are
bit-identical across platforms. Overflow wraps two's complement. Trig runs in
integer arithmetic at 64 fractional bits and rounds back to 32.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from math import isfinite, isqrt
from typing import ClassVar, Protocol, TypeVar

FRACTIONAL_BITS = 32
RAW_BITS = 64

_ONE = 1 << FRACTIONAL_BITS
_HALF = 1 << (FRACTIONAL_BITS - 1)
_RAW_MASK = (1 << RAW_BITS) - 1
_SIGN_BIT = 1 << (RAW_BITS - 1)
MAX_RAW = _SIGN_BIT - 1
MIN_RAW = -_SIGN_BIT

# Internal precision for trig.
_WIDE_BITS = 64
_WIDE_ONE = 1 << _WIDE_BITS
_WIDE_SHIFT = _WIDE_BITS - FRACTIONAL_BITS

ROUNDING_MODES = ("truncate", "nearest")

S = TypeVar("S", bound="Scalar")


class Scalar(Protocol):
    """Operations the vector types need from their component scalar."""

    ZERO: ClassVar
    ONE: ClassVar

    def __add__(self: S, other: S) -> S: ...
    def __sub__(self: S, other: S) -> S: ...
    def __mul__(self: S, other: S) -> S: ...
    def __truediv__(self: S, other: S) -> S: ...
    def __neg__(self: S) -> S: ...
    def __abs__(self: S) -> S: ...
    def __lt__(self, other: object) -> bool: ...
    def __gt__(self, other: object) -> bool: ...
    def sqrt(self: S) -> S: ...
    def sin(self: S) -> S: ...
    def cos(self: S) -> S: ...
    def to_float(self) -> float: ...

    @classmethod
    def atan2(cls: type[S], y: S, x: S) -> S: ...


def wrap_raw(raw: int) -> int:
    """Reduce an unbounded integer to signed 64-bit two's complement."""
    return ((raw + _SIGN_BIT) & _RAW_MASK) - _SIGN_BIT


def _div_trunc(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def _mul_wide(a: int, b: int) -> int:
    product = a * b
    if product < 0:
        return -((-product) >> _WIDE_BITS)
    return product >> _WIDE_BITS


def _round_wide(value: int) -> int:
    return wrap_raw((value + (1 << (_WIDE_SHIFT - 1))) >> _WIDE_SHIFT)


def _atan_inverse(n: int, one: int) -> int:
    """arctan(1/n) scaled by ``one``."""
    total = term = one // n
    n_squared = n * n
    k = 1
    sign = 1
    while term:
        term //= n_squared
        k += 2
        sign = -sign
        total += sign * (term // k)
    return total


def _machin_pi(bits: int) -> int:
    guard = 16
    one = 1 << (bits + guard)
    pi = 16 * _atan_inverse(5, one) - 4 * _atan_inverse(239, one)
    return pi >> guard


_WIDE_PI = _machin_pi(_WIDE_BITS)
_WIDE_HALF_PI = _WIDE_PI >> 1
_WIDE_TWO_PI = _WIDE_PI << 1


def _sin_wide(theta: int) -> int:
    theta %= _WIDE_TWO_PI
    if theta > _WIDE_PI:
        theta -= _WIDE_TWO_PI
    # Fold into [-pi/2, pi/2] where the series converges fastest.
    if theta > _WIDE_HALF_PI:
        theta = _WIDE_PI - theta
    elif theta < -_WIDE_HALF_PI:
        theta = -_WIDE_PI - theta

    theta_squared = _mul_wide(theta, theta)
    total = 0
    term = theta
    n = 1
    while term:
        total += term
        term = -_div_trunc(_mul_wide(term, theta_squared), (n + 1) * (n + 2))
        n += 2
    return total


def _atan_wide(z: int) -> int:
    if z < 0:
        return -_atan_wide(-z)
    if z > _WIDE_ONE:
        return _WIDE_HALF_PI - _atan_wide(_WIDE_ONE * _WIDE_ONE // z)

    # atan(z) = 2 * atan(z / (1 + sqrt(1 + z^2))), applied twice.
    for _ in range(2):
        root = isqrt(_WIDE_ONE * _WIDE_ONE + z * z)
        z = z * _WIDE_ONE // (_WIDE_ONE + root)

    z_squared = _mul_wide(z, z)
    total = 0
    power = z
    k = 1
    sign = 1
    while power:
        total += sign * (power // k)
        power = _mul_wide(power, z_squared)
        k += 2
        sign = -sign
    return total * 4


def _coerce(value: object) -> int | None:
    if isinstance(value, Fix64):
        return value.raw
    if isinstance(value, int) and not isinstance(value, bool):
        return wrap_raw(value << FRACTIONAL_BITS)
    return None


@dataclass(frozen=True, eq=False)
class Fix64:
    """Signed Q32.32 fixed-point number.

    ``raw`` is the scaled integer (value * 2**32) and wraps into int64 on
    construction. Arithmetic accepts other ``Fix64`` values or plain ints;
    floats are rejected so they cannot leak into deterministic code. Use
    :meth:`from_float` explicitly at I/O boundaries.

    Division by zero never raises: it saturates to ``MAX_VALUE`` for a
    non-negative dividend and ``MIN_VALUE`` for a negative one.
    Square root is total as well: a negative input returns ``ZERO``.
    """

    raw: int = 0

    ZERO: ClassVar["Fix64"]
    ONE: ClassVar["Fix64"]
    HALF: ClassVar["Fix64"]
    PI: ClassVar["Fix64"]
    HALF_PI: ClassVar["Fix64"]
    TWO_PI: ClassVar["Fix64"]
    MAX_VALUE: ClassVar["Fix64"]
    MIN_VALUE: ClassVar["Fix64"]
    EPSILON: ClassVar["Fix64"]

    def __post_init__(self) -> None:
        if not isinstance(self.raw, int):
            raise TypeError(f"Fix64 raw value must be an int, got {type(self.raw).__name__}.")
        object.__setattr__(self, "raw", wrap_raw(self.raw))

    @classmethod
    def from_raw(cls, raw: int) -> "Fix64":
        return cls(raw)

    @classmethod
    def from_int(cls, value: int) -> "Fix64":
        return cls(value << FRACTIONAL_BITS)

    @classmethod
    def from_float(cls, value: float, rounding: str = "truncate") -> "Fix64":
        """Convert a float, truncating toward zero unless rounding="nearest".

        Out-of-range values wrap like any other overflow.
        """
        if rounding not in ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode: {rounding!r}.")
        if not isfinite(value):
            raise ValueError(f"Cannot convert non-finite value {value!r} to Fix64.")
        scaled = float(value) * _ONE
        raw = round(scaled) if rounding == "nearest" else int(scaled)
        return cls(raw)

    def to_float(self) -> float:
        return self.raw / _ONE

    # Arithmetic

    def __add__(self, other: object) -> "Fix64":
        raw = _coerce(other)
        if raw is None:
            return NotImplemented
        return Fix64(self.raw + raw)

    __radd__ = __add__

    def __sub__(self, other: object) -> "Fix64":
        raw = _coerce(other)
        if raw is None:
            return NotImplemented
        return Fix64(self.raw - raw)

    def __rsub__(self, other: object) -> "Fix64":
        raw = _coerce(other)
        if raw is None:
            return NotImplemented
        return Fix64(raw - self.raw)

    def __mul__(self, other: object) -> "Fix64":
        raw = _coerce(other)
        if raw is None:
            return NotImplemented
        return Fix64((self.raw * raw) >> FRACTIONAL_BITS)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> "Fix64":
        raw = _coerce(other)
        if raw is None:
            return NotImplemented
        return Fix64(_divide_raw(self.raw, raw))

    def __rtruediv__(self, other: object) -> "Fix64":
        raw = _coerce(other)
        if raw is None:
            return NotImplemented
        return Fix64(_divide_raw(raw, self.raw))

    def __neg__(self) -> "Fix64":
        return Fix64(-self.raw)

    def __pos__(self) -> "Fix64":
        return self

    def __abs__(self) -> "Fix64":
        # abs(MIN_VALUE) wraps back to MIN_VALUE.
        return Fix64(abs(self.raw))

    # Comparison

    def __eq__(self, other: object) -> bool:
        raw = _coerce(other)
        if raw is None:
            return NotImplemented
        return self.raw == raw

    def __hash__(self) -> int:
        return hash(Fraction(self.raw, _ONE))

    def __lt__(self, other: object) -> bool:
        raw = _coerce(other)
        if raw is None:
            return NotImplemented
        return self.raw < raw

    def __le__(self, other: object) -> bool:
        raw = _coerce(other)
        if raw is None:
            return NotImplemented
        return self.raw <= raw

    def __gt__(self, other: object) -> bool:
        raw = _coerce(other)
        if raw is None:
            return NotImplemented
        return self.raw > raw

    def __ge__(self, other: object) -> bool:
        raw = _coerce(other)
        if raw is None:
            return NotImplemented
        return self.raw >= raw

    def __bool__(self) -> bool:
        return self.raw != 0

    def __int__(self) -> int:
        return _div_trunc(self.raw, _ONE)

    def __float__(self) -> float:
        return self.to_float()

    def __str__(self) -> str:
        return str(self.to_float())

    # Functions

    def sqrt(self) -> "Fix64":
        """Floor square root. Negative values (usually a wrapped square) give ZERO."""
        if self.raw <= 0:
            return Fix64.ZERO
        return Fix64(isqrt(self.raw << FRACTIONAL_BITS))

    def sin(self) -> "Fix64":
        return Fix64(_round_wide(_sin_wide(self.raw << _WIDE_SHIFT)))

    def cos(self) -> "Fix64":
        return Fix64(_round_wide(_sin_wide((self.raw << _WIDE_SHIFT) + _WIDE_HALF_PI)))

    @classmethod
    def atan2(cls, y: "Fix64", x: "Fix64") -> "Fix64":
        """Angle of (x, y) in radians, in (-pi, pi]."""
        if x.raw == 0:
            if y.raw > 0:
                return cls.HALF_PI
            if y.raw < 0:
                return -cls.HALF_PI
            return cls.ZERO
        angle = _atan_wide(_div_trunc(y.raw << _WIDE_BITS, x.raw))
        if x.raw < 0:
            angle += _WIDE_PI if y.raw >= 0 else -_WIDE_PI
        return cls(_round_wide(angle))


def _divide_raw(numerator: int, denominator: int) -> int:
    if denominator == 0:
        return MAX_RAW if numerator >= 0 else MIN_RAW
    return _div_trunc(numerator << FRACTIONAL_BITS, denominator)


Fix64.ZERO = Fix64(0)
Fix64.ONE = Fix64(_ONE)
Fix64.HALF = Fix64(_HALF)
Fix64.PI = Fix64(_round_wide(_WIDE_PI))
Fix64.HALF_PI = Fix64(_round_wide(_WIDE_HALF_PI))
Fix64.TWO_PI = Fix64(_round_wide(_WIDE_TWO_PI))
Fix64.MAX_VALUE = Fix64(MAX_RAW)
Fix64.MIN_VALUE = Fix64(MIN_RAW)
Fix64.EPSILON = Fix64(1)
