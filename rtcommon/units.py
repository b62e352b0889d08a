"""Time and Time² quantities with nanosecond precision.

`Time` and `Time2` wrap a single float so that formulas taken from
real-time scheduling papers can be written with ordinary operators while
still catching dimension mistakes:

    - Time + Time  -> Time
    - Time * float -> Time
    - Time / Time  -> float
    - Time * Time  -> Time2
    - Time2 / Time -> Time

Any other combination (e.g. Time + Time2, Time + 1.0) raises TypeError.

All arithmetic follows IEEE-754 float semantics: dividing by zero gives
inf or nan rather than raising, so the algebra stays a plain formula.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import reduce
from numbers import Real
from typing import Iterable, Tuple, Union

Scalar = Union[int, float]

NANOS_PER_NANO = 1.0
NANOS_PER_MICRO = 1_000.0
NANOS_PER_MILLI = 1_000_000.0
NANOS_PER_SEC = 1_000_000_000.0

# Two times closer than this (in ns) compare equal.
EQ_TOLERANCE_NS = 0.5

# Unit suffixes accepted by the parser.
UNIT_SCALES = {
    "s": NANOS_PER_SEC,
    "ms": NANOS_PER_MILLI,
    "us": NANOS_PER_MICRO,
    "ns": NANOS_PER_NANO,
}


def _is_scalar(value: object) -> bool:
    return isinstance(value, Real)


def ieee_div(a: float, b: float) -> float:
    """Divide like IEEE-754 floats: x/0 is +-inf, 0/0 and nan/0 are nan."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def ieee_floor(x: float) -> float:
    return float(math.floor(x)) if math.isfinite(x) else x


def ieee_ceil(x: float) -> float:
    return float(math.ceil(x)) if math.isfinite(x) else x


def ieee_round(x: float) -> float:
    """Round half away from zero, keeping inf and nan."""
    if not math.isfinite(x):
        return x
    truncated = float(math.trunc(x))
    if abs(x - truncated) >= 0.5:
        truncated += math.copysign(1.0, x)
    return truncated


def ieee_rem(a: float, b: float) -> float:
    """Truncated remainder (sign follows the dividend)."""
    if math.isnan(a) or math.isnan(b) or math.isinf(a) or b == 0.0:
        return math.nan
    return math.fmod(a, b)


def ieee_sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0.0 or math.isnan(x) else math.nan


def total_order_key(x: float) -> Tuple[bool, float]:
    """Sort key placing nan after every number, +inf included."""
    if math.isnan(x):
        return (True, 0.0)
    return (False, x)


@dataclass(frozen=True, eq=False)
class Time:
    """A signed duration, stored as nanoseconds.

    Attributes:
        value_ns: The duration in nanoseconds. Negative values are valid
                  (e.g. the laxity of an overloaded task).
    """
    value_ns: float

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "value_ns", float(self.value_ns))

    # -- constructors -------------------------------------------------------

    @classmethod
    def zero(cls) -> Time:
        return cls(0.0)

    @classmethod
    def one(cls) -> Time:
        return cls(1.0)

    @classmethod
    def nanos(cls, time_ns: float) -> Time:
        return cls(time_ns * NANOS_PER_NANO)

    @classmethod
    def micros(cls, time_us: float) -> Time:
        return cls(time_us * NANOS_PER_MICRO)

    @classmethod
    def millis(cls, time_ms: float) -> Time:
        return cls(time_ms * NANOS_PER_MILLI)

    @classmethod
    def secs(cls, time_s: float) -> Time:
        return cls(time_s * NANOS_PER_SEC)

    @classmethod
    def sum(cls, times: Iterable[Time]) -> Time:
        """Add up a sequence of times, starting from zero."""
        return reduce(lambda acc, t: acc + t, times, cls.zero())

    # -- accessors ----------------------------------------------------------

    def as_nanos(self) -> float:
        return self.value_ns / NANOS_PER_NANO

    def as_micros(self) -> float:
        return self.value_ns / NANOS_PER_MICRO

    def as_millis(self) -> float:
        return self.value_ns / NANOS_PER_MILLI

    def as_secs(self) -> float:
        return self.value_ns / NANOS_PER_SEC

    def floor(self) -> Time:
        return Time(ieee_floor(self.value_ns))

    def ceil(self) -> Time:
        return Time(ieee_ceil(self.value_ns))

    def round(self) -> Time:
        return Time(ieee_round(self.value_ns))

    # -- comparison ---------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return abs(self.value_ns - other.value_ns) < EQ_TOLERANCE_NS

    def __lt__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return total_order_key(self.value_ns) < total_order_key(other.value_ns)

    def __le__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return total_order_key(self.value_ns) <= total_order_key(other.value_ns)

    def __gt__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return total_order_key(self.value_ns) > total_order_key(other.value_ns)

    def __ge__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return total_order_key(self.value_ns) >= total_order_key(other.value_ns)

    # -- arithmetic ---------------------------------------------------------

    def __neg__(self) -> Time:
        return Time(-self.value_ns)

    def __add__(self, other: Time) -> Time:
        if not isinstance(other, Time):
            return NotImplemented
        return Time(self.value_ns + other.value_ns)

    def __sub__(self, other: Time) -> Time:
        if not isinstance(other, Time):
            return NotImplemented
        return Time(self.value_ns - other.value_ns)

    def __mul__(self, other):
        if isinstance(other, Time):
            return Time2(self.value_ns * other.value_ns)
        if _is_scalar(other):
            return Time(self.value_ns * other)
        return NotImplemented

    def __rmul__(self, other: Scalar) -> Time:
        if _is_scalar(other):
            return Time(other * self.value_ns)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Time):
            return ieee_div(self.value_ns, other.value_ns)
        if _is_scalar(other):
            return Time(ieee_div(self.value_ns, float(other)))
        return NotImplemented

    def __mod__(self, other: Time) -> Time:
        # Sub-nanosecond precision is dropped before taking the remainder.
        if not isinstance(other, Time):
            return NotImplemented
        return Time(ieee_rem(ieee_floor(self.value_ns), ieee_floor(other.value_ns)))

    # -- display ------------------------------------------------------------

    def __str__(self) -> str:
        milli = self.value_ns / NANOS_PER_MILLI
        if milli >= 1.0:
            return f"{milli:.3f}ms"

        micro = self.value_ns / NANOS_PER_MICRO
        if micro >= 1.0:
            return f"{micro:.3f}us"

        return f"{self.value_ns:.3f}ns"


@dataclass(frozen=True, eq=False)
class Time2:
    """A squared duration (ns²).

    Only produced by multiplying two `Time`s; `sqrt()` or dividing by a
    `Time` brings it back to a duration.
    """
    value_ns_2: float

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "value_ns_2", float(self.value_ns_2))

    @classmethod
    def new(cls, value: float) -> Time2:
        return cls(value)

    def value(self) -> float:
        return self.value_ns_2

    def sqrt(self) -> Time:
        """Square root as a `Time`; nan for negative values."""
        return Time.nanos(ieee_sqrt(self.value_ns_2))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Time2):
            return NotImplemented
        return self.value_ns_2 == other.value_ns_2

    def __neg__(self) -> Time2:
        return Time2(-self.value_ns_2)

    def __add__(self, other: Time2) -> Time2:
        if not isinstance(other, Time2):
            return NotImplemented
        return Time2(self.value_ns_2 + other.value_ns_2)

    def __sub__(self, other: Time2) -> Time2:
        if not isinstance(other, Time2):
            return NotImplemented
        return Time2(self.value_ns_2 - other.value_ns_2)

    def __mul__(self, other: Scalar) -> Time2:
        if _is_scalar(other):
            return Time2(self.value_ns_2 * other)
        return NotImplemented

    def __rmul__(self, other: Scalar) -> Time2:
        if _is_scalar(other):
            return Time2(other * self.value_ns_2)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Time):
            return Time(ieee_div(self.value_ns_2, other.value_ns))
        if _is_scalar(other):
            return Time2(ieee_div(self.value_ns_2, float(other)))
        return NotImplemented
