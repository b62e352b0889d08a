"""Aggregate metrics over tasksets.

A taskset is any ordered sequence of `RTTask`s. Functions here never
mutate or retain it. Some analyses elsewhere assume the taskset is sorted
by period or deadline; use the `is_taskset_sorted_by_*` predicates to
check before relying on it.
"""

import math
from functools import reduce
from typing import Callable, Sequence

from rtcommon.models import RTTask
from rtcommon.units import Time, ieee_floor, total_order_key

_I64_MIN = -(2 ** 63)
_I64_MAX = 2 ** 63 - 1


def _is_sorted_by(taskset: Sequence[RTTask], field: Callable[[RTTask], Time]) -> bool:
    return all(field(a) <= field(b) for a, b in zip(taskset, taskset[1:]))


def is_taskset_sorted_by_period(taskset: Sequence[RTTask]) -> bool:
    """Return True if periods are non-decreasing."""
    return _is_sorted_by(taskset, lambda t: t.period)


def is_taskset_sorted_by_deadline(taskset: Sequence[RTTask]) -> bool:
    """Return True if deadlines are non-decreasing."""
    return _is_sorted_by(taskset, lambda t: t.deadline)


def implicit_deadlines(taskset: Sequence[RTTask]) -> bool:
    return all(task.has_implicit_deadline() for task in taskset)


def constrained_deadlines(taskset: Sequence[RTTask]) -> bool:
    return all(task.has_constrained_deadline() for task in taskset)


def total_utilization(taskset: Sequence[RTTask]) -> float:
    """Sum of C/T over the taskset (0.0 when empty)."""
    return sum((task.utilization() for task in taskset), 0.0)


def largest_utilization(taskset: Sequence[RTTask]) -> float:
    """Largest C/T in the taskset (0.0 when empty).

    nan utilizations count as larger than any number.
    """
    return max((task.utilization() for task in taskset), key=total_order_key, default=0.0)


def total_density(taskset: Sequence[RTTask]) -> float:
    """Sum of C/D over the taskset (0.0 when empty)."""
    return sum((task.density() for task in taskset), 0.0)


def largest_density(taskset: Sequence[RTTask]) -> float:
    """Largest C/D in the taskset (0.0 when empty).

    nan densities count as larger than any number.
    """
    return max((task.density() for task in taskset), key=total_order_key, default=0.0)


def _period_as_int_ns(task: RTTask) -> int:
    # Saturating float -> int64 conversion: nan maps to 0.
    value = ieee_floor(task.period.as_nanos())
    if math.isnan(value):
        return 0
    if value >= _I64_MAX:
        return _I64_MAX
    if value <= _I64_MIN:
        return _I64_MIN
    return int(value)


def hyperperiod(taskset: Sequence[RTTask]) -> Time:
    """Least common multiple of all periods, each floored to whole nanoseconds.

    The fold starts from 1, so an empty taskset yields a hyperperiod of
    1ns. A zero period makes the whole hyperperiod zero. A hyperperiod too
    large for a float saturates to an infinite time.
    """
    lcm = reduce(math.lcm, (_period_as_int_ns(task) for task in taskset), 1)
    try:
        return Time.nanos(float(lcm))
    except OverflowError:
        return Time.nanos(math.inf)
