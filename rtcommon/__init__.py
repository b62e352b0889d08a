"""rtcommon: shared building blocks for real-time analysis tools.

This package provides dimension-checked `Time`/`Time2` quantities, the
Liu-Layland `RTTask` model and taskset-level metrics (utilization,
density, hyperperiod, deadline classification).
"""

import logging

from rtcommon.analysis import (
    constrained_deadlines,
    hyperperiod,
    implicit_deadlines,
    is_taskset_sorted_by_deadline,
    is_taskset_sorted_by_period,
    largest_density,
    largest_utilization,
    total_density,
    total_utilization,
)
from rtcommon.errors import MalformedFormatError, MalformedNumberError, ParseError, UnknownUnitError
from rtcommon.models import RTTask
from rtcommon.serialization import decode_task, decode_time, dump_taskset, encode_task, encode_time, load_taskset
from rtcommon.units import Time, Time2

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "Time",
    "Time2",
    "RTTask",
    "is_taskset_sorted_by_period",
    "is_taskset_sorted_by_deadline",
    "implicit_deadlines",
    "constrained_deadlines",
    "total_utilization",
    "largest_utilization",
    "total_density",
    "largest_density",
    "hyperperiod",
    "encode_time",
    "decode_time",
    "encode_task",
    "decode_task",
    "dump_taskset",
    "load_taskset",
    "ParseError",
    "MalformedNumberError",
    "UnknownUnitError",
    "MalformedFormatError",
]
