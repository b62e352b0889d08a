"""Text and YAML encodings for times, tasks and tasksets.

Time literals:

    "<number>"          nanoseconds, e.g. "1500"
    "<number> <unit>"   unit in {s, ms, us, ns}, e.g. "1.5 us"

A time always encodes as raw nanoseconds ("1500.0 ns"), whatever unit it
was parsed from. A task encodes as a record with the three time fields
`wcet`, `deadline` and `period`; a taskset is a YAML list of such records:

    - wcet: 1 ms
      deadline: 10 ms
      period: 10 ms
"""

import logging
import math
import re
from decimal import Decimal
from typing import IO, Any, Dict, List, Mapping, Sequence, Union

import yaml

from rtcommon.errors import MalformedFormatError, MalformedNumberError, UnknownUnitError
from rtcommon.models import RTTask
from rtcommon.units import UNIT_SCALES, Time

logger = logging.getLogger(__name__)

TASK_FIELDS = ("wcet", "deadline", "period")

# ASCII float literal: no digit-group underscores, no non-ASCII digits.
_NUMBER_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?|inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)


def _format_ns(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return repr(value)
    # Positional notation, shortest digits that round-trip; integral
    # values have no fractional part ("1500", not "1500.0").
    text = format(Decimal(repr(value)), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


def encode_time(time: Time) -> str:
    """Encode a time as "<nanoseconds> ns"."""
    return f"{_format_ns(time.as_nanos())} ns"


def _parse_number(token: str) -> float:
    if _NUMBER_RE.fullmatch(token) is None:
        logger.debug("Rejected time value %r", token)
        raise MalformedNumberError(token)
    return float(token)


def decode_time(text: str) -> Time:
    """Decode a time literal.

    Raises:
        MalformedNumberError: If the numeric token is not a float.
        UnknownUnitError: If the unit token is not s, ms, us or ns.
        MalformedFormatError: If the literal is not one or two tokens.
    """
    if not isinstance(text, str):
        raise MalformedFormatError(f"Expected a time string, got {type(text).__name__}")

    pieces = text.split()
    if len(pieces) == 1:
        return Time.nanos(_parse_number(pieces[0]))

    if len(pieces) == 2:
        value = _parse_number(pieces[0])
        unit = pieces[1]
        if unit not in UNIT_SCALES:
            logger.debug("Rejected time unit %r in %r", unit, text)
            raise UnknownUnitError(unit)
        return Time.nanos(value * UNIT_SCALES[unit])

    logger.debug("Rejected time literal %r (%d tokens)", text, len(pieces))
    raise MalformedFormatError(f"Parsing error, unknown format: {text!r}")


def encode_task(task: RTTask) -> Dict[str, str]:
    return {name: encode_time(getattr(task, name)) for name in TASK_FIELDS}


def decode_task(record: Mapping[str, Any]) -> RTTask:
    """Decode a task record; extra keys are ignored."""
    if not isinstance(record, Mapping):
        raise MalformedFormatError(f"Expected a task record, got {type(record).__name__}")

    missing = [name for name in TASK_FIELDS if name not in record]
    if missing:
        raise MalformedFormatError(f"Task record is missing field(s): {', '.join(missing)}")

    return RTTask(**{name: decode_time(record[name]) for name in TASK_FIELDS})


def dump_taskset(taskset: Sequence[RTTask]) -> str:
    """Render a taskset as a YAML list of task records."""
    return yaml.safe_dump([encode_task(task) for task in taskset], sort_keys=False)


def load_taskset(stream: Union[str, IO[str]]) -> List[RTTask]:
    """Load a taskset from a YAML string or an open text stream.

    An empty document is an empty taskset. YAML syntax errors propagate as
    `yaml.YAMLError`.
    """
    document = yaml.safe_load(stream)
    if document is None:
        return []
    if not isinstance(document, list):
        raise MalformedFormatError(f"Expected a list of tasks, got {type(document).__name__}")

    taskset = [decode_task(record) for record in document]
    logger.debug("Loaded taskset with %d task(s)", len(taskset))
    return taskset
