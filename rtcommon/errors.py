"""Errors raised while decoding times and tasks.

Every other operation in the library is total; these are the only
exceptions it raises on purpose.
"""


class ParseError(ValueError):
    """Base class for all decoding errors."""


class MalformedNumberError(ParseError):
    """The numeric part of a time literal is not a valid float."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Invalid time: {token!r} is not a number")
        self.token = token


class UnknownUnitError(ParseError):
    """The unit suffix of a time literal is not one of s, ms, us, ns."""

    def __init__(self, unit: str) -> None:
        super().__init__(f"Unknown time unit: {unit!r}")
        self.unit = unit


class MalformedFormatError(ParseError):
    """The input does not have the expected shape."""
