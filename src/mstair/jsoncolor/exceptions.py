# File: src/mstair/jsoncolor/exceptions.py
"""
Exceptions raised by mstair.jsoncolor.
"""

from __future__ import annotations


__all__ = [
    "ConfigError",
    "JsonColorError",
    "NestingDepthError",
    "SinkWriteError",
]


class JsonColorError(Exception):
    """Base class for all mstair.jsoncolor errors."""


class SinkWriteError(JsonColorError):
    """
    The output sink rejected or failed a write.

    The original exception, if any, is available as `__cause__`.
    """

    bytes_written: int
    """Bytes the sink accepted before the failure."""

    def __init__(self, bytes_written: int, reason: str) -> None:
        super().__init__(f"sink write failed after {bytes_written} bytes: {reason}")
        self.bytes_written = bytes_written
        self.reason = reason


class NestingDepthError(JsonColorError):
    """
    The value nests containers deeper than the formatter allows.

    Output written before the limit was reached stays in the sink.
    """

    def __init__(self, limit: int, bytes_written: int) -> None:
        super().__init__(f"containers nested deeper than {limit} levels (after {bytes_written} bytes)")
        self.limit = limit
        self.bytes_written = bytes_written


class ConfigError(JsonColorError, ValueError):
    """An environment variable or option holds an invalid value."""

    def __init__(self, name: str, value: str, expected: str) -> None:
        super().__init__(f"{name}={value!r}: expected {expected}")
        self.name = name
        self.value = value


# End of file: src/mstair/jsoncolor/exceptions.py
