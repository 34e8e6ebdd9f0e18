# File: src/mstair/jsoncolor/sink.py
"""
Byte-counting adapter over an output stream.

One `SinkWriter` is created per render call. It accepts text chunks, forwards them
to a binary stream as UTF-8 bytes (or to a text stream unchanged), and keeps a
running count of bytes accepted. Any failure of the underlying stream is raised as
`SinkWriteError` carrying that count.
"""

from __future__ import annotations

import io
from typing import IO, Any

from mstair.jsoncolor.exceptions import SinkWriteError


__all__ = ["SinkWriter"]


class SinkWriter:
    def __init__(self, sink: IO[bytes] | IO[str] | Any, *, encoding: str = "utf-8") -> None:
        """
        Wrap an output stream.

        :param sink: Binary stream, or a text stream (an `io.TextIOBase`, or any
            stream whose `mode` has no "b").
        :param encoding: Encoding used for byte accounting and binary output.
        """
        self.sink = sink
        self.encoding = encoding
        self.bytes_written: int = 0
        """Running total of bytes the sink has accepted."""
        self._text_mode = _is_text_stream(sink)

    def write(self, text: str) -> int:
        """Write one chunk and return its size in bytes."""
        data = text.encode(self.encoding)
        if not data:
            return 0
        try:
            if self._text_mode:
                self.sink.write(text)
                accepted = len(data)
            else:
                result = self.sink.write(data)
                accepted = len(data) if result is None else result
        except (OSError, ValueError, TypeError) as exc:
            raise SinkWriteError(self.bytes_written, str(exc) or type(exc).__name__) from exc

        if accepted < len(data):
            self.bytes_written += max(accepted, 0)
            raise SinkWriteError(self.bytes_written, "short write")
        self.bytes_written += accepted
        return accepted

    def flush(self) -> None:
        flush = getattr(self.sink, "flush", None)
        if flush is None:
            return
        try:
            flush()
        except (OSError, ValueError, TypeError) as exc:
            raise SinkWriteError(self.bytes_written, str(exc) or type(exc).__name__) from exc


def _is_text_stream(sink: Any) -> bool:
    if isinstance(sink, io.TextIOBase):
        return True
    # Duck-typed file objects such as SpooledTemporaryFile; gzip reports an int mode.
    mode = getattr(sink, "mode", None)
    return isinstance(mode, str) and "b" not in mode


# End of file: src/mstair/jsoncolor/sink.py
