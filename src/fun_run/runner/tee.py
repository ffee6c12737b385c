"""Writer that duplicates everything written to it into two other writers."""

import codecs
import io
from typing import IO, Any


class TextSinkWriter:
    """Accepts bytes and writes them to a text-only sink such as io.StringIO.

    Bytes are decoded as UTF-8 with replacement characters. The decoder is
    incremental, so a character split across two chunks is decoded whole.
    """

    def __init__(self, sink: IO[str]) -> None:
        self._sink = sink
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def write(self, data: bytes) -> int:
        self._sink.write(self._decoder.decode(data))
        return len(data)

    def flush(self) -> None:
        self._sink.flush()


def binary_sink(sink: IO[Any]) -> IO[bytes]:
    """Return a writer that accepts bytes for the given sink.

    Text streams such as sys.stdout expose their binary layer as `.buffer`;
    writing through it keeps the child's bytes unchanged. Text streams
    without one (io.StringIO) receive decoded text instead.
    """
    buffer = getattr(sink, "buffer", None)
    if buffer is not None:
        return buffer
    if isinstance(sink, io.TextIOBase):
        return TextSinkWriter(sink)  # type: ignore[return-value]
    return sink


class TeeWriter:
    """Writes every chunk to two writers, similar to the UNIX `tee` command.

    Each chunk is written in full to `first` and then to `second`.
    """

    def __init__(self, first: IO[bytes], second: IO[bytes]) -> None:
        self._first = first
        self._second = second

    def write(self, data: bytes) -> int:
        self._first.write(data)
        self._second.write(data)
        return len(data)

    def flush(self) -> None:
        self._first.flush()
        self._second.flush()


def tee(first: IO[bytes], second: IO[bytes]) -> TeeWriter:
    """Construct a TeeWriter writing to both writers."""
    return TeeWriter(first, second)
