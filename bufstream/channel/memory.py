from collections import deque
from typing import Iterable, Optional

from .base import Channel
from bufstream.utils.exceptions import ChannelError


class MemoryChannel(Channel):
    """In-memory channel: reads drain ``data``, writes collect in ``written``.

    ``read_chunks`` caps the size of successive reads and ``write_limits``
    caps how many bytes successive writes accept, which makes short reads and
    partial writes reproducible. Once a list is used up, reads and writes are
    limited only by the caller.
    """

    def __init__(self, data: bytes = b"", read_chunks: Optional[Iterable[int]] = None,
                 write_limits: Optional[Iterable[int]] = None):
        self._source = bytearray(data)
        self._read_chunks = deque(read_chunks or ())
        self._write_limits = deque(write_limits or ())
        self._closed = False

        self.written = bytearray()
        self.read_calls = 0
        self.write_calls = 0

    def feed(self, data: bytes) -> None:
        """Append more readable data."""
        self._source += data

    @property
    def pending(self) -> int:
        return len(self._source)

    def read(self, size: int) -> bytes:
        self._check_open()
        self.read_calls += 1
        if self._read_chunks:
            size = min(size, self._read_chunks.popleft())
        chunk = bytes(self._source[:size])
        del self._source[:size]
        return chunk

    def write(self, data: bytes) -> int:
        self._check_open()
        self.write_calls += 1
        count = len(data)
        if self._write_limits:
            count = min(count, self._write_limits.popleft())
        self.written += data[:count]
        return count

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self):
        if self._closed:
            raise ChannelError("I/O operation on closed memory channel")

    def __repr__(self):
        return f"<MemoryChannel pending={len(self._source)} written={len(self.written)}>"
