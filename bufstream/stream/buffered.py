import logging
from typing import Optional

from bufstream.config import StreamConfig, validate_block_size
from bufstream.utils.constants import DEFAULT_BLOCK_SIZE, DEFAULT_SYNC
from bufstream.utils.exceptions import ChannelError, StreamClosedError

logger = logging.getLogger(__name__)


class BufferedByteStream:
    """Read and write buffering over a byte channel.

    The channel only needs ``read(size)``, ``write(data)`` and ``close()``.
    ``read`` returns an empty result (``b""`` or ``None``) only when the
    channel is exhausted; ``write`` returns how many bytes it accepted.

    Reads are served from an internal buffer that is refilled ``block_size``
    bytes at a time. Writes are collected until the buffer grows past
    ``block_size`` (or on every write when ``sync`` is set) and then sent with
    a loop that copes with partial writes.

    Not thread-safe. The stream owns the channel until ``close()``.
    """

    def __init__(self, channel, block_size: int = DEFAULT_BLOCK_SIZE, sync: bool = DEFAULT_SYNC):
        self._channel = channel
        self._eof = False
        self._closed = False

        self._block_size = validate_block_size(block_size)
        self._sync = bool(sync)

        self._read_buffer = bytearray()
        self._write_buffer = bytearray()

    @classmethod
    def from_config(cls, channel, config: StreamConfig):
        return cls(channel, block_size=config.block_size, sync=config.sync)

    @property
    def channel(self):
        return self._channel

    @property
    def block_size(self) -> int:
        return self._block_size

    @property
    def sync(self) -> bool:
        """Flush after every write when true."""
        return self._sync

    @sync.setter
    def sync(self, value: bool):
        self._sync = bool(value)

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self):
        return (
            f"<{self.__class__.__name__} channel={self._channel!r} "
            f"block_size={self._block_size} sync={self._sync} closed={self._closed}>"
        )

    def read(self, size: Optional[int] = None) -> bytes:
        """Read up to ``size`` bytes, or everything until end of stream if ``size`` is None.

        Fewer than ``size`` bytes are returned only when the stream ends first.
        Returns ``b""`` once the stream is exhausted.
        """
        self._check_open()
        if size is not None:
            if isinstance(size, bool) or not isinstance(size, int):
                raise TypeError(f"size must be an integer or None, got {type(size).__name__}")
            if size < 0:
                raise ValueError(f"size must be non-negative, got {size}")
            if size == 0:
                return b""

        while not self._eof:
            if size is not None and size <= len(self._read_buffer):
                break
            self._fill_read_buffer()

        buffer = self._consume_read_buffer(size)
        return buffer if buffer is not None else b""

    def write(self, data) -> int:
        """Append ``data`` to the write buffer.

        Flushes when in sync mode or when the buffer exceeds ``block_size``.
        Returns the number of bytes appended, not the number transmitted.
        """
        self._check_open()
        view = memoryview(data)
        self._write_buffer += view

        if self._sync or len(self._write_buffer) > self._block_size:
            self.flush()

        return view.nbytes

    def __lshift__(self, data):
        self.write(data)
        return self

    def flush(self) -> None:
        """Send the whole write buffer to the channel."""
        self._check_open()
        self._flush_write_buffer()

    def close(self) -> None:
        """Flush pending writes and close the channel.

        A failure while flushing is logged and discarded so the channel is
        always closed; an interrupt during the flush still closes the channel
        and then propagates. A failure from the channel's own close propagates.
        Calling close on a closed stream does nothing.
        """
        if self._closed:
            return

        try:
            self._flush_write_buffer()
        except Exception as e:
            logger.warning("Discarding %d unflushed bytes on close: %s", len(self._write_buffer), e)
            self._write_buffer.clear()
        finally:
            self._closed = True
            self._channel.close()

    def eof(self) -> bool:
        """True when the channel is exhausted and no buffered data remains."""
        self._check_open()
        if not self._eof and not self._read_buffer:
            self._fill_read_buffer()

        return self._eof and not self._read_buffer

    @property
    def at_eof(self) -> bool:
        return self.eof()

    def _check_open(self):
        if self._closed:
            raise StreamClosedError("I/O operation on closed stream")

    def _flush_write_buffer(self):
        if not self._write_buffer:
            return
        self._syswrite()

    def _syswrite(self) -> int:
        # Accepted bytes leave the write buffer as soon as the channel takes
        # them, so a failed flush can be retried without resending them.
        buffer = bytes(self._write_buffer)
        remaining = len(buffer)

        # Fast path:
        written = self._accepted(self._channel.write(buffer), remaining)
        del self._write_buffer[:written]
        if written == remaining:
            return written

        # Slow path:
        logger.debug("Partial write: %d of %d bytes accepted", written, remaining)
        remaining -= written
        view = memoryview(buffer)

        # No retry limit: a channel that never accepts anything loops here.
        while remaining > 0:
            wrote = self._accepted(self._channel.write(view[written:]), remaining)
            del self._write_buffer[:wrote]
            remaining -= wrote
            written += wrote

        return written

    @staticmethod
    def _accepted(count, offered: int) -> int:
        # None is what non-blocking raw files report when nothing was written
        if count is None:
            return 0
        if count < 0 or count > offered:
            raise ChannelError(f"channel reported {count} bytes written of {offered} offered")
        return count

    def _fill_read_buffer(self):
        chunk = self._channel.read(self._block_size)
        if chunk:
            self._read_buffer += chunk
        else:
            self._eof = True
            logger.debug("End of stream reached on %r", self._channel)

    def _consume_read_buffer(self, size: Optional[int] = None) -> Optional[bytes]:
        # Nothing left, ever.
        if self._eof and not self._read_buffer:
            return None

        if size is None or size >= len(self._read_buffer):
            result = bytes(self._read_buffer)
            self._read_buffer.clear()
        else:
            result = bytes(self._read_buffer[:size])
            del self._read_buffer[:size]

        return result
