from typing import Iterator, List, Optional

from bufstream.config import StreamConfig, validate_delimiter
from bufstream.utils.constants import DEFAULT_BLOCK_SIZE, DEFAULT_SYNC, DEFAULT_DELIMITER
from .buffered import BufferedByteStream


class LineStream(BufferedByteStream):
    """Delimiter-separated lines over a BufferedByteStream.

    Lines are returned without their delimiter. ``read_line`` returns None
    once the stream is exhausted, so an empty line (``b""``) and the end of
    the stream stay distinguishable.
    """

    def __init__(self, channel, block_size: int = DEFAULT_BLOCK_SIZE, sync: bool = DEFAULT_SYNC,
                 delimiter: bytes = DEFAULT_DELIMITER):
        super().__init__(channel, block_size=block_size, sync=sync)
        self._delimiter = validate_delimiter(delimiter)

    @classmethod
    def from_config(cls, channel, config: StreamConfig):
        return cls(channel, block_size=config.block_size, sync=config.sync, delimiter=config.delimiter)

    @property
    def delimiter(self) -> bytes:
        return self._delimiter

    def write_line(self, *lines) -> None:
        """Write each argument followed by the delimiter.

        With no arguments only the delimiter is written. Each piece goes
        through ``write``, so the usual flush policy applies. Not re-entrant.
        """
        if not lines:
            self.write(self._delimiter)
            return

        for line in lines:
            self.write(line)
            self.write(self._delimiter)

    def read_line(self) -> Optional[bytes]:
        """Return the next line without its delimiter, or None at end of stream.

        A final line with no trailing delimiter is still returned once.
        """
        self._check_open()
        delimiter = self._delimiter
        index = self._read_buffer.find(delimiter)

        while index < 0 and not self._eof:
            # Rescan the tail so a delimiter split across two reads is found.
            start = max(0, len(self._read_buffer) - len(delimiter) + 1)
            self._fill_read_buffer()
            index = self._read_buffer.find(delimiter, start)

        if index < 0:
            return self._consume_read_buffer()

        line = self._consume_read_buffer(index)
        del self._read_buffer[:len(delimiter)]
        return line

    readline = read_line

    def lines(self) -> Iterator[bytes]:
        """Yield lines until the stream is exhausted.

        Continues from the current position; it never rewinds.
        """
        while True:
            line = self.read_line()
            if line is None:
                return
            yield line

    def __iter__(self) -> Iterator[bytes]:
        return self.lines()

    def read_lines(self) -> List[bytes]:
        return list(self.lines())

    readlines = read_lines
