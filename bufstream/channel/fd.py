import os

from .base import Channel
from bufstream.utils.exceptions import ChannelError


class FdChannel(Channel):
    """Channel over an OS file descriptor or an unbuffered binary file object.

    Pass ``close_fd=False`` to leave the descriptor open when the channel is
    closed.
    """

    def __init__(self, target, close_fd: bool = True):
        if isinstance(target, int):
            self._fd = target
            self._file = None
        else:
            self._fd = None
            self._file = target
        self._close_fd = close_fd
        self._closed = False

    @property
    def name(self):
        return self._fd if self._file is None else getattr(self._file, "name", self._file)

    def read(self, size: int) -> bytes:
        try:
            if self._file is not None:
                return self._file.read(size)
            return os.read(self._fd, size)
        except OSError as e:
            raise ChannelError(f"read error on {self.name}: {e}") from e

    def write(self, data: bytes) -> int:
        try:
            if self._file is not None:
                return self._file.write(data)
            return os.write(self._fd, data)
        except OSError as e:
            raise ChannelError(f"write error on {self.name}: {e}") from e

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if not self._close_fd:
            return
        try:
            if self._file is not None:
                self._file.close()
            else:
                os.close(self._fd)
        except OSError as e:
            raise ChannelError(f"close error on {self.name}: {e}") from e

    @property
    def closed(self) -> bool:
        return self._closed

    def __repr__(self):
        return f"<FdChannel {self.name!r}>"
