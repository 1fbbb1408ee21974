import socket

from .base import Channel
from bufstream.utils.exceptions import ChannelError


class SocketChannel(Channel):
    """Channel over a connected stream socket.

    ``send`` may take only part of the data; the stream retries the rest.
    """

    def __init__(self, sock: socket.socket):
        self._socket = sock

    @property
    def socket(self) -> socket.socket:
        return self._socket

    def read(self, size: int) -> bytes:
        try:
            return self._socket.recv(size)
        except OSError as e:
            raise ChannelError(f"Socket read error: {e}") from e

    def write(self, data: bytes) -> int:
        try:
            return self._socket.send(data)
        except OSError as e:
            raise ChannelError(f"Socket write error: {e}") from e

    def close(self) -> None:
        try:
            self._socket.close()
        except OSError as e:
            raise ChannelError(f"Socket close error: {e}") from e

    @property
    def closed(self) -> bool:
        return self._socket.fileno() == -1

    def __repr__(self):
        return f"<SocketChannel fd={self._socket.fileno()}>"
