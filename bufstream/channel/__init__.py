import logging
import socket

from .base import Channel, is_channel
from .fd import FdChannel
from .memory import MemoryChannel
from .serial import SerialChannel
from .sock import SocketChannel
from bufstream.utils.constants import DEFAULT_BAUDRATE, SERIAL_PREFIX

logger = logging.getLogger(__name__)


def create_channel(target, baudrate: int = DEFAULT_BAUDRATE, timeout: float = None):
    """Create a channel for the given target.

    Args:
        target: An OS file descriptor (int), a connected socket, initial
            bytes for an in-memory channel, a serial connection string
            (e.g. 'serial:COM3', 'serial:/dev/ttyUSB0', 'serial:loop://'),
            or an object that already has read/write/close.
        baudrate: Serial baud rate (default: 115200)
        timeout: Serial read timeout in seconds (default: block forever)

    Returns:
        A Channel, or ``target`` itself when it already is one
    """
    if isinstance(target, bool):
        raise TypeError("cannot create a channel from a bool")

    if isinstance(target, int):
        channel = FdChannel(target)
    elif isinstance(target, socket.socket):
        channel = SocketChannel(target)
    elif isinstance(target, (bytes, bytearray)):
        channel = MemoryChannel(target)
    elif isinstance(target, str):
        if not target.startswith(SERIAL_PREFIX):
            raise ValueError(f"unsupported connection string: {target!r}")
        channel = SerialChannel(target[len(SERIAL_PREFIX):], baudrate=baudrate, timeout=timeout)
    elif is_channel(target):
        return target
    else:
        raise TypeError(f"cannot create a channel from {type(target).__name__}")

    logger.debug("Created %r", channel)
    return channel


__all__ = [
    'Channel',
    'FdChannel',
    'MemoryChannel',
    'SerialChannel',
    'SocketChannel',
    'create_channel',
    'is_channel',
]
