"""Buffered byte and line streams over file descriptors, sockets and serial ports."""

from .config import StreamConfig
from .stream import BufferedByteStream, LineStream
from .channel import (
    Channel, FdChannel, MemoryChannel, SerialChannel, SocketChannel, create_channel,
)
from .utils.exceptions import (
    BufstreamException, ChannelError, SerialChannelError, StreamClosedError, ConfigError,
)

__version__ = "0.1.0"


def open_stream(target, config: StreamConfig = None, lines: bool = False, **channel_options):
    """Wrap ``target`` (see ``create_channel``) in a buffered stream.

    Returns a LineStream when ``lines`` is true, else a BufferedByteStream.
    """
    config = config or StreamConfig()
    channel = create_channel(target, **channel_options)
    cls = LineStream if lines else BufferedByteStream
    return cls.from_config(channel, config)


__all__ = [
    'StreamConfig',
    'BufferedByteStream',
    'LineStream',
    'Channel',
    'FdChannel',
    'MemoryChannel',
    'SerialChannel',
    'SocketChannel',
    'create_channel',
    'open_stream',
    'BufstreamException',
    'ChannelError',
    'SerialChannelError',
    'StreamClosedError',
    'ConfigError',
]
