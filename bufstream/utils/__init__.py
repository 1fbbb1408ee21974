from .exceptions import (
    BufstreamException,
    ChannelError,
    SerialChannelError,
    StreamClosedError,
    ConfigError,
)

__all__ = [
    'BufstreamException',
    'ChannelError',
    'SerialChannelError',
    'StreamClosedError',
    'ConfigError',
]
