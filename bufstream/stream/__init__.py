"""Stream Layer - buffered byte and line streams over a channel."""

from .buffered import BufferedByteStream
from .line import LineStream

__all__ = [
    "BufferedByteStream",
    "LineStream",
]
