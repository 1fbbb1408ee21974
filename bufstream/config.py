"""
Construction-time configuration for buffered streams.

Handles:
- Block size (read chunk size and write flush threshold)
- Sync mode (flush on every write)
- Line delimiter for LineStream
"""

from dataclasses import dataclass, replace as _replace

from bufstream.utils.constants import DEFAULT_BLOCK_SIZE, DEFAULT_SYNC, DEFAULT_DELIMITER
from bufstream.utils.exceptions import ConfigError


def validate_block_size(block_size) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(block_size, bool) or not isinstance(block_size, int):
        raise ConfigError(f"block_size must be an integer, got {type(block_size).__name__}")
    if block_size <= 0:
        raise ConfigError(f"block_size must be positive, got {block_size}")
    return block_size


def validate_delimiter(delimiter) -> bytes:
    if not isinstance(delimiter, (bytes, bytearray, memoryview)):
        raise ConfigError(f"delimiter must be bytes, got {type(delimiter).__name__}")
    delimiter = bytes(delimiter)
    if not delimiter:
        raise ConfigError("delimiter must not be empty")
    return delimiter


@dataclass(frozen=True)
class StreamConfig:
    """Settings resolved once when a stream is constructed."""
    block_size: int = DEFAULT_BLOCK_SIZE
    sync: bool = DEFAULT_SYNC
    delimiter: bytes = DEFAULT_DELIMITER

    def __post_init__(self):
        validate_block_size(self.block_size)
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, 'sync', bool(self.sync))
        object.__setattr__(self, 'delimiter', validate_delimiter(self.delimiter))

    def replace(self, **changes) -> "StreamConfig":
        """Return a validated copy with the given fields changed."""
        return _replace(self, **changes)
