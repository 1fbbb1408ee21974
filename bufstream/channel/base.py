from abc import ABC, abstractmethod


class Channel(ABC):
    """Byte channel wrapped by a stream.

    ``read`` may return fewer bytes than asked for; it returns ``b""`` only
    when no more data will ever arrive. ``write`` may accept fewer bytes than
    offered and returns the count it took.
    """

    @abstractmethod
    def read(self, size: int) -> bytes:
        pass

    @abstractmethod
    def write(self, data: bytes) -> int:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    @property
    @abstractmethod
    def closed(self) -> bool:
        pass


def is_channel(obj) -> bool:
    """True if ``obj`` has the read/write/close capability a stream needs."""
    return all(callable(getattr(obj, name, None)) for name in ("read", "write", "close"))
