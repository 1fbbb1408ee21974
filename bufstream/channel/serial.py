from .base import Channel
from bufstream.utils.constants import DEFAULT_BAUDRATE
from bufstream.utils.exceptions import SerialChannelError

try:
    import serial
except ImportError:
    raise ImportError("pyserial is required. Install with: pip install pyserial")


_DISCONNECT_HINTS = ("clearcommerror", "not exist", "cannot find", "access is denied",
                     "device not configured", "no such device")


def _is_disconnect(e: Exception) -> bool:
    error_msg = str(e).lower()
    return any(hint in error_msg for hint in _DISCONNECT_HINTS)


class SerialChannel(Channel):
    """Channel over a serial port or a pyserial URL such as ``loop://``.

    ``read`` blocks for the first byte (up to ``timeout`` seconds, forever
    when None) and then drains whatever else is already waiting. A timeout
    yields ``b""``, which a stream takes as end of stream.
    """

    def __init__(self, port: str, baudrate: int = DEFAULT_BAUDRATE, timeout: float = None):
        self.port = port
        self.baudrate = baudrate
        self._serial = None

        try:
            self._serial = serial.serial_for_url(
                port,
                baudrate=baudrate,
                timeout=timeout,
                write_timeout=timeout,
            )
        except serial.SerialException as e:
            raise SerialChannelError(f"Failed to open serial port {port}: {e}") from e

    def _error(self, operation: str, e: Exception) -> SerialChannelError:
        if _is_disconnect(e):
            return SerialChannelError(f"Serial port {self.port} disconnected (device removed or cable unplugged)")
        return SerialChannelError(f"Serial {operation} error: {e}")

    def read(self, size: int) -> bytes:
        try:
            first = self._serial.read(1)
            if not first or size <= 1:
                return first
            waiting = min(self._serial.in_waiting, size - 1)
            if waiting > 0:
                return first + self._serial.read(waiting)
            return first
        except serial.SerialException as e:
            raise self._error("read", e) from e

    def write(self, data: bytes) -> int:
        try:
            written = self._serial.write(data)
        except serial.SerialException as e:
            raise self._error("write", e) from e
        # pyserial returns None on some platforms for a complete write
        return len(data) if written is None else written

    def close(self) -> None:
        if self._serial is None:
            return
        try:
            if self._serial.is_open:
                self._serial.close()
        except serial.SerialException as e:
            raise self._error("close", e) from e
        finally:
            self._serial = None

    @property
    def closed(self) -> bool:
        return not (self._serial and self._serial.is_open)

    def __repr__(self):
        return f"<SerialChannel {self.port} @ {self.baudrate}>"
