# Stream buffering
DEFAULT_BLOCK_SIZE = 1024 * 4
DEFAULT_SYNC = False

# Line splitting
DEFAULT_DELIMITER = b"\n"

# Serial channel
DEFAULT_BAUDRATE = 115200
SERIAL_PREFIX = "serial:"
