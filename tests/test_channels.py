import os
import socket
import unittest

from bufstream import (
    BufferedByteStream, LineStream, StreamConfig, ChannelError,
    FdChannel, MemoryChannel, SerialChannel, SocketChannel,
    create_channel, open_stream,
)


class TestMemoryChannel(unittest.TestCase):
    def test_read_chunks_and_feed(self):
        channel = MemoryChannel(b"abcdef", read_chunks=[2])

        self.assertEqual(channel.read(10), b"ab")
        self.assertEqual(channel.read(10), b"cdef")
        self.assertEqual(channel.read(10), b"")
        channel.feed(b"more")
        self.assertEqual(channel.pending, 4)
        self.assertEqual(channel.read(2), b"mo")

    def test_write_limits(self):
        channel = MemoryChannel(write_limits=[1])

        self.assertEqual(channel.write(b"abc"), 1)
        self.assertEqual(channel.write(b"bc"), 2)
        self.assertEqual(bytes(channel.written), b"abc")

    def test_closed_channel_refuses_io(self):
        channel = MemoryChannel(b"x")
        channel.close()

        self.assertTrue(channel.closed)
        with self.assertRaises(ChannelError):
            channel.read(1)


class TestFdChannel(unittest.TestCase):
    def test_pipe_round_trip(self):
        read_fd, write_fd = os.pipe()

        writer = BufferedByteStream(FdChannel(write_fd))
        writer.write(b"hello\nworld")
        writer.close()

        reader = LineStream(FdChannel(read_fd))
        self.assertEqual(reader.read_lines(), [b"hello", b"world"])
        reader.close()
        self.assertTrue(reader.channel.closed)

    def test_file_object(self):
        read_fd, write_fd = os.pipe()
        with open(write_fd, "wb", buffering=0) as f:
            f.write(b"payload")

        with BufferedByteStream(FdChannel(open(read_fd, "rb", buffering=0))) as stream:
            self.assertEqual(stream.read(), b"payload")

    def test_keep_descriptor_open(self):
        read_fd, write_fd = os.pipe()
        try:
            FdChannel(write_fd, close_fd=False).close()
            os.write(write_fd, b"still open")
            self.assertEqual(os.read(read_fd, 100), b"still open")
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_os_error_is_wrapped(self):
        read_fd, write_fd = os.pipe()
        os.close(read_fd)
        os.close(write_fd)

        with self.assertRaises(ChannelError):
            FdChannel(read_fd).read(1)


class TestSocketChannel(unittest.TestCase):
    def test_socketpair_lines(self):
        left, right = socket.socketpair()
        a = LineStream(SocketChannel(left))
        b = LineStream(SocketChannel(right))
        try:
            a.write_line(b"ping")
            a.flush()
            self.assertEqual(b.read_line(), b"ping")

            b.write_line(b"pong")
            b.flush()
            self.assertEqual(a.read_line(), b"pong")

            a.close()
            self.assertIsNone(b.read_line())
            self.assertTrue(b.eof())
        finally:
            a.close()
            b.close()
        self.assertTrue(b.channel.closed)


class TestSerialChannel(unittest.TestCase):
    def test_loopback(self):
        stream = LineStream(SerialChannel("loop://", timeout=0.1))
        try:
            stream.write_line(b"AT", b"OK")
            stream.flush()
            self.assertEqual(stream.read_line(), b"AT")
            self.assertEqual(stream.read_line(), b"OK")
            # read timeout ends the stream
            self.assertIsNone(stream.read_line())
        finally:
            stream.close()
        self.assertTrue(stream.channel.closed)


class TestCreateChannel(unittest.TestCase):
    def test_bytes_give_memory_channel(self):
        channel = create_channel(b"abc")

        self.assertIsInstance(channel, MemoryChannel)
        self.assertEqual(channel.read(10), b"abc")

    def test_fd_gives_fd_channel(self):
        read_fd, write_fd = os.pipe()
        channel = create_channel(write_fd)
        try:
            self.assertIsInstance(channel, FdChannel)
        finally:
            channel.close()
            os.close(read_fd)

    def test_socket_gives_socket_channel(self):
        left, right = socket.socketpair()
        try:
            self.assertIsInstance(create_channel(left), SocketChannel)
        finally:
            left.close()
            right.close()

    def test_serial_prefix(self):
        channel = create_channel("serial:loop://", timeout=0.1)
        try:
            self.assertIsInstance(channel, SerialChannel)
        finally:
            channel.close()

    def test_existing_channel_passes_through(self):
        channel = MemoryChannel()
        self.assertIs(create_channel(channel), channel)

    def test_unsupported_targets(self):
        with self.assertRaises(ValueError):
            create_channel("/dev/ttyUSB0")
        with self.assertRaises(TypeError):
            create_channel(1.5)
        with self.assertRaises(TypeError):
            create_channel(True)

    def test_open_stream(self):
        stream = open_stream(b"a|b", StreamConfig(delimiter=b"|"), lines=True)

        self.assertIsInstance(stream, LineStream)
        self.assertEqual(stream.read_lines(), [b"a", b"b"])

        plain = open_stream(b"raw")
        self.assertNotIsInstance(plain, LineStream)
        self.assertEqual(plain.read(), b"raw")


if __name__ == "__main__":
    unittest.main()
