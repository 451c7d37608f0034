import unittest

import serial

from hidrelay.device.transport import DeviceUnavailable, SerialTransport, TransportError
from fakes import FakeExecutor


class _ScriptedPort:
    """Serial-like object with canned read/write behavior."""

    def __init__(self, incoming=b"", short_write=False, fail=None):
        self.incoming = bytearray(incoming)
        self.short_write = short_write
        self.fail = fail
        self.is_open = True
        self.written = bytearray()

    def write(self, data):
        if self.fail:
            raise self.fail
        self.written += data
        return len(data) - 1 if self.short_write else len(data)

    def flush(self):
        pass

    def read(self, size=1):
        if self.fail:
            raise self.fail
        chunk = bytes(self.incoming[:size])
        del self.incoming[:size]
        return chunk

    def close(self):
        self.is_open = False


def _transport(port):
    return SerialTransport("scripted", serial_factory=lambda *a, **kw: port).open()


class TestSerialTransport(unittest.TestCase):
    def test_loopback_round_trip(self):
        """Bytes written to pyserial's loop:// come back framed at the first brace."""
        with SerialTransport("loop://") as transport:
            transport.write(b'{"result": true}')
            self.assertEqual(transport.read_until_closing_brace(), b'{"result": true}')

    def test_nested_object_is_truncated_at_first_brace(self):
        with SerialTransport("loop://") as transport:
            transport.write(b'{"a": {"b": 1}}')
            self.assertEqual(transport.read_until_closing_brace(), b'{"a": {"b": 1}')

    def test_opens_at_fixed_baud_rate(self):
        executor = FakeExecutor()
        SerialTransport("/dev/ttyACM0", serial_factory=executor.factory).open()
        self.assertEqual(executor.open_kwargs["baudrate"], 115200)
        self.assertIsNone(executor.open_kwargs["timeout"])
        self.assertEqual(executor.open_kwargs["port"], "/dev/ttyACM0")

    def test_missing_port_is_device_unavailable(self):
        with self.assertRaises(DeviceUnavailable):
            SerialTransport("/dev/hidrelay-does-not-exist").open()

    def test_bad_baud_rate_is_device_unavailable(self):
        with self.assertRaises(DeviceUnavailable):
            SerialTransport("loop://", baudrate=-1).open()

    def test_factory_serial_exception_is_device_unavailable(self):
        def refuse(*args, **kwargs):
            raise serial.SerialException("busy")

        with self.assertRaises(DeviceUnavailable):
            SerialTransport("COM3", serial_factory=refuse).open()

    def test_write_before_open_fails(self):
        with self.assertRaises(TransportError):
            SerialTransport("loop://").write(b"{}")

    def test_short_write_fails(self):
        transport = _transport(_ScriptedPort(short_write=True))
        with self.assertRaises(TransportError):
            transport.write(b'{"method": "releaseAll", "params": {}}')

    def test_write_error_is_transport_error(self):
        transport = _transport(_ScriptedPort(fail=serial.SerialException("gone")))
        with self.assertRaises(TransportError) as ctx:
            transport.write(b"{}")
        self.assertIsInstance(ctx.exception, IOError)

    def test_read_error_is_transport_error(self):
        transport = _transport(_ScriptedPort(fail=OSError(5, "I/O error")))
        with self.assertRaises(TransportError):
            transport.read_until_closing_brace()

    def test_empty_read_is_transport_error(self):
        transport = _transport(_ScriptedPort(incoming=b'{"result": tr'))
        with self.assertRaises(TransportError):
            transport.read_until_closing_brace()

    def test_reads_one_frame_at_a_time(self):
        transport = _transport(_ScriptedPort(incoming=b'{"result": true}{"result": false}'))
        self.assertEqual(transport.read_until_closing_brace(), b'{"result": true}')
        self.assertEqual(transport.read_until_closing_brace(), b'{"result": false}')

    def test_close(self):
        port = _ScriptedPort()
        transport = _transport(port)
        self.assertTrue(transport.is_open)
        transport.close()
        self.assertFalse(transport.is_open)
        self.assertFalse(port.is_open)


if __name__ == "__main__":
    unittest.main()
