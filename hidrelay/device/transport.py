"""
Serial channel to the remote HID executor.

Framing is deliberately primitive: the executor answers with a single flat
JSON object, so a response ends at the first ``}`` byte. Nested objects in a
response are not supported and come back truncated.
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Optional

import serial

from .config import dcfg

log = logging.getLogger(__name__)

SerialFactory = Callable[..., Any]


class DeviceUnavailable(RuntimeError):
    """Raised when the serial port cannot be opened or configured."""

    pass


class TransportError(IOError):
    """Raised when a write or read fails in the middle of a call."""

    pass


class SerialTransport:
    """Owns one serial port handle and moves raw bytes over it."""

    def __init__(
        self,
        port: str,
        baudrate: int = dcfg.BAUD_RATE,
        *,
        serial_factory: Optional[SerialFactory] = None,
    ):
        """
        Args:
            port: Device path (``/dev/ttyACM0``, ``COM3``) or pyserial URL (``loop://``)
            baudrate: Link speed, fixed by the firmware at 115200
            serial_factory: Callable returning an open serial-like object
        """
        self.port = port
        self.baudrate = baudrate
        self._serial_factory = serial_factory or serial.serial_for_url
        self.serial: Optional[Any] = None

    def open(self) -> "SerialTransport":
        """Open the port at the configured baud rate; raise DeviceUnavailable on failure."""
        try:
            self.serial = self._serial_factory(
                self.port,
                baudrate=self.baudrate,
                timeout=dcfg.READ_TIMEOUT_S,
                write_timeout=dcfg.WRITE_TIMEOUT_S,
            )
        except (serial.SerialException, ValueError, OSError) as exc:
            raise DeviceUnavailable(
                f"cannot open {self.port!r} at {self.baudrate} baud: {exc}"
            ) from exc
        log.info("Opened serial link %s at %d baud", self.port, self.baudrate)
        return self

    def close(self) -> None:
        if self.serial is not None and getattr(self.serial, "is_open", True):
            self.serial.close()
            log.info("Closed serial link %s", self.port)
        self.serial = None

    @property
    def is_open(self) -> bool:
        return self.serial is not None and bool(getattr(self.serial, "is_open", True))

    def _require_open(self) -> Any:
        if not self.is_open:
            raise TransportError(f"serial link {self.port!r} is not open")
        return self.serial

    def write(self, data: bytes) -> None:
        """Send the whole buffer or raise TransportError."""
        port = self._require_open()
        try:
            written = port.write(data)
            port.flush()
        except (serial.SerialException, OSError) as exc:
            raise TransportError(f"write to {self.port!r} failed: {exc}") from exc
        if written is not None and written != len(data):
            raise TransportError(
                f"short write to {self.port!r}: {written} of {len(data)} bytes"
            )

    def read_until_closing_brace(self) -> bytes:
        """Read byte by byte until the first ``}`` and return everything read."""
        port = self._require_open()
        buffer = bytearray()
        while True:
            try:
                byte = port.read(1)
            except (serial.SerialException, OSError) as exc:
                raise TransportError(f"read from {self.port!r} failed: {exc}") from exc
            if not byte:
                raise TransportError(
                    f"serial link {self.port!r} returned no data after {len(buffer)} bytes"
                )
            buffer += byte
            if byte == dcfg.FRAME_END:
                return bytes(buffer)

    def __enter__(self) -> "SerialTransport":
        if not self.is_open:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
