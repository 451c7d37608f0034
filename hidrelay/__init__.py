from __future__ import annotations
from .device import (
    RemoteDeviceClient,
    SerialTransport,
    DeviceUnavailable,
    TransportError,
    ProtocolError,
    Method,
)
from .keys import Key, MouseButton
from .keyboard import TypingEmulator, summarize_typing
from .mouse import (
    MouseController,
    Point,
    bresenham,
    save_mouse_trajectory_jpeg,
    recorder,
    set_trajectory_callback,
)

__all__ = [
    "RemoteDeviceClient",
    "SerialTransport",
    "DeviceUnavailable",
    "TransportError",
    "ProtocolError",
    "Method",
    "Key",
    "MouseButton",
    "TypingEmulator",
    "summarize_typing",
    "MouseController",
    "Point",
    "bresenham",
    "save_mouse_trajectory_jpeg",
    "recorder",
    "set_trajectory_callback",
]
