"""
Key and mouse button codes understood by the remote HID executor.

Printable characters and common control codes are sent as their ASCII value
(0x00-0x7F). Modifiers and special keys live in the reserved band 0x80-0xDA,
matching the Arduino Keyboard library.
"""

from __future__ import annotations
from enum import IntEnum
from typing import Optional

RESERVED_MIN = 0x80
RESERVED_MAX = 0xDA


class Key(IntEnum):
    L_CTRL = 0x80
    L_SHIFT = 0x81
    L_ALT = 0x82
    L_GUI = 0x83

    R_CTRL = 0x84
    R_SHIFT = 0x85
    R_ALT = 0x86
    R_GUI = 0x87

    UP = 0xDA
    DOWN = 0xD9
    LEFT = 0xD8
    RIGHT = 0xD7

    BACKSPACE = 0xB2
    TAB = 0xB3
    RET = 0xB0
    ESC = 0xB1
    INS = 0xD1
    DEL = 0xD4
    PG_UP = 0xD3
    PG_DN = 0xD6
    HOME = 0xD2
    END = 0xD5
    CAPS = 0xC1

    F1 = 0xC2
    F2 = 0xC3
    F3 = 0xC4
    F4 = 0xC5
    F5 = 0xC6
    F6 = 0xC7
    F7 = 0xC8
    F8 = 0xC9
    F9 = 0xCA
    F10 = 0xCB
    F11 = 0xCC
    F12 = 0xCD


class MouseButton(IntEnum):
    """Arduino Mouse library button bits."""

    LEFT = 1
    RIGHT = 2
    MIDDLE = 4


_CONTROL_CHARS = {
    "\n": Key.RET,
    "\r": Key.RET,
    "\t": Key.TAB,
    "\b": Key.BACKSPACE,
    "\x1b": Key.ESC,
}


def is_reserved(code: int) -> bool:
    """True if code falls in the modifier/special-key band."""
    return RESERVED_MIN <= int(code) <= RESERVED_MAX


def key_for_char(ch: str) -> Optional[int]:
    """Map a single character to the code the executor types, or None if it has no key."""
    if len(ch) != 1:
        raise ValueError(f"expected a single character, got {ch!r}")
    if ch in _CONTROL_CHARS:
        return int(_CONTROL_CHARS[ch])
    code = ord(ch)
    if code < RESERVED_MIN:
        return code
    return None
