from __future__ import annotations
import math
from typing import NamedTuple, Protocol, Tuple

from ..utils import clamp


class Point(NamedTuple):
    """Integer screen coordinate."""

    x: int
    y: int


class ScreenQuery(Protocol):
    """Read-only view of the controlled machine's pointer and display."""

    def cursor_position(self) -> Point:
        ...

    def resolution(self) -> Point:
        """Bottom-right corner of the desktop, i.e. (width, height)."""
        ...


class DesktopScreen:
    """ScreenQuery backed by the local desktop through pyautogui."""

    def __init__(self):
        # pyautogui talks to the display server on import
        import pyautogui

        self._gui = pyautogui

    def cursor_position(self) -> Point:
        x, y = self._gui.position()
        return Point(int(x), int(y))

    def resolution(self) -> Point:
        width, height = self._gui.size()
        return Point(int(width), int(height))


def clamp_point(x: float, y: float, resolution: Tuple[int, int]) -> Point:
    """Clamp (x,y) into [0,width]×[0,height]."""
    width, height = resolution
    return Point(int(clamp(x, 0, width)), int(clamp(y, 0, height)))


def distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])
