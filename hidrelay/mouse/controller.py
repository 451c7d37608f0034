from __future__ import annotations
from typing import Any, Tuple

from ..keys import MouseButton
from .analysis import summarize_speeds
from .render import save_mouse_trajectory_jpeg


class MouseController:
    """Tiny façade for high-level pointer behaviors bound to one client."""

    def __init__(self, client: Any):
        """Initialize with a RemoteDeviceClient (kept as self.client)."""
        self.client = client

    def move_to(
        self,
        x: int,
        y: int,
        *,
        humanize: bool = True,
        click: bool = False,
        button: int = MouseButton.LEFT,
    ) -> Tuple[int, int]:
        """Travel to (x,y) along a wind path (or a straight line) and optionally click."""
        if humanize:
            self.client.wind_move(x, y)
        else:
            self.client.linear_move(x, y)
        if click:
            self.client.click(button)
        return tuple(self.client.cursor_position())

    def drag(
        self,
        start: Tuple[int, int],
        end: Tuple[int, int],
        *,
        button: int = MouseButton.LEFT,
    ) -> None:
        self.move_to(*start)
        self.client.hold(button)
        try:
            self.move_to(*end)
        finally:
            self.client.unhold(button)

    def summary(self) -> str:
        return summarize_speeds(self.client.recorder)

    def save_trajectory(self, outfile: str = "mouse_trajectory.jpg") -> str:
        return save_mouse_trajectory_jpeg(
            self.client.screen.resolution(), outfile, rec=self.client.recorder
        )
