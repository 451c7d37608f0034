"""
Synchronous call surface over the serial executor.

Every operation is one or more strictly sequential request/response round
trips: a request is never written until the previous response has been read
in full. There is no internal locking and no read timeout; callers that share
a client across threads, or that need liveness guarantees, must wrap calls
themselves.
"""

from __future__ import annotations
import logging
import random
import time
from typing import Any, Callable, Mapping, Optional

from ..keys import Key, MouseButton
from ..mouse.calibration import CalibrationController
from ..mouse.config import cfg
from ..mouse.geometry import DesktopScreen, Point, ScreenQuery, clamp_point
from ..mouse.paths import TrajectoryPlanner
from ..mouse.telemetry import TrajectoryRecorder, recorder as mouse_recorder
from ..keyboard.behaviors import TypingEmulator
from ..keyboard.config import kcfg
from ..utils import make_rng
from .codec import Method, build_request, decode, encode_request
from .transport import SerialTransport

log = logging.getLogger(__name__)


class RemoteDeviceClient:
    """Owns the transport, the calibration factor and the shared RNG."""

    def __init__(
        self,
        transport: SerialTransport,
        screen: Optional[ScreenQuery] = None,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
        recorder: Optional[TrajectoryRecorder] = None,
    ):
        self.transport = transport
        self.screen: ScreenQuery = screen if screen is not None else DesktopScreen()
        self.seed = seed
        self.rng = rng if rng is not None else make_rng(seed)
        self.recorder = recorder if recorder is not None else mouse_recorder
        self._sleep = sleep
        self._factor = 1.0

    @classmethod
    def open(cls, port: str, screen: Optional[ScreenQuery] = None, **kwargs: Any):
        """Open ``port`` and return a client bound to it."""
        transport = SerialTransport(port).open()
        return cls(transport, screen, **kwargs)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "RemoteDeviceClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def factor(self) -> float:
        """Device-unit to pixel scale learned by calibrate()."""
        return self._factor

    @factor.setter
    def factor(self, value: float) -> None:
        value = float(value)
        if not value > 0:
            raise ValueError(f"calibration factor must be > 0, got {value}")
        self._factor = value

    # ------------------------------------------------------------------
    # Primitive
    # ------------------------------------------------------------------

    def call(self, method: Method, params: Optional[Mapping[str, Any]] = None) -> bool:
        """Encode, send, block for the full response and return its result."""
        request = build_request(method, **dict(params or {}))
        payload = encode_request(request)
        log.debug("-> %s", payload)
        self.transport.write(payload)
        raw = self.transport.read_until_closing_brace()
        log.debug("<- %s", raw)
        return decode(raw)

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    def press_key(self, key: int) -> bool:
        return self.call(Method.PRESS, {"key": int(key)})

    def release_key(self, key: int) -> bool:
        return self.call(Method.RELEASE, {"key": int(key)})

    def release_all_keys(self) -> bool:
        return self.call(Method.RELEASE_ALL)

    def write_key(self, key: int) -> bool:
        return self.call(Method.WRITE, {"key": int(key)})

    def print_text(self, message: str) -> bool:
        return self.call(Method.PRINT, {"message": message})

    def print_line(self, message: str) -> bool:
        # The executor's own println does not append a line terminator.
        printed = self.print_text(message)
        return self.write_key(Key.RET) and printed

    # ------------------------------------------------------------------
    # Mouse
    # ------------------------------------------------------------------

    def click(self, button: int = MouseButton.LEFT) -> bool:
        self.recorder.log_click(*self.screen.cursor_position())
        return self.call(Method.CLICK, {"button": int(button)})

    def hold(self, button: int = MouseButton.LEFT) -> bool:
        self.recorder.log_down(*self.screen.cursor_position())
        return self.call(Method.HOLD, {"button": int(button)})

    def unhold(self, button: int = MouseButton.LEFT) -> bool:
        self.recorder.log_up(*self.screen.cursor_position())
        return self.call(Method.UNHOLD, {"button": int(button)})

    def move(self, x: float, y: float) -> bool:
        """Ask the executor to move from the current cursor position to (x,y).

        The executor scales the motion with the factor it last received
        through calibrate_step().
        """
        current = self.screen.cursor_position()
        dest = clamp_point(x, y, self.screen.resolution())
        self.recorder.log_move(dest.x, dest.y)
        log.debug("move %s -> %s (factor=%.4f)", tuple(current), tuple(dest), self._factor)
        return self.call(
            Method.MOVE_MOUSE,
            {"a_x": current.x, "a_y": current.y, "b_x": dest.x, "b_y": dest.y},
        )

    def calibrate_step(self, x: int, y: int, factor: float) -> bool:
        """Move (x*factor, y*factor) device units relative to the cursor."""
        return self.call(
            Method.CALIBRATE, {"x": int(x), "y": int(y), "factor": float(factor)}
        )

    def cursor_position(self) -> Point:
        return self.screen.cursor_position()

    def sleep_ms(self, ms: float) -> None:
        """Block the calling thread; this is the pacing mechanism for motion and typing."""
        if ms > 0:
            self._sleep(ms / 1000.0)

    # ------------------------------------------------------------------
    # High-level behaviors
    # ------------------------------------------------------------------

    def calibrate(self) -> float:
        return CalibrationController(self, self.screen).run()

    def linear_move(self, x: int, y: int) -> bool:
        return TrajectoryPlanner(self).linear_move(x, y)

    def wind_move(
        self,
        x: int,
        y: int,
        *,
        gravity: float = cfg.GRAVITY,
        wind: float = cfg.WIND,
        min_wait: float = cfg.MIN_WAIT_MS,
        max_wait: float = cfg.MAX_WAIT_MS,
        max_step: float = cfg.MAX_STEP,
        target_area: float = cfg.TARGET_AREA,
    ) -> bool:
        return TrajectoryPlanner(self).wind_move(
            x,
            y,
            gravity=gravity,
            wind=wind,
            min_wait=min_wait,
            max_wait=max_wait,
            max_step=max_step,
            target_area=target_area,
        )

    def type_text(
        self,
        message: str,
        wpm: float = kcfg.DEFAULT_WPM,
        *,
        mistakes: bool = True,
        accuracy: float = kcfg.DEFAULT_ACCURACY,
    ) -> None:
        TypingEmulator(self).type(message, wpm, mistakes, accuracy)
