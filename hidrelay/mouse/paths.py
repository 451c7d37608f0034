from __future__ import annotations
import math
import logging
from typing import Any, List, Tuple

from ..utils import HiResTimer, clamp
from .config import cfg
from .geometry import Point, clamp_point, distance

log = logging.getLogger(__name__)

SQRT2 = math.sqrt(2)
SQRT3 = math.sqrt(3)
SQRT5 = math.sqrt(5)


def bresenham(start: Tuple[int, int], end: Tuple[int, int]) -> List[Point]:
    """Rasterize the line start->end; returns every point after start, ending at end."""
    ax, ay = int(start[0]), int(start[1])
    bx, by = int(end[0]), int(end[1])

    # Iterate over the dominant axis; swap so that axis is always "x".
    steep = abs(by - ay) > abs(bx - ax)
    if steep:
        ax, ay = ay, ax
        bx, by = by, bx

    x_step = 1 if ax < bx else -1
    y_step = 1 if ay < by else -1
    dx = abs(bx - ax)
    dy = abs(by - ay)
    if dx == 0:
        return []

    slope = dy / dx
    error = 0.0
    x, y = ax, ay
    points: List[Point] = []
    for _ in range(dx):
        x += x_step
        error += slope
        if error >= 0.5:
            y += y_step
            # Distance from the top of the new pixel
            error -= 1.0
        points.append(Point(y, x) if steep else Point(x, y))
    return points


class TrajectoryPlanner:
    """Turns a single destination into a stream of small absolute moves."""

    def __init__(self, client: Any):
        self.client = client
        self.screen = client.screen
        self.rng = client.rng

    def _destination(self, x: float, y: float) -> Point:
        return clamp_point(x, y, self.screen.resolution())

    def linear_move(self, x: float, y: float) -> bool:
        """Follow a Bresenham line; re-sample the cursor only after each full run."""
        dest = self._destination(x, y)
        current = self.screen.cursor_position()
        max_passes = getattr(cfg, "LINEAR_MAX_PASSES", 8)

        passes = 0
        while tuple(current) != tuple(dest):
            if passes >= max_passes:
                log.warning(
                    "linear move stalled at %s, wanted %s after %d passes",
                    tuple(current),
                    tuple(dest),
                    passes,
                )
                return False
            for point in bresenham(current, dest):
                self.client.move(point.x, point.y)
            current = self.screen.cursor_position()
            passes += 1
        return True

    def wind_move(
        self,
        x: float,
        y: float,
        *,
        gravity: float = cfg.GRAVITY,
        wind: float = cfg.WIND,
        min_wait: float = cfg.MIN_WAIT_MS,
        max_wait: float = cfg.MAX_WAIT_MS,
        max_step: float = cfg.MAX_STEP,
        target_area: float = cfg.TARGET_AREA,
    ) -> bool:
        """WindMouse: a damped random walk pulled toward the destination by gravity.

        Wind pushes the pointer around while it is far away; inside
        ``target_area`` the wind dies off and the step cap shrinks, so the
        cursor decelerates into the target. Waits are in milliseconds.

        ``max_step`` must be at least the smallest homing step: below that a
        rescaled velocity truncates to zero pixels and the cursor never moves.
        Returns False if the iteration cap forced the final snap.
        """
        lo_step, hi_step = getattr(cfg, "HOMING_STEP_RANGE", (3, 6))
        if gravity <= 0:
            raise ValueError(f"gravity must be positive, got {gravity}")
        if wind < 0:
            raise ValueError(f"wind must be >= 0, got {wind}")
        if max_step < lo_step:
            raise ValueError(f"max_step must be >= {lo_step}, got {max_step}")

        dest = self._destination(x, y)
        current = self.screen.cursor_position()
        rng = self.rng
        max_iterations = getattr(cfg, "WIND_MAX_ITERATIONS", 5000)
        arrived = True

        vx = vy = 0.0
        wx = wy = 0.0

        with HiResTimer():
            for _ in range(max_iterations):
                dist = distance(current, dest)
                if dist <= 1:
                    break

                wind_mag = min(wind, dist)
                if dist > target_area:
                    spread = int(round(wind_mag)) * 2 + 1
                    wx = wx / SQRT3 + (rng.randint(0, spread) - wind_mag) / SQRT5
                    wy = wy / SQRT3 + (rng.randint(0, spread) - wind_mag) / SQRT5
                else:
                    wx /= SQRT2
                    wy /= SQRT2
                    if max_step < lo_step:
                        max_step = float(rng.randint(lo_step, hi_step))
                    else:
                        max_step /= SQRT5

                vx += wx + gravity * (dest.x - current.x) / dist
                vy += wy + gravity * (dest.y - current.y) / dist

                speed = math.hypot(vx, vy)
                if speed > max_step:
                    scale = rng.uniform(max_step / 2.0, max_step) / speed
                    vx *= scale
                    vy *= scale

                nxt = Point(current.x + int(vx), current.y + int(vy))
                if nxt != current:
                    self.client.move(nxt.x, nxt.y)

                step = distance(current, nxt)
                ratio = clamp(step / max_step, 0.0, 1.0)
                self.client.sleep_ms(min_wait + (max_wait - min_wait) * ratio)

                current = self.screen.cursor_position()
            else:
                log.warning(
                    "wind move hit %d iterations at %s; snapping to %s",
                    max_iterations,
                    tuple(current),
                    tuple(dest),
                )
                arrived = False

        if tuple(current) != tuple(dest):
            self.client.move(dest.x, dest.y)
        return arrived
