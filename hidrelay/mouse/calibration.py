"""
Device-unit to pixel calibration.

The executor can only move the pointer some number of its own units relative
to where it is; it has no idea how many pixels that amounts to. This module
probes with relative moves of known size, watches where the cursor lands and
nudges a scale factor until a request for ``n`` units times the factor moves
the cursor ``n`` pixels.
"""

from __future__ import annotations
import logging
from typing import Any

from .config import cfg
from .geometry import ScreenQuery

log = logging.getLogger(__name__)


class CalibrationController:
    """Learns the client's calibration factor by closed-loop probing."""

    def __init__(self, client: Any, screen: ScreenQuery):
        self.client = client
        self.screen = screen
        self.probes = 0

    def _adjust(self, factor: float, observed: float, step: int) -> float:
        delta = getattr(cfg, "CALIBRATION_DELTA", 0.001)
        if observed < step:
            factor += delta
        elif observed > step:
            factor -= delta
        return max(getattr(cfg, "CALIBRATION_MIN_FACTOR", 0.001), factor)

    def _settle(self, step: int, factor: float) -> float:
        """Probe at one step size until the cursor moves ``step`` pixels per axis."""
        width, height = self.screen.resolution()
        half_w, half_h = width / 2.0, height / 2.0
        tolerance = getattr(cfg, "CALIBRATION_TOLERANCE_PX", 1)
        max_probes = getattr(cfg, "CALIBRATION_MAX_PROBES", 2000)

        for _ in range(max_probes):
            before = self.screen.cursor_position()
            # Always head toward the centre so probes never pin against an edge.
            x_dir = 1 if before.x < half_w else -1
            y_dir = 1 if before.y < half_h else -1

            self.client.calibrate_step(x_dir * step, y_dir * step, factor)
            self.probes += 1

            after = self.screen.cursor_position()
            moved_x = abs(after.x - before.x)
            moved_y = abs(after.y - before.y)
            factor = self._adjust(factor, (moved_x + moved_y) / 2.0, step)
            log.debug(
                "calibrate step=%d moved=(%d,%d) factor=%.4f",
                step,
                moved_x,
                moved_y,
                factor,
            )

            if abs(moved_x - step) <= tolerance and abs(moved_y - step) <= tolerance:
                return factor
            if moved_x >= half_w or moved_y >= half_h:
                log.debug("calibrate step=%d hit half-screen bound", step)
                return factor

        log.warning(
            "calibration did not settle at step=%d after %d probes (factor=%.4f)",
            step,
            max_probes,
            factor,
        )
        return factor

    def run(self) -> float:
        """Sweep step sizes from small to large and store the final factor on the client."""
        _, height = self.screen.resolution()
        step = getattr(cfg, "CALIBRATION_START_STEP", 50)
        increment = max(1, getattr(cfg, "CALIBRATION_STEP_INCREMENT", 1))
        limit = height * getattr(cfg, "CALIBRATION_MAX_STEP_FRAC", 0.4)

        factor = self.client.factor
        while step < limit:
            factor = self._settle(step, factor)
            step += increment

        self.client.factor = factor
        log.info("Calibration finished: factor=%.4f after %d probes", factor, self.probes)
        return factor
