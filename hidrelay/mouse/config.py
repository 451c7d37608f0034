from __future__ import annotations


class cfg:
    """Motion and calibration tuning."""

    # --- WindMouse / path generation ---
    GRAVITY = 9.0
    WIND = 3.0
    MIN_WAIT_MS = 2.0
    MAX_WAIT_MS = 10.0
    MAX_STEP = 15.0
    TARGET_AREA = 12.0
    WIND_MAX_ITERATIONS = 5000  # hard stop; a final snap still lands on target
    HOMING_STEP_RANGE = (3, 6)  # re-rolled max step once it decays below MIN

    # --- Linear (Bresenham) path ---
    LINEAR_MAX_PASSES = 8  # re-rasterize this many times before giving up

    # --- Calibration ---
    CALIBRATION_START_STEP = 50
    CALIBRATION_STEP_INCREMENT = 1
    CALIBRATION_MAX_STEP_FRAC = 0.4  # of screen height
    CALIBRATION_DELTA = 0.001
    CALIBRATION_TOLERANCE_PX = 1
    CALIBRATION_MAX_PROBES = 2000  # per step size
    CALIBRATION_MIN_FACTOR = 0.001

    # --- Telemetry / rendering ---
    MIN_SPEED_PX_PER_MS = 0.05
    MAX_SPEED_PX_PER_MS = 2.0
