from .geometry import Point, ScreenQuery, DesktopScreen
from .calibration import CalibrationController
from .paths import TrajectoryPlanner, bresenham
from .render import save_mouse_trajectory_jpeg
from .telemetry import set_trajectory_callback, recorder
from .controller import MouseController
from .analysis import summarize_speeds

__all__ = [
    "Point",
    "ScreenQuery",
    "DesktopScreen",
    "CalibrationController",
    "TrajectoryPlanner",
    "bresenham",
    "save_mouse_trajectory_jpeg",
    "set_trajectory_callback",
    "MouseController",
    "recorder",
    "summarize_speeds",
]
