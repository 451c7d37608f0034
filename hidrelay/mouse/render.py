from __future__ import annotations
import math
import logging
from typing import List, Optional, Tuple
from pathlib import Path as FSPath
from PIL import Image, ImageDraw

from .config import cfg
from . import telemetry
from .telemetry import MouseEvent, TrajectoryRecorder


def _quantile(values, q):
    """Robust quantile (0..1). Returns value at the given fraction."""
    if not values:
        return 0.0
    q = min(1.0, max(0.0, float(q)))
    data = sorted(values)
    idx = q * (len(data) - 1)
    lo = int(math.floor(idx))
    hi = int(math.ceil(idx))
    if lo == hi:
        return data[lo]
    frac = idx - lo
    return data[lo] * (1 - frac) + data[hi] * frac


def _lerp_rgb(c0, c1, u):
    return tuple(int(a + (b - a) * u) for a, b in zip(c0, c1))


def _speed_to_rgb(speed, v_min, v_max):
    """
    Map speed to RGB, blue (slow) -> green -> red (fast).
    """
    if v_max <= v_min:
        t = 0.0
    else:
        t = (speed - v_min) / (v_max - v_min)
    t = max(0.0, min(1.0, t))

    slow, mid, fast = (0, 120, 255), (60, 205, 60), (255, 60, 60)
    if t <= 0.5:
        return _lerp_rgb(slow, mid, t / 0.5)
    return _lerp_rgb(mid, fast, (t - 0.5) / 0.5)


def _point_speeds(move_events: List[MouseEvent]) -> List[Tuple[float, float, float]]:
    out = []
    for i in range(1, len(move_events)):
        e_prev, e_cur = move_events[i - 1], move_events[i]
        dt_ms = max(1.0, (e_cur.t - e_prev.t) * 1000.0)
        dist_px = math.hypot(e_cur.x - e_prev.x, e_cur.y - e_prev.y)
        out.append((e_cur.x, e_cur.y, dist_px / dt_ms))
    return out


def save_mouse_trajectory_jpeg(
    resolution: Tuple[int, int],
    outfile: str = "mouse_trajectory.jpg",
    *,
    rec: Optional[TrajectoryRecorder] = None,
    background_color: Tuple[int, int, int] = (12, 12, 14),
    point_radius: int = 3,
    click_ring_radius: int = 5,
    canvas_margin: int = 20,
    annotate: bool = True,
) -> str:
    """
    Render the recorded pointer path into a JPEG image, coloring each point by
    instantaneous speed (pixels per millisecond). A legend is drawn on the right.
    """
    rec = rec or telemetry.recorder
    screen_width, screen_height = int(resolution[0]), int(resolution[1])
    events = [e for e in rec.events if e.kind in ("move", "click")]

    canvas_width = screen_width + canvas_margin * 2 + 80  # extra room for legend
    canvas_height = screen_height + canvas_margin * 2
    image = Image.new("RGB", (canvas_width, canvas_height), background_color)
    draw = ImageDraw.Draw(image)

    point_speeds = _point_speeds([e for e in events if e.kind == "move"])
    if not point_speeds:
        if annotate:
            draw.text(
                (canvas_margin, canvas_margin),
                "Not enough move data",
                fill=(180, 180, 180),
            )
        image.save(outfile, format="JPEG", quality=92, optimize=True)
        return outfile

    v_min = cfg.MIN_SPEED_PX_PER_MS
    v_max = cfg.MAX_SPEED_PX_PER_MS
    if v_max <= v_min:
        v_max = v_min + 1e-6

    def to_canvas(x, y):
        x = canvas_margin + max(0.0, min(screen_width - 1.0, x))
        y = canvas_margin + max(0.0, min(screen_height - 1.0, y))
        return x, y

    for x, y, speed in point_speeds:
        px, py = to_canvas(x, y)
        draw.ellipse(
            [px - point_radius, py - point_radius, px + point_radius, py + point_radius],
            fill=_speed_to_rgb(speed, v_min, v_max),
            outline=None,
        )

    for ev in events:
        if ev.kind == "click":
            x, y = to_canvas(ev.x, ev.y)
            r = click_ring_radius
            draw.ellipse([x - r, y - r, x + r, y + r], outline=(255, 200, 80), width=2)
            draw.ellipse([x - 2, y - 2, x + 2, y + 2], fill=(255, 255, 255))

    legend_left = canvas_margin + screen_width + 20
    legend_top = canvas_margin
    legend_height = max(80, screen_height - 40)
    legend_width = 18
    for i in range(legend_height):
        t = i / max(1, legend_height - 1)
        color = _speed_to_rgb(v_max - t * (v_max - v_min), v_min, v_max)
        draw.line(
            [(legend_left, legend_top + i), (legend_left + legend_width, legend_top + i)],
            fill=color,
            width=1,
        )
    draw.rectangle(
        [
            legend_left - 1,
            legend_top - 1,
            legend_left + legend_width + 1,
            legend_top + legend_height + 1,
        ],
        outline=(200, 200, 200),
        width=1,
    )
    label_x = legend_left + legend_width + 6
    draw.text((label_x, legend_top - 2), f"fast\n{v_max:.3f} px/ms", fill=(220, 220, 220))
    draw.text(
        (label_x, legend_top + legend_height - 22),
        f"slow\n{v_min:.3f} px/ms",
        fill=(220, 220, 220),
    )

    if annotate:
        speeds = [s for _, _, s in point_speeds]
        summary = (
            f"Points: {len(point_speeds)} | Speed px/ms min {min(speeds):.3f} | "
            f"p50 {_quantile(speeds, 0.50):.3f} | p95 {_quantile(speeds, 0.95):.3f} | "
            f"max {max(speeds):.3f} | avg {sum(speeds) / len(speeds):.3f}"
        )
        draw.text(
            (canvas_margin, canvas_height - canvas_margin - 14),
            summary,
            fill=(200, 200, 200),
        )

    image.save(outfile, format="JPEG", quality=92, optimize=True)

    cb = telemetry.get_trajectory_callback()
    if cb is not None:
        cb(FSPath(outfile))
    else:
        logging.getLogger(__name__).debug(
            "Trajectory saved to %s but no trajectory callback is registered",
            outfile,
        )
    return outfile
