from __future__ import annotations
import logging
from typing import Optional
from .telemetry import KeystrokeRecorder, recorder as global_recorder

# Route debug prints in this module through logging
print = logging.getLogger(__name__).debug


def summarize_typing(rec: Optional[KeystrokeRecorder] = None) -> str:
    """
    Reports, from the planned pauses (not wall clock):
      - Total planned duration
      - Overall Avg WPM (includes pauses/corrections)
      - Keystroke Avg WPM (just per-character delays)
      - Characters emitted & corrections
      - Seed used
    """
    rec = rec or global_recorder
    evs = rec.events
    chars = [e for e in evs if e.kind == "char"]
    if not chars:
        return "No typing data"

    total_time = sum(e.dt for e in evs if e.kind == "pause")
    char_delays = [e.dt for e in evs if e.kind == "pause" and e.value == "<char-delay>"]

    overall_wpm = (len(chars) / total_time) * 60.0 / 5.0 if total_time > 0 else 0.0
    if char_delays and sum(char_delays) > 0:
        avg_char_dt = sum(char_delays) / len(char_delays)
        keystroke_wpm = (1.0 / avg_char_dt) * 60.0 / 5.0
    else:
        keystroke_wpm = 0.0

    return (
        "Typing Summary:\n"
        f"  Total duration: {total_time:.2f}s\n"
        f"  Overall Avg WPM (with pauses): {overall_wpm:.2f}\n"
        f"  Keystroke Avg WPM (no pauses): {keystroke_wpm:.2f}\n"
        f"  Characters emitted: {len(chars)}\n"
        f"  Corrections (errors fixed): {rec.error_count}\n"
        f"  Random seed: {rec.seed if rec.seed is not None else 'N/A'}"
    )


def print_typing_summary(rec: Optional[KeystrokeRecorder] = None) -> None:
    print(summarize_typing(rec))
