from __future__ import annotations
from typing import Tuple, Dict


class kcfg:
    # Words per minute (5 chars = 1 word)
    DEFAULT_WPM = 80
    JITTER_COEF = 0.55

    # Percent chance of typing each character right when mistakes are enabled
    DEFAULT_ACCURACY = 97.5

    # Word & punctuation pauses (seconds)
    SPACE_PAUSE = (0.010, 0.030)
    WORD_PAUSE = (0.060, 0.140)
    PUNCT_PAUSE: Dict[str, Tuple[float, float]] = {
        ".": (0.130, 0.240),
        ",": (0.080, 0.160),
        ";": (0.080, 0.160),
        ":": (0.080, 0.160),
        "!": (0.130, 0.240),
        "?": (0.130, 0.240),
        ")": (0.050, 0.120),
    }

    # Human-like correction cadence
    CORRECTION_THINK_PAUSE = (0.350, 0.800)
    BACKSPACE_PAUSE = (0.120, 0.250)
    AFTER_CORRECTION_PAUSE = (0.150, 0.300)

    # Floor for any single pause, so the serial link is never flooded
    GLOBAL_MIN_INTERVAL_S = 0.009
