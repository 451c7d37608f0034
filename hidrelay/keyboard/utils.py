from __future__ import annotations
import math
import random
from .config import kcfg


def _is_printable_ascii(ch: str) -> bool:
    return len(ch) == 1 and 32 <= ord(ch) < 127


def _lognormal_delay(rng: random.Random, base_dt: float, jitter: float) -> float:
    z = rng.gauss(0.0, 1.0) * jitter
    return base_dt * math.exp(0.35 * z)


def _chars_per_second_for_wpm(wpm: float) -> float:
    return (wpm * 5.0) / 60.0


def _base_char_delay_for_wpm(wpm: float) -> float:
    cps = max(1e-3, _chars_per_second_for_wpm(wpm))
    return 1.0 / cps


def _looks_like_word_boundary(prev_ch: str, ch: str) -> bool:
    return (prev_ch.isalnum()) and (ch == " ")


def _is_punct(ch: str) -> bool:
    return ch in kcfg.PUNCT_PAUSE


# =========================================================
# Simple QWERTY adjacency for plausible slips
# =========================================================

_KEY_NEIGHBORS = {
    "q": "wa",
    "w": "qeas",
    "e": "wsdr",
    "r": "edft",
    "t": "rfgy",
    "y": "tghu",
    "u": "yhji",
    "i": "ujko",
    "o": "iklp",
    "p": "ol",
    "a": "qwsz",
    "s": "awedxz",
    "d": "serfcx",
    "f": "drtgcv",
    "g": "ftyhbv",
    "h": "gyujnb",
    "j": "huikmn",
    "k": "jiolm",
    "l": "kop",
    "z": "asx",
    "x": "zsdc",
    "c": "xdfv",
    "v": "cfgb",
    "b": "vghn",
    "n": "bhjm",
    "m": "njk",
}


def _force_typo(rng: random.Random, ch: str) -> str:
    """
    Return a printable ASCII typo that is GUARANTEED to differ from ch.
    Prefers keyboard neighbors; falls back to another letter.
    """
    base = ch.lower()
    candidates = [c for c in _KEY_NEIGHBORS.get(base, "") if c != base]
    if not candidates:
        alphabet = "etaoinshrdlcumwfgypbvkjxqz"
        candidates = [c for c in alphabet if c != base]
    typo = rng.choice(candidates)
    return typo.upper() if ch.isupper() else typo
