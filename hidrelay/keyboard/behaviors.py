from __future__ import annotations
import logging
from typing import Any, Optional

from ..keys import Key, key_for_char
from ..utils import HiResTimer, clamp as _clamp, random_uniform
from .config import kcfg
from .telemetry import KeystrokeRecorder, recorder as keyboard_recorder
from .utils import (
    _base_char_delay_for_wpm,
    _force_typo,
    _is_printable_ascii,
    _is_punct,
    _lognormal_delay,
    _looks_like_word_boundary,
)

log = logging.getLogger(__name__)

# Editing keys that would rewrite text already on the remote machine
_UNTYPEABLE = ("\b", "\x1b")


class TypingEmulator:
    """Types a message through the executor one keystroke at a time, like a person would."""

    def __init__(self, client: Any, recorder: Optional[KeystrokeRecorder] = None):
        self.client = client
        self.rng = client.rng
        self.recorder = recorder if recorder is not None else keyboard_recorder

    def _rand(self, bounds) -> float:
        return random_uniform(self.rng, *bounds)

    def _pause(self, dt: float, tag: str) -> None:
        dt = max(dt, kcfg.GLOBAL_MIN_INTERVAL_S)
        self.recorder.log("pause", tag, dt)
        self.client.sleep_ms(dt * 1000.0)

    def _emit(self, ch: str) -> None:
        code = key_for_char(ch)
        if code is None:
            self.client.print_text(ch)
        else:
            self.client.write_key(code)
        self.recorder.log("char", ch)

    def _backspace(self) -> None:
        self.client.write_key(Key.BACKSPACE)
        self.recorder.log("key", Key.BACKSPACE.name)

    def _char_delay(self, base_dt: float, prev_ch: str, ch: str) -> float:
        dt = _lognormal_delay(self.rng, base_dt, kcfg.JITTER_COEF)
        if _looks_like_word_boundary(prev_ch, ch):
            dt += self._rand(kcfg.WORD_PAUSE)
        elif ch == " ":
            dt += self._rand(kcfg.SPACE_PAUSE)
        elif _is_punct(ch):
            dt += self._rand(kcfg.PUNCT_PAUSE[ch])
        return dt

    def type(
        self,
        message: str,
        wpm: float = kcfg.DEFAULT_WPM,
        mistakes_enabled: bool = True,
        accuracy: float = kcfg.DEFAULT_ACCURACY,
    ) -> None:
        """
        Type ``message`` at roughly ``wpm`` words per minute.

        With mistakes enabled, each printable character is fumbled when a draw
        in [0, 100) exceeds ``accuracy`` (a percentage): a neighbouring key is
        typed, then erased with BACKSPACE, then the right character follows.
        The text that ends up on the remote machine is always ``message``.
        A ``\\r\\n`` line ending is typed as a single RET.
        """
        if wpm <= 0:
            raise ValueError(f"wpm must be positive, got {wpm}")
        for ch in _UNTYPEABLE:
            if ch in message:
                raise ValueError(f"cannot type {ch!r}; send it with write_key()")
        message = message.replace("\r\n", "\n")
        accuracy = _clamp(float(accuracy), 0.0, 100.0)
        base_dt = _base_char_delay_for_wpm(wpm)
        self.recorder.reset(seed=getattr(self.client, "seed", None))

        prev_ch = ""
        with HiResTimer():
            for ch in message:
                self._pause(self._char_delay(base_dt, prev_ch, ch), "<char-delay>")

                will_err = (
                    mistakes_enabled
                    and _is_printable_ascii(ch)
                    and self.rng.uniform(0.0, 100.0) > accuracy
                )
                if will_err:
                    wrong = _force_typo(self.rng, ch)
                    log.debug("typo %r for %r", wrong, ch)
                    self._emit(wrong)
                    self.recorder.error_count += 1

                    self._pause(self._rand(kcfg.CORRECTION_THINK_PAUSE), "<correction-think>")
                    self._pause(self._rand(kcfg.BACKSPACE_PAUSE), "<pre-backspace>")
                    self._backspace()
                    self._pause(self._rand(kcfg.AFTER_CORRECTION_PAUSE), "<after-correction>")

                self._emit(ch)
                prev_ch = ch
