from .behaviors import TypingEmulator
from .analysis import summarize_typing, print_typing_summary
from .telemetry import recorder

__all__ = [
    "TypingEmulator",
    "summarize_typing",
    "print_typing_summary",
    "recorder",
]
