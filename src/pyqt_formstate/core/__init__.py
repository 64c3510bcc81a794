"""
Core PyQt6 utilities.

Timing primitives with no form-specific logic.
"""

from .debounce_timer import DebounceTimer
from .debounce_scheduler import DebounceScheduler

__all__ = [
    "DebounceTimer",
    "DebounceScheduler",
]
