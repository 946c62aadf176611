"""Utilities module for scryptkdf."""

from scryptkdf.utils.device import resolve_device
from scryptkdf.utils.logging import get_logger
from scryptkdf.utils.timing import Timer, timer

__all__ = [
    "resolve_device",
    "get_logger",
    "Timer",
    "timer",
]
