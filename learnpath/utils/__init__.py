"""LearnPath utilities."""

from .logsetup import setup_logging, LOG_FORMAT
from .numbers import round_half_up, round_percent
from .clock import Clock, utc_now

__all__ = [
    "setup_logging",
    "LOG_FORMAT",
    "round_half_up",
    "round_percent",
    "Clock",
    "utc_now",
]
