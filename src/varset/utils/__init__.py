"""
Utility modules for varset.

Provides logging and timing helpers.
"""

from .logging import console, log_call, setup_logging, timed

__all__ = [
    "console",
    "log_call",
    "setup_logging",
    "timed",
]
