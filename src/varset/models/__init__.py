"""
Data models for varset.

Provides Pydantic models for configuration and load reporting.
"""

from .core import LoadMode, LoadReport, SkippedLine, VarsetConfig

__all__ = [
    "LoadMode",
    "LoadReport",
    "SkippedLine",
    "VarsetConfig",
]
