"""
I/O module for varset.

Provides text sources (plain, gzip, bzip2, stdin) and writers for variant
tables and run-length encoded tracks.
"""

from .input import open_text, read_lines
from .output import OutputWriter, RleTrackWriter, VariantSetWriter, open_output
from .rle import write_rle

__all__ = [
    "OutputWriter",
    "RleTrackWriter",
    "VariantSetWriter",
    "open_output",
    "open_text",
    "read_lines",
    "write_rle",
]
